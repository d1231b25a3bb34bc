"""
Recommendations and Summary

Category-level recommendations, the aggregate duplication figures and the
executive summary derived from them.
"""

from typing import List, Mapping, NamedTuple, Optional, Sequence

from ..constants import EffortEstimates, SummaryThresholds
from ..models import (
    ConsolidationOpportunity,
    CrossFileDuplication,
    DuplicationCluster,
    DuplicationRecommendation,
    DuplicationSummary,
    FileDuplication,
    Priority,
)


class AggregateMetrics(NamedTuple):
    total_duplicated_lines: int
    total_lines: int
    duplication_ratio: float
    overall_score: float


def exact_duplicate_recommendation(exact_clusters: Sequence[DuplicationCluster]) -> Optional[DuplicationRecommendation]:
    """Recommendation for critical/high exact clusters, or None if there are none."""
    actionable = [c for c in exact_clusters if c.is_actionable]
    if not actionable:
        return None

    return DuplicationRecommendation(
        priority='critical',
        category='refactoring',
        title='Eliminate High-Impact Exact Duplicates',
        description=f'Refactor {len(actionable)} clusters of exact code duplication',
        impact='high',
        effort='medium',
        clusters=[c.id for c in actionable],
        techniques=['extract_method', 'create_utility_functions', 'consolidate_logic'],
        estimated_hours=sum(c.instance_count * EffortEstimates.EXACT_HOURS_PER_INSTANCE for c in actionable),
        expected_reduction=sum(c.estimated_reduction for c in actionable),
    )


def cross_file_recommendation(cross_file: Sequence[CrossFileDuplication]) -> Optional[DuplicationRecommendation]:
    if not cross_file:
        return None

    return DuplicationRecommendation(
        priority='high',
        category='architecture',
        title='Address Cross-File Duplication',
        description='Create shared modules for functionality duplicated across files',
        impact='high',
        effort='high',
        clusters=[entry.cluster_id for entry in cross_file],
        techniques=['create_shared_modules', 'extract_common_utilities', 'establish_code_patterns'],
        estimated_hours=len(cross_file) * EffortEstimates.CROSS_FILE_HOURS_PER_ENTRY,
        expected_reduction=sum(entry.estimated_savings for entry in cross_file),
    )


def structural_pattern_recommendation(
    structural_clusters: Sequence[DuplicationCluster]
) -> Optional[DuplicationRecommendation]:
    """
    Recommendation for high/medium structural clusters.

    Templates typically remove part of the duplication rather than all of
    it, so the expected reduction is 40% of the duplicated lines.
    """
    selected = [c for c in structural_clusters if c.priority in (Priority.HIGH, Priority.MEDIUM)]
    if not selected:
        return None

    return DuplicationRecommendation(
        priority='medium',
        category='patterns',
        title='Standardize Code Patterns',
        description='Create templates and patterns for structurally similar code',
        impact='medium',
        effort='medium',
        clusters=[c.id for c in selected],
        techniques=['template_method_pattern', 'strategy_pattern', 'code_generation'],
        estimated_hours=len(selected) * EffortEstimates.STRUCTURAL_HOURS_PER_CLUSTER,
        expected_reduction=sum(
            int(c.duplicated_lines * EffortEstimates.STRUCTURAL_REDUCTION_SHARE) for c in selected
        ),
    )


def generate_recommendations(
    exact_clusters: Sequence[DuplicationCluster],
    structural_clusters: Sequence[DuplicationCluster],
    cross_file: Sequence[CrossFileDuplication]
) -> List[DuplicationRecommendation]:
    """Up to three recommendations: exact, cross-file, structural."""
    candidates = [
        exact_duplicate_recommendation(exact_clusters),
        cross_file_recommendation(cross_file),
        structural_pattern_recommendation(structural_clusters),
    ]
    return [r for r in candidates if r is not None]


def calculate_aggregate_metrics(
    clusters: Sequence[DuplicationCluster],
    duplication_by_file: Mapping[str, FileDuplication]
) -> AggregateMetrics:
    """
    Codebase-wide duplicated lines, ratio and overall score.

    Tiers overlap, so the duplicated-line total can exceed the line count
    of the codebase; the overall score bottoms out at 0.
    """
    duplicated = sum(cluster.duplicated_lines for cluster in clusters)
    total_lines = sum(f.total_lines for f in duplication_by_file.values())
    ratio = duplicated / total_lines if total_lines > 0 else 0.0
    score = max(0.0, 100.0 * (1 - SummaryThresholds.SCORE_RATIO_FACTOR * ratio))

    return AggregateMetrics(
        total_duplicated_lines=duplicated,
        total_lines=total_lines,
        duplication_ratio=ratio,
        overall_score=score,
    )


def classify_duplication_ratio(ratio: float) -> str:
    if ratio > SummaryThresholds.CRITICAL_RATIO:
        return 'critical'
    if ratio > SummaryThresholds.HIGH_RATIO:
        return 'high'
    if ratio > SummaryThresholds.MEDIUM_RATIO:
        return 'medium'
    return 'low'


def generate_summary(
    aggregate: AggregateMetrics,
    clusters: Sequence[DuplicationCluster],
    opportunities: Sequence[ConsolidationOpportunity],
    recommendations: Sequence[DuplicationRecommendation]
) -> DuplicationSummary:
    level = classify_duplication_ratio(aggregate.duplication_ratio)
    return DuplicationSummary(
        health_score=aggregate.overall_score,
        risk_level=level,
        maintenance_burden=level,
        refactoring_needed=sum(1 for c in clusters if c.is_actionable),
        potential_savings=sum(o.estimated_reduction for o in opportunities),
        recommended_actions=len(recommendations),
    )
