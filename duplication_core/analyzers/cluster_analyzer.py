"""
Cluster Analysis

Turns the raw groups of one detection tier into scored DuplicationClusters:
similarity, representative size, maintenance burden, refactoring effort,
priority and tier-specific recommendations.
"""

import logging
from typing import List, Sequence

from ..config import DuplicationConfig, WeightFactors
from ..constants import EffortThresholds, GroupingDefaults, PriorityThresholds
from ..models import CodeBlock, DetectionTier, DuplicationCluster, Priority, RefactoringEffort
from ..similarity.lexer import Lexer
from ..similarity.structural import average_pairwise_similarity

logger = logging.getLogger(__name__)

TIER_RECOMMENDATIONS = {
    DetectionTier.EXACT: [
        "Extract common functionality into a shared utility function",
        "Consider creating a base class or mixin for shared behavior",
    ],
    DetectionTier.STRUCTURAL: [
        "Identify common patterns and create template functions",
        "Use design patterns like Strategy or Template Method",
    ],
    DetectionTier.TOKEN: [
        "Standardize variable naming and code formatting",
        "Consider refactoring to use consistent abstractions",
    ],
}

HIGH_EFFORT_RECOMMENDATIONS = [
    "Plan refactoring in phases to minimize risk",
    "Ensure comprehensive test coverage before refactoring",
]


def count_distinct_files(instances: Sequence[CodeBlock]) -> int:
    return len({instance.file_path for instance in instances})


def calculate_maintenance_burden(
    tier: DetectionTier,
    instance_count: int,
    line_count: int,
    weights: WeightFactors
) -> float:
    """instances x lines x tier weight x maintenance weight"""
    burden = float(instance_count * line_count) * weights.for_tier(tier.value)
    return burden * weights.maintenance_burden


def assess_refactoring_effort(instances: Sequence[CodeBlock], line_count: int) -> RefactoringEffort:
    """
    Estimate how hard the cluster is to consolidate.

    Clusters spread over more than half as many files as instances are
    hard; large blocks or many instances are moderate.
    """
    if count_distinct_files(instances) > len(instances) // 2:
        return RefactoringEffort.HIGH
    if line_count > EffortThresholds.LARGE_BLOCK_LINES:
        return RefactoringEffort.MEDIUM
    if len(instances) > EffortThresholds.MANY_INSTANCES:
        return RefactoringEffort.MEDIUM
    return RefactoringEffort.LOW


def determine_priority(burden: float, effort: RefactoringEffort) -> Priority:
    """Map burden and effort to a priority tier."""
    if burden > PriorityThresholds.CRITICAL_BURDEN and effort == RefactoringEffort.LOW:
        return Priority.CRITICAL
    if burden > PriorityThresholds.HIGH_BURDEN and effort != RefactoringEffort.HIGH:
        return Priority.HIGH
    if burden > PriorityThresholds.MEDIUM_BURDEN:
        return Priority.MEDIUM
    return Priority.LOW


def generate_cluster_recommendations(tier: DetectionTier, effort: RefactoringEffort) -> List[str]:
    recommendations = list(TIER_RECOMMENDATIONS[tier])
    if effort == RefactoringEffort.HIGH:
        recommendations.extend(HIGH_EFFORT_RECOMMENDATIONS)
    return recommendations


def build_cluster(
    group: Sequence[CodeBlock],
    tier: DetectionTier,
    index: int,
    config: DuplicationConfig,
    lexer: Lexer
) -> DuplicationCluster:
    """Score one raw group; the first instance is the representative."""
    representative = group[0]
    line_count = representative.line_count

    burden = calculate_maintenance_burden(tier, len(group), line_count, config.weight_factors)
    effort = assess_refactoring_effort(group, line_count)

    return DuplicationCluster(
        id=f"{tier.value}_{index}",
        type=tier,
        instances=list(group),
        similarity_score=average_pairwise_similarity(group),
        line_count=line_count,
        token_count=lexer.estimate_token_count(representative.content),
        maintenance_burden=burden,
        refactoring_effort=effort,
        priority=determine_priority(burden, effort),
        recommendations=generate_cluster_recommendations(tier, effort),
    )


def cluster_duplicates(
    groups: Sequence[Sequence[CodeBlock]],
    tier: DetectionTier,
    config: DuplicationConfig,
    lexer: Lexer
) -> List[DuplicationCluster]:
    """
    Build the cluster list for one tier, highest burden first.

    IDs come from the group's position before sorting, so they are stable
    for a given input; equal burdens keep detection order.
    """
    clusters = []
    for index, group in enumerate(groups):
        if len(group) < GroupingDefaults.MIN_GROUP_SIZE:
            logger.debug("Dropping %s group %d with %d instance(s)", tier.value, index, len(group))
            continue
        clusters.append(build_cluster(group, tier, index, config, lexer))

    clusters.sort(key=lambda c: c.maintenance_burden, reverse=True)
    return clusters
