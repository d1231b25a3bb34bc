"""
Impact Analysis

Codebase-wide maintenance impact of all clusters plus the list of files
whose duplication density makes them hotspots.
"""

from typing import List, Mapping, Sequence

from ..constants import ImpactThresholds
from ..models import (
    CodebaseHealth,
    DuplicationCluster,
    DuplicationHotspot,
    DuplicationImpact,
    FileDuplication,
    Priority,
)

HOTSPOT_ACTIONS = {
    Priority.CRITICAL: "Immediate refactoring required - consider breaking file into modules",
    Priority.HIGH: "High priority refactoring - extract common functionality",
    Priority.MEDIUM: "Medium priority - review for consolidation opportunities",
    Priority.LOW: "Monitor for increasing duplication",
}


def classify_codebase_health(technical_debt_score: float) -> CodebaseHealth:
    if technical_debt_score > ImpactThresholds.CRITICAL_DEBT:
        return CodebaseHealth.CRITICAL
    if technical_debt_score > ImpactThresholds.POOR_DEBT:
        return CodebaseHealth.POOR
    if technical_debt_score > ImpactThresholds.FAIR_DEBT:
        return CodebaseHealth.FAIR
    return CodebaseHealth.GOOD


def count_affected_functions_in_file(file_path: str, clusters: Sequence[DuplicationCluster]) -> int:
    """Distinct function names with a duplicated instance in the file."""
    names = {
        instance.function_name
        for cluster in clusters
        for instance in cluster.instances
        if instance.file_path == file_path and instance.function_name
    }
    return len(names)


def generate_hotspot_analysis(
    clusters: Sequence[DuplicationCluster],
    duplication_by_file: Mapping[str, FileDuplication]
) -> List[DuplicationHotspot]:
    """Files above the hotspot threshold, densest first, ties by path."""
    hotspots = [
        DuplicationHotspot(
            location=file_path,
            duplication_score=file_duplication.hotspot_score,
            affected_functions=count_affected_functions_in_file(file_path, clusters),
            maintenance_risk=file_duplication.refactoring_priority,
            recommended_action=HOTSPOT_ACTIONS[file_duplication.refactoring_priority],
        )
        for file_path, file_duplication in duplication_by_file.items()
        if file_duplication.hotspot_score > ImpactThresholds.HOTSPOT_SCORE
    ]

    hotspots.sort(key=lambda h: (-h.duplication_score, h.location))
    return hotspots


def analyze_impact(
    clusters: Sequence[DuplicationCluster],
    duplication_by_file: Mapping[str, FileDuplication]
) -> DuplicationImpact:
    """
    Aggregate impact over clusters of all tiers.

    Each cluster stands for one piece of logic that exists in several
    places, so the multiplier is the average number of copies.
    """
    total_instances = sum(cluster.instance_count for cluster in clusters)
    multiplier = total_instances / len(clusters) if clusters else 0.0
    debt_score = sum(cluster.maintenance_burden for cluster in clusters) / ImpactThresholds.DEBT_NORMALIZATION

    return DuplicationImpact(
        maintenance_multiplier=multiplier,
        technical_debt_score=debt_score,
        change_risk_factor=min(multiplier * ImpactThresholds.CHANGE_RISK_PER_MULTIPLIER, ImpactThresholds.CHANGE_RISK_CAP),
        testing_burden=total_instances * ImpactThresholds.TESTS_PER_INSTANCE,
        codebase_health=classify_codebase_health(debt_score),
        hotspot_analysis=generate_hotspot_analysis(clusters, duplication_by_file),
    )
