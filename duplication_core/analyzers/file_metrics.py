"""
Per-file duplication rollup.
"""

from typing import Dict, Sequence

from ..constants import FilePriorityThresholds
from ..extractors.extract_blocks import estimate_total_lines
from ..models import DuplicationCluster, FileDuplication, ParseResult, Priority


def determine_file_priority(ratio: float) -> Priority:
    if ratio > FilePriorityThresholds.CRITICAL_RATIO:
        return Priority.CRITICAL
    if ratio > FilePriorityThresholds.HIGH_RATIO:
        return Priority.HIGH
    if ratio > FilePriorityThresholds.MEDIUM_RATIO:
        return Priority.MEDIUM
    return Priority.LOW


def calculate_file_duplication(
    parse_result: ParseResult,
    clusters: Sequence[DuplicationCluster]
) -> FileDuplication:
    """
    Duplication totals for one file.

    Internal counts clusters with two or more instances in this file;
    external counts clusters that also reach another file. Both weigh the
    cluster's line count by the number of instances in this file, so a
    cluster can contribute to both.
    """
    file_path = parse_result.file_path
    internal = 0
    external = 0

    for cluster in clusters:
        in_file = sum(1 for instance in cluster.instances if instance.file_path == file_path)
        if in_file == 0:
            continue
        if in_file >= 2:
            internal += cluster.line_count * in_file
        if in_file < len(cluster.instances):
            external += cluster.line_count * in_file

    total_lines = estimate_total_lines(parse_result)
    ratio = (internal + external) / total_lines if total_lines > 0 else 0.0

    return FileDuplication(
        file_path=file_path,
        internal_duplication=internal,
        external_duplication=external,
        total_lines=total_lines,
        duplication_ratio=ratio,
        hotspot_score=ratio * 100,
        refactoring_priority=determine_file_priority(ratio),
    )


def calculate_file_metrics(
    parse_results: Sequence[ParseResult],
    clusters: Sequence[DuplicationCluster]
) -> Dict[str, FileDuplication]:
    """Rollups keyed by file path, in input order."""
    return {
        parse_result.file_path: calculate_file_duplication(parse_result, clusters)
        for parse_result in parse_results
    }
