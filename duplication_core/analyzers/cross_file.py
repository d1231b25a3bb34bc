"""
Cross-File Analysis

For every cluster that spans two or more files: what kind of functionality
is duplicated, how to consolidate it, where to put the shared copy and how
many lines that saves.
"""

import logging
from collections import Counter
from typing import Dict, List, Mapping, Optional, Sequence

from ..constants import NEW_UTILITY_FILE
from ..models import (
    CrossFileDuplication,
    DetectionTier,
    DuplicationCluster,
    FilePair,
    RefactoringStrategy,
    SharedFunctionality,
)

logger = logging.getLogger(__name__)

# Checked in order; the first keyword found in the lowercased name wins
FUNCTIONALITY_KEYWORDS = (
    ('validate', SharedFunctionality.VALIDATION),
    ('format', SharedFunctionality.FORMATTING),
    ('parse', SharedFunctionality.PARSING),
    ('transform', SharedFunctionality.TRANSFORMATION),
)

FUNCTIONALITY_ORDER = list(SharedFunctionality)


def classify_function_name(name: str) -> SharedFunctionality:
    lowered = name.lower()
    for keyword, functionality in FUNCTIONALITY_KEYWORDS:
        if keyword in lowered:
            return functionality
    return SharedFunctionality.UTILITY


def identify_shared_functionality(cluster: DuplicationCluster) -> SharedFunctionality:
    """
    Majority vote over the functionality of each named instance.

    Ties go to the category listed first in SharedFunctionality; a cluster
    with no named instances is 'utility'.
    """
    votes = Counter(
        classify_function_name(instance.function_name)
        for instance in cluster.instances
        if instance.function_name
    )
    if not votes:
        return SharedFunctionality.UTILITY

    return max(FUNCTIONALITY_ORDER, key=lambda f: (votes[f], -FUNCTIONALITY_ORDER.index(f)))


def determine_refactoring_strategy(cluster: DuplicationCluster) -> RefactoringStrategy:
    file_count = len(cluster.affected_files)

    if cluster.type == DetectionTier.EXACT and file_count > 1:
        return RefactoringStrategy.EXTRACT_TO_SHARED_MODULE
    if cluster.type == DetectionTier.STRUCTURAL:
        return RefactoringStrategy.CREATE_TEMPLATE_FUNCTION
    if cluster.type == DetectionTier.TOKEN:
        return RefactoringStrategy.STANDARDIZE_AND_REFACTOR
    if file_count == 1:
        return RefactoringStrategy.EXTRACT_LOCAL_FUNCTION
    return RefactoringStrategy.MANUAL_REVIEW_REQUIRED


def determine_consolidation_target(file_counts: Mapping[str, int]) -> str:
    """
    Pick the file holding the most instances.

    Ties go to the lexicographically first path. When no file holds more
    than one instance there is no natural home, and 'new_utility_file' is
    returned instead.
    """
    target = None
    max_count = 0
    for file_path in sorted(file_counts):
        if file_counts[file_path] > max_count:
            max_count = file_counts[file_path]
            target = file_path

    if target is None or max_count <= 1:
        return NEW_UTILITY_FILE
    return target


def instances_per_file(cluster: DuplicationCluster) -> Dict[str, int]:
    return dict(Counter(instance.file_path for instance in cluster.instances))


def build_file_pairs(cluster: DuplicationCluster) -> List[FilePair]:
    """One FilePair per distinct (file1 < file2) combination, carrying the cluster's figures."""
    files = cluster.affected_files
    return [
        FilePair(
            file1=files[i],
            file2=files[j],
            similarity=cluster.similarity_score,
            shared_lines=cluster.line_count,
            shared_tokens=cluster.token_count,
        )
        for i in range(len(files))
        for j in range(i + 1, len(files))
    ]


def analyze_cross_file_cluster(cluster: DuplicationCluster) -> Optional[CrossFileDuplication]:
    """Cross-file analysis for one cluster, or None if it touches a single file."""
    file_counts = instances_per_file(cluster)
    if len(file_counts) < 2:
        return None

    return CrossFileDuplication(
        cluster_id=cluster.id,
        file_pairs=build_file_pairs(cluster),
        shared_functionality=identify_shared_functionality(cluster),
        consolidation_target=determine_consolidation_target(file_counts),
        estimated_savings=cluster.estimated_reduction,
        refactoring_strategy=determine_refactoring_strategy(cluster),
    )


def analyze_cross_file_duplication(clusters: Sequence[DuplicationCluster]) -> List[CrossFileDuplication]:
    """Cross-file entries for all multi-file clusters, in cluster order."""
    results = []
    for cluster in clusters:
        cross_file = analyze_cross_file_cluster(cluster)
        if cross_file is not None:
            results.append(cross_file)

    logger.debug("Cross-file: %d of %d clusters span multiple files", len(results), len(clusters))
    return results
