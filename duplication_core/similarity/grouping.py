"""
Three-Tier Duplicate Finding

Produces three independent families of raw groups from the block list:

- Tier 1: Exact matching (content key, optionally whitespace-stripped)
- Tier 2: Structural matching (fingerprint key, validated by average
  pairwise content similarity to reject accidental collisions)
- Tier 3: Token similarity (Jaccard over normalized tokens, with
  overlap-aware rejection of near-identical candidate groups)

Tiers do not exclude each other: an exact duplicate is normally also a
structural and a token duplicate, and shows up in all three results.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence

from ..config import DuplicationConfig
from ..constants import GroupingDefaults
from ..models import CodeBlock
from .structural import average_pairwise_similarity, calculate_token_similarity

logger = logging.getLogger(__name__)

RawGroup = List[CodeBlock]


def exact_key(content: str, ignore_whitespace: bool) -> str:
    """Grouping key for exact matching (spaces and tabs removed when ignoring whitespace)."""
    if ignore_whitespace:
        return content.replace(' ', '').replace('\t', '')
    return content


def find_exact_duplicates(blocks: Sequence[CodeBlock], config: DuplicationConfig) -> List[RawGroup]:
    """Group blocks by exact content, in order of first appearance."""
    content_groups: Dict[str, RawGroup] = defaultdict(list)

    for block in blocks:
        content_groups[exact_key(block.content, config.ignore_whitespace)].append(block)

    groups = [g for g in content_groups.values() if len(g) >= GroupingDefaults.MIN_GROUP_SIZE]
    logger.debug("Exact tier: found %d groups among %d blocks", len(groups), len(blocks))
    return groups


def find_structural_duplicates(blocks: Sequence[CodeBlock], config: DuplicationConfig) -> List[RawGroup]:
    """
    Group blocks by structural fingerprint.

    A fingerprint group is kept only when the average pairwise content
    similarity of its members reaches the similarity threshold.
    """
    hash_groups: Dict[str, RawGroup] = defaultdict(list)

    for block in blocks:
        hash_groups[block.structural_hash].append(block)

    groups = []
    for hash_val, group in hash_groups.items():
        if len(group) < GroupingDefaults.MIN_GROUP_SIZE:
            continue

        if validate_structural_group(group, config.similarity_threshold):
            groups.append(group)
        else:
            logger.debug(
                "Structural tier: rejected group %s (%d blocks below similarity threshold)",
                hash_val[:8], len(group),
            )

    logger.debug("Structural tier: found %d groups", len(groups))
    return groups


def validate_structural_group(group: Sequence[CodeBlock], threshold: float) -> bool:
    """True if the group has 2+ members whose average content similarity meets threshold."""
    if len(group) < GroupingDefaults.MIN_GROUP_SIZE:
        return False
    return average_pairwise_similarity(group) >= threshold


def _token_candidates(
    blocks: Sequence[CodeBlock],
    threshold: float,
    start: int,
    stop: int
) -> List[RawGroup]:
    """Candidate group around each block in [start, stop) from the blocks after it."""
    candidates = []
    for i in range(start, stop):
        candidate = [blocks[i]]
        for j in range(i + 1, len(blocks)):
            similarity = calculate_token_similarity(blocks[i].tokenized_content, blocks[j].tokenized_content)
            if similarity >= threshold:
                candidate.append(blocks[j])
        candidates.append(candidate)
    return candidates


def build_token_candidates(
    blocks: Sequence[CodeBlock],
    threshold: float,
    max_workers: int = 1
) -> List[RawGroup]:
    """
    Build one candidate group per block, in block order.

    With max_workers > 1 the block indices are split into contiguous ranges
    scored on a thread pool; results are concatenated in range order so the
    output is identical to the sequential run.
    """
    n = len(blocks)
    if n == 0:
        return []

    if max_workers <= 1 or n < 2:
        return _token_candidates(blocks, threshold, 0, n)

    chunk_size = math.ceil(n / max_workers)
    ranges = [(start, min(start + chunk_size, n)) for start in range(0, n, chunk_size)]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(_token_candidates, blocks, threshold, start, stop)
            for start, stop in ranges
        ]
        candidates: List[RawGroup] = []
        for future in futures:
            candidates.extend(future.result())

    return candidates


def find_token_duplicates(blocks: Sequence[CodeBlock], config: DuplicationConfig) -> List[RawGroup]:
    """
    Group blocks whose normalized token sets are similar.

    Candidates are accepted in block order; a candidate that overlaps an
    already accepted group by more than half of the smaller group is dropped.
    """
    candidates = build_token_candidates(blocks, config.token_similarity_threshold, config.max_workers)

    groups: List[RawGroup] = []
    for candidate in candidates:
        if len(candidate) < GroupingDefaults.MIN_GROUP_SIZE:
            continue
        if cluster_exists(groups, candidate):
            logger.debug("Token tier: skipped candidate around %s (overlaps accepted group)", candidate[0])
            continue
        groups.append(candidate)

    logger.debug("Token tier: found %d groups from %d candidates", len(groups), len(candidates))
    return groups


def cluster_exists(groups: Sequence[RawGroup], new_group: RawGroup) -> bool:
    """True if new_group significantly overlaps any existing group."""
    return any(clusters_overlap(existing, new_group) for existing in groups)


def clusters_overlap(group1: RawGroup, group2: RawGroup) -> bool:
    """
    Overlap is significant when more than 50% of the smaller group is shared.

    Membership is compared by occurrence identity (file and line range).
    """
    min_size = min(len(group1), len(group2))
    if min_size == 0:
        return False

    identities = {block.identity for block in group1}
    overlap = sum(1 for block in group2 if block.identity in identities)

    return overlap / min_size > GroupingDefaults.OVERLAP_RATIO
