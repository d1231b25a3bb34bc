"""
Similarity Metrics

Pairwise similarity between code blocks:

- Levenshtein-based content similarity on raw content
- Jaccard similarity on whitespace-separated token sets

All functions are pure and keep no state, so they are safe to call from
worker threads.
"""

from typing import Sequence

from rapidfuzz.distance import Levenshtein

from ..models import CodeBlock


def levenshtein_distance(str1: str, str2: str) -> int:
    """Classic edit distance with unit-cost insert, delete and substitute."""
    return Levenshtein.distance(str1, str2)


def calculate_content_similarity(content1: str, content2: str) -> float:
    """
    Similarity between raw contents: 1 - distance / longer length.

    Returns 1.0 for identical strings, including two empty strings.
    """
    if content1 == content2:
        return 1.0

    max_len = max(len(content1), len(content2))
    if max_len == 0:
        return 1.0

    return 1.0 - levenshtein_distance(content1, content2) / max_len


def calculate_token_similarity(content1: str, content2: str) -> float:
    """
    Jaccard similarity between whitespace-separated token sets.

    Returns:
        1.0 if both are empty, 0.0 if exactly one is empty,
        otherwise |intersection| / |union|
    """
    tokens1 = set(content1.split())
    tokens2 = set(content2.split())

    if not tokens1 and not tokens2:
        return 1.0
    if not tokens1 or not tokens2:
        return 0.0

    return len(tokens1 & tokens2) / len(tokens1 | tokens2)


def average_pairwise_similarity(blocks: Sequence[CodeBlock]) -> float:
    """
    Mean content similarity over all unordered pairs of blocks.

    Returns 0.0 for fewer than two blocks.
    """
    if len(blocks) < 2:
        return 0.0

    total = 0.0
    comparisons = 0
    for i in range(len(blocks)):
        for j in range(i + 1, len(blocks)):
            total += calculate_content_similarity(blocks[i].content, blocks[j].content)
            comparisons += 1

    return min(total / comparisons, 1.0)
