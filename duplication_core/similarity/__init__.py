"""
Similarity calculation modules for duplicate detection
"""

from .lexer import Lexer, RegexLexer
from .structural import (
    levenshtein_distance,
    calculate_content_similarity,
    calculate_token_similarity,
    average_pairwise_similarity,
)
from .grouping import (
    find_exact_duplicates,
    find_structural_duplicates,
    find_token_duplicates,
    clusters_overlap,
)

__all__ = [
    'Lexer',
    'RegexLexer',
    'levenshtein_distance',
    'calculate_content_similarity',
    'calculate_token_similarity',
    'average_pairwise_similarity',
    'find_exact_duplicates',
    'find_structural_duplicates',
    'find_token_duplicates',
    'clusters_overlap',
]
