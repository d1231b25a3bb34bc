"""
Block extraction from parsed syntactic inventories
"""

from .extract_blocks import (
    BlockExtractor,
    extract_code_blocks,
    coerce_parse_results,
    estimate_total_lines,
)

__all__ = [
    'BlockExtractor',
    'extract_code_blocks',
    'coerce_parse_results',
    'estimate_total_lines',
]
