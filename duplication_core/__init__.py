"""
duplication_core - Duplication detection and consolidation planning

Finds exact, structural and token-level duplicates in a parsed codebase,
scores their maintenance cost and turns them into ranked refactoring plans.

Usage:
    from duplication_core import detect_duplication, DuplicationConfig

    metrics = detect_duplication(parse_results, DuplicationConfig(min_lines=4))
    print(metrics.to_summary_dict())
"""

from .config import DuplicationConfig, WeightFactors
from .detector import DuplicationDetector, detect_duplication
from .errors import DuplicationError, EmptyInputError
from .models import (
    ClassInfo,
    CodeBlock,
    ConsolidationOpportunity,
    CrossFileDuplication,
    DuplicationCluster,
    DuplicationMetrics,
    FunctionInfo,
    ParameterInfo,
    ParseResult,
)
from .similarity.lexer import Lexer, RegexLexer

__version__ = '1.0.0'

__all__ = [
    'DuplicationConfig',
    'WeightFactors',
    'DuplicationDetector',
    'detect_duplication',
    'DuplicationError',
    'EmptyInputError',
    'ClassInfo',
    'CodeBlock',
    'ConsolidationOpportunity',
    'CrossFileDuplication',
    'DuplicationCluster',
    'DuplicationMetrics',
    'FunctionInfo',
    'ParameterInfo',
    'ParseResult',
    'Lexer',
    'RegexLexer',
]
