"""
Pydantic Models for the Duplication Engine

This package contains the data models for parser input and for structuring
duplicate detection and consolidation results using Pydantic v2.

Models:
- ParseResult: Syntactic inventory of one file (parser input)
- CodeBlock: Single function or method occurrence
- DuplicationCluster: Scored group of duplicated blocks
- CrossFileDuplication: Consolidation analysis for multi-file clusters
- FileDuplication: Per-file rollup
- ConsolidationOpportunity: ROI-ranked refactoring proposal
- DuplicationImpact: Codebase-wide impact and hotspots
- DuplicationMetrics: Complete results with recommendations and summary
"""

from .parse_result import (
    ParseResult,
    FunctionInfo,
    ClassInfo,
    ParameterInfo,
)

from .code_block import (
    CodeBlock,
    BlockKind,
)

from .duplication_cluster import (
    DuplicationCluster,
    DetectionTier,
    RefactoringEffort,
    Priority,
    ACTIONABLE_PRIORITIES,
)

from .cross_file import (
    CrossFileDuplication,
    FilePair,
    SharedFunctionality,
    RefactoringStrategy,
)

from .file_duplication import FileDuplication

from .consolidation_opportunity import (
    ConsolidationOpportunity,
    ConsolidationType,
)

from .impact import (
    DuplicationImpact,
    DuplicationHotspot,
    CodebaseHealth,
)

from .duplication_metrics import (
    DuplicationMetrics,
    DuplicationRecommendation,
    DuplicationSummary,
)

__all__ = [
    # parse_result
    'ParseResult',
    'FunctionInfo',
    'ClassInfo',
    'ParameterInfo',

    # code_block
    'CodeBlock',
    'BlockKind',

    # duplication_cluster
    'DuplicationCluster',
    'DetectionTier',
    'RefactoringEffort',
    'Priority',
    'ACTIONABLE_PRIORITIES',

    # cross_file
    'CrossFileDuplication',
    'FilePair',
    'SharedFunctionality',
    'RefactoringStrategy',

    # file_duplication
    'FileDuplication',

    # consolidation_opportunity
    'ConsolidationOpportunity',
    'ConsolidationType',

    # impact
    'DuplicationImpact',
    'DuplicationHotspot',
    'CodebaseHealth',

    # duplication_metrics
    'DuplicationMetrics',
    'DuplicationRecommendation',
    'DuplicationSummary',
]
