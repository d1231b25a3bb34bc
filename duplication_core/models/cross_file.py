"""
CrossFileDuplication Model - Clusters that span more than one file

Records every distinct file pair a cluster touches, what kind of
functionality is being duplicated, how to consolidate it and where.
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class SharedFunctionality(str, Enum):
    """Functionality category inferred from function names (in tie-break order)"""
    VALIDATION = "validation"
    FORMATTING = "formatting"
    PARSING = "parsing"
    TRANSFORMATION = "transformation"
    UTILITY = "utility"


class RefactoringStrategy(str, Enum):
    """Consolidation approach for a cross-file cluster"""
    EXTRACT_TO_SHARED_MODULE = "extract_to_shared_module"
    CREATE_TEMPLATE_FUNCTION = "create_template_function"
    STANDARDIZE_AND_REFACTOR = "standardize_and_refactor"
    EXTRACT_LOCAL_FUNCTION = "extract_local_function"
    MANUAL_REVIEW_REQUIRED = "manual_review_required"


class FilePair(BaseModel):
    """Duplication shared between two specific files"""
    file1: str = Field(..., description="Lexicographically smaller file")
    file2: str = Field(..., description="Lexicographically larger file")
    similarity: float = Field(..., ge=0.0, le=1.0, description="Cluster similarity score")
    shared_lines: int = Field(..., description="Cluster line count")
    shared_tokens: int = Field(..., ge=0, description="Cluster token count")

    model_config = {'frozen': True}


class CrossFileDuplication(BaseModel):
    """
    Cross-file consolidation analysis for one cluster

    consolidation_target is either a file path from the cluster or the
    sentinel 'new_utility_file' when no file holds more than one instance.
    """

    cluster_id: str = Field(..., description="ID of the analysed cluster")
    file_pairs: List[FilePair] = Field(default_factory=list, description="All distinct file pairs")
    shared_functionality: SharedFunctionality = Field(..., description="Majority functionality category")
    consolidation_target: str = Field(..., description="Destination file or 'new_utility_file'")
    estimated_savings: int = Field(..., description="Lines saved by keeping one copy")
    refactoring_strategy: RefactoringStrategy = Field(..., description="Recommended approach")

    model_config = {
        'frozen': True,
        'json_schema_extra': {
            'example': {
                'cluster_id': 'exact_0',
                'file_pairs': [{
                    'file1': 'src/a.js',
                    'file2': 'src/b.js',
                    'similarity': 1.0,
                    'shared_lines': 8,
                    'shared_tokens': 30,
                }],
                'shared_functionality': 'validation',
                'consolidation_target': 'new_utility_file',
                'estimated_savings': 8,
                'refactoring_strategy': 'extract_to_shared_module',
            }
        }
    }
