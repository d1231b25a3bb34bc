"""
ConsolidationOpportunity Model - Typed refactoring proposal

Represents a specific refactoring proposal for one high or critical
priority cluster, including the steps to carry it out and the expected
return on the effort.
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class ConsolidationType(str, Enum):
    """Kind of refactoring proposed"""
    EXTRACT_FUNCTION = "extract_function"    # Exact duplicates -> shared function
    CREATE_TEMPLATE = "create_template"      # Structural duplicates -> template
    STANDARDIZE_CODE = "standardize_code"    # Token duplicates -> shared conventions


class ConsolidationOpportunity(BaseModel):
    """
    Refactoring proposal for one cluster

    ROI compares the yearly maintenance savings (20% of the cluster burden)
    with the estimated hours of work.
    """

    id: str = Field(..., description="Opportunity identifier, e.g. 'consolidation_0'")
    type: ConsolidationType = Field(..., description="Refactoring type")
    cluster_id: str = Field(..., description="ID of the cluster addressed")
    description: str = Field(..., description="What to do")

    affected_files: List[str] = Field(default_factory=list, description="Files to modify, sorted")
    affected_functions: List[str] = Field(default_factory=list, description="Qualified function names, sorted")

    estimated_reduction: int = Field(..., description="Lines eliminated")
    complexity_reduction: float = Field(..., description="estimated_reduction / 10")
    maintenance_improvement: str = Field(..., description="Expected maintenance benefit")
    refactoring_steps: List[str] = Field(default_factory=list, description="Step-by-step plan")

    estimated_effort_hours: int = Field(..., ge=0, description="Estimated effort in hours")
    roi_score: float = Field(..., ge=0.0, description="Maintenance savings per hour of effort")

    model_config = {
        'frozen': True,
        'json_schema_extra': {
            'example': {
                'id': 'consolidation_0',
                'type': 'extract_function',
                'cluster_id': 'exact_0',
                'description': 'Extract identical code blocks into a shared utility function',
                'affected_files': ['src/a.js'],
                'affected_functions': ['formatDate', 'formatTime'],
                'estimated_reduction': 30,
                'complexity_reduction': 3.0,
                'estimated_effort_hours': 8,
                'roi_score': 1.62,
            }
        }
    }
