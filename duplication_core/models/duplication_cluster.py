"""
DuplicationCluster Model - Group of duplicated code blocks

Groups together CodeBlocks found by one detection tier, along with the
scores the cluster analyzer derives from them: similarity, maintenance
burden, refactoring effort and priority.
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field, computed_field, field_validator

from .code_block import CodeBlock


class DetectionTier(str, Enum):
    """Detection tier that produced the cluster"""
    EXACT = "exact"            # Identical (optionally whitespace-normalized) content
    STRUCTURAL = "structural"  # Same keyword/punctuation skeleton
    TOKEN = "token"            # Overlapping normalized token sets


class RefactoringEffort(str, Enum):
    """Estimated difficulty of consolidating the cluster"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Priority(str, Enum):
    """Action priority tier"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
    Priority.CRITICAL: 3,
}

ACTIONABLE_PRIORITIES = (Priority.CRITICAL, Priority.HIGH)


class DuplicationCluster(BaseModel):
    """
    Scored group of duplicated code blocks

    A cluster always has at least two instances; groups that collapse below
    that are discarded before scoring.
    """

    id: str = Field(..., description="Cluster identifier, e.g. 'exact_0'")
    type: DetectionTier = Field(..., description="Detection tier")
    instances: List[CodeBlock] = Field(..., min_length=2, description="Member blocks in detection order")

    similarity_score: float = Field(..., ge=0.0, le=1.0, description="Average pairwise content similarity")
    line_count: int = Field(..., description="Line count of the representative instance")
    token_count: int = Field(..., ge=0, description="Estimated token count of the representative instance")

    maintenance_burden: float = Field(..., ge=0.0, description="Weighted ongoing cost of the duplication")
    refactoring_effort: RefactoringEffort = Field(..., description="Estimated consolidation difficulty")
    priority: Priority = Field(..., description="Action priority")
    recommendations: List[str] = Field(default_factory=list, description="Suggested refactoring steps")

    model_config = {
        'frozen': True,
        'json_schema_extra': {
            'example': {
                'id': 'exact_0',
                'type': 'exact',
                'similarity_score': 1.0,
                'line_count': 12,
                'token_count': 48,
                'maintenance_burden': 21.6,
                'refactoring_effort': 'high',
                'priority': 'medium',
            }
        }
    }

    @field_validator('instances')
    @classmethod
    def validate_min_instances(cls, v):
        """Ensure at least 2 instances (a duplicate must occur more than once)"""
        if len(v) < 2:
            raise ValueError('A duplication cluster must have at least 2 instances')
        return v

    @computed_field
    @property
    def instance_count(self) -> int:
        """Number of occurrences"""
        return len(self.instances)

    @computed_field
    @property
    def affected_files(self) -> List[str]:
        """Distinct files touched by the cluster, sorted"""
        return sorted({instance.file_path for instance in self.instances})

    @property
    def is_actionable(self) -> bool:
        return self.priority in ACTIONABLE_PRIORITIES

    @property
    def estimated_reduction(self) -> int:
        """Lines removed by keeping a single copy"""
        return self.line_count * (len(self.instances) - 1)

    @property
    def duplicated_lines(self) -> int:
        return self.line_count * len(self.instances)
