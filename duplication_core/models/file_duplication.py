"""
FileDuplication Model - Per-file duplication rollup
"""

from pydantic import BaseModel, Field

from .duplication_cluster import Priority


class FileDuplication(BaseModel):
    """Internal and external duplication totals for one file"""

    file_path: str = Field(..., description="File path")
    internal_duplication: int = Field(0, ge=0, description="Lines duplicated within this file")
    external_duplication: int = Field(0, ge=0, description="Lines of this file duplicated elsewhere")
    total_lines: int = Field(0, ge=0, description="Line count used as the ratio denominator")
    duplication_ratio: float = Field(0.0, ge=0.0, description="(internal + external) / total_lines")
    hotspot_score: float = Field(0.0, ge=0.0, description="duplication_ratio x 100")
    refactoring_priority: Priority = Field(Priority.LOW, description="File-level refactoring priority")

    model_config = {
        'frozen': True,
        'json_schema_extra': {
            'example': {
                'file_path': 'src/utils.js',
                'internal_duplication': 24,
                'external_duplication': 12,
                'total_lines': 120,
                'duplication_ratio': 0.3,
                'hotspot_score': 30.0,
                'refactoring_priority': 'high',
            }
        }
    }
