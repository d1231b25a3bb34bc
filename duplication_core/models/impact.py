"""
DuplicationImpact Model - Codebase-wide maintenance impact
"""

from enum import Enum
from typing import List
from pydantic import BaseModel, Field

from .duplication_cluster import Priority


class CodebaseHealth(str, Enum):
    """Health tier derived from the technical-debt score"""
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


class DuplicationHotspot(BaseModel):
    """File whose duplication density exceeds the hotspot threshold"""
    location: str = Field(..., description="File path")
    duplication_score: float = Field(..., ge=0.0, description="File hotspot score")
    affected_functions: int = Field(..., ge=0, description="Distinct duplicated function names in the file")
    maintenance_risk: Priority = Field(..., description="File refactoring priority")
    recommended_action: str = Field(..., description="Suggested next step")

    model_config = {'frozen': True}


class DuplicationImpact(BaseModel):
    """Aggregate maintenance and technical-debt impact of all clusters"""

    maintenance_multiplier: float = Field(0.0, ge=0.0, description="Instances per cluster")
    technical_debt_score: float = Field(0.0, ge=0.0, description="Total burden / 100")
    change_risk_factor: float = Field(0.0, ge=0.0, le=2.0, description="min(multiplier x 0.2, 2.0)")
    testing_burden: int = Field(0, ge=0, description="Tests implied by duplicated instances")
    codebase_health: CodebaseHealth = Field(CodebaseHealth.GOOD, description="Health tier")
    hotspot_analysis: List[DuplicationHotspot] = Field(default_factory=list, description="Hotspots, densest first")

    model_config = {
        'frozen': True,
        'json_schema_extra': {
            'example': {
                'maintenance_multiplier': 2.5,
                'technical_debt_score': 3.2,
                'change_risk_factor': 0.5,
                'testing_burden': 20,
                'codebase_health': 'good',
                'hotspot_analysis': [],
            }
        }
    }
