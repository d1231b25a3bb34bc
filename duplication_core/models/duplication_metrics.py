"""
DuplicationMetrics Model - Complete duplication analysis results

Top-level model returned by a detection run: the three cluster lists,
cross-file analysis, per-file rollups, consolidation opportunities, impact
analysis, recommendations and an executive summary. Produced fresh on every
run and never mutated after it is returned.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from .consolidation_opportunity import ConsolidationOpportunity
from .cross_file import CrossFileDuplication
from .duplication_cluster import DuplicationCluster
from .file_duplication import FileDuplication
from .impact import DuplicationImpact


class DuplicationRecommendation(BaseModel):
    """Prioritized, category-level improvement suggestion"""
    priority: str = Field(..., description="critical, high or medium")
    category: str = Field(..., description="refactoring, architecture or patterns")
    title: str = Field(..., description="Short title")
    description: str = Field(..., description="What to do")
    impact: str = Field(..., description="Expected impact level")
    effort: str = Field(..., description="Expected effort level")
    clusters: List[str] = Field(default_factory=list, description="Cluster IDs covered")
    techniques: List[str] = Field(default_factory=list, description="Refactoring techniques")
    estimated_hours: int = Field(0, ge=0, description="Estimated effort in hours")
    expected_reduction: int = Field(0, ge=0, description="Expected line reduction")

    model_config = {'frozen': True}


class DuplicationSummary(BaseModel):
    """Executive-level overview"""
    health_score: float = Field(100.0, ge=0.0, le=100.0, description="max(0, 100 x (1 - 2 x ratio))")
    risk_level: str = Field("low", description="Risk tier from the duplication ratio")
    maintenance_burden: str = Field("low", description="Burden tier from the duplication ratio")
    refactoring_needed: int = Field(0, ge=0, description="Clusters at high or critical priority")
    potential_savings: int = Field(0, ge=0, description="Lines removable by all opportunities")
    recommended_actions: int = Field(0, ge=0, description="Number of recommendations")

    model_config = {'frozen': True}


class DuplicationMetrics(BaseModel):
    """
    Complete duplication analysis result

    Every container is always present; an input without duplicates yields
    empty lists and a per-file map of zero rollups rather than None.
    """

    overall_score: float = Field(100.0, ge=0.0, le=100.0, description="Inverse duplication score")
    total_duplicated_lines: int = Field(0, ge=0, description="Sum of lines x instances over all clusters")
    duplication_ratio: float = Field(0.0, ge=0.0, description="Duplicated lines / estimated total lines")

    exact_duplicates: List[DuplicationCluster] = Field(default_factory=list)
    structural_duplicates: List[DuplicationCluster] = Field(default_factory=list)
    token_duplicates: List[DuplicationCluster] = Field(default_factory=list)
    cross_file_duplicates: List[CrossFileDuplication] = Field(default_factory=list)
    duplication_by_file: Dict[str, FileDuplication] = Field(default_factory=dict)
    consolidation_opportunities: List[ConsolidationOpportunity] = Field(default_factory=list)
    impact_analysis: DuplicationImpact = Field(default_factory=DuplicationImpact)
    recommendations: List[DuplicationRecommendation] = Field(default_factory=list)
    summary: DuplicationSummary = Field(default_factory=DuplicationSummary)

    model_config = {
        'frozen': True,
        'json_schema_extra': {
            'example': {
                'overall_score': 82.5,
                'total_duplicated_lines': 70,
                'duplication_ratio': 0.0875,
                'summary': {
                    'health_score': 82.5,
                    'risk_level': 'medium',
                    'maintenance_burden': 'medium',
                    'refactoring_needed': 2,
                    'potential_savings': 35,
                    'recommended_actions': 2,
                },
            }
        }
    }

    def all_clusters(self) -> List[DuplicationCluster]:
        """Exact, structural and token clusters in that order"""
        return [*self.exact_duplicates, *self.structural_duplicates, *self.token_duplicates]

    def top_clusters(self, top_n: Optional[int] = None) -> List[DuplicationCluster]:
        """
        Clusters across all tiers ordered by maintenance burden, capped at top_n

        Ties keep tier order (exact, structural, token) and in-tier order.
        """
        ranked = sorted(self.all_clusters(), key=lambda c: -c.maintenance_burden)
        if top_n is None:
            return ranked
        return ranked[:top_n]

    def to_summary_dict(self) -> Dict[str, Any]:
        """Export summary data for dashboards and the technical-debt scorer"""
        return {
            'overall_score': round(self.overall_score, 2),
            'duplication_ratio': round(self.duplication_ratio, 4),
            'total_duplicated_lines': self.total_duplicated_lines,
            'exact_clusters': len(self.exact_duplicates),
            'structural_clusters': len(self.structural_duplicates),
            'token_clusters': len(self.token_duplicates),
            'cross_file_clusters': len(self.cross_file_duplicates),
            'files_analyzed': len(self.duplication_by_file),
            'hotspots': len(self.impact_analysis.hotspot_analysis),
            'codebase_health': self.impact_analysis.codebase_health.value,
            'technical_debt_score': round(self.impact_analysis.technical_debt_score, 2),
            'consolidation_opportunities': len(self.consolidation_opportunities),
            'best_roi_score': round(max((o.roi_score for o in self.consolidation_opportunities), default=0.0), 4),
            'risk_level': self.summary.risk_level,
            'potential_savings': self.summary.potential_savings,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON (field order and content are deterministic)"""
        return self.model_dump_json(indent=indent)
