"""
Consolidation Planning

Generates a typed refactoring proposal for every cluster at critical or high
priority and ranks the proposals by return on investment.
"""

from typing import Dict, List, NamedTuple, Sequence

from ..constants import EffortEstimates
from ..models import (
    ConsolidationOpportunity,
    ConsolidationType,
    DetectionTier,
    DuplicationCluster,
)


class ConsolidationPlan(NamedTuple):
    type: ConsolidationType
    description: str
    maintenance_improvement: str
    refactoring_steps: List[str]
    hours_per_instance: int


CONSOLIDATION_PLANS: Dict[DetectionTier, ConsolidationPlan] = {
    DetectionTier.EXACT: ConsolidationPlan(
        type=ConsolidationType.EXTRACT_FUNCTION,
        description="Extract identical code blocks into a shared utility function",
        maintenance_improvement="Eliminates exact duplicates, centralizes logic",
        refactoring_steps=[
            "Identify common parameters and return values",
            "Create new utility function",
            "Replace duplicated code with function calls",
            "Add comprehensive tests for new function",
        ],
        hours_per_instance=EffortEstimates.EXACT_HOURS_PER_INSTANCE,
    ),
    DetectionTier.STRUCTURAL: ConsolidationPlan(
        type=ConsolidationType.CREATE_TEMPLATE,
        description="Create template function or pattern for structurally similar code",
        maintenance_improvement="Standardizes patterns, reduces cognitive overhead",
        refactoring_steps=[
            "Analyze structural differences",
            "Design template or strategy pattern",
            "Implement template function",
            "Refactor instances to use template",
            "Update tests and documentation",
        ],
        hours_per_instance=EffortEstimates.STRUCTURAL_HOURS_PER_INSTANCE,
    ),
    DetectionTier.TOKEN: ConsolidationPlan(
        type=ConsolidationType.STANDARDIZE_CODE,
        description="Standardize code patterns and naming conventions",
        maintenance_improvement="Improves consistency and readability",
        refactoring_steps=[
            "Define coding standards",
            "Refactor instances to follow standards",
            "Update linting rules",
            "Review and test changes",
        ],
        hours_per_instance=EffortEstimates.TOKEN_HOURS_PER_INSTANCE,
    ),
}


def affected_functions(cluster: DuplicationCluster) -> List[str]:
    """Distinct qualified names of the named instances, sorted."""
    return sorted({
        instance.qualified_name
        for instance in cluster.instances
        if instance.qualified_name
    })


def calculate_roi(maintenance_burden: float, effort_hours: int) -> float:
    """
    Yearly maintenance savings per hour of refactoring work.

    Savings are taken as 20% of the cluster's maintenance burden.
    """
    if effort_hours <= 0:
        return 0.0
    return maintenance_burden * EffortEstimates.ANNUAL_MAINTENANCE_SAVINGS / effort_hours


def generate_consolidation_opportunity(cluster: DuplicationCluster, index: int) -> ConsolidationOpportunity:
    plan = CONSOLIDATION_PLANS[cluster.type]
    reduction = cluster.estimated_reduction
    effort_hours = cluster.instance_count * plan.hours_per_instance

    return ConsolidationOpportunity(
        id=f"consolidation_{index}",
        type=plan.type,
        cluster_id=cluster.id,
        description=plan.description,
        affected_files=cluster.affected_files,
        affected_functions=affected_functions(cluster),
        estimated_reduction=reduction,
        complexity_reduction=reduction / EffortEstimates.COMPLEXITY_DIVISOR,
        maintenance_improvement=plan.maintenance_improvement,
        refactoring_steps=list(plan.refactoring_steps),
        estimated_effort_hours=effort_hours,
        roi_score=calculate_roi(cluster.maintenance_burden, effort_hours),
    )


def generate_consolidation_opportunities(clusters: Sequence[DuplicationCluster]) -> List[ConsolidationOpportunity]:
    """
    Opportunities for actionable clusters, best ROI first.

    IDs are numbered in cluster order before ranking; equal ROI keeps
    that order.
    """
    opportunities = []
    for cluster in clusters:
        if cluster.is_actionable:
            opportunities.append(generate_consolidation_opportunity(cluster, len(opportunities)))

    opportunities.sort(key=lambda o: o.roi_score, reverse=True)
    return opportunities
