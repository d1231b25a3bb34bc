"""
Analysis stages that run on the clusters produced by the finder
"""

from .cluster_analyzer import cluster_duplicates, determine_priority, assess_refactoring_effort
from .cross_file import analyze_cross_file_duplication, determine_consolidation_target
from .file_metrics import calculate_file_metrics
from .consolidation import generate_consolidation_opportunities
from .impact import analyze_impact
from .recommendations import (
    AggregateMetrics,
    calculate_aggregate_metrics,
    generate_recommendations,
    generate_summary,
)

__all__ = [
    'cluster_duplicates',
    'determine_priority',
    'assess_refactoring_effort',
    'analyze_cross_file_duplication',
    'determine_consolidation_target',
    'calculate_file_metrics',
    'generate_consolidation_opportunities',
    'analyze_impact',
    'AggregateMetrics',
    'calculate_aggregate_metrics',
    'generate_recommendations',
    'generate_summary',
]
