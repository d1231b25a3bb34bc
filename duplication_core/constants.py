"""
Centralized constants for the duplication detection engine.

Eliminates magic numbers scattered across the finder, cluster scoring,
file aggregation and planning stages. Organized by domain into namespace classes.
"""


class ConfigDefaults:
    MIN_LINES = 6
    MIN_TOKENS = 50
    SIMILARITY_THRESHOLD = 0.85
    TOKEN_SIMILARITY_THRESHOLD = 0.75
    MAX_DISTANCE = 3
    REPORT_TOP_N = 15
    MAX_WORKERS = 1


class WeightDefaults:
    EXACT_DUPLICATION = 1.0
    STRUCTURAL_SIMILARITY = 0.8
    TOKEN_SIMILARITY = 0.6
    CROSS_FILE_IMPACT = 1.2
    MAINTENANCE_BURDEN = 0.9


class GroupingDefaults:
    MIN_GROUP_SIZE = 2
    OVERLAP_RATIO = 0.5


class EffortThresholds:
    LARGE_BLOCK_LINES = 50
    MANY_INSTANCES = 5


class PriorityThresholds:
    CRITICAL_BURDEN = 100
    HIGH_BURDEN = 50
    MEDIUM_BURDEN = 20


class FilePriorityThresholds:
    CRITICAL_RATIO = 0.3
    HIGH_RATIO = 0.2
    MEDIUM_RATIO = 0.1


class EffortEstimates:
    EXACT_HOURS_PER_INSTANCE = 2
    STRUCTURAL_HOURS_PER_INSTANCE = 3
    TOKEN_HOURS_PER_INSTANCE = 1
    CROSS_FILE_HOURS_PER_ENTRY = 4
    STRUCTURAL_HOURS_PER_CLUSTER = 3
    ANNUAL_MAINTENANCE_SAVINGS = 0.2
    COMPLEXITY_DIVISOR = 10.0
    STRUCTURAL_REDUCTION_SHARE = 0.4


class ImpactThresholds:
    DEBT_NORMALIZATION = 100.0
    CHANGE_RISK_PER_MULTIPLIER = 0.2
    CHANGE_RISK_CAP = 2.0
    TESTS_PER_INSTANCE = 2
    HOTSPOT_SCORE = 20
    CRITICAL_DEBT = 50
    POOR_DEBT = 30
    FAIR_DEBT = 15


class SummaryThresholds:
    CRITICAL_RATIO = 0.25
    HIGH_RATIO = 0.15
    MEDIUM_RATIO = 0.08
    SCORE_RATIO_FACTOR = 2


NEW_UTILITY_FILE = "new_utility_file"
