"""
Tests for cluster scoring.

Run with: python -m pytest duplication_core/analyzers/test_cluster_analyzer.py -v
"""

from duplication_core.analyzers.cluster_analyzer import (
    HIGH_EFFORT_RECOMMENDATIONS,
    assess_refactoring_effort,
    build_cluster,
    calculate_maintenance_burden,
    cluster_duplicates,
    determine_priority,
    generate_cluster_recommendations,
)
from duplication_core.config import DuplicationConfig, WeightFactors
from duplication_core.models import CodeBlock, DetectionTier, Priority, RefactoringEffort
from duplication_core.similarity.lexer import RegexLexer


def make_block(file_path='a.js', start=1, lines=10, content='return value;'):
    return CodeBlock(file_path=file_path, start_line=start, end_line=start + lines - 1, content=content)


def same_file_group(count, lines=10, file_path='a.js'):
    return [make_block(file_path, start=1 + i * 100, lines=lines) for i in range(count)]


class TestMaintenanceBurden:
    """Tests for maintenance burden."""

    def test_exact_weight(self):
        """Test exact burden is instances x lines x 1.0 x 0.9."""
        burden = calculate_maintenance_burden(DetectionTier.EXACT, 2, 10, WeightFactors())
        assert burden == 2 * 10 * 1.0 * 0.9

    def test_tier_weights(self):
        """Test structural and token tiers are weighted down."""
        weights = WeightFactors()
        structural = calculate_maintenance_burden(DetectionTier.STRUCTURAL, 3, 10, weights)
        token = calculate_maintenance_burden(DetectionTier.TOKEN, 3, 10, weights)
        assert structural == 3 * 10 * 0.8 * 0.9
        assert token == 3 * 10 * 0.6 * 0.9

    def test_custom_weights(self):
        """Test configured weights are applied."""
        weights = WeightFactors(exact_duplication=2.0, maintenance_burden=1.0)
        assert calculate_maintenance_burden(DetectionTier.EXACT, 2, 5, weights) == 20.0


class TestRefactoringEffort:
    """Tests for effort assessment."""

    def test_small_local_cluster(self):
        """Test two small blocks in one file are low effort."""
        assert assess_refactoring_effort(same_file_group(2), 10) == RefactoringEffort.LOW

    def test_large_blocks(self):
        """Test blocks over 50 lines are medium effort."""
        assert assess_refactoring_effort(same_file_group(2, lines=60), 60) == RefactoringEffort.MEDIUM

    def test_many_instances_in_one_file(self):
        """Test more than five instances are medium effort."""
        assert assess_refactoring_effort(same_file_group(6), 10) == RefactoringEffort.MEDIUM

    def test_many_files_takes_precedence(self):
        """Test spreading across many files is high effort."""
        instances = [make_block(f'file{i}.js') for i in range(6)]
        assert assess_refactoring_effort(instances, 20) == RefactoringEffort.HIGH

    def test_two_files_two_instances(self):
        """Test two instances in two files is already high effort."""
        instances = [make_block('a.js'), make_block('b.js')]
        assert assess_refactoring_effort(instances, 10) == RefactoringEffort.HIGH

    def test_integer_half(self):
        """Test the file count is compared with half the instances, rounded down."""
        # 5 instances over 3 files: 3 > 5 // 2
        instances = [make_block('a.js', 1), make_block('a.js', 100), make_block('b.js'),
                     make_block('b.js', 100), make_block('c.js')]
        assert assess_refactoring_effort(instances, 10) == RefactoringEffort.HIGH
        # 4 instances over 2 files: 2 > 4 // 2 is false
        instances = [make_block('a.js', 1), make_block('a.js', 100), make_block('b.js'), make_block('b.js', 100)]
        assert assess_refactoring_effort(instances, 10) == RefactoringEffort.LOW


class TestPriority:
    """Tests for priority assignment."""

    def test_critical(self):
        """Test high burden with low effort is critical."""
        assert determine_priority(150, RefactoringEffort.LOW) == Priority.CRITICAL

    def test_high(self):
        """Test burden over 50 with medium effort is high."""
        assert determine_priority(75, RefactoringEffort.MEDIUM) == Priority.HIGH

    def test_medium(self):
        """Test burden over 20 is medium."""
        assert determine_priority(30, RefactoringEffort.MEDIUM) == Priority.MEDIUM

    def test_low(self):
        """Test small burden is low."""
        assert determine_priority(10, RefactoringEffort.LOW) == Priority.LOW

    def test_high_effort_caps_at_medium(self):
        """Test high effort keeps even a large burden at medium."""
        assert determine_priority(200, RefactoringEffort.HIGH) == Priority.MEDIUM

    def test_boundaries_are_exclusive(self):
        """Test thresholds must be exceeded, not met."""
        assert determine_priority(100, RefactoringEffort.LOW) == Priority.HIGH
        assert determine_priority(50, RefactoringEffort.LOW) == Priority.MEDIUM
        assert determine_priority(20, RefactoringEffort.LOW) == Priority.LOW

    def test_monotonic_in_burden(self):
        """Test raising burden at fixed effort never lowers priority."""
        for effort in RefactoringEffort:
            ranks = [determine_priority(burden / 2, effort).rank for burden in range(0, 400)]
            assert ranks == sorted(ranks)


class TestRecommendations:
    """Tests for cluster recommendations."""

    def test_tier_specific(self):
        """Test each tier gets its own two recommendations."""
        exact = generate_cluster_recommendations(DetectionTier.EXACT, RefactoringEffort.LOW)
        structural = generate_cluster_recommendations(DetectionTier.STRUCTURAL, RefactoringEffort.LOW)
        token = generate_cluster_recommendations(DetectionTier.TOKEN, RefactoringEffort.LOW)
        assert exact[0] == "Extract common functionality into a shared utility function"
        assert structural[1] == "Use design patterns like Strategy or Template Method"
        assert token[0] == "Standardize variable naming and code formatting"
        assert len(exact) == len(structural) == len(token) == 2

    def test_high_effort_adds_cautions(self):
        """Test high effort appends phased-refactoring advice."""
        recommendations = generate_cluster_recommendations(DetectionTier.EXACT, RefactoringEffort.HIGH)
        assert recommendations[2:] == HIGH_EFFORT_RECOMMENDATIONS


class TestBuildCluster:
    """Tests for cluster construction."""

    def test_fields(self):
        """Test a cluster is scored from its representative instance."""
        group = same_file_group(3, lines=20)
        cluster = build_cluster(group, DetectionTier.EXACT, 4, DuplicationConfig(), RegexLexer())
        assert cluster.id == 'exact_4'
        assert cluster.line_count == 20
        assert cluster.similarity_score == 1.0
        assert cluster.token_count == 3
        assert cluster.maintenance_burden == 3 * 20 * 0.9
        assert cluster.refactoring_effort == RefactoringEffort.LOW
        assert cluster.priority == Priority.HIGH


class TestClusterDuplicates:
    """Tests for building a tier's cluster list."""

    def test_sorted_by_burden_with_original_ids(self):
        """Test clusters sort by burden but keep pre-sort ids."""
        groups = [same_file_group(2, lines=10), same_file_group(2, lines=40), same_file_group(2, lines=10, file_path='b.js')]
        clusters = cluster_duplicates(groups, DetectionTier.TOKEN, DuplicationConfig(), RegexLexer())
        assert [c.id for c in clusters] == ['token_1', 'token_0', 'token_2']

    def test_small_groups_dropped(self):
        """Test groups with fewer than two members are discarded."""
        groups = [[make_block()], same_file_group(2)]
        clusters = cluster_duplicates(groups, DetectionTier.EXACT, DuplicationConfig(), RegexLexer())
        assert [c.id for c in clusters] == ['exact_1']
        assert all(c.instance_count >= 2 for c in clusters)

    def test_empty(self):
        """Test no groups gives no clusters."""
        assert cluster_duplicates([], DetectionTier.EXACT, DuplicationConfig(), RegexLexer()) == []
