"""
Tests for similarity metrics.

Run with: python -m pytest duplication_core/similarity/test_structural.py -v
"""

import logging

import pytest

from duplication_core.config import DuplicationConfig
from duplication_core.detector import DuplicationDetector
from duplication_core.models import CodeBlock
from duplication_core.similarity.structural import (
    average_pairwise_similarity,
    calculate_content_similarity,
    calculate_token_similarity,
    levenshtein_distance,
)
from duplication_core.test_detector import mixed_codebase


def block(content, start=1):
    return CodeBlock(file_path='a.js', start_line=start, end_line=start + 5, content=content)


class TestLevenshteinDistance:
    """Tests for edit distance."""

    @pytest.mark.parametrize('s1,s2,expected', [
        ('hello', 'hello', 0),
        ('hello', 'helloo', 1),
        ('hello', 'hell', 1),
        ('hello', 'hallo', 1),
        ('', '', 0),
        ('', 'hello', 5),
        ('abc', 'xyz', 3),
        ('kitten', 'sitting', 3),
    ])
    def test_known_distances(self, s1, s2, expected):
        """Test distances for known pairs."""
        assert levenshtein_distance(s1, s2) == expected

    @pytest.mark.parametrize('s1,s2', [
        ('kitten', 'sitting'),
        ('flaw', 'lawn'),
        ('', 'abc'),
        ('function a() {}', 'function b() { return 1; }'),
    ])
    def test_symmetric(self, s1, s2):
        """Test distance does not depend on argument order."""
        assert levenshtein_distance(s1, s2) == levenshtein_distance(s2, s1)

    def test_zero_only_for_identical(self):
        """Test different strings always have a positive distance."""
        assert levenshtein_distance('a', 'b') > 0
        assert levenshtein_distance('ab', 'ba') > 0
        assert levenshtein_distance('same', 'same') == 0

    def test_long_bodies(self):
        """Test distance on multi-kilobyte function bodies."""
        body = '\n'.join(f'  total += items[{i}].price;' for i in range(100))
        edited = body.replace('total +=', 'totals +=', 1).replace('items[42]', 'itemz[42]')
        assert len(body) > 2500
        assert levenshtein_distance(body, edited) == 2
        assert calculate_content_similarity(body, edited) == pytest.approx(1.0 - 2 / len(edited))

    def test_top_clusters_capped(self, caplog):
        """Test the top cluster log is capped at report_top_n."""
        with caplog.at_level(logging.DEBUG, logger='duplication_core'):
            DuplicationDetector(DuplicationConfig(report_top_n=1)).detect(mixed_codebase())
        assert caplog.text.count('Top cluster') == 1


class TestContentSimilarity:
    """Tests for Levenshtein-based content similarity."""

    @pytest.mark.parametrize('content', ['', 'x', 'function test() { return true; }'])
    def test_identical_is_one(self, content):
        """Test identical contents, including empty, score 1.0."""
        assert calculate_content_similarity(content, content) == 1.0

    def test_very_similar(self):
        """Test a one-word change stays above 0.8."""
        result = calculate_content_similarity(
            "function test() { return true; }", "function test() { return false; }"
        )
        assert 0.8 <= result < 1.0

    def test_moderately_similar(self):
        """Test renamed variables stay above 0.6."""
        result = calculate_content_similarity(
            "function validateInput(data) { return data.valid; }",
            "function validateOutput(result) { return result.valid; }",
        )
        assert 0.6 <= result <= 1.0

    def test_one_empty(self):
        """Test similarity to the empty string is 0."""
        assert calculate_content_similarity('abc', '') == 0.0

    def test_bounded(self):
        """Test unrelated contents stay within [0, 1]."""
        result = calculate_content_similarity(
            "function test() {}", "class Example extends Base { constructor() { super(); } }"
        )
        assert 0.0 <= result <= 1.0


class TestTokenSimilarity:
    """Tests for Jaccard token similarity."""

    def test_both_empty(self):
        """Test two empty token sets are identical."""
        assert calculate_token_similarity('', '') == 1.0

    def test_one_empty(self):
        """Test one empty token set scores 0."""
        assert calculate_token_similarity('a b', '') == 0.0
        assert calculate_token_similarity('   ', 'a') == 0.0

    def test_identical(self):
        """Test identical token strings score 1."""
        assert calculate_token_similarity('a b c', 'a b c') == 1.0

    def test_partial_overlap(self):
        """Test Jaccard over sets."""
        # {a, b, c} vs {b, c, d}: 2 shared of 4
        assert calculate_token_similarity('a b c', 'b c d') == 0.5

    def test_duplicates_ignored(self):
        """Test repeated tokens count once."""
        assert calculate_token_similarity('a a a b', 'a b') == 1.0


class TestAveragePairwiseSimilarity:
    """Tests for group similarity."""

    def test_single_block(self):
        """Test fewer than two blocks score 0."""
        assert average_pairwise_similarity([block('x')]) == 0.0
        assert average_pairwise_similarity([]) == 0.0

    def test_identical_blocks(self):
        """Test identical blocks score 1."""
        assert average_pairwise_similarity([block('abc'), block('abc', 10), block('abc', 20)]) == 1.0

    def test_mean_of_pairs(self):
        """Test the score is the mean over all pairs."""
        blocks = [block('abcd'), block('abcd', 10), block('abce', 20)]
        # pairs: 1.0, 0.75, 0.75
        assert average_pairwise_similarity(blocks) == pytest.approx(2.5 / 3)
