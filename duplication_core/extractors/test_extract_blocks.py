"""
Tests for extract_blocks module.

Run with: python -m pytest duplication_core/extractors/test_extract_blocks.py -v
"""

import pytest
from pydantic import ValidationError

from duplication_core.config import DuplicationConfig
from duplication_core.extractors.extract_blocks import (
    BlockExtractor,
    coerce_parse_results,
    estimate_total_lines,
    extract_code_blocks,
    generate_placeholder_content,
    is_block_size_valid,
    slice_source,
    split_source_lines,
)
from duplication_core.models import ClassInfo, FunctionInfo, ParameterInfo, ParseResult
from duplication_core.similarity.lexer import RegexLexer


SOURCE = "\n".join(f"line {n}" for n in range(1, 31))


def make_parse_result(file_path='src/app.js', functions=(), classes=(), source=None, total_lines=None):
    return ParseResult(
        file_path=file_path,
        functions=list(functions),
        classes=list(classes),
        source=source,
        total_lines=total_lines,
    )


def fn(name, start, end, **kwargs):
    return FunctionInfo(name=name, start_line=start, end_line=end, **kwargs)


class TestBlockSize:
    """Tests for the minimum block size."""

    def test_inclusive_line_count(self):
        """Test a block of exactly min_lines qualifies."""
        assert is_block_size_valid(1, 6, 6)
        assert not is_block_size_valid(1, 5, 6)


class TestContent:
    """Tests for block content."""

    def test_slice_source(self):
        """Test slicing is 1-indexed and inclusive."""
        lines = SOURCE.splitlines()
        assert slice_source(lines, 2, 3) == "line 2\nline 3"

    def test_slice_clamped(self):
        """Test ranges past either end of the file are clamped."""
        lines = ["a", "b", "c"]
        assert slice_source(lines, 0, 2) == "a\nb"
        assert slice_source(lines, 2, 99) == "b\nc"

    def test_placeholder(self):
        """Test placeholder content has one line per source line."""
        assert generate_placeholder_content(3, 4) == "  // Line 3 content\n  // Line 4 content"

    def test_split_on_newline_only(self):
        """Test form feeds and Unicode separators do not start new lines."""
        assert split_source_lines("a\fb\nc\u2028d\ne") == ["a\fb", "c\u2028d", "e"]

    def test_split_crlf(self):
        """Test CRLF endings give the same lines as LF."""
        assert split_source_lines("a\r\nb\r\n") == split_source_lines("a\nb\n") == ["a", "b", ""]

    def test_slice_matches_parser_lines_with_separators(self):
        """Test block content follows newline line numbers past \\f and U+2028."""
        body = "function a() {\n  x();\n  y();\n  z();\n  w();\n}"
        source = "// header\f\nvar s = '\u2028';\n" + body + "\n"
        result = make_parse_result(functions=[fn('a', 3, 8)], source=source)
        blocks = extract_code_blocks([result])
        assert len(blocks) == 1
        assert blocks[0].content == body


class TestExtractCodeBlocks:
    """Tests for block extraction."""

    def test_functions_then_methods(self):
        """Test functions come first, then methods in class order."""
        result = make_parse_result(
            functions=[fn('top', 1, 8)],
            classes=[ClassInfo(name='User', methods=[fn('save', 10, 20), fn('load', 22, 30)])],
            source=SOURCE,
        )
        blocks = extract_code_blocks([result])
        assert [b.qualified_name for b in blocks] == ['top', 'User.save', 'User.load']

    def test_short_blocks_skipped(self):
        """Test blocks below min_lines are not extracted."""
        result = make_parse_result(functions=[fn('tiny', 1, 3), fn('big', 5, 12)], source=SOURCE)
        blocks = extract_code_blocks([result])
        assert [b.function_name for b in blocks] == ['big']

    def test_min_lines_configurable(self):
        """Test a lower min_lines admits smaller blocks."""
        result = make_parse_result(functions=[fn('tiny', 1, 3)], source=SOURCE)
        assert len(extract_code_blocks([result], DuplicationConfig(min_lines=3))) == 1

    def test_real_content_from_source(self):
        """Test content is the literal slice of the source."""
        result = make_parse_result(functions=[fn('f', 1, 6)], source=SOURCE)
        block = extract_code_blocks([result])[0]
        assert block.content == "\n".join(f"line {n}" for n in range(1, 7))

    def test_placeholder_without_source(self):
        """Test placeholder content when no source is given."""
        result = make_parse_result(functions=[fn('f', 4, 9)])
        block = extract_code_blocks([result])[0]
        assert block.content.splitlines()[0] == "  // Line 4 content"
        assert len(block.content.splitlines()) == 6

    def test_derived_representations(self):
        """Test tokenized content and fingerprint are filled in."""
        result = make_parse_result(functions=[fn('f', 1, 6)], source=SOURCE)
        block = extract_code_blocks([result])[0]
        assert block.tokenized_content == " ".join(f"line {n}" for n in range(1, 7))
        assert len(block.structural_hash) == 64

    def test_function_metadata(self):
        """Test function metadata carries id, kind, flags and parameter count."""
        result = make_parse_result(
            functions=[fn('f', 1, 6, is_async=True, is_exported=True, parameters=[ParameterInfo(name='a')])],
            source=SOURCE,
        )
        block = extract_code_blocks([result])[0]
        assert block.metadata == {'id': 0, 'type': 'function', 'async': True, 'exported': True, 'param_count': 1}

    def test_method_metadata(self):
        """Test method metadata names the class."""
        result = make_parse_result(classes=[ClassInfo(name='Repo', methods=[fn('find', 1, 6)])], source=SOURCE)
        block = extract_code_blocks([result])[0]
        assert block.metadata == {'id': 0, 'type': 'method', 'class': 'Repo', 'async': False, 'param_count': 0}
        assert block.class_name == 'Repo'

    def test_ids_run_across_files(self):
        """Test block ids continue across files."""
        results = [
            make_parse_result('a.js', functions=[fn('f', 1, 6)], source=SOURCE),
            make_parse_result('b.js', functions=[fn('g', 1, 6), fn('h', 10, 16)], source=SOURCE),
        ]
        blocks = extract_code_blocks(results)
        assert [b.metadata['id'] for b in blocks] == [0, 1, 2]

    def test_empty_name_is_none(self):
        """Test anonymous functions have no function name."""
        result = make_parse_result(functions=[fn('', 1, 6)], source=SOURCE)
        assert extract_code_blocks([result])[0].function_name is None

    def test_custom_lexer(self):
        """Test a supplied lexer is used for normalization."""
        lexer = RegexLexer(DuplicationConfig(ignore_variable_names=True))
        result = make_parse_result(functions=[fn('f', 1, 6)], source=SOURCE)
        block = BlockExtractor(DuplicationConfig(), lexer).extract([result])[0]
        assert block.tokenized_content.startswith("IDENTIFIER NUMBER_LITERAL")


class TestTotalLines:
    """Tests for file size estimation."""

    def test_explicit_total(self):
        """Test a parser-reported total wins."""
        assert estimate_total_lines(make_parse_result(functions=[fn('f', 1, 6)], total_lines=120)) == 120

    def test_max_end_line_fallback(self):
        """Test the furthest end line is used otherwise."""
        result = make_parse_result(
            functions=[fn('f', 1, 6)],
            classes=[ClassInfo(name='C', methods=[fn('m', 10, 44)])],
        )
        assert estimate_total_lines(result) == 44

    def test_empty_file(self):
        """Test a file without functions has zero lines."""
        assert estimate_total_lines(make_parse_result()) == 0


class TestCoerceParseResults:
    """Tests for accepting plain dicts."""

    def test_dicts_validated(self):
        """Test dicts become ParseResult models."""
        results = coerce_parse_results([{'file_path': 'a.js', 'functions': [{'name': 'f', 'start_line': 1, 'end_line': 6}]}])
        assert isinstance(results[0], ParseResult)
        assert results[0].functions[0].name == 'f'

    def test_models_pass_through(self):
        """Test models are returned unchanged."""
        result = make_parse_result()
        assert coerce_parse_results([result])[0] is result

    def test_malformed_dict(self):
        """Test malformed dicts raise a validation error."""
        with pytest.raises(ValidationError):
            coerce_parse_results([{'functions': []}])
