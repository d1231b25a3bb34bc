"""
Code Block Extraction

Walks the parsed syntactic inventory and emits one CodeBlock per function
and per class method that meets the minimum line count. Each block carries
its raw content plus the normalized token string and structural fingerprint
produced by the lexer.

Content is the literal slice of the file when the parse result carries its
source text. Without it, each line is represented by a placeholder, which
makes blocks with the same line span compare as identical.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..config import DuplicationConfig
from ..models import BlockKind, ClassInfo, CodeBlock, FunctionInfo, ParseResult
from ..similarity.lexer import Lexer, RegexLexer

logger = logging.getLogger(__name__)

ParseRecord = Union[ParseResult, Mapping[str, Any]]


def coerce_parse_results(records: Iterable[ParseRecord]) -> List[ParseResult]:
    """Validate plain dicts into ParseResult models; models pass through."""
    results = []
    for record in records:
        if isinstance(record, ParseResult):
            results.append(record)
        else:
            results.append(ParseResult.model_validate(record))
    return results


def is_block_size_valid(start_line: int, end_line: int, min_lines: int) -> bool:
    """Check if a block spans at least min_lines lines."""
    return end_line - start_line + 1 >= min_lines


def generate_placeholder_content(start_line: int, end_line: int) -> str:
    """Line-range placeholder used when no source text is available."""
    return "\n".join(f"  // Line {line} content" for line in range(start_line, end_line + 1))


def slice_source(source_lines: Sequence[str], start_line: int, end_line: int) -> str:
    """Return lines start_line..end_line (1-indexed, inclusive), clamped to the file."""
    start = max(start_line, 1) - 1
    return "\n".join(source_lines[start:max(end_line, 0)])


def split_source_lines(source: str) -> List[str]:
    """Split source on newlines only, dropping the CR of CRLF endings."""
    return [line[:-1] if line.endswith('\r') else line for line in source.split('\n')]


def estimate_total_lines(parse_result: ParseResult) -> int:
    """
    Line count of a file.

    Uses the parser-reported total when present, otherwise the furthest
    end line of any function or method (a lower bound, not an exact LOC count).
    """
    if parse_result.total_lines is not None:
        return parse_result.total_lines
    return parse_result.max_end_line()


class BlockExtractor:
    """
    Builds CodeBlocks from parse results.

    Block ids run across the whole extraction, so an extractor instance is
    meant for a single run.
    """

    def __init__(self, config: DuplicationConfig, lexer: Optional[Lexer] = None) -> None:
        self.config = config
        self.lexer = lexer or RegexLexer(config)
        self._next_id = 0

    def extract(self, parse_results: Sequence[ParseResult]) -> List[CodeBlock]:
        blocks: List[CodeBlock] = []

        for parse_result in parse_results:
            source_lines = split_source_lines(parse_result.source) if parse_result.source is not None else None
            if source_lines is None and (parse_result.functions or parse_result.classes):
                logger.debug("No source text for %s; using line placeholders", parse_result.file_path)

            for function in parse_result.functions:
                if is_block_size_valid(function.start_line, function.end_line, self.config.min_lines):
                    blocks.append(self._build_block(parse_result, source_lines, function))

            for class_info in parse_result.classes:
                for method in class_info.methods:
                    if is_block_size_valid(method.start_line, method.end_line, self.config.min_lines):
                        blocks.append(self._build_block(parse_result, source_lines, method, class_info))

        logger.debug("Extracted %d blocks from %d files", len(blocks), len(parse_results))
        return blocks

    def _build_block(
        self,
        parse_result: ParseResult,
        source_lines: Optional[List[str]],
        function: FunctionInfo,
        class_info: Optional[ClassInfo] = None
    ) -> CodeBlock:
        if source_lines is not None:
            content = slice_source(source_lines, function.start_line, function.end_line)
        else:
            content = generate_placeholder_content(function.start_line, function.end_line)

        metadata: Dict[str, Any] = {'id': self._next_id}
        if class_info is None:
            metadata.update({
                'type': BlockKind.FUNCTION.value,
                'async': function.is_async,
                'exported': function.is_exported,
                'param_count': len(function.parameters),
            })
        else:
            metadata.update({
                'type': BlockKind.METHOD.value,
                'class': class_info.name,
                'async': function.is_async,
                'param_count': len(function.parameters),
            })
        self._next_id += 1

        return CodeBlock(
            file_path=parse_result.file_path,
            start_line=function.start_line,
            end_line=function.end_line,
            function_name=function.name or None,
            class_name=class_info.name if class_info is not None else None,
            content=content,
            tokenized_content=self.lexer.normalize(content),
            structural_hash=self.lexer.structural_fingerprint(content),
            metadata=metadata,
        )


def extract_code_blocks(
    parse_results: Sequence[ParseResult],
    config: Optional[DuplicationConfig] = None,
    lexer: Optional[Lexer] = None
) -> List[CodeBlock]:
    """Extract analyzable blocks from parse results."""
    config = config or DuplicationConfig()
    return BlockExtractor(config, lexer).extract(parse_results)
