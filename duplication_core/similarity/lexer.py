"""
Lexing for Duplicate Comparison

Produces the two derived representations every block is compared on:

- the normalized token string (comments stripped, whitespace collapsed,
  identifiers and literals folded, each step toggled by configuration)
- the structural fingerprint (hash of the control-keyword and punctuation
  skeleton, identical for code that differs only in names and values)

The regular-expression lexer is a cross-language proxy for a real tokenizer.
It sits behind the Lexer base class so a language-specific lexer can be
swapped in without touching the finder or the scoring stages.
"""

import hashlib
import re
from abc import ABC, abstractmethod
from typing import List, Optional

from ..config import DuplicationConfig

SINGLE_LINE_COMMENT = re.compile(r'//.*')
MULTI_LINE_COMMENT = re.compile(r'/\*[\s\S]*?\*/')
WHITESPACE = re.compile(r'\s+')
IDENTIFIER = re.compile(r'\b[a-zA-Z_][a-zA-Z0-9_]*\b')
STRING_LITERAL = re.compile(r'["\'][^"\']*["\']')
NUMBER_LITERAL = re.compile(r'\b\d+(?:\.\d+)?\b')

STRUCTURAL_KEYWORDS = ('if', 'else', 'for', 'while', 'function', 'class', 'return', 'var', 'let', 'const')
STRUCTURAL_ELEMENT = re.compile(
    r'\b(?:' + '|'.join(STRUCTURAL_KEYWORDS) + r')\b|[{}\[\]();,.]'
)
PUNCTUATION = re.compile(r'[{}\[\]();,.]')


class Lexer(ABC):
    """Abstract base class for block lexers."""

    @abstractmethod
    def normalize(self, content: str) -> str:
        """
        Return the normalized token string for a block.

        Args:
            content: Raw block content

        Returns:
            Whitespace-separated token string used for token similarity
        """

    @abstractmethod
    def structural_elements(self, content: str) -> List[str]:
        """Return the structural skeleton of a block in source order."""

    def structural_fingerprint(self, content: str) -> str:
        """
        Hash the structural skeleton of a block.

        Two blocks with identical control-flow and punctuation sequences
        but different identifiers or literals produce the same fingerprint.
        """
        skeleton = ''.join(self.structural_elements(content))
        return hashlib.sha256(skeleton.encode()).hexdigest()

    def estimate_token_count(self, content: str) -> int:
        """Word count plus punctuation count."""
        return len(content.split()) + len(PUNCTUATION.findall(content))


class RegexLexer(Lexer):
    """
    Regular-expression lexer for C-family syntax.

    Normalization steps run in a fixed order: comments, whitespace, then
    identifier, string and number folding. String folding runs after
    identifier folding, so IDENTIFIER placeholders produced inside string
    literals are folded into STRING_LITERAL as well.
    """

    def __init__(self, config: Optional[DuplicationConfig] = None) -> None:
        self.config = config or DuplicationConfig()

    def normalize(self, content: str) -> str:
        tokenized = content

        if self.config.ignore_comments:
            tokenized = SINGLE_LINE_COMMENT.sub('', tokenized)
            tokenized = MULTI_LINE_COMMENT.sub('', tokenized)

        if self.config.ignore_whitespace:
            tokenized = WHITESPACE.sub(' ', tokenized).strip()

        if self.config.ignore_variable_names:
            tokenized = IDENTIFIER.sub('IDENTIFIER', tokenized)
            tokenized = STRING_LITERAL.sub('STRING_LITERAL', tokenized)
            tokenized = NUMBER_LITERAL.sub('NUMBER_LITERAL', tokenized)

        return tokenized

    def structural_elements(self, content: str) -> List[str]:
        return STRUCTURAL_ELEMENT.findall(content)
