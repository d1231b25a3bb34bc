"""
CodeBlock Model - One analyzable function or method body

Created once per qualifying function or method by the block extractor and
never mutated afterwards. Carries the raw content together with the two
derived representations the finder compares on: the normalized token string
and the structural fingerprint.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple
from pydantic import BaseModel, Field, computed_field


class BlockKind(str, Enum):
    """Kind of syntactic unit a block was extracted from"""
    FUNCTION = "function"
    METHOD = "method"


class CodeBlock(BaseModel):
    """
    Single occurrence of potentially duplicated code

    Identity is the (file_path, start_line, end_line) triple; two blocks
    with the same triple are the same occurrence regardless of content.
    """

    # Location
    file_path: str = Field(..., description="File containing the block")
    start_line: int = Field(..., description="First line (1-indexed)")
    end_line: int = Field(..., description="Last line (1-indexed, inclusive)")

    # Naming
    function_name: Optional[str] = Field(None, description="Function or method name")
    class_name: Optional[str] = Field(None, description="Enclosing class for methods")

    # Content
    content: str = Field(..., description="Raw block content")
    tokenized_content: str = Field("", description="Normalized token string")
    structural_hash: str = Field("", description="Hash of the keyword/punctuation skeleton")

    metadata: Dict[str, Any] = Field(default_factory=dict, description="Block kind, async flag, parameter count")

    model_config = {
        'frozen': True,
        'json_schema_extra': {
            'example': {
                'file_path': 'src/validators/email.js',
                'start_line': 1,
                'end_line': 8,
                'function_name': 'validateEmail',
                'content': 'function validateEmail(email) { ... }',
                'metadata': {'id': 0, 'type': 'function', 'async': False, 'param_count': 1},
            }
        }
    }

    @computed_field
    @property
    def line_count(self) -> int:
        """Number of lines spanned by the block"""
        return self.end_line - self.start_line + 1

    @computed_field
    @property
    def qualified_name(self) -> Optional[str]:
        """'Class.method' for methods, the bare name for functions, None if unnamed"""
        if not self.function_name:
            return None
        if self.class_name:
            return f"{self.class_name}.{self.function_name}"
        return self.function_name

    @property
    def identity(self) -> Tuple[str, int, int]:
        return (self.file_path, self.start_line, self.end_line)

    def same_occurrence(self, other: 'CodeBlock') -> bool:
        """True if both blocks point at the same file and line range"""
        return self.identity == other.identity

    def __str__(self) -> str:
        return f"{self.file_path}:{self.start_line}-{self.end_line}"
