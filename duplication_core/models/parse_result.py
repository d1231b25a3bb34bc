"""
ParseResult Model - Syntactic inventory of one source file

Mirrors the records produced by the upstream language parser: the file path,
its top-level functions and its classes with their methods. Optionally carries
the literal source text and true line count so blocks can be compared on real
content rather than line-range placeholders.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ParameterInfo(BaseModel):
    """Single function parameter"""
    name: str = Field(..., description="Parameter name")
    type: Optional[str] = Field(None, description="Declared type, if any")
    default_value: Optional[str] = Field(None, description="Default value expression")
    is_optional: bool = Field(False, description="Whether the parameter may be omitted")


class FunctionInfo(BaseModel):
    """Function or method boundary reported by the parser"""
    name: str = Field("", description="Function name (may be empty for anonymous functions)")
    parameters: List[ParameterInfo] = Field(default_factory=list, description="Declared parameters")
    return_type: Optional[str] = Field(None, description="Declared return type")
    is_async: bool = Field(False, description="async function")
    is_exported: bool = Field(False, description="Exported from its module")
    start_line: int = Field(..., description="First line (1-indexed)")
    end_line: int = Field(..., description="Last line (1-indexed, inclusive)")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Parser-specific extras")

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


class ClassInfo(BaseModel):
    """Class boundary with its methods"""
    name: str = Field(..., description="Class name")
    extends: Optional[str] = Field(None, description="Base class")
    implements: List[str] = Field(default_factory=list, description="Implemented interfaces")
    methods: List[FunctionInfo] = Field(default_factory=list, description="Methods in declaration order")
    is_exported: bool = Field(False, description="Exported from its module")
    start_line: int = Field(0, description="First line (1-indexed)")
    end_line: int = Field(0, description="Last line (1-indexed, inclusive)")


class ParseResult(BaseModel):
    """
    Parsed syntactic inventory of a single file

    `source` and `total_lines` are optional: without `source` block content
    falls back to line-range placeholders, without `total_lines` the file size
    is estimated from the furthest function or method end line.
    """

    file_path: str = Field(..., description="Repository-relative path")
    language: str = Field("javascript", description="Source language")
    functions: List[FunctionInfo] = Field(default_factory=list, description="Top-level functions")
    classes: List[ClassInfo] = Field(default_factory=list, description="Classes and their methods")
    source: Optional[str] = Field(None, description="Literal file text")
    total_lines: Optional[int] = Field(None, ge=0, description="True line count of the file")

    model_config = {
        'json_schema_extra': {
            'example': {
                'file_path': 'src/validators/email.js',
                'language': 'javascript',
                'functions': [{
                    'name': 'validateEmail',
                    'parameters': [{'name': 'email'}],
                    'start_line': 1,
                    'end_line': 8,
                }],
                'classes': [],
                'total_lines': 40,
            }
        }
    }

    def max_end_line(self) -> int:
        """Furthest end line over all functions and methods (0 if none)."""
        end_lines = [f.end_line for f in self.functions]
        end_lines.extend(m.end_line for c in self.classes for m in c.methods)
        return max(end_lines, default=0)
