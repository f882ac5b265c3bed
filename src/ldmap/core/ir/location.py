"""Source location tracking for annotations and IR nodes.

Records the file, line, and column where an annotation or declaration was
written, enabling source-mapped error messages. Hosts with a different notion
of position map it onto these three coordinates.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class SourceLocation(BaseModel):
    """Source position where an annotation or declaration was written.

    Attributes:
        file: Path to the source file (relative or absolute)
        line: 1-indexed line number
        column: 1-indexed column number
    """

    file: str
    line: int
    column: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class Spanned(BaseModel, Generic[T]):
    """A value paired with the location it was read from."""

    value: T
    location: SourceLocation

    model_config = ConfigDict(frozen=True)
