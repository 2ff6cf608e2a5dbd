from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class ChainError(Exception):
    """Problem with a chain description file. Printed by the CLI, never by the library.

    `path` points into the document (``errors.<entry>.<field>``); `entry`
    names the chain entry it belongs to, if any.
    """

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None
    entry: Optional[str] = None

    source: ClassVar[str] = "chains"

    @property
    def location(self) -> str:
        parts = [p for p in (self.file, self.path) if p]
        return ":".join(parts) if parts else "<chains>"

    def to_item(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "file": self.file,
            "path": self.path,
            "entry": self.entry,
            "severity": "error",
            "source": self.source,
        }

    def __str__(self) -> str:
        return f"{self.location}: {self.code}: {self.message}"


class ChainLoadError(ChainError):
    source = "load"


class ChainValidationError(ChainError):
    source = "validate"
