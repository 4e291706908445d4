"""Minimal text document attached to an editing surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass(slots=True)
class TextDocument:
    """List-of-lines text storage with an identity and a version counter.

    ``uri`` identifies the document; swapping in a document with another uri
    is a change of document identity, while ``replace_lines`` is a content
    change that bumps ``version``.
    """

    uri: str = "untitled:1"
    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, uri: str = "untitled:1") -> "TextDocument":
        lines = text.split("\n")
        return cls(uri=uri, _lines=lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def snapshot(self) -> Sequence[str]:
        return tuple(self._lines)

    def replace_lines(self, start: int, end: int, new_lines: Sequence[str]) -> None:
        """Replace ``[start:end]`` with ``new_lines`` and bump the version."""

        lines = list(self._lines)
        lines[start:end] = list(new_lines)
        self._lines = lines or [""]
        self.version += 1


__all__ = ["TextDocument"]
