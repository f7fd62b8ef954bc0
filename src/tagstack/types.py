"""
Shared types for the delimiter stack engine and the host compiler.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from enum import auto


class InvalidTagsError(ValueError):
    """Raised when a delimiter pair (or its escaped flag) is rejected."""


class TagClass(Enum):
    """Interpolation tag classes, each with its own delimiter stack."""

    PLAIN = auto()  # output as-is
    ESCAPED = auto()  # output HTML-escaped


@dataclass(frozen=True, slots=True)
class DelimiterPair:
    """One open/close interpolation token pair, e.g. `{{` / `}}`."""

    open: str
    close: str

    def __iter__(self) -> Iterator[str]:
        yield self.open
        yield self.close

    def __str__(self) -> str:
        return f"{self.open} {self.close}"


class TagStack:
    """
    Append-only history of delimiter pairs for one tag class.

    The first element is the pair seeded at construction (the default) and
    the last element is the most recently applied pair. Nothing is ever
    popped, so the history grows for as long as its owner lives.
    """

    __slots__ = ("_pairs",)

    def __init__(self, seed: DelimiterPair) -> None:
        self._pairs: list[DelimiterPair] = [seed]

    def push(self, pair: DelimiterPair) -> None:
        self._pairs.append(pair)

    @property
    def default(self) -> DelimiterPair:
        return self._pairs[0]

    @property
    def parent(self) -> DelimiterPair:
        return self._pairs[-1]

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[DelimiterPair]:
        return iter(self._pairs)

    def __getitem__(self, index: int) -> DelimiterPair:
        return self._pairs[index]

    def __repr__(self) -> str:
        pairs = ", ".join(str(p) for p in self._pairs)
        return f"TagStack([{pairs}])"


@dataclass
class EngineState:
    """Mutable state owned by exactly one engine instance."""

    plain_stack: TagStack
    escaped_stack: TagStack
    revert: bool = field(default=False)

    def stack_for(self, tag_class: TagClass) -> TagStack:
        if tag_class is TagClass.ESCAPED:
            return self.escaped_stack
        return self.plain_stack
