from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class LineJob:
    index: int
    words: tuple[str, ...]
    total_word_chars: int
    width: int

    @classmethod
    def from_words(cls, index: int, words: Sequence[str], width: int) -> "LineJob":
        return cls(
            index=index,
            words=tuple(words),
            total_word_chars=sum(len(word) for word in words),
            width=width,
        )

    @property
    def gaps(self) -> int:
        return len(self.words) - 1

    @property
    def slack(self) -> int:
        """Width left over once every gap holds a single separator."""
        return self.width - (self.total_word_chars + self.gaps)


@dataclass(frozen=True)
class JustifiedResult:
    index: int
    text: str
