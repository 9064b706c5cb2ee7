"""Greedy grouping of whitespace-delimited words into line jobs."""
from __future__ import annotations

from typing import Iterator, List

from .errors import InvalidArgumentError
from .models import LineJob


def validate_arguments(text: object, width: object) -> None:
    if text is None:
        raise InvalidArgumentError("text must not be None")
    if not isinstance(text, str):
        raise InvalidArgumentError(f"text must be a string, got {type(text).__name__}")
    if isinstance(width, bool) or not isinstance(width, int):
        raise InvalidArgumentError(f"width must be an integer, got {type(width).__name__}")
    if width <= 0:
        raise InvalidArgumentError(f"width must be > 0, got {width}")


def iter_line_jobs(text: str, width: int) -> Iterator[LineJob]:
    """Yield line jobs in text order.

    A line keeps taking words while its word characters plus one separator per
    placed word still fit in ``width``. A word longer than ``width`` always
    lands on a line of its own; it is never split or dropped.
    """
    validate_arguments(text, width)

    line_words: List[str] = []
    line_chars = 0
    index = 0
    for word in text.split():
        if line_words and line_chars + len(word) + len(line_words) > width:
            yield LineJob(index=index, words=tuple(line_words), total_word_chars=line_chars, width=width)
            index += 1
            line_words = []
            line_chars = 0
        line_words.append(word)
        line_chars += len(word)

    if line_words:
        yield LineJob(index=index, words=tuple(line_words), total_word_chars=line_chars, width=width)


def split_text(text: str, width: int) -> List[LineJob]:
    return list(iter_line_jobs(text, width))
