from __future__ import annotations

from typing import List

from .errors import LineOverflowError
from .models import LineJob

DEFAULT_SEPARATOR = " "


def gap_widths(total_separators: int, gaps: int) -> List[int]:
    """Split ``total_separators`` over ``gaps``, extra characters going to the leftmost gaps."""
    if gaps <= 0:
        return []
    base, remainder = divmod(total_separators, gaps)
    return [base + 1 if position < remainder else base for position in range(gaps)]


def _interleave(words: tuple[str, ...], widths: List[int], separator: str) -> str:
    parts: List[str] = [words[0]]
    for word, width in zip(words[1:], widths):
        parts.append(separator * width)
        parts.append(word)
    return "".join(parts)


def justify(job: LineJob, separator: str = DEFAULT_SEPARATOR) -> str:
    """Return ``job`` as a single line padded out to ``job.width``.

    The only line allowed to come out longer than its width is a lone word that
    is itself too long. A multi-word job that cannot fit with single gaps is a
    splitter defect and raises ``LineOverflowError``.
    """
    words = job.words
    if not words:
        raise ValueError(f"Line job {job.index} has no words")

    slack = job.slack
    if slack < 0:
        if len(words) > 1:
            raise LineOverflowError(
                f"Line job {job.index} needs {job.total_word_chars + job.gaps} chars "
                f"but width is {job.width}",
                index=job.index,
            )
        return words[0]

    if slack == 0:
        return separator.join(words)

    total_separators = job.width - job.total_word_chars
    if len(words) == 1:
        return words[0] + separator * total_separators
    return _interleave(words, gap_widths(total_separators, job.gaps), separator)
