from __future__ import annotations

import os
from typing import Iterable

from .errors import LineAdjustError
from .models import JustifiedResult


def join_results(results: Iterable[JustifiedResult], line_separator: str = os.linesep) -> str:
    ordered = sorted(results, key=lambda result: result.index)
    expected = list(range(len(ordered)))
    actual = [result.index for result in ordered]
    if actual != expected:
        missing = sorted(set(expected) - set(actual))
        raise LineAdjustError(f"Collected line indices are not contiguous (missing: {missing[:10]})")
    return line_separator.join(result.text for result in ordered)
