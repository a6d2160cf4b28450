from __future__ import annotations
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from alone.config import get_recursion_limit

# NOTE: sys.setrecursionlimit is process-global; evaluation is single-threaded.


@contextmanager
def recursion_limit(limit: Optional[int] = None) -> Iterator[int]:
    """Raise the interpreter recursion limit for the duration of the block.

    The limit is never lowered, so nested uses are no-ops.
    """
    wanted = get_recursion_limit() if limit is None else limit
    previous = sys.getrecursionlimit()
    if wanted <= previous:
        yield previous
        return
    sys.setrecursionlimit(wanted)
    try:
        yield wanted
    finally:
        sys.setrecursionlimit(previous)
