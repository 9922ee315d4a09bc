"""Row-range splitting for the per-pixel passes."""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Tuple

import numpy as np


def row_chunks(height: int, workers: int) -> List[Tuple[int, int]]:
    """Split ``range(height)`` into at most ``workers`` contiguous ranges."""
    workers = max(1, min(workers, height))
    bounds = np.linspace(0, height, workers + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:]) if b > a]


def process_in_row_chunks(
    func: Callable[[int, int], object],
    height: int,
    workers: int = 1,
) -> list:
    """Run ``func(row_start, row_end)`` over contiguous row ranges.

    Results are returned in row order. With one worker everything runs on
    the calling thread.
    """
    chunks = row_chunks(height, workers)
    if len(chunks) <= 1:
        return [func(start, end) for start, end in chunks]

    with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
        futures = [executor.submit(func, start, end) for start, end in chunks]
        return [future.result() for future in futures]
