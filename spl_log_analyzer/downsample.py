"""
Stride downsampling for display.

Keeps every step-th point so a chart never has to draw tens of thousands of
samples. This is selection, not aggregation: peaks between kept points are
lost, which is why the output must never feed back into the statistics.
"""

import math
from typing import List, Sequence, TypeVar

from .constants import DEFAULT_MAX_POINTS

T = TypeVar("T")


def downsample(series: Sequence[T], target: int = DEFAULT_MAX_POINTS) -> List[T]:
    """
    Reduce ``series`` to at most ``target`` points by fixed-stride selection.

    Examples:
        >>> downsample(list(range(10)), 4)
        [0, 3, 6, 9]
        >>> downsample([1, 2, 3], 5)
        [1, 2, 3]
    """
    target = max(int(target), 1)
    if len(series) <= target:
        return list(series)
    step = math.ceil(len(series) / target)
    return list(series[::step])
