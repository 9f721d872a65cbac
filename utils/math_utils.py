"""Small numeric helpers."""
import math
from typing import List, TypeVar

N = TypeVar('N', int, float)


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between (x1, y1) and (x2, y2)."""
    return math.sqrt((x2 - x1) * (x2 - x1) + (y2 - y1) * (y2 - y1))


def clamp(value: N, minimum: N, maximum: N) -> N:
    """Return ``minimum`` if value is below it, ``maximum`` if above, else value."""
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def fibonacci(upper_bound: int) -> List[int]:
    """
    Return the Fibonacci sequence: 0, 1 and then ``upper_bound`` more terms.

    >>> fibonacci(5)
    [0, 1, 1, 2, 3, 5, 8]
    """
    sequence = [0, 1]
    for _ in range(max(0, upper_bound)):
        sequence.append(sequence[-2] + sequence[-1])
    return sequence
