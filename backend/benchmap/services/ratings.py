"""Rating normalization and community rating aggregation."""
import math
from typing import Dict, Hashable, Iterable, Tuple, Union

Number = Union[int, float]

MIN_RATING = 1
MAX_RATING = 5


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3, 2.25 -> 2.3 at one digit)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def normalize_rating(value: Number) -> int:
    """Clamp a numeric rating into [1, 5] and round it to an integer.

    >>> [normalize_rating(v) for v in (0, 6, 3.6)]
    [1, 5, 4]
    """
    clamped = max(MIN_RATING, min(MAX_RATING, value))
    return int(round_half_up(clamped))


def aggregate_community_ratings(pairs: Iterable[Tuple[Hashable, Number]]) -> Dict[Hashable, float]:
    """Average rating per bench, rounded to one decimal.

    Benches without ratings are absent from the result rather than mapped
    to 0, so callers can tell "no reviews yet" from a low score.

    Args:
        pairs: (bench_id, rating) tuples

    Returns:
        Dict of bench_id -> mean rating
    """
    sums: Dict[Hashable, float] = {}
    counts: Dict[Hashable, int] = {}
    for bench_id, rating in pairs:
        sums[bench_id] = sums.get(bench_id, 0.0) + float(rating)
        counts[bench_id] = counts.get(bench_id, 0) + 1

    return {
        bench_id: round_half_up(total / counts[bench_id], 1)
        for bench_id, total in sums.items()
    }
