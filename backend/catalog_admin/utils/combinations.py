from typing import Iterable, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def cartesian_product(axes: Sequence[Iterable[T]]) -> List[Tuple[T, ...]]:
    """
    Every combination taking exactly one token per axis, in axis order.

    Built as an iterative fold: start from the single empty tuple and extend
    each partial tuple with every option of the next axis. The last axis
    varies fastest, so for [[a, b], [1, 2]] the result is
    [(a, 1), (a, 2), (b, 1), (b, 2)].

    Zero axes yield [()]; an empty axis yields [].
    """
    combos: List[Tuple[T, ...]] = [()]
    for axis in axes:
        options = list(axis)
        combos = [prefix + (opt,) for prefix in combos for opt in options]
    return combos


def count_combinations(axis_sizes: Iterable[int], color_count: int = 0) -> int:
    """Number of SKUs a product would materialise, without building them."""
    total = 1
    for size in axis_sizes:
        total *= size
    return total * max(color_count, 1)
