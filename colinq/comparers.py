from __future__ import annotations
from .types import *


def default_comparer(left: Any, right: Any) -> int:
    """three-way comparison using the natural < and > operators"""
    if left < right: return -1
    if left > right: return 1
    return 0


def create_comparer(key_selector: KeySelector[T, K],
                    ascending: bool,
                    comparer: Optional[Comparer[K]] = None) -> Comparer[T]:
    """
    builds a total-order comparison over elements from a key selector.
    the optional comparer works on keys, not on elements. descending order swaps
    the operands, so equal keys still compare as 0 and sorting stays stable.
    """
    key_comparer = comparer if comparer is not None else default_comparer

    if ascending:
        def compare(left: T, right: T) -> int:
            return key_comparer(key_selector(left), key_selector(right))
    else:
        def compare(left: T, right: T) -> int:
            return key_comparer(key_selector(right), key_selector(left))

    return compare


def chain_comparers(primary: Comparer[T], secondary: Comparer[T]) -> Comparer[T]:
    """secondary only breaks ties left by primary"""
    def compare(left: T, right: T) -> int:
        result = primary(left, right)
        return result if result != 0 else secondary(left, right)

    return compare
