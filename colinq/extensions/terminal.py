from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..types import *
from ..errors import EmptySequenceError, OutOfBoundsError

if typing.TYPE_CHECKING:
    from ..enumerable import IQueryable
    from ..containers import List as ColinqList, Dictionary


def _identity(element):
    return element


class _TerminalOperations(Generic[T]):
    """
    terminal operations derived from other operations. nothing here iterates
    directly: the primitive terminals (first_or_default, aggregate, count, ...)
    come from the lazy base or the collection base, and everything else is
    built on top of them.
    """

    @property
    def to(self: 'IQueryable[T]') -> 'TerminalAccessor[T]':
        """conversions into python, numpy and pandas containers"""
        return TerminalAccessor(self)

    # --- materialization ---

    def to_list(self: 'IQueryable[T]') -> 'ColinqList[T]':
        """materialize into a new colinq List"""
        from ..containers import List
        return List(self.to_array())

    def to_dictionary(self: 'IQueryable[T]', key_selector: KeySelector[T, K],
                      value_selector: Selector[T, V]) -> 'Dictionary[K, V]':
        """materialize into a key-unique Dictionary; a repeated key raises KeyExistsError"""
        from ..containers import Dictionary
        return Dictionary.from_array(self.to_array(), key_selector, value_selector)

    # --- element access ---

    def first(self) -> T:
        element = self.first_or_default(MISSING)
        if element is MISSING: raise EmptySequenceError()
        return element

    def first_where(self, predicate: Predicate[T]) -> T:
        element = self.first_or_default_where(predicate, MISSING)
        if element is MISSING: raise EmptySequenceError("sequence contains no matching elements")
        return element

    def last(self) -> T:
        element = self.last_or_default(MISSING)
        if element is MISSING: raise EmptySequenceError()
        return element

    def last_where(self, predicate: Predicate[T]) -> T:
        element = self.last_or_default_where(predicate, MISSING)
        if element is MISSING: raise EmptySequenceError("sequence contains no matching elements")
        return element

    def single(self) -> T:
        element = self.single_or_default(MISSING)
        if element is MISSING: raise EmptySequenceError()
        return element

    def single_where(self, predicate: Predicate[T]) -> T:
        element = self.single_or_default_where(predicate, MISSING)
        if element is MISSING: raise EmptySequenceError("sequence contains no matching elements")
        return element

    def element_at(self, index: int) -> T:
        """element at a position; out of range raises OutOfBoundsError"""
        element = self.element_at_or_default(index, MISSING)
        if element is MISSING: raise OutOfBoundsError(index)
        return element

    def contains(self, element: T) -> bool:
        return self.any_where(lambda e: e is element or e == element)

    # --- aggregates ---

    def min(self) -> T:
        """smallest element, folding pairwise with <"""
        return self.aggregate(lambda previous, current: previous if previous < current else current)

    def max(self) -> T:
        """largest element, folding pairwise with >"""
        return self.aggregate(lambda previous, current: previous if previous > current else current)

    def min_of(self, selector: Selector[T, U]) -> U:
        """smallest projected value"""
        return self.select(selector).min()

    def max_of(self, selector: Selector[T, U]) -> U:
        """largest projected value"""
        return self.select(selector).max()

    def sum(self) -> Union[int, float]:
        return self.fold(lambda previous, current: previous + current, 0)

    def sum_of(self, selector: Selector[T, Union[int, float]]) -> Union[int, float]:
        return self.fold(lambda previous, current: previous + selector(current), 0)

    def average(self) -> float:
        return self.average_of(_identity)


class TerminalAccessor(Generic[T]):
    def __init__(self, queryable: 'IQueryable[T]'):
        self._queryable = queryable

    def list(self) -> List[T]:
        """convert to a python list"""
        return self._queryable.to_array()

    def set(self) -> Set[T]:
        """convert to a python set"""
        return set(self._queryable.to_array())

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to a python dict; later keys overwrite earlier ones"""
        val_sel = value_selector if value_selector else _identity
        return {key_selector(item): val_sel(item) for item in self._queryable.to_array()}

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self._queryable.to_array())

    def pandas(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self._queryable.to_array())

    def df(self) -> pd.DataFrame:
        """
        convert to pandas dataframe. records (dicts, namedtuples such as the
        KeyValuePair items of a Dictionary) become rows with one column per field.
        """
        return pd.DataFrame(self._queryable.to_array())
