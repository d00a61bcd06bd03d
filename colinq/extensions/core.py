from __future__ import annotations
import typing
from functools import reduce
from ..types import *
from ..comparers import create_comparer

if typing.TYPE_CHECKING:
    from ..enumerable import Enumerable, IQueryable, OrderedEnumerable


class _CoreOperations(Generic[T]):
    """
    lazy transformations. each call wraps self.as_enumerable() in one new node
    and returns immediately; no element is touched until the result is pulled.
    """

    def where(self: 'IQueryable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """filter elements based on a predicate"""
        from ..enumerable import ConditionalEnumerable
        return ConditionalEnumerable(self.as_enumerable(), predicate)

    def select(self: 'IQueryable[T]', selector: Selector[T, U]) -> 'Enumerable[U]':
        """project each element to a new form"""
        from ..enumerable import TransformEnumerable
        return TransformEnumerable(self.as_enumerable(), selector)

    def select_many(self: 'IQueryable[T]',
                    selector: Selector[T, Union[Iterable[U], 'IQueryable[U]']]) -> 'Enumerable[U]':
        """
        project every element to a sequence (a python iterable or a queryable)
        and flatten the results. outer order is kept, and inner order within each group.
        """
        from ..enumerable import ConcatEnumerable, DeferredEnumerable, ArrayEnumerable, wrap_iterable
        projected = self.select(lambda element: wrap_iterable(selector(element)))

        def flatten():
            return reduce(ConcatEnumerable, projected, ArrayEnumerable(()))

        return DeferredEnumerable(flatten)

    def distinct(self: 'IQueryable[T]') -> 'Enumerable[T]':
        """distinct elements, first occurrence wins"""
        from ..enumerable import UniqueEnumerable
        return UniqueEnumerable(self.as_enumerable())

    def distinct_by(self: 'IQueryable[T]', key_selector: KeySelector[T, K]) -> 'Enumerable[T]':
        """distinct by a projected key, first occurrence wins"""
        from ..enumerable import UniqueEnumerable
        return UniqueEnumerable(self.as_enumerable(), key_selector)

    def concat(self: 'IQueryable[T]',
               other: Union[Iterable[T], 'IQueryable[T]'],
               *others: Union[Iterable[T], 'IQueryable[T]']) -> 'Enumerable[T]':
        """concatenate with one or more sequences, preserving all elements and order"""
        from ..enumerable import ConcatEnumerable, wrap_iterable
        result = self.as_enumerable()
        for sequence in (other, *others):
            result = ConcatEnumerable(result, wrap_iterable(sequence))
        return result

    def union(self: 'IQueryable[T]', other: Union[Iterable[T], 'IQueryable[T]']) -> 'Enumerable[T]':
        """order-preserving union: distinct over the concatenation"""
        from ..enumerable import UniqueEnumerable
        return UniqueEnumerable(self.concat(other))

    def except_(self: 'IQueryable[T]', other: Union[Iterable[T], 'IQueryable[T]']) -> 'Enumerable[T]':
        """elements of this sequence that the other one does not contain"""
        from ..enumerable import wrap_iterable
        excluded = wrap_iterable(other)
        return self.where(lambda element: not excluded.contains(element))

    def reverse(self: 'IQueryable[T]') -> 'Enumerable[T]':
        """inverts the order of the elements in a sequence"""
        from ..enumerable import ReverseEnumerable
        return ReverseEnumerable(self.as_enumerable())

    def skip(self: 'IQueryable[T]', count: int) -> 'Enumerable[T]':
        """everything after the first 'count' elements"""
        from ..enumerable import RangeEnumerable
        return RangeEnumerable(self.as_enumerable(), count, None)

    def take(self: 'IQueryable[T]', count: int) -> 'Enumerable[T]':
        """the first 'count' elements"""
        from ..enumerable import RangeEnumerable
        return RangeEnumerable(self.as_enumerable(), None, count)

    def skip_while(self: 'IQueryable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """skip elements while predicate is true"""
        from ..enumerable import WhileEnumerable
        return WhileEnumerable(self.as_enumerable(), predicate, skip=True)

    def take_while(self: 'IQueryable[T]', predicate: Predicate[T]) -> 'Enumerable[T]':
        """take elements while predicate is true"""
        from ..enumerable import WhileEnumerable
        return WhileEnumerable(self.as_enumerable(), predicate, skip=False)

    def order_by(self: 'IQueryable[T]', key_selector: KeySelector[T, K],
                 comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """stable sort by a key, optionally compared by a custom key comparer"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self.as_enumerable(), create_comparer(key_selector, True, comparer))

    def order_by_descending(self: 'IQueryable[T]', key_selector: KeySelector[T, K],
                            comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """stable sort by a key in descending order"""
        from ..enumerable import OrderedEnumerable
        return OrderedEnumerable(self.as_enumerable(), create_comparer(key_selector, False, comparer))
