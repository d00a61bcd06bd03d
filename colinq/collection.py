from __future__ import annotations

from abc import abstractmethod
from functools import reduce, wraps
from .types import *
from .config import get_options
from .errors import EmptySequenceError, OutOfBoundsError
from .enumerable import IQueryable, Enumerable, ArrayEnumerable
from .extensions.core import _CoreOperations
from .extensions.terminal import _TerminalOperations


# --- generic collection base ---

class EnumerableCollection(
    IQueryable[T],
    _CoreOperations[T],
    _TerminalOperations[T]
):
    """
    base for eager collections. owns no data: every operation is routed
    through as_enumerable() / to_array(), which concrete collections supply.
    """

    @abstractmethod
    def copy(self) -> 'EnumerableCollection[T]':
        """a new collection of the same type with its own storage"""
        pass

    def __repr__(self) -> str:
        limit = get_options().repr_limit
        head = self.take(limit + 1).to_array()
        parts = [repr(item) for item in head[:limit]]
        if len(head) > limit:
            parts.append("...")
        items = ", ".join(parts)
        return f"{type(self).__name__}([{items}])"

    # --- primitive terminals, delegated to the lazy view ---

    def aggregate(self, aggregator: Aggregator[T, T]) -> T:
        return self.as_enumerable().aggregate(aggregator)

    def fold(self, aggregator: Aggregator[U, T], seed: U) -> U:
        return self.as_enumerable().fold(aggregator, seed)

    def any(self) -> bool:
        return self.as_enumerable().any()

    def any_where(self, predicate: Predicate[T]) -> bool:
        return self.as_enumerable().any_where(predicate)

    def all(self, predicate: Predicate[T]) -> bool:
        return self.as_enumerable().all(predicate)

    def count(self) -> int:
        return self.as_enumerable().count()

    def count_where(self, predicate: Predicate[T]) -> int:
        return self.as_enumerable().count_where(predicate)

    def average_of(self, selector: Selector[T, float]) -> float:
        return self.as_enumerable().average_of(selector)

    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        return self.as_enumerable().element_at_or_default(index, default)

    def first_or_default(self, default: Optional[T] = None) -> Optional[T]:
        return self.as_enumerable().first_or_default(default)

    def first_or_default_where(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        return self.as_enumerable().first_or_default_where(predicate, default)

    def last_or_default(self, default: Optional[T] = None) -> Optional[T]:
        return self.as_enumerable().last_or_default(default)

    def last_or_default_where(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        return self.as_enumerable().last_or_default_where(predicate, default)

    def single_or_default(self, default: Optional[T] = None) -> Optional[T]:
        return self.as_enumerable().single_or_default(default)

    def single_or_default_where(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        return self.as_enumerable().single_or_default_where(predicate, default)

    def for_each(self, action: Action[T]) -> None:
        self.as_enumerable().for_each(action)


# --- array-backed specialization ---

def _array_fast_path(method):
    """scan the backing list directly unless the fast path is switched off"""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        if get_options().array_fast_path:
            return method(self, *args, **kwargs)
        return getattr(EnumerableCollection, method.__name__)(self, *args, **kwargs)
    return wrapper


class ArrayQueryable(EnumerableCollection[T]):
    """
    a collection backed by a python list. the hot terminal operations index
    the list directly instead of building a node chain; everything else goes
    through the lazy pipeline via EnumerableCollection.
    """

    def __init__(self, elements: Optional[Union[Iterable[T], IQueryable[T]]] = None):
        if elements is None:
            self._source: List[T] = []
        elif isinstance(elements, IQueryable):
            self._source = elements.to_array()
        else:
            self._source = list(elements)

    def __len__(self) -> int:
        return len(self._source)

    def as_array(self) -> List[T]:
        """the live backing list. changes to it change the collection"""
        return self._source

    def to_array(self) -> List[T]:
        return list(self._source)

    def as_enumerable(self) -> Enumerable[T]:
        return ArrayEnumerable(self._source)

    @_array_fast_path
    def aggregate(self, aggregator: Aggregator[T, T]) -> T:
        if not self._source:
            raise EmptySequenceError()
        return reduce(aggregator, self._source)

    @_array_fast_path
    def fold(self, aggregator: Aggregator[U, T], seed: U) -> U:
        return reduce(aggregator, self._source, seed)

    @_array_fast_path
    def any(self) -> bool:
        return len(self._source) > 0

    @_array_fast_path
    def any_where(self, predicate: Predicate[T]) -> bool:
        return any(predicate(x) for x in self._source)

    @_array_fast_path
    def all(self, predicate: Predicate[T]) -> bool:
        return all(predicate(x) for x in self._source)

    @_array_fast_path
    def count(self) -> int:
        return len(self._source)

    @_array_fast_path
    def count_where(self, predicate: Predicate[T]) -> int:
        return sum(1 for x in self._source if predicate(x))

    @_array_fast_path
    def average_of(self, selector: Selector[T, float]) -> float:
        if not self._source:
            raise EmptySequenceError()
        total = 0
        for i in range(len(self._source)):
            total += selector(self._source[i])
        return total / len(self._source)

    @_array_fast_path
    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        if index < 0:
            raise OutOfBoundsError(index, "negative index is forbidden")
        return self._source[index] if index < len(self._source) else default

    @_array_fast_path
    def first_or_default(self, default: Optional[T] = None) -> Optional[T]:
        return self._source[0] if self._source else default

    @_array_fast_path
    def first_or_default_where(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        for x in self._source:
            if predicate(x):
                return x
        return default

    @_array_fast_path
    def last_or_default(self, default: Optional[T] = None) -> Optional[T]:
        return self._source[-1] if self._source else default

    @_array_fast_path
    def last_or_default_where(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        for i in range(len(self._source) - 1, -1, -1):
            if predicate(self._source[i]):
                return self._source[i]
        return default

    @_array_fast_path
    def for_each(self, action: Action[T]) -> None:
        """calls action(element) in order; no index is passed, use enumerate() for that"""
        for i in range(len(self._source)):
            action(self._source[i])
