from __future__ import annotations

import logging
from abc import ABC, abstractmethod
import collections.abc
from collections import deque
from functools import cmp_to_key, reduce
from itertools import islice, takewhile, dropwhile
from .types import *
from .errors import EmptySequenceError, MoreThanOneElementError, OutOfBoundsError
from .comparers import create_comparer, chain_comparers

# --- core functionality ---
from .extensions.core import _CoreOperations
from .extensions.terminal import _TerminalOperations

logger = logging.getLogger(__name__)

# --- capability contract ---

class IQueryable(ABC, Generic[T]):
    """
    anything that can be viewed as a lazy sequence and materialized to a list.
    those two primitives are all a type needs to gain the full query surface.
    """

    @abstractmethod
    def as_enumerable(self) -> 'Enumerable[T]':
        """view as a lazy, re-iterable sequence"""
        pass

    @abstractmethod
    def to_array(self) -> List[T]:
        """materialize into a new list the caller owns"""
        pass

    def __iter__(self) -> Iterator[T]:
        return iter(self.as_enumerable())

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)


def wrap_iterable(source: Union[Iterable[T], IQueryable[T]]) -> 'Enumerable[T]':
    """turn a queryable or any python iterable into a lazy sequence"""
    if isinstance(source, IQueryable):
        return source.as_enumerable()
    if isinstance(source, (list, tuple)):
        return ArrayEnumerable(source)
    if isinstance(source, collections.abc.Iterator):
        # one-shot iterators are cached so the node can be replayed
        return MemoizedEnumerable(source)
    if isinstance(source, collections.abc.Iterable):
        return IterableEnumerable(source)
    raise TypeError(f"{type(source).__name__} object is not iterable")


# --- lazy sequence base ---

class Enumerable(
    IQueryable[T],
    _CoreOperations[T],
    _TerminalOperations[T]
):
    """
    a lazy sequence. subclasses only supply __iter__; every iteration pulls the
    upstream again, so results follow the live state of the source collection.
    mutating that collection while a pull is in progress is undefined.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        pass

    def as_enumerable(self) -> 'Enumerable[T]':
        return self

    def to_array(self) -> List[T]:
        return list(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"

    # --- terminal operations driven by the iterator ---

    def aggregate(self, aggregator: Aggregator[T, T]) -> T:
        iterator = iter(self)
        try:
            seed = next(iterator)
        except StopIteration:
            raise EmptySequenceError() from None
        return reduce(aggregator, iterator, seed)

    def fold(self, aggregator: Aggregator[U, T], seed: U) -> U:
        return reduce(aggregator, self, seed)

    def any(self) -> bool:
        for _ in self:
            return True
        return False

    def any_where(self, predicate: Predicate[T]) -> bool:
        for element in self:
            if predicate(element):
                return True
        return False

    def all(self, predicate: Predicate[T]) -> bool:
        for element in self:
            if not predicate(element):
                return False
        return True

    def count(self) -> int:
        return sum(1 for _ in self)

    def count_where(self, predicate: Predicate[T]) -> int:
        return sum(1 for element in self if predicate(element))

    def average_of(self, selector: Selector[T, float]) -> float:
        total, count = 0, 0
        for element in self:
            total += selector(element)
            count += 1
        if count == 0:
            raise EmptySequenceError()
        return total / count

    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        if index < 0:
            raise OutOfBoundsError(index, "negative index is forbidden")
        for element in islice(self, index, None):
            return element
        return default

    def first_or_default(self, default: Optional[T] = None) -> Optional[T]:
        for element in self:
            return element
        return default

    def first_or_default_where(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        for element in self:
            if predicate(element):
                return element
        return default

    def last_or_default(self, default: Optional[T] = None) -> Optional[T]:
        result = default
        for element in self:
            result = element
        return result

    def last_or_default_where(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        result = default
        for element in self:
            if predicate(element):
                result = element
        return result

    def single_or_default(self, default: Optional[T] = None) -> Optional[T]:
        result = MISSING
        for element in self:
            if result is not MISSING:
                raise MoreThanOneElementError()
            result = element
        return default if result is MISSING else result

    def single_or_default_where(self, predicate: Predicate[T], default: Optional[T] = None) -> Optional[T]:
        return ConditionalEnumerable(self, predicate).single_or_default(default)

    def for_each(self, action: Action[T]) -> None:
        """calls action(element) for every element. the action gets no index"""
        for element in self:
            action(element)


# --- leaf nodes ---

class ArrayEnumerable(Enumerable[T]):
    """yields the elements of a list in index order, reading it live"""

    def __init__(self, source: Sequence[T]):
        self._source = source

    def __iter__(self) -> Iterator[T]:
        yield from self._source

    def count(self) -> int:
        return len(self._source)

    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        if index < 0:
            raise OutOfBoundsError(index, "negative index is forbidden")
        return self._source[index] if index < len(self._source) else default


class IterableEnumerable(Enumerable[T]):
    """wraps a python iterable that can be iterated more than once (range, set, dict view)"""

    def __init__(self, source: Iterable[T]):
        self._source = source

    def __iter__(self) -> Iterator[T]:
        yield from self._source


class MemoizedEnumerable(Enumerable[T]):
    """
    wraps a one-shot iterator. items are cached as they are pulled, so later
    iterations replay the cache and then continue pulling where the last one stopped.
    """

    def __init__(self, source: Iterator[T]):
        self._source = source
        self._cache: List[T] = []
        self._is_fully_enumerated = False
        self._error: Optional[Exception] = None

    def __iter__(self) -> Iterator[T]:
        index = 0
        while True:
            if index < len(self._cache):
                yield self._cache[index]
                index += 1
                continue
            if self._is_fully_enumerated:
                return
            if self._error is not None:
                # a dead iterator would look exhausted; keep failing instead
                raise self._error
            try:
                item = next(self._source)
            except StopIteration:
                self._is_fully_enumerated = True
                logger.debug(f"memoized iterator exhausted after {len(self._cache)} items")
                return
            except Exception as e:
                self._error = e
                logger.debug(f"memoized iterator failed after {len(self._cache)} items: {e!r}")
                raise
            self._cache.append(item)


class DeferredEnumerable(Enumerable[T]):
    """builds its upstream from a factory on every pull"""

    def __init__(self, factory: Callable[[], Iterable[T]]):
        self._factory = factory

    def __iter__(self) -> Iterator[T]:
        yield from self._factory()


# --- single-upstream nodes ---

class TransformEnumerable(Enumerable[U]):
    def __init__(self, source: Enumerable[T], selector: Selector[T, U]):
        self._source = source
        self._selector = selector

    def __iter__(self) -> Iterator[U]:
        selector = self._selector
        for element in self._source:
            yield selector(element)


class ConditionalEnumerable(Enumerable[T]):
    def __init__(self, source: Enumerable[T], predicate: Predicate[T]):
        self._source = source
        self._predicate = predicate

    def __iter__(self) -> Iterator[T]:
        predicate = self._predicate
        for element in self._source:
            if predicate(element):
                yield element


class RangeEnumerable(Enumerable[T]):
    """
    a contiguous window of the upstream: skip only, take only, or both
    (skip first, then take).
    """

    def __init__(self, source: Enumerable[T], skip: Optional[int], take: Optional[int]):
        self._source = source
        self._skip = max(skip, 0) if skip is not None else None
        self._take = max(take, 0) if take is not None else None

    def __iter__(self) -> Iterator[T]:
        start = self._skip or 0
        stop = None if self._take is None else start + self._take
        if stop == start:
            return
        yield from islice(self._source, start, stop)


class WhileEnumerable(Enumerable[T]):
    """take-while / skip-while window driven by a predicate"""

    def __init__(self, source: Enumerable[T], predicate: Predicate[T], skip: bool):
        self._source = source
        self._predicate = predicate
        self._skip = skip

    def __iter__(self) -> Iterator[T]:
        window = dropwhile if self._skip else takewhile
        yield from window(self._predicate, self._source)


class _SeenKeys:
    """membership set that falls back to a list scan for unhashable keys"""

    def __init__(self):
        self._hashed = set()
        self._unhashable = []

    def add(self, key: Any) -> bool:
        """record key, returning True only the first time it is seen"""
        try:
            if key in self._hashed:
                return False
            self._hashed.add(key)
            return True
        except TypeError:
            if key in self._unhashable:
                return False
            self._unhashable.append(key)
            return True


class UniqueEnumerable(Enumerable[T]):
    """first occurrence per key, in first-seen order"""

    def __init__(self, source: Enumerable[T], key_selector: Optional[KeySelector[T, K]] = None):
        self._source = source
        self._key_selector = key_selector

    def __iter__(self) -> Iterator[T]:
        seen = _SeenKeys()
        key_selector = self._key_selector
        for element in self._source:
            key = key_selector(element) if key_selector is not None else element
            if seen.add(key):
                yield element


class ReverseEnumerable(Enumerable[T]):
    """buffers the whole upstream on the first pull, then yields it backwards"""

    def __init__(self, source: Enumerable[T]):
        self._source = source

    def __iter__(self) -> Iterator[T]:
        buffer = list(self._source)
        logger.debug(f"reverse buffered {len(buffer)} elements")
        yield from reversed(buffer)


class OrderedEnumerable(Enumerable[T]):
    """
    stable sort over the upstream using a comparer chain. the upstream is
    buffered on the first pull; then_by extends the chain of the same node
    rather than sorting the sorted output again.
    """

    def __init__(self, source: Enumerable[T], comparer: Comparer[T]):
        self._source = source
        self._comparer = comparer

    def __iter__(self) -> Iterator[T]:
        buffer = list(self._source)
        logger.debug(f"sort buffered {len(buffer)} elements")
        # list.sort is stable; the comparer is only ever called pairwise
        buffer.sort(key=cmp_to_key(self._comparer))
        yield from buffer

    def then_by(self, key_selector: KeySelector[T, K],
                comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort ascending"""
        return OrderedEnumerable(
            self._source,
            chain_comparers(self._comparer, create_comparer(key_selector, True, comparer)))

    def then_by_descending(self, key_selector: KeySelector[T, K],
                           comparer: Optional[Comparer[K]] = None) -> 'OrderedEnumerable[T]':
        """secondary sort descending"""
        return OrderedEnumerable(
            self._source,
            chain_comparers(self._comparer, create_comparer(key_selector, False, comparer)))


# --- two-upstream node ---

class ConcatEnumerable(Enumerable[T]):
    """all of left in order, then all of right"""

    def __init__(self, left: Enumerable[T], right: Enumerable[T]):
        self._left = left
        self._right = right

    def _parts(self) -> deque:
        # chained concat() calls nest on the left; walk them iteratively
        # so long chains do not stack one generator frame per link
        parts = deque([self._right])
        node = self._left
        while isinstance(node, ConcatEnumerable):
            parts.appendleft(node._right)
            node = node._left
        parts.appendleft(node)
        return parts

    def __iter__(self) -> Iterator[T]:
        for part in self._parts():
            yield from part
