from __future__ import annotations

import collections.abc
import logging
from .types import (
    T, K, V, Any, Optional, Union, Iterable, Mapping, Generic,
    Selector, KeySelector, KeyValuePair
)
from .errors import KeyExistsError, OutOfBoundsError
from .enumerable import IQueryable, Enumerable, ArrayEnumerable, DeferredEnumerable
from .collection import EnumerableCollection, ArrayQueryable

logger = logging.getLogger(__name__)


class List(ArrayQueryable[T]):
    """
    an ordered, 0-indexed list with positional mutation at any index.
    push/pop are cheap at the back and linear at the front.
    queries built from a list read it live: they see later mutations.
    """

    def copy(self) -> 'List[T]':
        return List(self._source)

    def clear(self) -> None:
        self._source.clear()

    def __getitem__(self, index: int) -> T:
        if index < 0 or index >= len(self._source):
            raise OutOfBoundsError(index)
        return self._source[index]

    def get(self, index: int) -> Optional[T]:
        """element at index, or None past the end"""
        if index < 0:
            raise OutOfBoundsError(index)
        return self._source[index] if index < len(self._source) else None

    def set(self, index: int, element: T) -> None:
        """replace the element at index; index == len appends"""
        if index < 0 or index > len(self._source):
            raise OutOfBoundsError(index)
        if index == len(self._source):
            self._source.append(element)
        else:
            self._source[index] = element

    def insert(self, index: int, element: T) -> None:
        """insert before index, shifting later elements right"""
        if index < 0 or index > len(self._source):
            raise OutOfBoundsError(index)
        self._source.insert(index, element)

    def remove_at(self, index: int) -> T:
        """remove and return the element in an occupied slot"""
        if index < 0 or index >= len(self._source):
            raise OutOfBoundsError(index)
        return self._source.pop(index)

    def remove(self, element: T) -> None:
        """remove every element identical or equal to element, not just the first"""
        before = len(self._source)
        self._source[:] = [x for x in self._source if not (x is element or x == element)]
        logger.debug(f"removed {before - len(self._source)} occurrences of {element!r}")

    def index_of(self, element: T) -> int:
        """position of the first identical or equal element, -1 if there is none"""
        for i, x in enumerate(self._source):
            if x is element or x == element:
                return i
        return -1

    def push(self, element: T) -> int:
        self._source.append(element)
        return len(self._source)

    def push_range(self, elements: Union[Iterable[T], IQueryable[T]]) -> int:
        # snapshot first so pushing a list onto itself terminates
        items = elements.to_array() if isinstance(elements, IQueryable) else list(elements)
        self._source.extend(items)
        return len(self._source)

    def push_front(self, element: T) -> int:
        self._source.insert(0, element)
        return len(self._source)

    def pop(self) -> Optional[T]:
        return self._source.pop() if self._source else None

    def pop_front(self) -> Optional[T]:
        return self._source.pop(0) if self._source else None


class Stack(ArrayQueryable[T]):
    """
    last-in first-out view over a backing list. the top of the stack is the
    end of the list, so enumeration runs bottom to top.
    """

    def copy(self) -> 'Stack[T]':
        return Stack(self._source)

    def clear(self) -> None:
        self._source.clear()

    def peek(self) -> Optional[T]:
        return self._source[-1] if self._source else None

    def pop(self) -> Optional[T]:
        return self._source.pop() if self._source else None

    def push(self, element: T) -> int:
        self._source.append(element)
        return len(self._source)


class Dictionary(EnumerableCollection[KeyValuePair], Generic[K, V]):
    """
    a key-unique map. set() refuses existing keys, set_or_update() overwrites.
    enumerates KeyValuePair(key, value) records in insertion order. keys keep
    their original python type; keys that compare and hash equal (1, 1.0, True)
    are the same key.

    `key in d` tests keys, like a python dict. contains(pair) is the query
    operation and compares whole KeyValuePair records, so
    KeyValuePair('a', 1) in d is False while d.contains(KeyValuePair('a', 1))
    is True.
    """

    @staticmethod
    def from_array(items: Iterable[T],
                   key_selector: KeySelector[T, K],
                   value_selector: Selector[T, V]) -> 'Dictionary[K, V]':
        """build from any iterable; a repeated key raises KeyExistsError"""
        return Dictionary(KeyValuePair(key_selector(item), value_selector(item)) for item in items)

    def __init__(self, pairs: Optional[Union[Iterable[Any], Mapping[K, V]]] = None):
        self._dictionary: dict = {}
        if pairs is None:
            return
        if isinstance(pairs, collections.abc.Mapping):
            pairs = pairs.items()
        for key, value in pairs:
            self.set(key, value)

    def __len__(self) -> int:
        return len(self._dictionary)

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def copy(self) -> 'Dictionary[K, V]':
        return Dictionary(self.to_array())

    def as_enumerable(self) -> Enumerable[KeyValuePair]:
        # snapshot per pull: sees later changes, tolerates mutation mid-iteration
        return DeferredEnumerable(lambda: ArrayEnumerable(self.to_array()))

    def to_array(self) -> list:
        return [KeyValuePair(key, value) for key, value in self._dictionary.items()]

    def keys(self) -> Enumerable[K]:
        return self.select(lambda pair: pair.key)

    def values(self) -> Enumerable[V]:
        return self.select(lambda pair: pair.value)

    def clear(self) -> None:
        self._dictionary.clear()

    def contains_key(self, key: K) -> bool:
        return key in self._dictionary

    def contains_value(self, value: V) -> bool:
        return any(v == value for v in self._dictionary.values())

    def remove(self, key: K) -> None:
        """drop key if present, otherwise do nothing"""
        self._dictionary.pop(key, None)

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        return self._dictionary.get(key, default)

    def set(self, key: K, value: V) -> None:
        if self.contains_key(key):
            raise KeyExistsError(key)
        self.set_or_update(key, value)

    def set_or_update(self, key: K, value: V) -> None:
        self._dictionary[key] = value
