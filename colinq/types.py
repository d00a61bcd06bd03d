from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Mapping, Any, Optional, Union,
    Dict, List, Set, Tuple, Sequence, NamedTuple
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Predicate = Callable[[T], bool]
Selector = Callable[[T], U]
KeySelector = Callable[[T], K]
Comparer = Callable[[T, T], int]
Aggregator = Callable[[U, T], U]
Action = Callable[[T], Any]


class _Missing:
    """marks 'no element' where None is a legal element value"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


class KeyValuePair(NamedTuple):
    """immutable key/value record yielded when enumerating a dictionary"""
    key: Any
    value: Any
