import typing
from itertools import repeat as _repeat
from .types import *
from .enumerable import ArrayEnumerable, IterableEnumerable, DeferredEnumerable, wrap_iterable

if typing.TYPE_CHECKING:
    from .enumerable import Enumerable, IQueryable

def from_iterable(data: Union[Iterable[T], 'IQueryable[T]']) -> 'Enumerable[T]':
    """
    create a lazy sequence over any iterable. lists are read live, generators
    and other one-shot iterators are cached as they are consumed.
    """
    return wrap_iterable(data)

def from_range(start: int, count: int) -> 'Enumerable[int]':
    """create enumerable over start, start + 1, ..., start + count - 1"""
    if count < 0:
        raise ValueError(f"count must not be negative: {count}")
    return IterableEnumerable(range(start, start + count))

def repeat(item: T, count: int) -> 'Enumerable[T]':
    """create enumerable with repeated item"""
    if count < 0:
        raise ValueError(f"count must not be negative: {count}")
    return DeferredEnumerable(lambda: _repeat(item, count))

def empty() -> 'Enumerable[Any]':
    """create empty enumerable"""
    return ArrayEnumerable(())

def generate(generator_func: Callable[[], T], count: int) -> 'Enumerable[T]':
    """generate sequence using a function; it is called again on every pull"""
    return DeferredEnumerable(lambda: (generator_func() for _ in range(count)))

# --- aliases ---
query = from_iterable
Q = from_iterable
