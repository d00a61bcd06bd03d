from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import dataclass, asdict, fields, replace
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOptions:
    """runtime switches for the query engine."""
    # route hot terminal operations of array-backed collections through direct scans
    array_fast_path: bool = True
    # number of elements shown by collection reprs
    repr_limit: int = 10


_options = QueryOptions()


def get_options() -> QueryOptions:
    """the options currently in effect"""
    return _options


def configure(**changes) -> QueryOptions:
    """replace the given option fields and return the new options."""
    global _options
    known = {f.name for f in fields(QueryOptions)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"unknown query options: {', '.join(sorted(unknown))}")
    _options = replace(_options, **changes)
    logger.debug(f"query options: {asdict(_options)}")
    return _options


@contextmanager
def options_override(**changes) -> Iterator[QueryOptions]:
    """apply option changes for the duration of a with-block."""
    global _options
    previous = _options
    try:
        yield configure(**changes)
    finally:
        _options = previous
