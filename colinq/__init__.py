r"""
'    ________  ____  __    _____   ______
'   / ____/ / / / / / /   /  _/ | / / __ \
'  / /   / / / / / / /    / //  |/ / / / /
' / /___/ /_/ / / / /____/ // /|  / /_/ /
' \____/\____/_/ /_____/___/_/ |_/\___\_\
"""

# expose the query engine
from .enumerable import (
    IQueryable,
    Enumerable,
    OrderedEnumerable,
    MemoizedEnumerable
)
from .collection import EnumerableCollection, ArrayQueryable

# expose the eager collections
from .containers import List, Stack, Dictionary

# expose the factory functions
from .factories import (
    from_iterable,
    from_range,
    repeat,
    empty,
    generate,
    query,
    Q
)

# expose supporting types, errors and options
from .types import KeyValuePair
from .comparers import create_comparer, chain_comparers, default_comparer
from .errors import (
    ColinqError,
    EmptySequenceError,
    MoreThanOneElementError,
    OutOfBoundsError,
    KeyExistsError
)
from .config import QueryOptions, configure, get_options, options_override

# define what `import *` does
__all__ = [
    "IQueryable",
    "Enumerable",
    "OrderedEnumerable",
    "MemoizedEnumerable",
    "EnumerableCollection",
    "ArrayQueryable",
    "List",
    "Stack",
    "Dictionary",
    "from_iterable",
    "from_range",
    "repeat",
    "empty",
    "generate",
    "query",
    "Q",
    "KeyValuePair",
    "create_comparer",
    "chain_comparers",
    "default_comparer",
    "ColinqError",
    "EmptySequenceError",
    "MoreThanOneElementError",
    "OutOfBoundsError",
    "KeyExistsError",
    "QueryOptions",
    "configure",
    "get_options",
    "options_override"
]
