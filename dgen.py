'''
seeded record generator for tests. a schema is a nested python structure:

    {'name': 'first_name',                                   # faker provider
     'age': ('pyint', {'min_value': 18, 'max_value': 65}),  # provider with kwargs
     'team': {'_dgen_provider': 'choice', 'from': ['a', 'b']},
     'label': {'_dgen_provider': 'ref', 'key': 'name', 'format': 'user-{}'},
     'tags': [{'_dgen_items': 'word', '_dgen_count': (0, 3)}]}
'''

from typing import Any, Dict, Optional

import numpy as np
from faker import Faker

from colinq import List, Enumerable, from_iterable


class Generator:
    """schema interpreter backed by faker and a numpy random generator."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def _call_faker(self, method_name: str, kwargs: Optional[Dict] = None) -> Any:
        try:
            method = getattr(self._fake, method_name)
        except AttributeError:
            raise ValueError(f"faker has no provider '{method_name}'") from None
        return method(**(kwargs or {}))

    def _resolve_provider(self, config: Dict, context: Dict) -> Any:
        provider = config["_dgen_provider"]

        if provider == "ref":
            key = config["key"]
            if key not in context:
                raise ValueError(f"reference to '{key}' not found in current context.")
            value = context[key]
            return config["format"].format(value) if "format" in config else value

        if provider == "choice":
            # numpy hands back numpy scalars, records should hold python values
            index = self._rng.integers(0, len(config["from"]))
            return config["from"][int(index)]

        if provider == "literal":
            return config["value"]

        raise ValueError(f"unknown _dgen_provider: '{provider}'")

    def _count(self, item_schema: Any) -> int:
        count = item_schema.get("_dgen_count", 3) if isinstance(item_schema, dict) else 3
        if isinstance(count, (list, tuple)):
            low, high = count
            return int(self._rng.integers(low, high, endpoint=True))
        return count

    def create(self, schema: Any, context: Optional[Dict] = None) -> Any:
        current_context = context or {}

        if isinstance(schema, dict):
            if "_dgen_provider" in schema:
                return self._resolve_provider(schema, current_context)
            # fields see their parent context and the siblings generated before them
            record = {}
            for key, value in schema.items():
                record[key] = self.create(value, {**current_context, **record})
            return record

        if isinstance(schema, list):
            if not schema:
                return []
            item_schema = schema[0]
            actual_item_schema = item_schema.get("_dgen_items", item_schema) if isinstance(item_schema, dict) else item_schema
            return [self.create(actual_item_schema, current_context) for _ in range(self._count(item_schema))]

        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._call_faker(schema[0], schema[1])

        if isinstance(schema, str) and hasattr(self._fake, schema):
            return self._call_faker(schema)

        return schema


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def take(self, count: int) -> List:
        """generate count records eagerly into a colinq List"""
        return List(self._generator.create(self._schema) for _ in range(count))

    def stream(self, count: int) -> Enumerable:
        """
        generate up to count records lazily. records are produced as they are
        pulled and cached, so iterating twice yields the same records.
        """
        return from_iterable(self._generator.create(self._schema) for _ in range(count))


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
