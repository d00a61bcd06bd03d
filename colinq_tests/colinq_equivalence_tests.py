import suite
from dataclasses import asdict
from dgen import from_schema
from colinq import (
    List, Stack, Q, configure, get_options, options_override,
    EmptySequenceError, OutOfBoundsError
)

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
assert_raises = suite.assert_raises

person_schema = {
    'id': ('pyint', {'min_value': 1, 'max_value': 100}),
    'name': 'first_name',
    'age': ('pyint', {'min_value': 18, 'max_value': 65}),
    'salary': ('pyint', {'min_value': 30000, 'max_value': 150000}),
    'department': {'_dgen_provider': 'choice', 'from': ['eng', 'sales', 'hr', 'marketing']},
    'active': ('pybool', {}),
}

records = from_schema(person_schema, seed=42).take(40)
numbers = List([5, 3, 8, 1, 9, 2, 7])


class _ViewCountingList(List):
    """counts how often the lazy view is requested"""

    def __init__(self, elements=None):
        super().__init__(elements)
        self.views = 0

    def as_enumerable(self):
        self.views += 1
        return super().as_enumerable()


def both_paths(operation):
    """run operation with the array fast path on and off; return both results"""
    with options_override(array_fast_path=True):
        fast = operation()
    with options_override(array_fast_path=False):
        generic = operation()
    return fast, generic


def assert_paths_agree(operation, description):
    fast, generic = both_paths(operation)
    assert_equal(fast, generic, f"{description}: fast and generic paths differ")
    return fast


# --- equivalence of the two code paths ---

@test("counting and predicates agree on both paths")
def test_equivalent_counts():
    assert_paths_agree(lambda: records.count(), "count")
    assert_paths_agree(lambda: records.count_where(lambda r: r['active']), "count_where")
    assert_paths_agree(lambda: records.any(), "any")
    assert_paths_agree(lambda: List().any(), "any on empty")
    assert_paths_agree(lambda: records.any_where(lambda r: r['age'] > 60), "any_where")
    assert_paths_agree(lambda: records.all(lambda r: r['salary'] >= 30000), "all")
    assert_paths_agree(lambda: records.all(lambda r: r['department'] == 'eng'), "all false")


@test("element access agrees on both paths")
def test_equivalent_element_access():
    for index in (0, 3, 39, 40, 100):
        assert_paths_agree(lambda: records.element_at_or_default(index), f"element_at_or_default({index})")
    assert_paths_agree(lambda: records.first_or_default(), "first_or_default")
    assert_paths_agree(lambda: records.last_or_default(), "last_or_default")
    assert_paths_agree(lambda: records.first_or_default_where(lambda r: r['department'] == 'hr'), "first hr")
    assert_paths_agree(lambda: records.last_or_default_where(lambda r: r['department'] == 'hr'), "last hr")
    assert_paths_agree(lambda: records.first_or_default_where(lambda r: r['age'] > 100, 'none'), "default")
    assert_paths_agree(lambda: numbers.element_at(4), "element_at")
    assert_paths_agree(lambda: numbers.last(), "last")


@test("aggregates agree on both paths")
def test_equivalent_aggregates():
    assert_paths_agree(lambda: records.average_of(lambda r: r['salary']), "average_of salary")
    assert_paths_agree(lambda: numbers.average(), "average")
    assert_paths_agree(lambda: numbers.aggregate(lambda a, b: a * 10 + b), "aggregate")
    assert_paths_agree(lambda: records.fold(lambda acc, r: acc + r['age'], 0), "fold")
    assert_paths_agree(lambda: records.min_of(lambda r: r['age']), "min_of")
    assert_paths_agree(lambda: records.max_of(lambda r: r['salary']), "max_of")
    assert_paths_agree(lambda: numbers.min(), "min")
    assert_paths_agree(lambda: numbers.max(), "max")
    assert_paths_agree(lambda: numbers.sum(), "sum")
    assert_paths_agree(lambda: records.sum_of(lambda r: r['salary']), "sum_of")


@test("for_each visits the same elements on both paths")
def test_equivalent_for_each():
    def visit():
        seen = []
        records.for_each(lambda r: seen.append(r['id']))
        return seen
    visited = assert_paths_agree(visit, "for_each")
    assert_equal(len(visited), 40, "every record visited")


@test("errors agree on both paths")
def test_equivalent_errors():
    for fast_path in (True, False):
        with options_override(array_fast_path=fast_path):
            with assert_raises(EmptySequenceError):
                List().first()
            with assert_raises(EmptySequenceError):
                Stack().last()
            with assert_raises(EmptySequenceError):
                List().aggregate(lambda a, b: a + b)
            with assert_raises(EmptySequenceError):
                List().average()
            with assert_raises(OutOfBoundsError):
                numbers.element_at_or_default(-1)
            with assert_raises(OutOfBoundsError):
                numbers.element_at(7)


@test("collection results match their lazy view")
def test_collection_matches_view():
    view = records.as_enumerable()
    assert_equal(records.count(), view.count(), "count")
    assert_equal(records.first(), view.first(), "first")
    assert_equal(records.last_where(lambda r: r['active']), view.last_where(lambda r: r['active']), "last_where")
    assert_equal(records.average_of(lambda r: r['age']), view.average_of(lambda r: r['age']), "average_of")
    assert_equal(records.to_array(), view.to_array(), "to_array")
    assert_equal(numbers.element_at_or_default(10), Q([5, 3]).element_at_or_default(10), "past the end")


@test("fast path scans without building a lazy view")
def test_fast_path_is_direct():
    counted = _ViewCountingList([1, 2, 3])
    counted.count()
    counted.any_where(lambda x: x > 2)
    counted.first_or_default()
    assert_equal(counted.views, 0, "fast path never asks for the lazy view")
    with options_override(array_fast_path=False):
        counted.count()
        counted.last_or_default()
    assert_equal(counted.views, 2, "generic path goes through the lazy view")
    counted.where(lambda x: x > 1).to_array()
    assert_equal(counted.views, 3, "transformations always use the lazy view")


# --- options ---

@test("options have sensible defaults")
def test_default_options():
    options = get_options()
    assert_that(options.array_fast_path is True, "fast path on by default")
    assert_equal(options.repr_limit, 10, "repr limit")


@test("options_override restores previous options")
def test_options_override_restores():
    before = get_options()
    with options_override(array_fast_path=False) as options:
        assert_that(options.array_fast_path is False, "override applied")
        assert_that(get_options() is options, "override is current")
    assert_that(get_options() is before, "previous options restored")
    try:
        with options_override(repr_limit=1):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert_that(get_options() is before, "restored after an error")


@test("configure rejects unknown options")
def test_configure():
    previous = get_options()
    try:
        updated = configure(repr_limit=3)
        assert_equal(updated.repr_limit, 3, "field replaced")
        assert_equal(repr(List(range(5))), "List([0, 1, 2, ...])", "repr follows the option")
        with assert_raises(TypeError, "unknown query options"):
            configure(fast=True)
    finally:
        configure(**asdict(previous))


if __name__ == "__main__":
    suite.run(title="colinq eager/lazy equivalence test suite")
