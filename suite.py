import time
from contextlib import contextmanager
from functools import wraps
from typing import List, Dict, Any, Callable, Iterator, Optional, Type

_suite_state: Dict[str, List[Dict[str, Any]]] = {
    'tests': [],
    'results': []
}

PASS_MARK = '✔ pass'
FAIL_MARK = '✖ fail'


class _c:
    """ansi color codes for the report."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


class TestAssertionError(AssertionError):
    """an assertion made by a test, as opposed to an unexpected exception."""
    __test__ = False


# --- registration ---

def test(description: str) -> Callable:
    """decorator that registers a function as a test case under a description."""

    def decorator(func: Callable) -> Callable:
        _suite_state['tests'].append({'func': func, 'description': description})

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


# --- assertions ---

def assert_that(condition: Any, message: str = "assertion failed") -> None:
    if not condition:
        raise TestAssertionError(message)


def assert_equal(actual: Any, expected: Any, message: str = "values differ") -> None:
    if actual != expected:
        raise TestAssertionError(f"{message}: expected {expected!r}, got {actual!r}")


@contextmanager
def assert_raises(error_type: Type[BaseException], contains: Optional[str] = None) -> Iterator[None]:
    """the with-block must raise error_type, optionally with text in its message."""
    try:
        yield
    except error_type as e:
        if contains is not None and contains not in str(e):
            raise TestAssertionError(f"{error_type.__name__} raised with unexpected message: {e}")
        return
    raise TestAssertionError(f"expected {error_type.__name__} to be raised")


# --- runner ---

def run(title: str = "test run") -> bool:
    """runs every registered test, prints a report and returns True if all passed."""
    print(f"\n{_c.info}--- starting: {title} ---{_c.reset}")
    start_time = time.perf_counter()

    results = []
    for test_item in _suite_state['tests']:
        error = None
        try:
            test_item['func']()
        except TestAssertionError as e:
            error = f"assertion failed: {e}"
        except Exception as e:
            error = f"{type(e).__name__}: {e}"

        results.append({'passed': error is None, 'description': test_item['description'], 'error': error})

        if error is None:
            print(f"  {_c.ok}{PASS_MARK}{_c.reset}  {test_item['description']}")
        else:
            print(f"  {_c.fail}{FAIL_MARK}{_c.reset}  {test_item['description']}")
            print(f"    {_c.grey}└─> {error}{_c.reset}")

    _suite_state['results'] = results
    _print_summary(start_time)

    # clear tests so several suites can run in a single process
    _suite_state['tests'] = []
    return all(r['passed'] for r in results)


def _print_summary(start_time: float) -> None:
    duration = (time.perf_counter() - start_time) * 1000
    results = _suite_state['results']

    total = len(results)
    passed_count = sum(1 for r in results if r['passed'])
    failed_count = total - passed_count

    summary_color = _c.ok if failed_count == 0 else _c.fail

    print(f"\n{summary_color}--- summary ---{_c.reset}")
    print(f"  ran {_c.info}{total}{_c.reset} tests in {_c.warn}{duration:.2f}ms{_c.reset}")
    print(f"  {_c.ok}passed: {passed_count}{_c.reset}, {_c.fail}failed: {failed_count}{_c.reset}")
    print(f"{summary_color}---------------{_c.reset}\n")
