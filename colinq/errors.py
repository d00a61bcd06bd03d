"""
error taxonomy. every error also derives from the closest builtin so callers
can catch either the colinq type or the plain python one.
"""


class ColinqError(Exception):
    """base class for all errors raised by colinq"""
    pass


class EmptySequenceError(ColinqError, ValueError):
    """raised when an operation needs at least one element and got none."""

    def __init__(self, message: str = "sequence contains no elements"):
        super().__init__(message)


class MoreThanOneElementError(ColinqError, ValueError):
    """raised by single() when more than one element matches."""

    def __init__(self, message: str = "sequence contains more than one element"):
        super().__init__(message)


class OutOfBoundsError(ColinqError, IndexError):
    """raised for negative indices and for indices past an occupied slot."""

    def __init__(self, index: int, message: str = "out of bounds"):
        self.index = index
        super().__init__(f"{message}: {index}")


class KeyExistsError(ColinqError, KeyError):
    """raised when a unique insert meets a key that is already present."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"key already exists: {key!r}")

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the message readable
        return self.args[0]
