"""Protocols and type aliases for static type check support.

Classes in this module are intended for checking compatibility at run time,
not (necessarily) for direct inheritance.
"""

__all__ = ['Comparator', 'Entries', 'Key', 'ValueT']

import typing

Key = typing.Union[int, str]
"""Entry keys are non-negative integers (auto-index) or strings."""

ValueT = typing.TypeVar('ValueT')
T = typing.TypeVar('T', contravariant=True)


class Comparator(typing.Protocol[T]):
    """Caller supplied ordering for the ``u*sort`` family.

    Return a negative number, zero, or a positive number when *a* sorts
    before, equal to, or after *b*.
    """
    def __call__(self, a: T, b: T) -> int:
        ...


Entries = typing.Union[typing.Mapping[Key, ValueT], typing.Iterable[ValueT]]
"""Sources of initial or additional entries.

Mappings (including containers) contribute their keys. Other iterables are
keyed by position, like an array literal.
"""
