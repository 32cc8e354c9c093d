"""Implement composable details.

Key normalization, input dispatching, positional window arithmetic, and the
ordering keys behind the sort family.

The parallel _typing module provides interface specifications for
compatibility checking without providing run time implementation details.

The helpers here are not part of the public interface and should not be exposed
in user-facing code.
"""

from __future__ import annotations

__all__ = []

import collections.abc
import enum
import functools
import itertools
import logging
import re
import typing

from arraymap.exceptions import InvalidKeyError

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


class SortFlag(enum.IntFlag):
    """Modify the comparison used by the value and key sorts.

    ``FLAG_CASE`` may be combined with ``STRING`` or ``NATURAL`` to compare
    case-insensitively.
    """
    REGULAR = 0
    NUMERIC = 1
    STRING = 2
    NATURAL = 6
    FLAG_CASE = 8


def is_key(key) -> bool:
    """Check whether *key* is a non-negative int or a str."""
    # bool is an int subclass, but True and 1 must not be interchangeable keys.
    if isinstance(key, bool) or not isinstance(key, (int, str)):
        return False
    return not (isinstance(key, int) and key < 0)


def check_key(key, operation: str = 'insert'):
    """Return *key* if it is usable as an entry key.

    Raises:
        InvalidKeyError if *key* is not a non-negative int or a str.
    """
    if not is_key(key):
        raise InvalidKeyError(key, operation)
    return key


@functools.singledispatch
def entries(source) -> typing.Iterable[typing.Tuple[typing.Any, typing.Any]]:
    """Get (key, value) pairs from a source of entries.

    Non-mapping iterables are keyed by position, like an array literal.
    """
    if not isinstance(source, collections.abc.Iterable):
        raise TypeError(f'Expected a mapping or an iterable of values. Got {source!r}.')
    return enumerate(source)


@entries.register(str)
@entries.register(bytes)
def _(source):
    raise TypeError(f'Expected a mapping or an iterable of values. Got {type(source).__qualname__}.')


@entries.register(collections.abc.Mapping)
def _(source: collections.abc.Mapping):
    return source.items()


@functools.singledispatch
def as_values(source) -> typing.Iterable:
    """Get the values of *source*, ignoring any keys.

    A bare scalar (including str and bytes) is a single value.
    """
    if isinstance(source, collections.abc.Iterable):
        return source
    return (source,)


@as_values.register(str)
@as_values.register(bytes)
def _(source):
    return (source,)


@as_values.register(collections.abc.Mapping)
def _(source: collections.abc.Mapping):
    return source.values()


def window(count: int, offset: int, length: typing.Optional[int] = None) -> typing.Tuple[int, int]:
    """Get the [start, stop) positions selected by *offset* and *length*.

    A negative *offset* counts from the end. An offset beyond the end selects
    nothing. If *length* is None, the window extends to the end. A negative
    *length* stops that many entries before the end.
    """
    if offset > count:
        start = count
    elif offset < 0:
        start = max(count + offset, 0)
    else:
        start = offset

    if length is None:
        stop = count
    elif length < 0:
        stop = max(count + length, start)
    else:
        stop = min(start + length, count)
    return start, stop


def renumber(pairs: typing.Iterable[typing.Tuple[typing.Any, typing.Any]]) -> typing.List[tuple]:
    """Assign integer keys 0..n-1 in order, keeping string keys.

    A None key is a positional entry and is numbered like an integer key.
    """
    counter = itertools.count()
    return [(key if isinstance(key, str) else next(counter), value) for key, value in pairs]


_digits = re.compile(r'(\d+)')


def natural_key(value, casefold: bool = False) -> tuple:
    """Ordering key that compares runs of digits numerically.

    ``'img12'`` sorts after ``'img10'`` and ``'img2'``. Leading whitespace is
    not significant.
    """
    text = str(value).lstrip()
    if casefold:
        text = text.casefold()
    # Tag each chunk so that numbers and text never compare directly.
    return tuple((0, int(chunk), '') if chunk.isdigit() else (1, 0, chunk)
                 for chunk in _digits.split(text) if chunk)


def value_order(flags: SortFlag) -> typing.Optional[typing.Callable]:
    """Get the sort key function for comparing values under *flags*.

    Returns None for the regular Python ordering.
    """
    casefold = bool(int(flags) & SortFlag.FLAG_CASE)
    kind = int(flags) & ~int(SortFlag.FLAG_CASE)
    if kind == SortFlag.NATURAL:
        return functools.partial(natural_key, casefold=casefold)
    if kind == SortFlag.STRING:
        if casefold:
            return lambda value: str(value).casefold()
        return str
    if kind == SortFlag.NUMERIC:
        return float
    if kind != SortFlag.REGULAR:
        raise ValueError(f'Unsupported sort flags: {flags!r}')
    return None


def key_order(flags: SortFlag) -> typing.Callable:
    """Get the sort key function for comparing entry keys under *flags*.

    Under the regular ordering, integer keys sort numerically ahead of string
    keys, which sort lexically.
    """
    order = value_order(flags)
    if order is None:
        return lambda key: (1, 0, key) if isinstance(key, str) else (0, key, '')
    return order


def type_name(value) -> str:
    """Name the observed type of *value* for diagnostic messages."""
    if value is None:
        return 'None'
    return type(value).__qualname__


def capability_name(capability) -> str:
    """Name a required element type for diagnostic messages."""
    if isinstance(capability, tuple):
        return ' | '.join(capability_name(c) for c in capability)
    return getattr(capability, '__qualname__', repr(capability))


def strictly_equal(a, b) -> bool:
    """Compare without type coercion.

    ``1``, ``1.0`` and ``True`` are not strictly equal to each other.
    """
    return a is b or (type(a) is type(b) and a == b)
