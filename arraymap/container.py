"""Ordered associative container with list and map semantics.

An OrderedContainer holds unique-keyed entries in insertion order. Keys are
non-negative integers or strings. Entries inserted without a key are assigned
the next auto-index: one greater than the largest integer key in use,
starting at 0. Overwriting an existing key keeps the entry in place.

The bulk and reordering operations follow the conventions of PHP arrays,
which distinguish integer keys (positional, renumbered by some operations)
from string keys (never renumbered):

    * :py:meth:`~OrderedContainer.slice` and :py:meth:`~OrderedContainer.splice`
      select a contiguous window by position. Negative values count from the end.
    * :py:meth:`~OrderedContainer.splice` and :py:meth:`~OrderedContainer.reverse`
      renumber integer keys 0..n-1 in the new order.
    * ``sort``, ``rsort`` and ``usort`` discard all keys. The remaining sorts
      keep the key associated with each value.

Reordering operations are atomic. The new arrangement is computed aside and
committed only if it completes, so a failed sort leaves the container as it
was.

The container also provides a forward-only cursor (:py:meth:`~OrderedContainer.current`,
:py:meth:`~OrderedContainer.next`, :py:meth:`~OrderedContainer.key`,
:py:meth:`~OrderedContainer.valid`, :py:meth:`~OrderedContainer.rewind`).
Plain iteration yields values from a snapshot and does not move the cursor.

Example::

    >>> c = OrderedContainer(['a', 'b', 'c'])
    >>> c['x'] = 'd'
    >>> c.splice(1, 1, ['y', 'z'])
    OrderedContainer({0: 'b'})
    >>> c.dump()
    {0: 'a', 1: 'y', 2: 'z', 3: 'c', 'x': 'd'}

"""

from __future__ import annotations

__all__ = ['OrderedContainer', 'SortFlag']

import functools
import logging
import typing

from arraymap import _detail
from arraymap._detail import SortFlag
from arraymap._typing import Comparator
from arraymap._typing import Entries
from arraymap._typing import Key
from arraymap._typing import ValueT
from arraymap.exceptions import SortOperationFailed

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

ContainerT = typing.TypeVar('ContainerT', bound='OrderedContainer')


class OrderedContainer(typing.Generic[ValueT]):
    """Ordered mapping of int or str keys to values.

    Build from a mapping (keys are kept), another container (keys are kept),
    or any other iterable of values (keyed 0..n-1). Duplicate keys in the
    source collapse to the last value, at the position of the first
    occurrence.
    """
    _collection: typing.Dict[Key, ValueT]

    def __init__(self, initial: Entries = ()):
        self._collection = {}
        self._next_index = 0
        self._position = 0
        self._order = None
        for key, value in _detail.entries(initial):
            self.insert(key, value)

    # Hook for subclasses to reject values before any mutation.
    def _validate(self, values: typing.Iterable) -> None:
        ...

    def _store(self, key: typing.Optional[Key], value) -> Key:
        if key is None:
            key = self._next_index
        if key not in self._collection:
            self._order = None
        self._collection[key] = value
        if isinstance(key, int) and key >= self._next_index:
            self._next_index = key + 1
        return key

    def _replace(self, pairs: typing.Iterable[typing.Tuple[Key, ValueT]]):
        """Commit a new arrangement of entries and rewind the cursor."""
        self._collection = dict(pairs)
        self._reindex()
        self._position = 0

    def _reindex(self):
        self._order = None
        self._next_index = max((key for key in self._collection if isinstance(key, int)), default=-1) + 1

    def _normalized(self, source: Entries, operation: str) -> typing.List[tuple]:
        pairs = []
        for key, value in _detail.entries(source):
            if key is not None:
                key = _detail.check_key(key, operation)
            pairs.append((key, value))
        self._validate(value for _, value in pairs)
        return pairs

    def get(self, key: Key, default=None) -> typing.Optional[ValueT]:
        """Get the value for *key*, or *default* if there is no such entry.

        Keys that could never be stored (unhashable, float, negative, ...) are
        simply absent.
        """
        if not _detail.is_key(key):
            return default
        return self._collection.get(key, default)

    def contains_key(self, key: Key) -> bool:
        return _detail.is_key(key) and key in self._collection

    def contains_value(self, value) -> bool:
        """Check for an entry with a strictly equal value.

        No type coercion is applied: a container holding ``1`` does not
        contain ``1.0`` or ``True``.
        """
        return any(_detail.strictly_equal(item, value) for item in self._collection.values())

    def has(self, key: Key) -> bool:
        """Check that *key* exists and its value is not None."""
        return self.get(key) is not None

    def insert(self, key: typing.Optional[Key], value: ValueT) -> Key:
        """Insert or overwrite an entry.

        If *key* is None, the value is appended at the next auto-index.
        An existing key keeps its position. A new key is added at the end.

        Returns:
            The key of the entry.

        Raises:
            InvalidKeyError if *key* is not None, a non-negative int, or a str.
        """
        if key is not None:
            key = _detail.check_key(key)
        self._validate((value,))
        return self._store(key, value)

    def remove(self, key: Key) -> None:
        """Remove the entry for *key*, if any.

        The cursor stays on the entry it was at.
        """
        if not self.contains_key(key):
            return
        if self._ordered_keys().index(key) < self._position:
            self._position -= 1
        del self._collection[key]
        self._order = None
        if isinstance(key, int) and key + 1 == self._next_index:
            self._reindex()

    def count(self) -> int:
        return len(self._collection)

    def is_empty(self) -> bool:
        return not self._collection

    def dump(self) -> typing.Dict[Key, ValueT]:
        """Get a snapshot of the entries as an (ordered) dict."""
        return dict(self._collection)

    def wipe(self) -> None:
        """Remove all entries."""
        self._replace(())

    def overwrite(self, new_entries: Entries) -> None:
        """Replace all entries with *new_entries*, in order."""
        pairs = self._normalized(new_entries, 'overwrite')
        self.wipe()
        for key, value in pairs:
            self._store(key, value)

    def merge(self, other_entries: Entries) -> None:
        """Assign each entry of *other_entries* by key.

        Identical keys are overwritten in place. New keys are added at the end.
        """
        for key, value in self._normalized(other_entries, 'merge'):
            self._store(key, value)

    def append(self, values: typing.Iterable[ValueT]) -> None:
        """Append each value (keys ignored) at the next auto-index."""
        values = list(_detail.as_values(values))
        self._validate(values)
        for value in values:
            self._store(None, value)

    def prepend(self, values: typing.Iterable[ValueT], preserve_order: bool = False) -> None:
        """Insert each value (keys ignored) at the front.

        Values are placed at the front one at a time, so they end up in
        reverse order unless *preserve_order* is set.

        Each prepended value takes the next auto-index. Existing keys are not
        renumbered, so integer keys no longer follow position afterwards.
        """
        values = list(_detail.as_values(values))
        self._validate(values)
        if preserve_order:
            values.reverse()
        front = []
        key = self._next_index
        for value in values:
            front.insert(0, (key, value))
            key += 1
        self._replace(front + list(self._collection.items()))

    def slice(self: ContainerT,
              offset: int,
              length: typing.Optional[int] = None,
              preserve_keys: bool = False) -> ContainerT:
        """Get a new container of the entries in a positional window.

        A negative *offset* counts back from the end. If *length* is None,
        the window extends to the end. A negative *length* stops that many
        entries before the end.

        String keys are always kept. Integer keys are renumbered from 0
        unless *preserve_keys* is set.
        """
        items = list(self._collection.items())
        start, stop = _detail.window(len(items), offset, length)
        selected = items[start:stop]
        if not preserve_keys:
            selected = _detail.renumber(selected)
        return type(self)(dict(selected))

    def splice(self: ContainerT,
               offset: int,
               length: typing.Optional[int] = None,
               replacement=None) -> ContainerT:
        """Remove a positional window and insert *replacement* in its place.

        The window is selected as for :py:meth:`slice`. The keys of
        *replacement* are ignored. A scalar replacement is a single value.
        Afterwards, all integer keys are renumbered 0..n-1 in order.

        Returns:
            The removed entries, as a new container.
        """
        items = list(self._collection.items())
        start, stop = _detail.window(len(items), offset, length)
        incoming = [] if replacement is None else list(_detail.as_values(replacement))
        self._validate(incoming)
        removed = items[start:stop]
        arranged = items[:start] + [(None, value) for value in incoming] + items[stop:]
        self._replace(_detail.renumber(arranged))
        return type(self)(dict(_detail.renumber(removed)))

    def reverse(self) -> None:
        """Reverse the order of the entries.

        String keys are kept. Integer keys are renumbered from 0 in the new order.
        """
        self._replace(_detail.renumber(reversed(list(self._collection.items()))))

    def _sort(self, operation: str, resolve: typing.Callable[[], typing.Optional[typing.Callable]], *,
              by_key: bool = False,
              descending: bool = False,
              keep_keys: bool = True):
        """Reorder the entries, committing only if the sort completes.

        *resolve* produces the ordering key function (None for the natural
        ordering). Invalid flags or comparators fail like any other sort error.
        """
        items = list(self._collection.items())
        field = 0 if by_key else 1
        try:
            order = resolve()
            if order is None:
                def sort_key(item):
                    return item[field]
            else:
                def sort_key(item):
                    return order(item[field])
            arranged = sorted(items, key=sort_key, reverse=descending)
        except Exception as e:
            logger.debug(f'{operation} failed for {self!r}: {e}')
            raise SortOperationFailed(operation, str(e)) from e
        if not keep_keys:
            arranged = [(index, value) for index, (_, value) in enumerate(arranged)]
        self._replace(arranged)

    @staticmethod
    def _comparison(compare: Comparator):
        if not callable(compare):
            raise TypeError(f'Expected a comparison function. Got {compare!r}.')
        return functools.cmp_to_key(compare)

    def sort(self, flags: SortFlag = SortFlag.REGULAR) -> None:
        """Sort by value, ascending. Keys are discarded and renumbered from 0."""
        self._sort('sort', functools.partial(_detail.value_order, flags), keep_keys=False)

    def rsort(self, flags: SortFlag = SortFlag.REGULAR) -> None:
        """Sort by value, descending. Keys are discarded and renumbered from 0."""
        self._sort('rsort', functools.partial(_detail.value_order, flags), descending=True, keep_keys=False)

    def asort(self, flags: SortFlag = SortFlag.REGULAR) -> None:
        """Sort by value, ascending, keeping keys."""
        self._sort('asort', functools.partial(_detail.value_order, flags))

    def arsort(self, flags: SortFlag = SortFlag.REGULAR) -> None:
        """Sort by value, descending, keeping keys."""
        self._sort('arsort', functools.partial(_detail.value_order, flags), descending=True)

    def ksort(self, flags: SortFlag = SortFlag.REGULAR) -> None:
        """Sort by key, ascending.

        Under the regular ordering, integer keys come first.
        """
        self._sort('ksort', functools.partial(_detail.key_order, flags), by_key=True)

    def krsort(self, flags: SortFlag = SortFlag.REGULAR) -> None:
        """Sort by key, descending."""
        self._sort('krsort', functools.partial(_detail.key_order, flags), by_key=True, descending=True)

    def natsort(self) -> None:
        """Sort by value in natural order, keeping keys."""
        self._sort('natsort', functools.partial(_detail.value_order, SortFlag.NATURAL))

    def natcasesort(self) -> None:
        """Sort by value in case-insensitive natural order, keeping keys."""
        self._sort('natcasesort', functools.partial(_detail.value_order, SortFlag.NATURAL | SortFlag.FLAG_CASE))

    def usort(self, compare: Comparator[ValueT]) -> None:
        """Sort by value with *compare*. Keys are discarded and renumbered from 0."""
        self._sort('usort', functools.partial(self._comparison, compare), keep_keys=False)

    def uksort(self, compare: Comparator[Key]) -> None:
        """Sort by key with *compare*."""
        self._sort('uksort', functools.partial(self._comparison, compare), by_key=True)

    def uasort(self, compare: Comparator[ValueT]) -> None:
        """Sort by value with *compare*, keeping keys."""
        self._sort('uasort', functools.partial(self._comparison, compare))

    def flip(self) -> None:
        """Exchange keys and values.

        When several entries share a value, the last one wins, at the position
        of the first.

        Raises:
            InvalidKeyError if a value cannot be a key. The container is unchanged.
        """
        pairs = [(_detail.check_key(value, 'flip'), key) for key, value in self._collection.items()]
        self._validate(key for _, key in pairs)
        self._replace(pairs)

    def keys(self) -> OrderedContainer[Key]:
        """Get a new container of the keys, numbered from 0."""
        return OrderedContainer(list(self._collection))

    def values(self) -> typing.ValuesView[ValueT]:
        return self._collection.values()

    def items(self) -> typing.ItemsView[Key, ValueT]:
        return self._collection.items()

    # Cursor protocol.

    def _ordered_keys(self) -> typing.Tuple[Key, ...]:
        if self._order is None:
            self._order = tuple(self._collection)
        return self._order

    def valid(self) -> bool:
        """Check whether the cursor is at an entry."""
        return self._position < len(self._collection)

    def key(self) -> typing.Optional[Key]:
        """Get the key at the cursor, or None past the last entry."""
        if not self.valid():
            return None
        return self._ordered_keys()[self._position]

    def current(self) -> typing.Optional[ValueT]:
        """Get the value at the cursor, or None past the last entry."""
        if not self.valid():
            return None
        return self._collection[self._ordered_keys()[self._position]]

    def next(self) -> None:
        """Advance the cursor."""
        if self.valid():
            self._position += 1

    def rewind(self) -> None:
        """Move the cursor to the first entry."""
        self._position = 0

    # Python protocols.

    def __len__(self):
        return len(self._collection)

    def __contains__(self, key):
        return self.contains_key(key)

    def __getitem__(self, key: Key) -> typing.Optional[ValueT]:
        return self.get(key)

    def __setitem__(self, key: typing.Optional[Key], value: ValueT):
        self.insert(key, value)

    def __delitem__(self, key: Key):
        self.remove(key)

    def __iter__(self) -> typing.Iterator[ValueT]:
        return iter(tuple(self._collection.values()))

    def __eq__(self, other):
        if not isinstance(other, OrderedContainer):
            return NotImplemented
        return list(self._collection.items()) == list(other._collection.items())

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self._collection)


@_detail.entries.register(OrderedContainer)
def _(source: OrderedContainer):
    return source.items()


@_detail.as_values.register(OrderedContainer)
def _(source: OrderedContainer):
    return source.values()
