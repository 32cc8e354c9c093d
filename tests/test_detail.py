"""Test the key, window, and ordering helpers behind the containers.
"""
import pytest
from arraymap import _detail
from arraymap import InvalidKeyError
from arraymap import SortFlag


def test_window():
    assert _detail.window(4, 1, 2) == (1, 3)
    assert _detail.window(4, 1) == (1, 4)
    assert _detail.window(4, -2) == (2, 4)
    assert _detail.window(4, -10, 1) == (0, 1)
    assert _detail.window(4, 5, 1) == (4, 4)
    assert _detail.window(4, 1, -1) == (1, 3)
    assert _detail.window(4, 3, -2) == (3, 3)
    assert _detail.window(0, 0) == (0, 0)


def test_renumber():
    pairs = [(5, 'a'), ('k', 'b'), (None, 'c'), (2, 'd')]
    assert _detail.renumber(pairs) == [(0, 'a'), ('k', 'b'), (1, 'c'), (2, 'd')]


def test_check_key():
    assert _detail.check_key(0) == 0
    assert _detail.check_key('') == ''
    for key in (None, -1, False, 1.0, ('a',)):
        with pytest.raises(InvalidKeyError) as exc_info:
            _detail.check_key(key, 'flip')
        assert exc_info.value.operation == 'flip'


def test_natural_key():
    ordered = sorted(['a10', 'a2', 'a1', 'b', '  a3'], key=_detail.natural_key)
    assert ordered == ['a1', 'a2', '  a3', 'a10', 'b']
    assert _detail.natural_key('A1', casefold=True) == _detail.natural_key('a1')
    assert _detail.natural_key('A1') < _detail.natural_key('a1')


def test_orderings():
    assert _detail.value_order(SortFlag.REGULAR) is None
    assert _detail.value_order(SortFlag.STRING)(12) == '12'
    assert _detail.value_order(SortFlag.STRING | SortFlag.FLAG_CASE)('AbC') == 'abc'
    assert _detail.value_order(SortFlag.NUMERIC)('2.5') == 2.5
    with pytest.raises(ValueError):
        _detail.value_order(4)

    order = _detail.key_order(SortFlag.REGULAR)
    assert sorted(['b', 3, 'a', 1], key=order) == [1, 3, 'a', 'b']


def test_names():
    assert _detail.type_name(None) == 'None'
    assert _detail.type_name(1.5) == 'float'
    assert _detail.capability_name((int, str)) == 'int | str'
    assert _detail.strictly_equal(1, 1)
    assert not _detail.strictly_equal(1, True)
    assert not _detail.strictly_equal(1, 1.0)
