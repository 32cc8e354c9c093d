"""Test element type enforcement by TypedContainer subtypes.
"""
from __future__ import annotations

import logging
import typing

import pytest
from arraymap import ContainerError
from arraymap import InvalidElementType
from arraymap import NoCapabilityDeclared
from arraymap import OrderedContainer
from arraymap import TypedContainer

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


class Shape:
    def area(self) -> float:
        raise NotImplementedError


class Circle(Shape):
    def area(self) -> float:
        return 3.14


class Square(Shape):
    def area(self) -> float:
        return 1.0


class Shapes(TypedContainer, element_type=Shape):
    ...


class Circles(TypedContainer[Circle]):
    ...


@typing.runtime_checkable
class HasArea(typing.Protocol):
    def area(self) -> float:
        ...


class Positive(TypedContainer):
    @classmethod
    def conforms(cls, value) -> bool:
        return isinstance(value, int) and value > 0


def test_accepts_conforming_elements():
    circle = Circle()
    shapes = Shapes([circle, Square()])
    assert shapes.count() == 2
    shapes[None] = Square()
    shapes['named'] = Circle()
    shapes.insert(0, Square())
    assert len(shapes) == 4
    assert list(shapes.dump()) == [0, 1, 2, 'named']


def test_rejects_nonconforming_elements():
    shapes = Shapes([Circle()])
    with pytest.raises(InvalidElementType) as exc_info:
        shapes.insert(None, 'circle')
    error = exc_info.value
    assert error.actual == 'str'
    assert error.expected == 'Shape'
    assert error.container == 'Shapes'
    assert error.code == 100
    assert 'str' in str(error) and 'Shape' in str(error)
    assert shapes.count() == 1

    with pytest.raises(TypeError):
        shapes['key'] = None
    with pytest.raises(ContainerError):
        Shapes([Circle(), 42])
    assert 'key' not in shapes


def test_no_capability_declared():
    with pytest.raises(NoCapabilityDeclared):
        TypedContainer()

    class Unbound(TypedContainer):
        ...

    # The missing capability is reported before any element is examined.
    with pytest.raises(NoCapabilityDeclared) as exc_info:
        Unbound([object()])
    assert exc_info.value.container.endswith('Unbound')
    assert exc_info.value.code == 101


def test_capability_declarations():
    assert Shapes.element_type is Shape
    assert Circles.element_type is Circle
    with pytest.raises(InvalidElementType):
        Circles([Square()])

    class MoreShapes(Shapes):
        ...

    assert MoreShapes.element_type is Shape
    assert isinstance(MoreShapes([Circle()]), Shapes)

    Integers = TypedContainer.of(int)
    assert Integers.__name__ == 'TypedContainer[int]'
    assert Integers([1, 2]).dump() == {0: 1, 1: 2}
    with pytest.raises(InvalidElementType):
        Integers(['1'])

    Scalars = TypedContainer.of((int, str), name='Scalars')
    assert Scalars([1, 'a']).count() == 2
    with pytest.raises(InvalidElementType) as exc_info:
        Scalars([1.5])
    assert exc_info.value.expected == 'int | str'


def test_protocol_capability():
    class Measurable(TypedContainer, element_type=HasArea):
        ...

    class Plot:
        def area(self):
            return 100.0

    assert Measurable([Circle(), Plot()]).count() == 2
    with pytest.raises(InvalidElementType):
        Measurable([object()])


def test_unusable_capability():
    class Unchecked(typing.Protocol):
        def area(self) -> float:
            ...

    with pytest.raises(TypeError):
        class Broken(TypedContainer, element_type=Unchecked):
            ...


def test_capability_strategy():
    assert Positive([1, 2]).count() == 2
    with pytest.raises(InvalidElementType) as exc_info:
        Positive([0])
    assert exc_info.value.expected == 'Positive.conforms'


def test_bulk_operations_are_checked_first():
    circle = Circle()
    shapes = Shapes({'c': circle})
    before = shapes.dump()
    operations = [
        lambda: shapes.append([Square(), 'x']),
        lambda: shapes.prepend([Square(), 'x']),
        lambda: shapes.merge({'c': None}),
        lambda: shapes.overwrite([Square(), 'x']),
        lambda: shapes.splice(0, 1, [Square(), 'x']),
    ]
    for operation in operations:
        with pytest.raises(InvalidElementType):
            operation()
        assert shapes.dump() == before

    shapes.merge({'s': Square()})
    shapes.splice(0, 0, [Circle()])
    assert shapes.count() == 3


def test_contains_value_checks_probe():
    circle = Circle()
    shapes = Shapes([circle])
    assert shapes.contains_value(circle)
    assert not shapes.contains_value(Circle())
    with pytest.raises(InvalidElementType):
        shapes.contains_value('circle')


def test_derived_containers():
    shapes = Shapes({'a': Circle(), 'b': Square(), 'c': Circle()})
    sliced = shapes.slice(1)
    assert type(sliced) is Shapes
    assert list(sliced.dump()) == ['b', 'c']

    removed = shapes.splice(0, 1)
    assert type(removed) is Shapes
    assert list(shapes.dump()) == ['b', 'c']

    keys = shapes.keys()
    assert type(keys) is OrderedContainer
    assert list(keys) == ['b', 'c']


def test_sorting_typed_elements():
    Words = TypedContainer.of(str)
    words = Words(['pear', 'Apple', 'fig'])
    words.sort()
    assert list(words) == ['Apple', 'fig', 'pear']
    words.usort(lambda a, b: len(a) - len(b))
    assert list(words) == ['fig', 'pear', 'Apple']


def test_flip_checks_new_values():
    Words = TypedContainer.of(str)
    words = Words(['a', 'b'])
    with pytest.raises(InvalidElementType):
        words.flip()
    assert words.dump() == {0: 'a', 1: 'b'}

    words = Words({'x': 'a', 'y': 'b'})
    words.flip()
    assert words.dump() == {'a': 'x', 'b': 'y'}
