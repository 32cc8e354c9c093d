"""Ordered containers that only accept elements of a declared type.

A TypedContainer subtype declares its required element type once, when the
class is defined. All instances of the subtype share it. Declare it with a
class keyword::

    class Shapes(TypedContainer, element_type=Shape):
        ...

or with the generic parameter::

    class Shapes(TypedContainer[Shape]):
        ...

The element type may be a class, a tuple of classes, or a
:py:func:`typing.runtime_checkable` Protocol. For other capability checks,
override :py:meth:`TypedContainer.conforms`.

Every path that adds values (construction, item assignment, ``insert``,
``overwrite``, ``merge``, ``append``, ``prepend``, ``splice``) checks all of
the incoming values before the container is modified. ``contains_value``
checks its probe as well, so asking about a value of the wrong type is an
error rather than a False result.
"""

from __future__ import annotations

__all__ = ['TypedContainer']

import logging
import types
import typing

from arraymap import _detail
from arraymap._typing import Entries
from arraymap.container import OrderedContainer
from arraymap.exceptions import InvalidElementType
from arraymap.exceptions import NoCapabilityDeclared

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

ElementT = typing.TypeVar('ElementT')


def _capability_from_bases(cls) -> typing.Optional[type]:
    """Get the element type from a parameterized TypedContainer base, if any."""
    for base in cls.__dict__.get('__orig_bases__', ()):
        origin = typing.get_origin(base)
        if isinstance(origin, type) and issubclass(origin, TypedContainer):
            args = typing.get_args(base)
            if args and not isinstance(args[0], typing.TypeVar):
                return args[0]
    return None


class TypedContainer(OrderedContainer[ElementT], typing.Generic[ElementT]):
    """OrderedContainer that rejects elements not satisfying *element_type*.

    Raises:
        NoCapabilityDeclared on instantiation of a subtype with no element type.
        InvalidElementType when a value does not conform. The container is unchanged.
    """
    element_type: typing.ClassVar[typing.Any] = None

    def __init_subclass__(cls, element_type=None, **kwargs):
        super().__init_subclass__(**kwargs)
        if element_type is None:
            element_type = _capability_from_bases(cls)
        if element_type is None:
            # Inherit from the parent class, if it declared one.
            return
        try:
            isinstance(None, element_type)
        except TypeError as e:
            raise TypeError(
                f'{cls.__qualname__}: cannot check elements against {element_type!r}.') from e
        cls.element_type = element_type
        logger.debug(f'{cls.__qualname__} requires elements of type {_detail.capability_name(element_type)}.')

    @classmethod
    def of(cls, element_type, name: str = None) -> typing.Type[TypedContainer]:
        """Create a subtype requiring *element_type*.

        Example::

            Shapes = TypedContainer.of(Shape)
            shapes = Shapes([Circle(), Square()])

        """
        if name is None:
            name = f'{cls.__name__}[{_detail.capability_name(element_type)}]'

        def body(namespace):
            namespace['__module__'] = cls.__module__

        return types.new_class(name, (cls,), {'element_type': element_type}, body)

    @classmethod
    def declares_capability(cls) -> bool:
        return cls.element_type is not None or cls.conforms.__func__ is not TypedContainer.conforms.__func__

    @classmethod
    def capability_name(cls) -> str:
        if cls.element_type is not None:
            return _detail.capability_name(cls.element_type)
        return cls.conforms.__qualname__

    @classmethod
    def conforms(cls, value) -> bool:
        """Check whether *value* may be held by this type of container."""
        return isinstance(value, cls.element_type)

    def __init__(self, initial: Entries = ()):
        if not self.declares_capability():
            raise NoCapabilityDeclared(type(self).__qualname__)
        super().__init__(initial)

    def _validate(self, values: typing.Iterable) -> None:
        for value in values:
            if not self.conforms(value):
                error = InvalidElementType(type(self).__qualname__,
                                           _detail.type_name(value),
                                           self.capability_name())
                logger.debug(str(error))
                raise error

    def contains_value(self, value) -> bool:
        self._validate((value,))
        return super().contains_value(value)
