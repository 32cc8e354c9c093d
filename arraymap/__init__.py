"""Ordered containers with array-like list and map semantics.

:py:class:`OrderedContainer` keeps unique int or str keys in insertion order
and provides PHP-array style bulk operations (slice, splice, prepend, flip)
and sorts. :py:class:`TypedContainer` subtypes additionally require every
element to be of a declared type.
"""

__all__ = ['ContainerError',
           'InvalidElementType',
           'InvalidKeyError',
           'NoCapabilityDeclared',
           'OrderedContainer',
           'SortFlag',
           'SortOperationFailed',
           'TypedContainer']

from arraymap.container import OrderedContainer
from arraymap.container import SortFlag
from arraymap.exceptions import ContainerError
from arraymap.exceptions import InvalidElementType
from arraymap.exceptions import InvalidKeyError
from arraymap.exceptions import NoCapabilityDeclared
from arraymap.exceptions import SortOperationFailed
from arraymap.typed import TypedContainer
