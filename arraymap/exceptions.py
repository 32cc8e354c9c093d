"""Core arraymap exceptions.

Every failure raised by the containers derives from :class:`ContainerError`,
so callers can catch the package errors with a single clause. Each kind also
carries a numeric *code* and enough context to diagnose the failure without
inspecting container internals.
"""

__all__ = ['ContainerError',
           'InvalidElementType',
           'InvalidKeyError',
           'NoCapabilityDeclared',
           'SortOperationFailed']

import typing


class ContainerError(Exception):
    """Base exception for arraymap package errors.

    Users should be able to use this base class to catch errors
    emitted by arraymap.
    """
    code: typing.ClassVar[int] = 0


class InvalidElementType(ContainerError, TypeError):
    """A value does not satisfy the required capability of a TypedContainer."""
    code = 100

    def __init__(self, container: str, actual: str, expected: str):
        self.container = container
        self.actual = actual
        self.expected = expected
        super().__init__(
            f"{container} was provided an invalid type of '{actual}'. Expected '{expected}'.")


class NoCapabilityDeclared(ContainerError, TypeError):
    """A TypedContainer subtype was instantiated without a required capability."""
    code = 101

    def __init__(self, container: str):
        self.container = container
        super().__init__(
            f"The container '{container}' does not declare a required element type. "
            "Define the subclass with an *element_type* keyword or a generic parameter.")


class InvalidKeyError(ContainerError, TypeError):
    """A key is neither an int nor a str."""
    code = 200

    def __init__(self, key, operation: str = 'insert'):
        self.key = key
        self.operation = operation
        super().__init__(
            f'{operation} requires int or str keys. Got {key!r} of type {type(key).__qualname__}.')


# Distinguish the failed operation numerically, as well as by name.
_sort_codes = {name: 600 + i for i, name in enumerate(
    ('usort', 'uksort', 'uasort', 'sort', 'rsort', 'natsort',
     'natcasesort', 'ksort', 'krsort', 'asort', 'arsort'))}


class SortOperationFailed(ContainerError):
    """A sort family operation could not complete.

    The container is left in its prior order. The underlying error, if any,
    is available as ``__cause__``.
    """
    code = 600

    def __init__(self, operation: str, reason: str = None):
        self.operation = operation
        self.code = _sort_codes.get(operation, SortOperationFailed.code)
        message = f'The call to {operation} on the container failed.'
        if reason:
            message += f' {reason}'
        super().__init__(message)
