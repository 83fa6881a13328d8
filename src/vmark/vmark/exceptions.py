"""vmark Exceptions

Every error raised while executing a template is fatal for that render.
"""

from __future__ import annotations


class VmarkError(Exception):
    """Base exception for all vmark errors."""

    pass


class StructuralError(VmarkError):
    """Raised when a template does not parse to exactly one root element."""

    def __init__(self, count: int, template: str = ""):
        self.count = count
        self.template = template
        super().__init__(
            f"Expected a single root element for template but found {count}: {template!r}"
        )


class UnknownDirectiveError(VmarkError):
    """Raised when an attribute carries the directive prefix but names no known directive."""

    def __init__(self, directive: str, reason: str = "Unknown directive"):
        self.directive = directive
        super().__init__(f"{reason}: {directive}")


class UnknownFieldError(VmarkError):
    """Raised when a directive references a field missing from the data context."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unknown data field: {field}")


class TypeMismatchError(VmarkError):
    """Raised when a data field holds a value of the wrong type for a directive."""

    def __init__(self, field: str, expected: str, value: object):
        self.field = field
        self.expected = expected
        self.value = value
        super().__init__(
            f"Data field '{field}' is not of type {expected}: {type(value).__name__}"
        )


class MissingSequenceError(VmarkError):
    """Raised when a loop source is absent, malformed or not a sequence."""

    def __init__(self, field: str, reason: str = "Sequence not found for field"):
        self.field = field
        self.reason = reason
        super().__init__(f"{reason}: {field}")


class InterpolationError(VmarkError):
    """Raised when placeholder interpolation fails."""

    pass


class ComponentNotFoundError(VmarkError):
    """Raised when a component name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Component not found: {name}")


class UnknownMethodError(VmarkError):
    """Raised when a view model is asked to call a method it does not define."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unknown method: {method}")


class ConfigError(VmarkError):
    """Raised when an application config file is invalid."""

    pass
