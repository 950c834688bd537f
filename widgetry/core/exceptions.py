"""
Exceptions
==========

Error hierarchy shared by the constructors, renderers and document generator.
"""


class WidgetryError(Exception):
    """Base class for all widgetry errors."""

    pass


class InvalidArgumentError(WidgetryError, ValueError):
    """Raised when a constructor receives an argument it cannot use."""

    pass


class InvalidIdError(InvalidArgumentError):
    """Raised when an input or output id is not a valid identifier."""

    pass


class DuplicateIdError(WidgetryError):
    """Raised when the same id is bound more than once in a page."""

    def __init__(self, duplicate_id: str, kinds: tuple = ()) -> None:
        self.duplicate_id = duplicate_id
        self.kinds = kinds
        detail = f" (bound as {' and '.join(kinds)})" if kinds else ""
        super().__init__(f"Duplicate id '{duplicate_id}'{detail}; ids must be unique")


class InvalidCSSUnitError(InvalidArgumentError):
    """Raised when a width or height is not a valid CSS unit."""

    pass


class ThemeError(WidgetryError):
    """Raised when a theme cannot be resolved."""

    pass


class UnknownOutputError(WidgetryError, KeyError):
    """Raised when a rendered value targets an output id missing from the page."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class OutputTypeError(WidgetryError, TypeError):
    """Raised when a rendered value does not fit the placeholder it targets."""

    pass


class HTMLGenerationError(WidgetryError):
    """Exception raised when HTML generation fails."""

    pass


class UIParseError(WidgetryError):
    """Exception raised when a declarative UI definition cannot be built."""

    pass
