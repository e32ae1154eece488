"""Errors and warnings raised by pytest-specify.

Every error may carry a location in the example tree: the qualified
name of the group, the spec description and an outline of the group.
Messages render that location below the error text, with the outline
dumped as YAML so the failing part of a specification is easy to spot.
"""

from collections.abc import Mapping
from os import linesep
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import safe_dump

if TYPE_CHECKING:
    from importlib.metadata import EntryPoint
    from typing import Self

if TYPE_CHECKING:
    from pytest_specify.examples import Example

#: Indentation of the location lines.
LOCATION_INDENT = ' ' * 4
#: Indentation of the dumped outline.
OUTLINE_INDENT = ' ' * 8

#: Placeholder for values YAML can not represent, such as callables.
OPAQUE_VALUE = '<runtime object>'

PLAIN_TYPES = (str, bytes, int, float, bool)


class ErrorContext(TypedDict, total=False):
    """Location of an error in a specification; every key is optional."""

    #: Qualified name of the example group.
    group: str | None
    #: Description of the spec.
    spec: str | None
    #: Outline of the example group, or any other plain data to show.
    element: Any


def plain_data(value: Any) -> Any:  # noqa: ANN401
    """Reduce a value to data `yaml.safe_dump` accepts.

    Mappings and sequences are converted recursively; objects of any
    other type are replaced with a placeholder.
    """
    if value is None or isinstance(value, PLAIN_TYPES):
        return value

    if isinstance(value, Mapping):
        return {key: plain_data(item) for key, item in value.items()}

    if isinstance(value, (list, tuple)):
        return [plain_data(item) for item in value]

    return OPAQUE_VALUE


class ErrorFormatter:
    """Mixin rendering messages together with their error context."""

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Render a message followed by its location and outline.

        Args:
            message: Human-readable error text.
            context: Optional location of the error.

        Returns:
            The message alone when the context is empty, otherwise the
            message with location and outline lines appended.
        """
        if not context:
            return message

        return linesep.join([
            message,
            *cls.location_lines(context),
            *cls.outline_lines(context),
        ])

    @staticmethod
    def location_lines(context: ErrorContext) -> list[str]:
        """Lines naming the group and the spec, when known."""
        lines = []
        if group := context.get('group'):
            lines.append(f'{LOCATION_INDENT}in group "{group}"')
        if spec := context.get('spec'):
            lines.append(f'{LOCATION_INDENT}on spec "{spec}"')

        return lines

    @staticmethod
    def outline_lines(context: ErrorContext) -> list[str]:
        """Indented YAML lines of the context element, if any."""
        if not (element := context.get('element')):
            return []

        dumped = safe_dump(
            plain_data(element),
            indent=2,
            sort_keys=False,
            allow_unicode=True,
        )

        return [
            f'{OUTLINE_INDENT}{line}'
            for line in dumped.splitlines()
            if line.strip()
        ]


class PluginWarning(UserWarning):
    """A plugin could not be loaded or shadows an existing verb.

    Emitted instead of `PluginError` unless strict mode is enabled.
    """


class DSLError(Exception, ErrorFormatter):
    """Base class of every pytest-specify error."""

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Store the message and its optional location.

        Args:
            message: Human-readable error text.
            context: Location of the error in the specification.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """Message rendered with its location."""
        return self.format(self.message, self.context)

    @classmethod
    def from_example(cls, message: str, example: 'Example | None', *,
                     spec: str | None = None) -> 'Self':
        """Create an error located at an example group.

        Args:
            message: Human-readable error text.
            example: Group the error belongs to, if any.
            spec: Description of the spec involved, if any.

        Returns:
            An error carrying the group name and outline.
        """
        if example is None:
            return cls(message, context=ErrorContext(spec=spec))

        return cls(message, context=ErrorContext(
            group=example.qualified_name(),
            spec=spec,
            element=example.outline(),
        ))


class PluginError(DSLError):
    """A plugin entry point is broken, or shadows a verb in strict mode."""

    def __init__(self, message: str, *,
                 entrypoint: 'EntryPoint | None' = None) -> None:
        """Store the message and the offending entry point.

        Args:
            message: Human-readable error text.
            entrypoint: Entry point the failure relates to, if known.
        """
        self.entrypoint = entrypoint

        super().__init__(message)


class DSLBuildError(DSLError):
    """The DSL was misused while a specification was being built.

    Raised for hooks and specs declared outside `describe`, verbs used
    after the build finished, `given()` without arguments and
    non-callable spec bodies.
    """


class DSLRuntimeError(DSLError):
    """A runtime primitive was misused while specs ran.

    Raised for nested waits and for reports made with no running spec.
    """
