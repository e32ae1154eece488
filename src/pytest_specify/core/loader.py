"""Assertion registry and plugin loading infrastructure.

This module defines a mixin holding the process-wide mapping from verb
names to assertion definitions, together with discovery of assertion
plugins exposed via Python entry points.

Verbs registered directly (built-ins and `extend_assertions`) replace
existing ones silently. Verbs contributed by plugins that shadow an
existing name still replace it, but emit a warning, or raise in
strict mode.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING
from warnings import warn

from pydantic import ValidationError

from pytest_specify.errors import PluginError, PluginWarning
from pytest_specify.extensions import Assertion, Plugin

if TYPE_CHECKING:
    from collections.abc import Iterable
    from importlib.metadata import EntryPoint

if TYPE_CHECKING:
    from pytest_specify.extensions import AssertionVerb

#: Entry-point group scanned for assertion plugins.
PLUGINS_GROUP = 'specify_plugins'


class AssertionRegistryMixin:
    """Mixin holding registered assertion verbs.

    Attributes:
        strict_mode: If True, any plugin loading issue raises an error.
            If False, issues are emitted as warnings and loading continues.
        assertions: Assertion definitions keyed by every name and alias.
    """

    strict_mode: bool = False

    assertions: dict[str, Assertion]

    def add_assertion(self, assertion: Assertion,
                      entrypoint: 'EntryPoint | None' = None) -> None:
        """Register an assertion under its name and aliases.

        Args:
            assertion: Declarative assertion definition.
            entrypoint: Entry point from which the assertion was loaded,
                if applicable. Shadowing is only reported for plugins.

        Raises:
            PluginError: If a plugin assertion shadows a verb on strict mode.
        """
        for name in assertion.names:
            if entrypoint is not None and name in self.assertions and (error := self.emit_plugin_issue(
                f'Assertion {name!r} from {entrypoint.value!r} is shadowing an existing',
                entrypoint,
            )):
                raise error

            self.assertions[name] = assertion

    def extend_assertions(self, assertions: 'Mapping[str, AssertionVerb] | Iterable[Assertion]') -> None:
        """Register custom assertion verbs.

        Existing verbs with the same names are replaced, and every
        assertion handler sees the change immediately.

        Args:
            assertions: Either a mapping of verb names to verb callables
                or declarative assertion definitions.

        Raises:
            ValidationError: If a verb name is not a valid identifier.
        """
        if isinstance(assertions, Mapping):
            assertions = [
                Assertion(name=name, verb=verb)
                for name, verb in assertions.items()
            ]

        for assertion in assertions:
            self.add_assertion(assertion)

    def resolve_verb(self, name: str) -> 'AssertionVerb':
        """Return the callable registered under `name`.

        Raises:
            AttributeError: If no verb is registered under the name.
        """
        if (assertion := self.assertions.get(name)) is None:
            raise AttributeError(f'Unknown assertion {name!r}')

        return assertion.verb

    def emit_plugin_issue(self, message: str,
                          entrypoint: 'EntryPoint | None' = None) -> Exception | None:
        """Emit a plugin warning or return the exception.

        Args:
            message: Warning message to emit.
            entrypoint: Entry point the issue relates to, if applicable.

        Returns:
            PluginError on strict mode, otherwise `None`
                with producing a PluginWarning.
        """
        if self.strict_mode:
            return PluginError(message, entrypoint=entrypoint)

        warn(message, category=PluginWarning, stacklevel=2)

        return None

    def _load_plugin(self, entrypoint: 'EntryPoint') -> None:
        """Load and register a single plugin entry point.

        Args:
            entrypoint: Entry point describing the plugin to load.

        Raises:
            PluginError: If any loading issues occur on strict mode.
        """
        try:
            plugin = entrypoint.load()

        except ValidationError as base:
            if error := self.emit_plugin_issue(
                f'Failed to validate entrypoint {entrypoint.name!r}',
                entrypoint,
            ):
                raise error from base
            return None

        except Exception as base:
            if error := self.emit_plugin_issue(
                f'Failed to load entrypoint {entrypoint.name!r}',
                entrypoint,
            ):
                raise error from base
            return None

        if not isinstance(plugin, Plugin):
            if error := self.emit_plugin_issue(
                f'Loaded from entrypoint {entrypoint.name!r} object is not a plugin',
                entrypoint,
            ):
                raise error
            return None

        for assertion in plugin.assertions:
            self.add_assertion(assertion, entrypoint)

    def clear_plugins(self) -> None:
        """Forget every registered assertion."""
        self.assertions = {}

    def load_plugins(self) -> None:
        """Load plugins via entry points and register their assertions.

        Raises:
            PluginError: If any loading issues occur on strict mode.
        """
        from importlib.metadata import entry_points  # noqa: PLC0415

        for entrypoint in entry_points().select(group=PLUGINS_GROUP):
            self._load_plugin(entrypoint)
