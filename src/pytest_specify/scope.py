"""Scope extension for specification builders.

Builders refer to the DSL verbs as bare names. Two modes make those
names resolvable:

- global mode merges the verbs into the module namespace the builder
  was defined in;
- scoped mode calls a copy of the builder whose global namespace is a
  `ScopedGlobals` mapping layering the verbs over the live module
  globals. The copy shares the original code object, closure, defaults
  and bound `self`, so parameters, locals and closure variables behave
  as before and still shadow the verbs. Functions defined inside the
  builder inherit the mapping, so nested `describe` bodies see the
  verbs too.

Module globals are read at lookup time in both modes, so values
rebound after the build are visible to spec bodies and hooks. The
module namespace is never touched in scoped mode: the interpreter
stores `global` assignments of the builder straight into the mapping,
where they shadow the module value.
"""

from functools import update_wrapper
from inspect import Parameter, ismethod, signature
from sys import modules
from types import FunctionType, MethodType
from typing import TYPE_CHECKING, Any

from pytest_specify.errors import DSLBuildError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

#: Parameter kinds able to receive the builder positionally.
_POSITIONAL = (
    Parameter.POSITIONAL_ONLY,
    Parameter.POSITIONAL_OR_KEYWORD,
)

#: Module attributes the interpreter reads from globals directly.
_MODULE_ATTRIBUTES = ('__name__', '__builtins__')


class ScopedGlobals(dict[str, Any]):
    """Global namespace of a scoped builder.

    Holds only names assigned through `global` statements. Any other
    name resolves to a verb first, then to the live module globals;
    `KeyError` lets the interpreter fall back to builtins.
    """

    def __init__(self, namespace: dict[str, Any], api: 'Mapping[str, Any]') -> None:
        """Layer the verbs over a module namespace.

        Args:
            namespace: Module globals of the builder, kept by reference.
            api: Verb names mapped to implementations.
        """
        super().__init__({
            name: namespace[name]
            for name in _MODULE_ATTRIBUTES
            if name in namespace
        })

        self.namespace = namespace
        self.api = api

    def __missing__(self, name: str) -> Any:  # noqa: ANN401
        """Resolve a verb or a module global."""
        if name in self.api:
            return self.api[name]

        return self.namespace[name]


def module_namespace(fn: 'Callable[..., Any]') -> dict[str, Any]:
    """Return the global namespace a callable resolves names in.

    Raises:
        DSLBuildError: If the callable has no module namespace.
    """
    function = fn.__func__ if ismethod(fn) else fn
    if isinstance(function, FunctionType):
        return function.__globals__

    module = modules.get(getattr(function, '__module__', None) or '')
    if module is None:
        raise DSLBuildError(f'Can not locate the module namespace of {fn!r}')

    return vars(module)


def extend_globals[F: Callable[..., Any]](fn: F, api: 'Mapping[str, Any]') -> F:
    """Merge the verbs into the module namespace of `fn`.

    Args:
        fn: Specification builder.
        api: Verb names mapped to implementations.

    Returns:
        `fn` unchanged.
    """
    module_namespace(fn).update(api)
    return fn


def extend_scope[F: Callable[..., Any]](fn: F, api: 'Mapping[str, Any]') -> F:
    """Return a copy of `fn` resolving the verbs as global names.

    Callables that are not plain functions or bound methods are
    returned unchanged; they can still receive the builder explicitly.

    Args:
        fn: Specification builder.
        api: Verb names mapped to implementations.

    Returns:
        Function (or method bound to the same object) with the same
        code, parameters and closure as `fn`.
    """
    function = fn.__func__ if ismethod(fn) else fn
    if not isinstance(function, FunctionType):
        return fn

    extended = FunctionType(
        function.__code__,
        ScopedGlobals(function.__globals__, api),
        function.__name__,
        function.__defaults__,
        function.__closure__,
    )
    extended.__kwdefaults__ = function.__kwdefaults__
    update_wrapper(extended, function)

    if ismethod(fn):
        return MethodType(extended, fn.__self__)  # type: ignore[return-value]

    return extended  # type: ignore[return-value]


def accepts_builder(fn: 'Callable[..., Any]') -> bool:
    """Tell whether `fn` requires a positional argument for the builder.

    Parameters with a default keep it; `*args` accepts the builder.
    """
    try:
        parameters = signature(fn).parameters.values()
    except (TypeError, ValueError):
        return False

    return any(
        parameter.kind is Parameter.VAR_POSITIONAL
        or (parameter.kind in _POSITIONAL and parameter.default is Parameter.empty)
        for parameter in parameters
    )


def invoke(fn: 'Callable[..., Any]', builder: Any, *,  # noqa: ANN401
           global_api: bool = False) -> Any:  # noqa: ANN401
    """Run a specification builder under the selected scope mode.

    Builders declaring a required positional parameter or `*args`
    also receive the builder object explicitly.

    Args:
        fn: Specification builder.
        builder: Object whose `verbs()` provides the DSL.
        global_api: Whether to merge the verbs into the module namespace.

    Returns:
        Whatever the builder returns.
    """
    api = builder.verbs()
    target = extend_globals(fn, api) if global_api else extend_scope(fn, api)

    if accepts_builder(target):
        return target(builder)

    return target()
