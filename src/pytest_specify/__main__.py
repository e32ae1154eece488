"""CLI utilities for pytest-specify.

Specifications can be run outside pytest with the in-process engine,
outlined as YAML, and the registered assertion verbs listed.

Targets are given as `module:attribute`, where the attribute is either
a `Specification` (created with `@specify('Name')`) or a plain builder
function.
"""

from importlib import import_module
from sys import path as sys_path
from typing import TYPE_CHECKING

from click import BadParameter, argument, echo, group, option, pass_context
from yaml import safe_dump

from pytest_specify.core import Specification, Specifier, specify
from pytest_specify.engine import SyncEngine

if TYPE_CHECKING:
    from click import Context

    from pytest_specify.engine import TestResult


def _load_target(target: str, pythonpath: tuple[str, ...] = ()) -> Specification:
    """Import a specification or builder from `module:attribute`.

    Plain builder functions are wrapped into a specification of the
    default specifier, titled by the function name.

    Args:
        target: Import reference.
        pythonpath: Extra import locations, searched first.

    Returns:
        The referenced specification.

    Raises:
        BadParameter: If the reference can not be resolved.
    """
    module_name, _, attribute = target.partition(':')
    if not module_name or not attribute:
        raise BadParameter(f'{target!r} is not in the form module:attribute')

    for location in reversed(pythonpath):
        if location not in sys_path:
            sys_path.insert(0, location)

    try:
        obj = getattr(import_module(module_name), attribute)
    except (ImportError, AttributeError) as base:
        raise BadParameter(f'Can not import {target!r}: {base}') from base

    if isinstance(obj, Specification):
        return obj

    if not callable(obj):
        raise BadParameter(f'{target!r} is neither a specification nor a builder')

    return Specification(attribute, obj, specifier=specify)


def _format_result(result: 'TestResult') -> str:
    """Format one spec outcome as a report line with failure details."""
    status = 'PASS' if result.passed else 'FAIL'
    line = f'{status} {result.group}: {result.description}'

    for failure in result.failures:
        line += f'\n    - {failure.message or "<no message>"}'
    if result.error:
        line += f'\n    ! {result.error}'

    return line


PythonPathOption = option(
    '-p', '--pythonpath',
    multiple=True,
    help='Directory prepended to the import path; may be repeated.',
)


@group(help='Command-line utilities for pytest-specify specifications.')
def cli() -> None:
    """Root CLI group for pytest-specify tools."""
    return None


@cli.command(
    name='run',
    help='Run a specification with the in-process engine and report results.',
)
@option(
    '-g', '--global-api',
    is_flag=True,
    default=False,
    help='Merge the DSL verbs into the builder module namespace.',
)
@PythonPathOption
@argument('target')
@pass_context
def run_specification(ctx: 'Context', target: str,
                      pythonpath: tuple[str, ...], global_api: bool) -> None:
    """Run a specification and exit with status 1 if any spec failed.

    Args:
        ctx: Click context.
        target: Import reference of the specification.
        pythonpath: Extra import locations.
        global_api: Whether to use global mode for this run.
    """
    specification = _load_target(target, pythonpath)
    specifier: Specifier = specification.specifier

    engine = SyncEngine()

    previous = specifier.global_api
    specifier.global_api = previous or global_api
    try:
        specification(engine)
    finally:
        specifier.global_api = previous

    echo(f'{engine.title} Specifications')
    for result in engine.results:
        echo(_format_result(result))
    echo(f'{len(engine.results)} specs, {engine.passed} passed, {engine.failed} failed')

    if engine.failed:
        ctx.exit(1)


@cli.command(
    name='outline',
    help='Print the example tree of a specification as YAML without running it.',
)
@PythonPathOption
@argument('target')
def outline_specification(target: str, pythonpath: tuple[str, ...]) -> None:
    """Print the example outline.

    Args:
        target: Import reference of the specification.
        pythonpath: Extra import locations.
    """
    specification = _load_target(target, pythonpath)

    outline = {
        'specify': specification.name,
        'examples': [example.outline() for example in specification.build()],
    }

    echo(safe_dump(outline, sort_keys=False, allow_unicode=True), nl=False)


@cli.command(
    name='assertions',
    help='List registered assertion verbs.',
)
def list_assertions() -> None:
    """Print every registered verb with its aliases."""
    listed: set[int] = set()

    for name, assertion in sorted(specify.assertions.items()):
        if id(assertion) in listed or name != assertion.name:
            continue
        listed.add(id(assertion))

        line = name
        if assertion.aliases:
            line += f' ({", ".join(assertion.aliases)})'
        if assertion.title:
            line += f': {assertion.title}'
        echo(line)


if __name__ == '__main__':
    cli()
