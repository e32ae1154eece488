"""Runtime settings resolved from the environment.

Settings are read once, when a `Specifier` is constructed, from
variables prefixed with `SPECIFY_` (for example `SPECIFY_GLOBAL_API=1`).
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from pytest_specify.models import SettingsModel

ENV_PREFIX = 'SPECIFY_'


class Settings(SettingsModel):
    """Process-wide defaults for specification runs."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        frozen=True,
        extra='ignore',
    )

    global_api: bool = Field(
        default=False,
        title='Global API mode',
        description=(
            'If true, the DSL verbs are merged into the module namespace of '
            'the builder function instead of being injected into its scope.'
        ),
    )

    strict: bool = Field(
        default=False,
        title='Strict plugin loading',
        description=(
            'If true, plugin loading failures and verb shadowing by plugins '
            'raise errors instead of emitting warnings.'
        ),
    )

    load_plugins: bool = Field(
        default=True,
        title='Load plugins',
        description='If true, assertion plugins are discovered via entry points.',
    )
