"""DSL names primitive types and validation rules.

This module defines the identifier pattern shared by assertion verbs
and their aliases. Verbs are resolved as attributes of assertion
handlers, so their names must be valid Python identifiers.
"""

from typing import Annotated

from pydantic import Field

#: Base pattern for all DSL identifiers.
#: Identifiers must start with a letter and may contain letters, digits, or underscores
_NAME_PATTERN = r'[a-zA-Z][a-zA-Z0-9_]*'


Verb = Annotated[
    str, Field(
        pattern=rf'^{_NAME_PATTERN}$',
        title='Verb identifier',
        description=(
            'Name under which an assertion is exposed on assertion handlers. '
            'Verb identifiers must start with a letter and may contain '
            'letters, digits, or underscores. '
            'Names are restricted to ASCII characters.'
        ),
        examples=[
            'equals',
            'is_true',
            'isPositive',
        ],
    ),
]

Namespace = Annotated[
    str, Field(
        pattern=rf'^{_NAME_PATTERN}$',
        title='Plugin namespace identifier',
        description=(
            'Name of a plugin contributing assertion verbs. '
            'Used in diagnostics only; verbs are not prefixed with it.'
        ),
        examples=[
            'http',
            'numbers',
        ],
    ),
]
