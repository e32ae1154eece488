"""Core specification runtime.

This package defines the infrastructure running specifications:

- the assertion registry with entry-point plugin loading;
- compilation of example trees into flat statement sequences;
- the `Specifier` driver tying building, compiling and execution.

The primary public entry point is `specify`, the process-wide default
`Specifier`.
"""

from .compiler import DeclareGroup, RunTest, Statement, compile_examples
from .specifier import Specification, Specifier, specify

__all__ = (
    'DeclareGroup',
    'RunTest',
    'Specification',
    'Specifier',
    'Statement',
    'compile_examples',
    'specify',
)
