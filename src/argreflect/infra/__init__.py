"""Infrastructure layer — integration with argparse and the import system.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Foreign exceptions are re-raised as
  :class:`~argreflect.exceptions.ArgReflectError` subclasses.
"""

from argreflect.infra.argparse_bridge import (
    ArgumentTypeAdapter,
    ConvertingAction,
    add_reflected_argument,
    reflected_type,
)
from argreflect.infra.type_loader import load_type

__all__: list[str] = [
    "ArgumentTypeAdapter",
    "ConvertingAction",
    "add_reflected_argument",
    "load_type",
    "reflected_type",
]
