"""argreflect — convert command-line text into typed Python values.

Picks a conversion path for an arbitrary target class (enumeration
member lookup, a ``from_string`` factory, or the class constructor) and
reports failures as either user-input errors or configuration errors.
"""

from argreflect.core.converter import ReflectArgumentType
from argreflect.exceptions import (
    ArgReflectError,
    ConfigurationError,
    UserInputConversionError,
)
from argreflect.version import __version__

__all__: list[str] = [
    "ArgReflectError",
    "ConfigurationError",
    "ReflectArgumentType",
    "UserInputConversionError",
    "__version__",
]
