"""Resolve textual type paths to classes.

Accepted forms:

* ``"int"`` — a builtin name;
* ``"pathlib.Path"`` — module path and attribute, split at the last dot;
* ``"package.module:Outer.Inner"`` — explicit module and qualified name.

Import-system exceptions never escape this module raw; they are
re-raised as :class:`~argreflect.exceptions.TypeResolutionError`.
"""

from __future__ import annotations

import builtins
import importlib

from argreflect.exceptions import TypeResolutionError

_HINT = "Use a builtin name (int), module.Name, or module:Qualified.Name."


def _split(path: str) -> tuple[str, str]:
    if ":" in path:
        module_name, _, qualname = path.partition(":")
    else:
        module_name, _, qualname = path.rpartition(".")
    if not module_name or not qualname:
        raise TypeResolutionError(f"Invalid type path: {path!r}", hint=_HINT)
    return module_name, qualname


def load_type(path: str) -> type:
    """Import and return the class named by *path*.

    Raises
    ------
    TypeResolutionError
        If the module cannot be imported, the attribute does not exist,
        or it is not a class.
    """
    stripped = path.strip()
    if not stripped:
        raise TypeResolutionError("Type path must not be empty.", hint=_HINT)

    if ":" not in stripped and "." not in stripped:
        found: object = getattr(builtins, stripped, None)
        if found is None:
            raise TypeResolutionError(f"Unknown builtin type: {stripped!r}", hint=_HINT)
    else:
        module_name, qualname = _split(stripped)
        try:
            found = importlib.import_module(module_name)
        except ImportError as exc:
            raise TypeResolutionError(
                f"Cannot import module {module_name!r}: {exc}",
            ) from exc
        for part in qualname.split("."):
            try:
                found = getattr(found, part)
            except AttributeError as exc:
                raise TypeResolutionError(
                    f"{module_name!r} has no attribute {qualname!r}",
                ) from exc

    if not isinstance(found, type):
        raise TypeResolutionError(
            f"{stripped!r} is a {type(found).__name__}, not a class",
        )
    return found
