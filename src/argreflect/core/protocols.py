"""Protocols (interfaces) consumed by the core layer.

The converter depends only on these contracts; each resolution tier is
an object that structurally satisfies :class:`Resolver`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from argreflect.core.models import ConversionOutcome, ConversionRequest
    from argreflect.core.target_type import TargetType


ParseFunction = Callable[[str], Any]
"""A function turning raw text into a typed value."""


class Resolver(Protocol):
    """Contract for one tier of the resolution priority list."""

    name: str
    """Short label used in logs and diagnostics."""

    def resolve(
        self,
        target: TargetType[Any],
        request: ConversionRequest,
    ) -> ConversionOutcome:
        """Attempt to convert ``request.value`` into ``target``.

        Returns
        -------
        Resolved
            The tier produced a value.
        Declined
            The tier does not apply; the converter tries the next one.
        Failed
            The tier applied and the conversion failed.  Terminal.

        Implementations must not raise for conversion failures; every
        failure is reported through the returned outcome.
        """
        ...  # pragma: no cover
