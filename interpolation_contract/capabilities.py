"""Capability model shared by every interpolation candidate.

A candidate always exposes :meth:`interpolate`.  Differentiation and
integration are optional and gated by two boolean flags; when a flag is
``False`` the gated operations must raise :class:`UnsupportedOperationError`
(any :class:`NotImplementedError` is accepted as the same signal).

Implementations either subclass :class:`Interpolation`, overriding only what
they support, or satisfy :class:`SupportsInterpolation` structurally.
"""
from __future__ import annotations

import enum
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "UnsupportedOperationError",
    "Capability",
    "Interpolation",
    "SupportsInterpolation",
    "CONTRACT_MEMBERS",
    "capabilities_of",
    "missing_operations",
]


class UnsupportedOperationError(NotImplementedError):
    """Raised by a gated operation whose capability flag is ``False``."""

    def __init__(self, operation: str, candidate: Any = None) -> None:
        self.operation = operation
        owner = type(candidate).__name__ if candidate is not None else "interpolation"
        super().__init__(f"{owner} does not support {operation}")


class Capability(enum.Flag):
    """Optional capabilities a candidate may declare."""

    NONE = 0
    DIFFERENTIATION = enum.auto()
    INTEGRATION = enum.auto()

    def describe(self) -> str:
        if not self:
            return "interpolation only"
        names = [c.name.lower() for c in (Capability.DIFFERENTIATION, Capability.INTEGRATION) if c in self]
        return "interpolation+" + "+".join(names)


@runtime_checkable
class SupportsInterpolation(Protocol):
    """Structural contract for candidates that do not subclass :class:`Interpolation`."""

    @property
    def supports_differentiation(self) -> bool: ...

    @property
    def supports_integration(self) -> bool: ...

    def interpolate(self, x: float) -> float: ...

    def differentiate(self, x: float) -> float: ...

    def differentiate_full(self, x: float) -> tuple[float, float]: ...

    def integrate(self, upper_bound: float) -> float: ...


class Interpolation:
    """Base class for interpolation candidates.

    Subclasses must implement :meth:`interpolate`.  The gated operations raise
    :class:`UnsupportedOperationError` until overridden, and the matching flag
    should then be switched on.
    """

    supports_differentiation: bool = False
    supports_integration: bool = False

    def interpolate(self, x: float) -> float:  # pragma: no cover - interface
        raise NotImplementedError

    def differentiate(self, x: float) -> float:
        """Return the first derivative at ``x``."""
        raise UnsupportedOperationError("differentiation", self)

    def differentiate_full(self, x: float) -> tuple[float, float]:
        """Return ``(value, first_derivative)`` at ``x``."""
        raise UnsupportedOperationError("differentiation", self)

    def integrate(self, upper_bound: float) -> float:
        """Return the definite integral from the first node to ``upper_bound``."""
        raise UnsupportedOperationError("integration", self)

    @property
    def capabilities(self) -> Capability:
        return capabilities_of(self)


CONTRACT_MEMBERS = (
    "interpolate",
    "supports_differentiation",
    "supports_integration",
    "differentiate",
    "differentiate_full",
    "integrate",
)


def capabilities_of(candidate: Any) -> Capability:
    """Read both capability flags of ``candidate`` into a :class:`Capability`."""
    caps = Capability.NONE
    if bool(candidate.supports_differentiation):
        caps |= Capability.DIFFERENTIATION
    if bool(candidate.supports_integration):
        caps |= Capability.INTEGRATION
    return caps


def missing_operations(candidate: Any) -> list[str]:
    """Return the contract members ``candidate`` does not expose at all."""
    return [name for name in CONTRACT_MEMBERS if not hasattr(candidate, name)]
