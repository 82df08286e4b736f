"""Conformance checks applied to an interpolation factory.

:class:`InterpolationContract` holds a factory, the type it is expected to
build and the Check D sample orders.  It hands out named, self‑contained
checks that an external runner (usually a parametrized pytest test) executes.
Every check builds its own candidate and returns a
:class:`~interpolation_contract.report.VerificationReport`; an unexpected
exception from the factory or candidate becomes a failed report with the
exception attached.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence

import numpy as np

from . import constants as C
from .capabilities import capabilities_of
from .numeric import deviations, linear_vectors, resolve_seed
from .report import ContractViolation, FailureBuilder, VerificationReport

__all__ = ["Factory", "ContractCheck", "InterpolationContract"]

Factory = Callable[[Sequence[float], Sequence[float]], Any]

_DIFFERENTIATION_OPS = ("differentiate", "differentiate_full")
_INTEGRATION_OPS = ("integrate",)


def _evaluate(candidate: Any, xs: Sequence[float]) -> tuple[list[float], dict[int, str]]:
    """Interpolate at every ``x``; non‑scalar results become NaN and are listed by index."""
    values: list[float] = []
    not_scalar: dict[int, str] = {}
    for i, x in enumerate(xs):
        out = candidate.interpolate(x)
        if np.ndim(out) != 0:
            not_scalar[i] = f"interpolate({x!r}) returned shape {np.shape(out)} instead of a scalar"
            values.append(float("nan"))
        else:
            values.append(float(out))
    return values, not_scalar


@dataclass(frozen=True)
class ContractCheck:
    """A named zero‑argument check."""

    name: str
    run: Callable[[], VerificationReport]

    def __call__(self) -> VerificationReport:
        return self.run()

    def verify(self) -> VerificationReport:
        """Run the check and raise :class:`ContractViolation` if it fails."""
        report = self.run()
        if not report.passed:
            raise ContractViolation(report)
        return report

    def __repr__(self) -> str:
        return f"ContractCheck({self.name!r})"


class InterpolationContract:
    """Behavioral contract every interpolation factory must satisfy.

    ``expected_type`` is either the class the factory must return (compared by
    identity, subclasses do not count) or its class name.  ``orders`` are the
    sample counts used by the linear reproduction check.  ``seed`` pins the
    random probes; see :func:`~interpolation_contract.numeric.resolve_seed`.
    """

    def __init__(
        self,
        factory: Factory,
        expected_type: type | str,
        *,
        orders: Sequence[int] = C.DEFAULT_ORDERS,
        seed: int | None = None,
        tolerance: float = C.DEFAULT_TOLERANCE,
        check_derivative_agreement: bool = False,
        verbose: bool = False,
    ) -> None:
        orders = tuple(int(o) for o in orders)
        if not orders:
            raise ValueError("at least one order is required")
        if any(o < 1 for o in orders):
            raise ValueError(f"orders must be positive, got {orders}")
        self.factory = factory
        self.expected_type = expected_type
        self.orders = orders
        self.seed = resolve_seed(seed)
        self.tolerance = tolerance
        self.check_derivative_agreement = check_derivative_agreement
        self.verbose = verbose
        # child logger per expected type
        self.logger = logging.getLogger(f"{__name__}.{self.expected_name}")
        self.logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
        self.logger.debug("[interp-contract] %s: seed %d", self.expected_name, self.seed)

    # ------------------------------------------------------------------
    # Protocol

    @property
    def expected_name(self) -> str:
        if isinstance(self.expected_type, str):
            return self.expected_type
        return self.expected_type.__name__

    def checks(self) -> list[ContractCheck]:
        """Return the named checks in their canonical order."""
        named = [
            ("FactoryReturnsCorrectType", self.factory_returns_correct_type),
            ("ConsistentCapabilityBehavior", self.consistent_capability_behavior),
            ("InterpolationMatchesNodePoints", self.interpolation_matches_node_points),
            ("CanDealWithLinearSamples", self.can_deal_with_linear_samples),
        ]
        if self.check_derivative_agreement:
            named.append(("DerivativeFormsAgree", self.derivative_forms_agree))
        return [ContractCheck(name, self._guarded(name, body)) for name, body in named]

    def __iter__(self) -> Iterator[ContractCheck]:
        return iter(self.checks())

    def run(self) -> list[VerificationReport]:
        """Execute every check; a failing check never stops the others."""
        reports = [check() for check in self.checks()]
        failed = [r.check for r in reports if not r.passed]
        if failed:
            self.logger.info(
                "[interp-contract] %s: %d/%d checks failed: %s",
                self.expected_name,
                len(failed),
                len(reports),
                ", ".join(failed),
            )
        return reports

    def pytest_params(self) -> list[Any]:
        """Return ``pytest.param`` entries (one per check) for ``parametrize``."""
        import pytest

        return [pytest.param(check, id=check.name) for check in self.checks()]

    def _guarded(
        self, name: str, body: Callable[[str], VerificationReport]
    ) -> Callable[[], VerificationReport]:
        def _run() -> VerificationReport:
            self.logger.debug("[interp-contract] %s: running %s", self.expected_name, name)
            try:
                report = body(name)
            except Exception as exc:
                self.logger.info(
                    "[interp-contract] %s: %s raised %s: %s",
                    self.expected_name,
                    name,
                    type(exc).__name__,
                    exc,
                )
                return (
                    FailureBuilder(name, "The candidate raised an unexpected error.")
                    .add_label("Interpolation Type", self.expected_name)
                    .set_error(exc)
                    .build()
                )
            if not report.passed:
                self.logger.info("[interp-contract] %s: %s failed", self.expected_name, name)
            return report

        return _run

    def _build(self, points: Sequence[float], values: Sequence[float]) -> Any:
        return self.factory(list(points), list(values))

    def _type_matches(self, candidate: Any) -> bool:
        actual = type(candidate)
        if isinstance(self.expected_type, str):
            return self.expected_type in (actual.__name__, actual.__qualname__)
        return actual is self.expected_type

    # ------------------------------------------------------------------
    # Checks

    def factory_returns_correct_type(self, name: str) -> VerificationReport:
        candidate = self._build(C.BASIC_POINTS, C.BASIC_VALUES)
        if self._type_matches(candidate):
            return VerificationReport(name)
        return (
            FailureBuilder(name, "Expected the factory to return the correct type.")
            .add_label("Interpolation Type", self.expected_name)
            .add_label("Actual Type", type(candidate).__name__)
            .capture_stack()
            .build()
        )

    def _probe_gated(
        self, candidate: Any, flag: str, operations: Sequence[str]
    ) -> tuple[list[str], BaseException | None]:
        """Exercise ``operations`` at the probe point against the value of ``flag``."""
        failures: list[str] = []
        error: BaseException | None = None
        first = bool(getattr(candidate, flag))
        second = bool(getattr(candidate, flag))
        if first != second:
            failures.append(f"{flag} changed between queries ({first} -> {second})")
        supported = first
        x = C.PROBE_POINT

        for op in operations:
            call = getattr(candidate, op, None)
            if call is None:
                failures.append(f"{op} is not exposed")
                continue
            try:
                call(x)
            except NotImplementedError as exc:
                if supported:
                    failures.append(f"{op}({x}) raised {type(exc).__name__} although {flag} is True")
                    error = error or exc
                continue
            except Exception as exc:
                if supported:
                    failures.append(
                        f"{op}({x}) raised {type(exc).__name__}: {exc} although {flag} is True"
                    )
                else:
                    failures.append(
                        f"{op}({x}) raised {type(exc).__name__} instead of an unsupported-operation error"
                    )
                error = error or exc
                continue
            if not supported:
                failures.append(f"{op}({x}) succeeded although {flag} is False")
        return failures, error

    def consistent_capability_behavior(self, name: str) -> VerificationReport:
        candidate = self._build(C.BASIC_POINTS, C.BASIC_VALUES)
        diff_failures, diff_error = self._probe_gated(
            candidate, "supports_differentiation", _DIFFERENTIATION_OPS
        )
        int_failures, int_error = self._probe_gated(
            candidate, "supports_integration", _INTEGRATION_OPS
        )
        failures = diff_failures + int_failures
        if not failures:
            return VerificationReport(name)

        builder = (
            FailureBuilder(name, "Capability flags and gated operations disagree.")
            .add_label("Interpolation Type", self.expected_name)
            .add_label("Capabilities", capabilities_of(candidate).describe())
        )
        for line in failures:
            builder.add_failure(line)
        error = diff_error or int_error
        if error is not None:
            builder.set_error(error)
        return builder.capture_stack().build()

    def interpolation_matches_node_points(self, name: str) -> VerificationReport:
        points, values = C.NODE_POINTS, C.NODE_VALUES
        candidate = self._build(points, values)
        actual, not_scalar = _evaluate(candidate, points)
        devs = [
            d
            for d in deviations(points, values, actual, tolerance=self.tolerance)
            if d.index not in not_scalar
        ]
        if not devs and not not_scalar:
            return VerificationReport(name)

        builder = (
            FailureBuilder(name, "Expected the interpolation to pass through every node point.")
            .add_label("Interpolation Type", self.expected_name)
            .add_label("Tolerance", self.tolerance)
            .add_label("Expected", [values[d.index] for d in devs])
            .add_label("Actual", [d.actual for d in devs])
        )
        for index, problem in not_scalar.items():
            builder.add_failure(f"node {index}: {problem}")
        for dev in devs:
            builder.add_failure(f"node {dev.index}: {dev.describe()}")
        return builder.capture_stack().build()

    def can_deal_with_linear_samples(self, name: str) -> VerificationReport:
        rng = np.random.default_rng(self.seed)
        failures: list[str] = []
        for order in self.orders:
            vectors = linear_vectors(order, rng)
            candidate = self._build(vectors.points, vectors.values)
            actual, not_scalar = _evaluate(candidate, vectors.probes)
            failures.extend(f"order {order}: {problem}" for problem in not_scalar.values())
            devs = deviations(vectors.probes, vectors.expected, actual, tolerance=self.tolerance)
            failures.extend(
                f"order {order}: {dev.describe()}" for dev in devs if dev.index not in not_scalar
            )

        if not failures:
            return VerificationReport(name, labels={"Seed": self.seed})

        builder = (
            FailureBuilder(name, "Expected the interpolation to reproduce linear samples.")
            .add_label("Interpolation Type", self.expected_name)
            .add_label("Orders", list(self.orders))
            .add_label("Tolerance", self.tolerance)
            .add_label("Seed", self.seed)
        )
        for line in failures:
            builder.add_failure(line)
        return builder.capture_stack().build()

    def derivative_forms_agree(self, name: str) -> VerificationReport:
        candidate = self._build(C.BASIC_POINTS, C.BASIC_VALUES)
        if not candidate.supports_differentiation:
            return VerificationReport(name, labels={"Skipped": "no differentiation support"})

        x = C.PROBE_POINT
        value, derivative = candidate.differentiate_full(x)
        expected = [candidate.interpolate(x), candidate.differentiate(x)]
        devs = deviations([x, x], expected, [value, derivative], tolerance=self.tolerance)
        if not devs:
            return VerificationReport(name)

        builder = (
            FailureBuilder(name, "Expected both differentiation forms to agree.")
            .add_label("Interpolation Type", self.expected_name)
            .add_label("Expected", tuple(expected))
            .add_label("Actual", (value, derivative))
        )
        for dev in devs:
            part = "value" if dev.index == 0 else "first derivative"
            builder.add_failure(f"{part}: {dev.describe()}")
        return builder.capture_stack().build()
