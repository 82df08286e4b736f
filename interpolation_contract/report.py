"""Verification reports produced by contract checks."""
from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from typing import Any

__all__ = ["VerificationReport", "FailureBuilder", "ContractViolation"]


@dataclass
class VerificationReport:
    """Outcome of one check: pass/fail plus a structured failure description."""

    check: str
    passed: bool = True
    message: str | None = None
    labels: dict[str, Any] = field(default_factory=dict)
    failures: list[str] = field(default_factory=list)
    error: BaseException | None = None
    stack_trace: str | None = None

    def __bool__(self) -> bool:
        return self.passed

    def format(self) -> str:
        """Render the report as human‑readable text."""
        status = "passed" if self.passed else "FAILED"
        lines = [f"{self.check}: {status}"]
        if self.message:
            lines.append(self.message)
        for key, val in self.labels.items():
            lines.append(f"  {key}: {val}")
        lines.extend(f"  - {f}" for f in self.failures)
        if self.error is not None:
            lines.append(f"  Error: {type(self.error).__name__}: {self.error}")
        if self.stack_trace:
            lines.append(self.stack_trace.rstrip())
        return "\n".join(lines)

    __str__ = format


class FailureBuilder:
    """Fluent builder for failed :class:`VerificationReport` objects."""

    def __init__(self, check: str, message: str) -> None:
        self._report = VerificationReport(check=check, passed=False, message=message)

    def add_label(self, label: str, value: Any) -> "FailureBuilder":
        self._report.labels[label] = value
        return self

    def add_failure(self, text: str) -> "FailureBuilder":
        self._report.failures.append(text)
        return self

    def set_error(self, exc: BaseException) -> "FailureBuilder":
        self._report.error = exc
        self._report.stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        return self

    def capture_stack(self) -> "FailureBuilder":
        """Record the current call stack when no exception is at hand."""
        if self._report.stack_trace is None:
            self._report.stack_trace = "".join(traceback.format_stack()[:-1])
        return self

    def build(self) -> VerificationReport:
        return self._report


class ContractViolation(AssertionError):
    """Raised when a check is asserted and its report is a failure."""

    def __init__(self, report: VerificationReport) -> None:
        self.report = report
        super().__init__(report.format())
