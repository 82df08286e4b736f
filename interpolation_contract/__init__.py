"""Conformance checks for interpolation implementations.

Hand the contract a factory and the type it should build, then run the checks
from your test suite.

Typical usage
-------------
>>> from interpolation_contract import InterpolationContract
>>> contract = InterpolationContract(LinearSpline.from_samples, LinearSpline)
>>> @pytest.mark.parametrize("check", contract.pytest_params())
... def test_linear_spline_contract(check):
...     check.verify()
"""
from importlib.metadata import version as _version  # type: ignore

from .capabilities import (
    Capability,
    Interpolation,
    SupportsInterpolation,
    UnsupportedOperationError,
    capabilities_of,
    missing_operations,
)
from .contract import ContractCheck, Factory, InterpolationContract
from .report import ContractViolation, FailureBuilder, VerificationReport

__all__ = [
    "Capability",
    "Interpolation",
    "SupportsInterpolation",
    "UnsupportedOperationError",
    "capabilities_of",
    "missing_operations",
    "ContractCheck",
    "Factory",
    "InterpolationContract",
    "ContractViolation",
    "FailureBuilder",
    "VerificationReport",
    "__version__",
]

try:
    __version__ = _version("interpolation_contract")
except Exception:  # pragma: no cover – package not installed yet
    __version__ = "0.0.0"
