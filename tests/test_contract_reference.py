"""Reference candidates must pass every check of the contract."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from interpolation_contract import ContractCheck, InterpolationContract  # noqa: E402
from candidates import (  # noqa: E402
    BarycentricPolynomial,
    DuckLinear,
    ExactPolynomial,
    LinearSpline,
)

_SEED = 20091027

LINEAR_SPLINE = InterpolationContract(
    LinearSpline.from_samples, LinearSpline, orders=(1, 2, 4, 7), seed=_SEED
)
EXACT_POLYNOMIAL = InterpolationContract(
    ExactPolynomial, ExactPolynomial, orders=(2, 3, 4), seed=_SEED, check_derivative_agreement=True
)
BARYCENTRIC = InterpolationContract(BarycentricPolynomial, "BarycentricPolynomial", seed=_SEED)
DUCK = InterpolationContract(DuckLinear, DuckLinear, seed=_SEED)


@pytest.mark.parametrize("check", LINEAR_SPLINE.pytest_params())
def test_linear_spline_contract(check: ContractCheck) -> None:
    check.verify()


@pytest.mark.parametrize("check", EXACT_POLYNOMIAL.pytest_params())
def test_exact_polynomial_contract(check: ContractCheck) -> None:
    check.verify()


@pytest.mark.parametrize("check", BARYCENTRIC.pytest_params())
def test_barycentric_contract(check: ContractCheck) -> None:
    check.verify()


@pytest.mark.parametrize("check", DUCK.pytest_params())
def test_structural_candidate_contract(check: ContractCheck) -> None:
    check.verify()


def test_check_names_follow_canonical_order() -> None:
    assert [c.name for c in BARYCENTRIC.checks()] == [
        "FactoryReturnsCorrectType",
        "ConsistentCapabilityBehavior",
        "InterpolationMatchesNodePoints",
        "CanDealWithLinearSamples",
    ]
    assert [c.name for c in EXACT_POLYNOMIAL][-1] == "DerivativeFormsAgree"


def test_node_scenario_values() -> None:
    spline = LinearSpline([1, 2, 2.3, 3, 8], [50, 20, 30, 10, -20])
    assert spline.interpolate(2.3) == pytest.approx(30, abs=1e-12)
    assert spline.interpolate(8) == pytest.approx(-20, abs=1e-12)


def test_linear_scenario_values() -> None:
    poly = ExactPolynomial([4, 5, 6, 7], [2, 3, 4, 5])
    for x in (4.25, 5.5, 6.999, 7.75):
        assert poly.interpolate(x) == pytest.approx(x - 2, abs=1e-12)


def test_run_returns_a_passing_report_per_check() -> None:
    reports = LINEAR_SPLINE.run()
    assert len(reports) == 4
    assert all(reports)
    linear = reports[-1]
    assert linear.check == "CanDealWithLinearSamples"
    assert linear.labels["Seed"] == _SEED


def test_derivative_agreement_skips_without_differentiation() -> None:
    contract = InterpolationContract(
        BarycentricPolynomial, BarycentricPolynomial, check_derivative_agreement=True, seed=1
    )
    report = contract.checks()[-1]()
    assert report.check == "DerivativeFormsAgree"
    assert report.passed
    assert "Skipped" in report.labels
