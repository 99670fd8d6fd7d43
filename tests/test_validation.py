import pytest

from loan_ledger_api.app.schemas.loan import LoanCreate
from loan_ledger_api.app.services.validation import describe_error, validate_payload


@pytest.mark.parametrize(
    "error, reason",
    [
        ({"type": "greater_than_equal", "ctx": {"ge": 0.0}}, "The amount field must be at least 0."),
        ({"type": "greater_than_equal", "ctx": {"ge": 0.5}}, "The amount field must be at least 0.5."),
        ({"type": "less_than_equal", "ctx": {"le": 100.0}}, "The amount field must not be greater than 100."),
        ({"type": "missing"}, "The amount field is required."),
    ],
)
def test_describe_error(error, reason) -> None:
    assert describe_error("amount", error) == reason


def test_float_lower_bound_is_rendered_without_fraction() -> None:
    data, errors = validate_payload(
        LoanCreate,
        {"amount": 10, "interest_rate": -1.5, "duration_years": 1, "borrower_id": 2},
    )

    assert data is None
    assert errors == {"interest_rate": ["The interest rate field must be at least 0."]}
