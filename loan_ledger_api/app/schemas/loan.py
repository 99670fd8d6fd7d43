"""
Pydantic models for loan data.

``LoanCreate`` validates a new loan, ``LoanUpdate`` validates a partial
update and ``LoanRead``/``LoanDetail`` shape stored loans for
responses.  Lender ids never appear in input schemas: the lender is
always the authenticated caller.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from loan_ledger_api.app.core.db import SQLITE_MAX_INTEGER

from .user import UserSummary


def _reject_bool(value, error_type: str, message: str):
    # Lax mode would read true/false as 1/0.
    if isinstance(value, bool):
        raise PydanticCustomError(error_type, message)
    return value


class _LoanTerms(BaseModel):
    """Validators shared by the create and update schemas."""

    @field_validator("amount", "interest_rate", mode="before", check_fields=False)
    @classmethod
    def _number_not_bool(cls, value):
        return _reject_bool(value, "float_type", "Input should be a valid number")

    @field_validator("duration_years", "borrower_id", mode="before", check_fields=False)
    @classmethod
    def _integer_not_bool(cls, value):
        return _reject_bool(value, "int_type", "Input should be a valid integer")


class LoanCreate(_LoanTerms):
    """Schema for creating a loan.  All fields are required."""

    amount: float = Field(..., ge=0, allow_inf_nan=False, examples=[5000])
    interest_rate: float = Field(..., ge=0, allow_inf_nan=False, examples=[5])
    duration_years: int = Field(..., ge=1, le=SQLITE_MAX_INTEGER, examples=[2])
    borrower_id: int = Field(..., le=SQLITE_MAX_INTEGER, examples=[2])


class LoanUpdate(_LoanTerms):
    """Schema for updating a loan.

    Every field is optional, but a field that is present must satisfy
    the same constraints as on creation.  Defaults are not validated,
    so an explicit ``null`` is rejected while an absent field is simply
    left unset (see ``model_dump(exclude_unset=True)``).  Unknown keys,
    including ``lender_id`` and ``borrower_id``, are ignored.
    """

    amount: float = Field(None, ge=0, allow_inf_nan=False, examples=[6000])
    interest_rate: float = Field(None, ge=0, allow_inf_nan=False, examples=[4.5])
    duration_years: int = Field(None, ge=1, le=SQLITE_MAX_INTEGER, examples=[3])


class LoanRead(BaseModel):
    """Schema for reading a loan from the API."""

    id: int
    amount: float
    interest_rate: float
    duration_years: int
    lender_id: int
    borrower_id: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class LoanDetail(LoanRead):
    """A loan expanded with the lender and borrower summaries."""

    lender: Optional[UserSummary] = None
    borrower: Optional[UserSummary] = None
