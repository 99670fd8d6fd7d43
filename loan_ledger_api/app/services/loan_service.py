"""
Business logic for loans.

``LoanService`` owns every rule of the loan lifecycle: field
validation, the self-lending ban and lender-only mutation.  The
caller's user id is always passed in explicitly by the HTTP layer;
the service never looks up the current user on its own.

Each operation returns a ``ServiceResult``.  Mutating operations check
their guards in a fixed order: the loan must exist, the caller must be
its lender, the payload must be valid, and only then is anything
written.  A stranger asking for a missing id therefore sees "not found",
and a stranger sending garbage to an existing loan sees "forbidden"
without learning anything about the validation rules.
"""

import logging
from dataclasses import replace
from typing import Any, List, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from ..core.results import ErrorKind, ServiceResult
from ..models import Loan
from ..schemas.loan import LoanCreate, LoanDetail, LoanRead, LoanUpdate
from ..schemas.user import UserSummary
from ..stores import LoanStore, UserStore
from .validation import field_label, validate_payload


logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "Validation failed. Please check the input fields."

_user_id_adapter = TypeAdapter(int)


def _coerce_user_id(value: Any) -> Optional[int]:
    try:
        return _user_id_adapter.validate_python(value)
    except ValidationError:
        return None


class LoanService:
    """Loan lifecycle rules on top of a loan and a user store.

    Stateless apart from its two stores, so a new instance per request
    is as good as a shared one.
    """

    def __init__(self, loans: LoanStore, users: UserStore) -> None:
        self.loans = loans
        self.users = users

    def _expand(self, loans: List[Loan]) -> List[LoanDetail]:
        people = self.users.get_many(
            [loan.lender_id for loan in loans] + [loan.borrower_id for loan in loans]
        )
        expanded: List[LoanDetail] = []
        for loan in loans:
            lender = people.get(loan.lender_id)
            borrower = people.get(loan.borrower_id)
            expanded.append(
                LoanDetail(
                    **LoanRead.model_validate(loan).model_dump(),
                    lender=UserSummary.model_validate(lender) if lender else None,
                    borrower=UserSummary.model_validate(borrower) if borrower else None,
                )
            )
        return expanded

    async def list_loans(self) -> ServiceResult[List[LoanDetail]]:
        """Return every loan with its lender and borrower.  Public."""
        loans = self.loans.list_all()
        return ServiceResult.success("Loans retrieved successfully.", self._expand(loans))

    async def get_loan(self, loan_id: int) -> ServiceResult[LoanDetail]:
        """Return a single expanded loan.  Public."""
        loan = self.loans.get(loan_id)
        if loan is None:
            return ServiceResult.failure(ErrorKind.NOT_FOUND, "Loan not found.")
        return ServiceResult.success("Loan retrieved successfully.", self._expand([loan])[0])

    async def create_loan(self, caller_id: int, payload: Mapping[str, Any]) -> ServiceResult[LoanRead]:
        """Create a loan lent by ``caller_id``.

        All four fields are required and the borrower must be an
        existing user.  The self-lending rule is a business rejection
        checked only once every field is valid.
        """
        data, errors = validate_payload(LoanCreate, payload, reference_fields={"borrower_id"})

        if "borrower_id" not in errors:
            borrower_id = data.borrower_id if data else _coerce_user_id(payload.get("borrower_id"))
            if borrower_id is None or not self.users.exists(borrower_id):
                errors["borrower_id"] = [f"The selected {field_label('borrower_id')} is invalid."]
                data = None

        if errors or data is None:
            logger.info("Rejected loan from user %s: %s", caller_id, sorted(errors))
            return ServiceResult.failure(ErrorKind.VALIDATION_FAILED, VALIDATION_FAILED_MESSAGE, errors)

        if data.borrower_id == caller_id:
            logger.info("Rejected self-loan from user %s", caller_id)
            return ServiceResult.failure(
                ErrorKind.SELF_LOAN_FORBIDDEN,
                "The lender and borrower cannot be the same user.",
            )

        loan = self.loans.create(
            Loan(
                amount=data.amount,
                interest_rate=data.interest_rate,
                duration_years=data.duration_years,
                lender_id=caller_id,
                borrower_id=data.borrower_id,
            )
        )
        logger.info("User %s lent %s to user %s (loan %s)", caller_id, loan.amount, loan.borrower_id, loan.id)
        return ServiceResult.success("Loan created successfully.", LoanRead.model_validate(loan))

    async def update_loan(
        self, caller_id: int, loan_id: int, payload: Mapping[str, Any]
    ) -> ServiceResult[LoanRead]:
        """Apply a partial update to a loan owned by ``caller_id``.

        Only ``amount``, ``interest_rate`` and ``duration_years`` can
        change; fields missing from the payload keep their values.
        """
        loan = self.loans.get(loan_id)
        if loan is None:
            return ServiceResult.failure(
                ErrorKind.NOT_FOUND, "Loan not found. Unable to update non-existing loan."
            )

        if caller_id != loan.lender_id:
            logger.warning("User %s tried to update loan %s owned by %s", caller_id, loan_id, loan.lender_id)
            return ServiceResult.failure(
                ErrorKind.FORBIDDEN, "Unauthorized. Only the original lender can update this loan."
            )

        data, errors = validate_payload(LoanUpdate, payload)
        if errors or data is None:
            return ServiceResult.failure(ErrorKind.VALIDATION_FAILED, VALIDATION_FAILED_MESSAGE, errors)

        changes = data.model_dump(exclude_unset=True)
        if changes:
            loan = self.loans.update(replace(loan, **changes))
            logger.info("User %s updated loan %s: %s", caller_id, loan_id, changes)
        return ServiceResult.success("Loan updated successfully.", LoanRead.model_validate(loan))

    async def delete_loan(self, caller_id: int, loan_id: int) -> ServiceResult[None]:
        """Permanently delete a loan owned by ``caller_id``."""
        loan = self.loans.get(loan_id)
        if loan is None:
            return ServiceResult.failure(
                ErrorKind.NOT_FOUND, "Loan not found. Unable to delete non-existing loan."
            )

        if caller_id != loan.lender_id:
            logger.warning("User %s tried to delete loan %s owned by %s", caller_id, loan_id, loan.lender_id)
            return ServiceResult.failure(
                ErrorKind.FORBIDDEN, "Unauthorized. Only the original lender can delete this loan."
            )

        self.loans.delete(loan_id)
        logger.info("User %s deleted loan %s", caller_id, loan_id)
        return ServiceResult.success("Loan deleted successfully.")
