"""
Business logic for users.

Registration stores a PBKDF2 password hash and login checks it; both
hand back a bearer token so a freshly registered user can start
lending straight away.
"""

import logging
import sqlite3
from typing import Any, Mapping

from ..core.results import ErrorKind, ServiceResult
from ..core.security import create_access_token, hash_password, verify_password
from ..schemas.user import AuthToken, UserLogin, UserRegister, UserSummary
from ..stores import UserStore
from .validation import validate_payload


logger = logging.getLogger(__name__)


class UserService:
    """Registration and login on top of a user store."""

    def __init__(self, users: UserStore) -> None:
        self.users = users

    @staticmethod
    def _issue_token(user) -> AuthToken:
        token = create_access_token({"sub": str(user.id)})
        return AuthToken(user=UserSummary.model_validate(user), access_token=token)

    async def register(self, payload: Mapping[str, Any]) -> ServiceResult[AuthToken]:
        """Create a user account and return it with an access token.

        The e-mail must be unique; a duplicate is reported as a field
        error like any other validation failure.
        """
        data, errors = validate_payload(UserRegister, payload)
        if data is not None and self.users.get_by_email(data.email) is not None:
            errors = {"email": ["The email has already been taken."]}
        if errors or data is None:
            return ServiceResult.failure(
                ErrorKind.VALIDATION_FAILED,
                "Validation failed. Please check the input fields.",
                errors,
            )

        try:
            user = self.users.create(data.name, data.email, hash_password(data.password))
        except sqlite3.IntegrityError:
            # Lost a race with a concurrent registration of the same address.
            return ServiceResult.failure(
                ErrorKind.VALIDATION_FAILED,
                "Validation failed. Please check the input fields.",
                {"email": ["The email has already been taken."]},
            )
        logger.info("Registered user %s (%s)", user.id, user.email)
        return ServiceResult.success("User registered successfully.", self._issue_token(user))

    async def authenticate(self, payload: Mapping[str, Any]) -> ServiceResult[AuthToken]:
        """Check e-mail and password and return a fresh token on success."""
        data, errors = validate_payload(UserLogin, payload)
        if errors or data is None:
            return ServiceResult.failure(
                ErrorKind.VALIDATION_FAILED,
                "Validation failed. Please check the input fields.",
                errors,
            )

        user = self.users.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.password):
            logger.info("Failed login for %s", data.email)
            return ServiceResult.failure(ErrorKind.INVALID_CREDENTIALS, "Invalid credentials.")
        return ServiceResult.success("Login successful.", self._issue_token(user))
