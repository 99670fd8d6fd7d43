"""
The uniform response envelope.

Every response of the API, success or error, is an object with a
``status`` (``"success"`` or ``"error"``), a human readable ``message``
and a ``data`` payload that may be ``null``.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    status: Literal["success", "error"] = Field(..., examples=["success"])
    message: str = Field(..., examples=["Loan retrieved successfully."])
    data: Any = None
