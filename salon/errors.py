"""Business-rule errors raised by the service layer.

Each error is an ``HTTPException`` so FastAPI renders it directly; the
``code`` lets the frontend tell a booking conflict apart from a form error.
"""

from typing import Optional

from fastapi import HTTPException, status


class SalonError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"

    def __init__(self, detail: str, code: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=detail)
        if code:
            self.code = code


class NotFoundError(SalonError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(SalonError):
    status_code = status.HTTP_409_CONFLICT
    code = "appointment_conflict"


class AlreadyPaidError(SalonError):
    status_code = status.HTTP_409_CONFLICT
    code = "already_paid"


class ValidationError(SalonError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class PermissionDeniedError(SalonError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "permission_denied"
