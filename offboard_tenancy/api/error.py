from typing import Any, Dict

from fastapi import status

from offboard_tenancy.libs.result import Error


class ClientError(Exception):
    """Business error surfaced to the caller with its code and remediation."""

    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_body(self) -> Dict[str, Any]:
        error = {"code": self.base_error.code, "message": self.base_error.message}
        if self.base_error.reason:
            error["reason"] = self.base_error.reason
        if self.base_error.remediation:
            error["remediation"] = self.base_error.remediation
        return {"error": error}


class ServerError(Exception):
    """Unexpected use case failure; details stay in the log."""

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_body(self) -> Dict[str, Any]:
        return {"error": {"code": self.base_error.code, "message": "Internal server error"}}
