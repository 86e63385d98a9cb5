from __future__ import annotations

from typing import Any, Dict, Optional

RAW_TEXT_REQUIRED = 'Request body must contain a "rawText" string.'
CONFIG_PAYLOAD_REQUIRED = 'Request body must contain a "fieldConfig" and/or "sectionConfig" object.'
IPS_REQUIRED = "Request body must contain an array of IPs."
GENERIC_SERVER_ERROR = "An error occurred on the server."
FORMAT_SERVER_ERROR = "An error occurred on the server while formatting the report."


class ServiceError(Exception):
    """Base error carrying the HTTP status and the message safe to show a caller."""

    status_code: int = 500

    def __init__(self, message: str, *, error: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = error

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"message": self.message}
        if self.error is not None:
            payload["error"] = self.error
        return payload


class InputError(ServiceError):
    status_code = 400


class ExtractionFault(ServiceError):
    status_code = 500

    def __init__(self, message: str = FORMAT_SERVER_ERROR) -> None:
        super().__init__(message)


class UpstreamFailure(ServiceError):
    # upstream answered, but said no
    status_code = 400


class UpstreamUnavailable(ServiceError):
    status_code = 500

    def __init__(self, message: str = GENERIC_SERVER_ERROR) -> None:
        super().__init__(message)


class ConfigurationError(ServiceError):
    status_code = 500
