"""
Messenger SDK error types.

BuilderValidationError — payload rejected locally, before any network call.
RemoteApiError         — the Graph API answered with a structured error.
TransportError         — the HTTP exchange could not be completed.
"""

from typing import Any, Optional, Union


class MessengerError(Exception):
    def __init__(self, code: Union[str, int], message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class BuilderValidationError(MessengerError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("builder_validation_error", message, details)


class TransportError(MessengerError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("transport_error", message)
        self.status_code = status_code


class RemoteApiError(MessengerError):
    """Error body returned by the Graph API, kept verbatim."""

    def __init__(
        self,
        message: str,
        type: str,
        code: int,
        subcode: Optional[int] = None,
        trace_id: Optional[str] = None,
    ):
        super().__init__(code, message, {
            "type": type,
            "code": code,
            "error_subcode": subcode,
            "fbtrace_id": trace_id,
        })
        self.type = type
        self.subcode = subcode
        self.trace_id = trace_id

    @classmethod
    def from_error_body(cls, error: dict[str, Any]) -> "RemoteApiError":
        """Build from the `error` object of a Graph API response."""
        return cls(
            message=error.get("message", ""),
            type=error.get("type", ""),
            code=error.get("code", 0),
            subcode=error.get("error_subcode"),
            trace_id=error.get("fbtrace_id"),
        )

    def __repr__(self) -> str:
        return (
            f"RemoteApiError(code={self.code!r}, subcode={self.subcode!r}, "
            f"type={self.type!r}, trace_id={self.trace_id!r})"
        )
