"""
Diagnostic log records kept by the ``RequestLogger``.

Records are frozen and hold already-redacted data. A :class:`LogEntry` is a
tagged union: ``kind`` tells which record type ``data`` holds.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from ..errors import ClassifiedError


class LogEntryKind(str, Enum):
    REQUEST = "request"
    RESPONSE = "response"
    ERROR = "error"


@dataclass(frozen=True)
class RequestRecord:
    """One outbound call: endpoint, redacted headers/payload and options."""

    endpoint: str
    headers: Dict[str, Any]
    payload: Any
    options: Dict[str, Any]
    timestamp: datetime
    provider: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "headers": dict(self.headers),
            "payload": self.payload,
            "options": dict(self.options),
            "timestamp": self.timestamp.isoformat(),
            "provider": self.provider,
        }


@dataclass(frozen=True)
class ResponseRecord:
    """Reply to an outbound call. ``duration`` is in seconds."""

    status_code: int
    headers: Dict[str, Any]
    body: Any
    duration: float
    error: str
    timestamp: datetime
    provider: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status_code": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
            "duration": self.duration,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
            "provider": self.provider,
        }


@dataclass(frozen=True)
class ErrorRecord:
    """Error trail entry; ``classified`` is set when the failure was classified."""

    provider: Optional[str]
    message: str
    status_code: int
    duration: float
    timestamp: datetime
    request: Optional[RequestRecord] = None
    classified: Optional[ClassifiedError] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "message": self.message,
            "status_code": self.status_code,
            "duration": self.duration,
            "timestamp": self.timestamp.isoformat(),
            "request": self.request.to_dict() if self.request else None,
            "classified": self.classified.to_dict() if self.classified else None,
        }


@dataclass(frozen=True)
class LogEntry:
    kind: LogEntryKind
    data: Union[RequestRecord, ResponseRecord, ErrorRecord] = field(compare=False)

    @property
    def timestamp(self) -> datetime:
        return self.data.timestamp

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "data": self.data.to_dict()}


__all__ = [
    "LogEntryKind",
    "RequestRecord",
    "ResponseRecord",
    "ErrorRecord",
    "LogEntry",
]
