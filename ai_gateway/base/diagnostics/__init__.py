"""Diagnostics: error classification, request logging and connection testing.

The three services here are plain objects constructed by the host and
injected into the :class:`~ai_gateway.service.manager.ServiceManager`; none
of them is a process-wide singleton.
"""

from .connection_tester import (
    BUDGET_MESSAGE,
    CANCELLED_MESSAGE,
    INVALID_FORMAT_MESSAGE,
    UNSUPPORTED_MESSAGE,
    ConnectionTester,
)
from .error_classifier import ErrorClassifier, is_retry_recommended, level_for_status, recovery_strategy
from .log_entry import ErrorRecord, LogEntry, LogEntryKind, RequestRecord, ResponseRecord
from .redaction import REDACTED, redact_headers, redact_payload
from .request_logger import DEFAULT_LOG_CAPACITY, RequestLogger
from .test_result import CapabilityCheck, TestResult

__all__ = [
    "ConnectionTester",
    "UNSUPPORTED_MESSAGE",
    "INVALID_FORMAT_MESSAGE",
    "CANCELLED_MESSAGE",
    "BUDGET_MESSAGE",
    "ErrorClassifier",
    "is_retry_recommended",
    "level_for_status",
    "recovery_strategy",
    "ErrorRecord",
    "LogEntry",
    "LogEntryKind",
    "RequestRecord",
    "ResponseRecord",
    "REDACTED",
    "redact_headers",
    "redact_payload",
    "DEFAULT_LOG_CAPACITY",
    "RequestLogger",
    "CapabilityCheck",
    "TestResult",
]
