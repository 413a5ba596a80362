"""Unified sync exception taxonomy.

Every domain exception inherits from ``SyncError`` and carries structured
context fields that let the caller decide whether to retry a sync and
what to report.

Taxonomy categories
-------------------
- ``ConfigurationError`` — host-local configuration is malformed. Fatal,
  raised before any network call.
- ``AggregationError``   — a descriptor conversion or secret fetch failed.
  Fatal, raised before the payload is sent.
- ``TransmissionError``  — the control plane answered with a non-2xx
  status. Retryable; reported inside a ``SyncResult`` rather than raised.

Transport failures (DNS, TLS, timeouts) are ``httpx`` exceptions outside
this hierarchy; they propagate to the caller.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and HTTP responses.
"""

from __future__ import annotations


class SyncError(Exception):
    """Base exception for all trigger-sync errors.

    Attributes:
        message: Human-readable error description.
        stage: Sync stage where the error occurred
            (e.g. ``"durable_config"``, ``"secrets"``).
        code: Machine-readable error code (e.g. ``"INVALID_HOST_JSON"``).
        retryable: Whether the caller may retry the sync as-is.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ConfigurationError):
            return "configuration"
        if isinstance(self, AggregationError):
            return "aggregation"
        if isinstance(self, TransmissionError):
            return "transmission"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
        }


# ---------------------------------------------------------------------------
# Category classes
# ---------------------------------------------------------------------------


class ConfigurationError(SyncError):
    """Malformed host configuration (``host.json``, signing key). Never retryable."""

    default_stage = "configuration"
    default_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class AggregationError(SyncError):
    """A descriptor conversion or secret fetch failed. Never retryable."""

    default_stage = "aggregation"
    default_code = "AGGREGATION_FAILED"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransmissionError(SyncError):
    """The control plane rejected the sync with a non-success status.

    Attributes:
        status_code: HTTP status code returned by the endpoint.
    """

    default_stage = "transmission"
    default_code = "SYNC_REJECTED"

    def __init__(self, message: str = "", *, status_code: int = 0, **kwargs: object) -> None:
        self.status_code = status_code
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]

    def to_error_dict(self) -> dict[str, object]:
        error = super().to_error_dict()
        error["status_code"] = self.status_code
        return error
