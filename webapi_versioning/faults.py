"""
Versioning faults - Structured fault types.

Every fault carries a stable code, a message, a domain and a severity,
so the framework's error pipeline can log it and map it to a response.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    """Fault severity; determines the logging level."""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain(str, Enum):
    """Functional area a fault belongs to."""
    CONFIG = "config"
    ARGUMENT = "argument"
    VERSIONING = "versioning"


DOMAIN_SEVERITY = {
    FaultDomain.CONFIG: Severity.FATAL,
    FaultDomain.ARGUMENT: Severity.ERROR,
    FaultDomain.VERSIONING: Severity.ERROR,
}


# ============================================================================
# Fault - Base Class
# ============================================================================

class Fault(Exception):
    """
    Base fault class.

    Attributes:
        code: Stable machine-readable identifier (e.g., "INVALID_ARGUMENT")
        message: Human-readable summary
        domain: Fault domain
        severity: Defaults to the domain's severity
        public: Whether the message is safe to show to API clients
        metadata: Values describing the failure
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        domain: FaultDomain,
        severity: Optional[Severity] = None,
        public: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.domain = domain
        self.severity = severity or DOMAIN_SEVERITY[domain]
        self.public = public
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self.code!r}, domain={self.domain.value}, "
            f"severity={self.severity.value})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging or an HTTP error body."""
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "metadata": self.metadata,
        }


class VersioningFault(Fault):
    """Base class for all faults raised by this package."""


# ============================================================================
# ARGUMENT Faults
# ============================================================================

class InvalidArgumentFault(VersioningFault, ValueError):
    """An argument was None, empty, or of the wrong kind."""

    def __init__(self, name: str, reason: str = "must not be None or empty", **kwargs):
        super().__init__(
            code="INVALID_ARGUMENT",
            message=f"Argument '{name}' {reason}",
            domain=FaultDomain.ARGUMENT,
            metadata={"argument": name, "reason": reason, **kwargs.get("metadata", {})},
        )
        self.argument = name


class IndexOutOfRangeFault(VersioningFault, IndexError):
    """Positional access outside ``0 <= index < count``."""

    def __init__(self, index: Any, count: int, **kwargs):
        super().__init__(
            code="INDEX_OUT_OF_RANGE",
            message=f"Index {index!r} is out of range for a group of {count} descriptor(s)",
            domain=FaultDomain.ARGUMENT,
            metadata={"index": index, "count": count, **kwargs.get("metadata", {})},
        )
        self.index = index
        self.count = count


# ============================================================================
# VERSIONING Faults
# ============================================================================

class InvalidApiVersionFault(VersioningFault, ValueError):
    """API version text could not be parsed."""

    def __init__(self, text: Any, **kwargs):
        super().__init__(
            code="INVALID_API_VERSION",
            message=f"'{text}' is not a valid API version",
            domain=FaultDomain.VERSIONING,
            public=True,
            metadata={"text": text, **kwargs.get("metadata", {})},
        )
        self.text = text


class AmbiguousApiVersionFault(VersioningFault):
    """A request specified more than one distinct API version."""

    def __init__(self, values: list[str], **kwargs):
        super().__init__(
            code="AMBIGUOUS_API_VERSION",
            message=f"The request specified multiple API versions: {', '.join(values)}",
            domain=FaultDomain.VERSIONING,
            public=True,
            metadata={"values": values, **kwargs.get("metadata", {})},
        )
        self.values = values


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigInvalidFault(VersioningFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            domain=FaultDomain.CONFIG,
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )
        self.key = key


__all__ = [
    "Severity",
    "DOMAIN_SEVERITY",
    "FaultDomain",
    "Fault",
    "VersioningFault",
    "InvalidArgumentFault",
    "IndexOutOfRangeFault",
    "InvalidApiVersionFault",
    "AmbiguousApiVersionFault",
    "ConfigInvalidFault",
]
