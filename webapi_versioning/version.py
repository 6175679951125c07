"""
API Version

Immutable value type for an API version.

A version has an optional group version (a date) and an optional
``major.minor`` pair, plus an optional status such as ``beta``:

    1.0
    2.1-beta
    2016-07-01
    2016-07-01.1.0-rc
"""

from __future__ import annotations

import re
from datetime import date
from functools import total_ordering
from typing import Any, Optional, Union

from .faults import InvalidApiVersionFault, InvalidArgumentFault


_VERSION_RE = re.compile(
    r"""
    ^[vV]?
    (?:(?P<group>\d{4}-\d{2}-\d{2})(?:\.(?=\d)|(?=-)|$))?
    (?:(?P<major>\d+)(?:\.(?P<minor>\d+))?)?
    (?:-(?P<status>[a-zA-Z][a-zA-Z0-9]*))?
    $
    """,
    re.VERBOSE,
)

_STATUS_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9]*$")


@total_ordering
class ApiVersion:
    """
    An API version.

    Equality and hashing ignore the case of the status. Ordering is by
    group version, then major, then minor; a version with a status sorts
    before the same version without one.

    Example:
        >>> ApiVersion.parse("2.0") == ApiVersion(2, 0)
        True
        >>> ApiVersion.parse("1.0-beta") < ApiVersion(1, 0)
        True
    """

    __slots__ = ("_group_version", "_major", "_minor", "_status")

    def __init__(
        self,
        major: Optional[int] = None,
        minor: Optional[int] = None,
        status: Optional[str] = None,
        *,
        group_version: Optional[date] = None,
    ):
        if major is None and group_version is None:
            raise InvalidArgumentFault("major", "is required when no group version is given")
        if minor is not None and major is None:
            raise InvalidArgumentFault("minor", "requires a major version")
        for name, value in (("major", major), ("minor", minor)):
            if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
                raise InvalidArgumentFault(name, "must be a non-negative integer")
        if status is not None and not _STATUS_RE.match(status):
            raise InvalidArgumentFault("status", "must be alphanumeric and start with a letter")

        if major is not None and minor is None:
            minor = 0

        object.__setattr__(self, "_group_version", group_version)
        object.__setattr__(self, "_major", major)
        object.__setattr__(self, "_minor", minor)
        object.__setattr__(self, "_status", status)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def parse(cls, text: str) -> "ApiVersion":
        """
        Parse version text.

        Raises:
            InvalidApiVersionFault: If the text is not a valid version
        """
        if text is None:
            raise InvalidArgumentFault("text")

        match = _VERSION_RE.match(str(text).strip())
        if match is None or (match.group("group") is None and match.group("major") is None):
            raise InvalidApiVersionFault(text)

        group_version = None
        if match.group("group"):
            try:
                group_version = date.fromisoformat(match.group("group"))
            except ValueError:
                raise InvalidApiVersionFault(text) from None

        major = int(match.group("major")) if match.group("major") is not None else None
        minor = int(match.group("minor")) if match.group("minor") is not None else None

        return cls(major, minor, match.group("status"), group_version=group_version)

    @classmethod
    def try_parse(cls, text: Optional[str]) -> Optional["ApiVersion"]:
        """Parse version text, returning None instead of raising."""
        if text is None:
            return None
        try:
            return cls.parse(text)
        except InvalidApiVersionFault:
            return None

    @classmethod
    def coerce(cls, value: Union["ApiVersion", str, int, float]) -> "ApiVersion":
        """Convert a version, string, int or float to an ApiVersion."""
        if isinstance(value, ApiVersion):
            return value
        if isinstance(value, bool):
            raise InvalidApiVersionFault(value)
        if isinstance(value, int):
            return cls(value, 0)
        if isinstance(value, (float, str)):
            return cls.parse(str(value))
        raise InvalidApiVersionFault(value)

    @classmethod
    def default(cls) -> "ApiVersion":
        return cls(1, 0)

    # ========================================================================
    # Properties
    # ========================================================================

    @property
    def group_version(self) -> Optional[date]:
        return self._group_version

    @property
    def major(self) -> Optional[int]:
        return self._major

    @property
    def minor(self) -> Optional[int]:
        return self._minor

    @property
    def status(self) -> Optional[str]:
        return self._status

    # ========================================================================
    # Comparison
    # ========================================================================

    def _key(self) -> tuple:
        return (
            self._group_version is not None,
            self._group_version or date.min,
            self._major if self._major is not None else -1,
            self._minor if self._minor is not None else -1,
            # Pre-release statuses sort before the release
            self._status is None,
            (self._status or "").lower(),
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ApiVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        parts = []
        if self._group_version is not None:
            parts.append(self._group_version.isoformat())
        if self._major is not None:
            parts.append(f"{self._major}.{self._minor}")
        text = ".".join(parts)
        if self._status:
            text = f"{text}-{self._status}"
        return text

    def __repr__(self) -> str:
        return f"ApiVersion('{self}')"


__all__ = ["ApiVersion"]
