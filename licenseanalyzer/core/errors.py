"""Exception hierarchy for license analysis.

Recoverable errors describe expected per-item failures: the current
dependency or group is skipped and processing continues.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from licenseanalyzer.core.models import Coordinate


class RecoverableError(Exception):
    """Base class for recoverable business errors.

    These errors indicate expected failure conditions that can be handled
    gracefully by skipping the current item and continuing processing.
    """
    pass


class ConfigurationError(RecoverableError):
    """Configuration or project file error.

    Raised when a configuration source or the analysed project file is
    missing or malformed. Fatal when raised during collector setup.
    """
    pass


class RetrievalError(RecoverableError):
    """A descriptor could not be fetched for a coordinate.

    Covers missing artifacts as well as network and storage failures.
    """

    def __init__(
        self,
        message: str,
        coordinate: Optional["Coordinate"] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.coordinate = coordinate
        self.cause = cause


class DescriptorParseError(RecoverableError):
    """A descriptor document is not well-formed XML."""
    pass


class UnresolvableGroupError(RecoverableError):
    """A dependency group cannot be materialized into coordinates."""
    pass


__all__ = [
    "RecoverableError",
    "ConfigurationError",
    "RetrievalError",
    "DescriptorParseError",
    "UnresolvableGroupError",
]
