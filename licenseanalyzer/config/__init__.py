"""Configuration schema and loading for licenseanalyzer."""

from .schema import AnalyserConfig, LicenseOverride, RepositoryConfig
from .loader import load_config

__all__ = [
    "AnalyserConfig",
    "LicenseOverride",
    "RepositoryConfig",
    "load_config",
]
