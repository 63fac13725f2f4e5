"""Licenseanalyzer: resolve the licenses of a project's dependencies from POM metadata."""

__version__ = "0.1.0"
