"""Core value types and errors."""

from .errors import (
    ConfigurationError,
    DescriptorParseError,
    RecoverableError,
    RetrievalError,
    UnresolvableGroupError,
)
from .models import Coordinate, Dependency, Descriptor, License, sort_dependencies

__all__ = [
    "Coordinate",
    "Dependency",
    "Descriptor",
    "License",
    "sort_dependencies",
    "RecoverableError",
    "ConfigurationError",
    "RetrievalError",
    "DescriptorParseError",
    "UnresolvableGroupError",
]
