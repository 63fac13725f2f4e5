"""Descriptor retrieval: coordinate to POM descriptor."""

from .base import DescriptorRetriever
from .cache import CachingRetriever
from .maven import MavenRepositoryRetriever

__all__ = ["DescriptorRetriever", "CachingRetriever", "MavenRepositoryRetriever"]
