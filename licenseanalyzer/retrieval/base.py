"""Descriptor retriever interface.

A retriever maps one coordinate to its descriptor. Transport is split
from parsing: subclasses implement :meth:`DescriptorRetriever.fetch`
returning raw bytes, and :meth:`DescriptorRetriever.resolve` parses them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from licenseanalyzer.core.models import Coordinate, Descriptor
from licenseanalyzer.parsers.pom import parse_descriptor

logger = logging.getLogger("licenseanalyzer.retrieval.base")


class DescriptorRetriever(ABC):
    """Base class for descriptor retrievers.

    Implementations must be referentially stable within one run:
    resolving the same coordinate twice yields the same content.
    """

    NAME: str = "base"

    @abstractmethod
    def fetch(self, coordinate: Coordinate) -> bytes:
        """Fetch the raw descriptor document for a coordinate.

        Args:
            coordinate: Artifact coordinate.

        Returns:
            bytes: Raw document content.

        Raises:
            RetrievalError: If the artifact is missing or cannot be read.
        """
        raise NotImplementedError

    def resolve(self, coordinate: Coordinate) -> Descriptor:
        """Fetch and parse the descriptor for a coordinate.

        Raises:
            RetrievalError: If fetching fails.
            DescriptorParseError: If the document is malformed.
        """
        data = self.fetch(coordinate)
        logger.debug("%s retrieved %d bytes for %s", self.NAME, len(data), coordinate)
        return parse_descriptor(data, origin=str(coordinate))


__all__ = ["DescriptorRetriever"]
