"""Shared fixtures: POM builders and an in-memory descriptor retriever."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from licenseanalyzer.core.errors import RetrievalError
from licenseanalyzer.core.models import Coordinate
from licenseanalyzer.retrieval.base import DescriptorRetriever

POM_NS = "http://maven.apache.org/POM/4.0.0"


def build_pom(
    group: Optional[str] = None,
    artifact: str = "lib",
    version: str = "1.0",
    licenses: Sequence[Tuple[Optional[str], Optional[str]]] = (),
    parent: Optional[str] = None,
    namespace: bool = True,
    group_element: str = "groupId",
) -> str:
    """Render a minimal POM document."""
    parts: List[str] = []
    if parent:
        p_group, p_artifact, p_version = parent.split(":")
        parts.append(
            "<parent>"
            f"<groupId>{p_group}</groupId>"
            f"<artifactId>{p_artifact}</artifactId>"
            f"<version>{p_version}</version>"
            "</parent>"
        )
    if group:
        parts.append(f"<{group_element}>{group}</{group_element}>")
    parts.append(f"<artifactId>{artifact}</artifactId>")
    parts.append(f"<version>{version}</version>")
    if licenses:
        entries = []
        for name, url in licenses:
            body = ""
            if name is not None:
                body += f"<name>{name}</name>"
            if url is not None:
                body += f"<url>{url}</url>"
            entries.append(f"<license>{body}</license>")
        parts.append("<licenses>" + "".join(entries) + "</licenses>")
    ns_attr = f' xmlns="{POM_NS}"' if namespace else ""
    return f"<?xml version=\"1.0\"?><project{ns_attr}>" + "".join(parts) + "</project>"


class FakeRetriever(DescriptorRetriever):
    """In-memory retriever recording every fetch."""

    NAME = "fake"

    def __init__(self) -> None:
        self.documents: Dict[Coordinate, str] = {}
        self.calls: List[Coordinate] = []

    def add(self, notation: str, document: str) -> Coordinate:
        coordinate = Coordinate.parse(notation)
        self.documents[coordinate] = document
        return coordinate

    def fetch(self, coordinate: Coordinate) -> bytes:
        self.calls.append(coordinate)
        document = self.documents.get(coordinate)
        if document is None:
            raise RetrievalError(f"Descriptor not found for {coordinate}", coordinate=coordinate)
        return document.encode("utf-8")


@pytest.fixture
def retriever() -> FakeRetriever:
    return FakeRetriever()


@pytest.fixture
def pom():
    return build_pom
