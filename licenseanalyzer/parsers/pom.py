"""POM descriptor parsing.

Two entry points:

* :func:`parse_descriptor` turns the raw bytes of a dependency's POM into
  a :class:`~licenseanalyzer.core.models.Descriptor` (licenses, parent
  reference, override group).
* :func:`parse_project` reads the analysed project's own ``pom.xml`` and
  returns its declared dependencies, properties and managed versions so
  that the collector can group them by scope.

Only direct children are inspected (``project/licenses/license``,
``project/parent``), so nested ``<dependency>`` or ``<plugin>`` blocks
never leak their ``groupId``/``version`` into the project's own fields.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from licenseanalyzer.core.errors import ConfigurationError, DescriptorParseError
from licenseanalyzer.core.models import Coordinate, Descriptor, License

logger = logging.getLogger("licenseanalyzer.parsers.pom")

_PROPERTY_RE = re.compile(r"\$\{([^}]+)\}")


# ---------------------------------------------------------------------------
# Element helpers
# ---------------------------------------------------------------------------


def _detect_namespace(root: ET.Element) -> str:
    if root.tag.startswith("{"):
        return root.tag.split("}")[0][1:]
    return ""


def _ns_tag(tag: str, ns: str) -> str:
    if not ns:
        return tag
    return "/".join(f"{{{ns}}}{part}" for part in tag.split("/"))


def _child(elem: ET.Element, tag: str, ns: str) -> Optional[ET.Element]:
    return elem.find(_ns_tag(tag, ns))


def _children(elem: ET.Element, tag: str, ns: str) -> List[ET.Element]:
    return elem.findall(_ns_tag(tag, ns))


def _child_text(elem: ET.Element, tag: str, ns: str) -> Optional[str]:
    target = _child(elem, tag, ns)
    if target is not None and target.text and target.text.strip():
        return target.text.strip()
    return None


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def _parse_root(data: bytes, origin: str) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        raise DescriptorParseError(f"Malformed descriptor {origin}: {exc}") from exc


# ---------------------------------------------------------------------------
# Dependency descriptors
# ---------------------------------------------------------------------------


def parse_descriptor(data: Union[bytes, str], origin: str = "<descriptor>") -> Descriptor:
    """Parse POM bytes into a Descriptor.

    Args:
        data: Raw document content.
        origin: Human readable origin used in error messages.

    Returns:
        Descriptor: Parsed descriptor.

    Raises:
        DescriptorParseError: If the document is not well-formed XML.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    root = _parse_root(data, origin)
    ns = _detect_namespace(root)

    group_id = _child_text(root, "group", ns) or _child_text(root, "groupId", ns)

    licenses: List[License] = []
    licenses_elem = _child(root, "licenses", ns)
    if licenses_elem is not None:
        for lic in _children(licenses_elem, "license", ns):
            licenses.append(
                License(
                    name=_child_text(lic, "name", ns) or "",
                    url=_child_text(lic, "url", ns) or "",
                )
            )

    parent: Optional[Coordinate] = None
    parent_incomplete = False
    parent_elem = _child(root, "parent", ns)
    if parent_elem is not None:
        p_group = _child_text(parent_elem, "groupId", ns)
        p_artifact = _child_text(parent_elem, "artifactId", ns)
        p_version = _child_text(parent_elem, "version", ns)
        if p_group and p_artifact and p_version:
            parent = Coordinate(p_group, p_artifact, p_version)
        else:
            parent_incomplete = True
            logger.debug("Incomplete parent reference in %s", origin)

    return Descriptor(
        group_id=group_id,
        artifact_id=_child_text(root, "artifactId", ns),
        version=_child_text(root, "version", ns),
        licenses=tuple(licenses),
        parent=parent,
        parent_incomplete=parent_incomplete,
    )


# ---------------------------------------------------------------------------
# Project POM
# ---------------------------------------------------------------------------


@dataclass
class DeclaredDependency:
    """A ``<dependency>`` entry of the analysed project."""

    group_id: str
    artifact_id: str
    version: Optional[str]
    scope: str = "compile"
    optional: bool = False


@dataclass
class ProjectModel:
    """Facts from the analysed project's own pom.xml."""

    group_id: Optional[str]
    artifact_id: Optional[str]
    version: Optional[str]
    properties: Dict[str, str] = field(default_factory=dict)
    dependencies: List[DeclaredDependency] = field(default_factory=list)
    managed_versions: Dict[str, str] = field(default_factory=dict)

    def interpolate(self, value: Optional[str]) -> Optional[str]:
        """Substitute ``${...}`` references; None if any stays unresolved."""
        if value is None:
            return None

        unresolved = False

        def _replace(match: re.Match) -> str:
            nonlocal unresolved
            resolved = self.properties.get(match.group(1))
            if resolved is None:
                unresolved = True
                return match.group(0)
            return resolved

        # Properties may reference other properties; bound the passes.
        result = value
        for _ in range(10):
            if not _PROPERTY_RE.search(result):
                break
            unresolved = False
            result = _PROPERTY_RE.sub(_replace, result)
            if unresolved:
                return None
        return None if _PROPERTY_RE.search(result) else result

    def version_for(self, dep: DeclaredDependency) -> Optional[str]:
        """Return the concrete version of a declared dependency, if known."""
        version = dep.version or self.managed_versions.get(
            f"{dep.group_id}:{dep.artifact_id}"
        )
        return self.interpolate(version)


def parse_project(pom_path: Path) -> ProjectModel:
    """Parse the analysed project's pom.xml.

    Raises:
        ConfigurationError: If the file is missing or malformed.
    """
    try:
        data = pom_path.read_bytes()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read project file {pom_path}: {exc}") from exc
    try:
        root = _parse_root(data, str(pom_path))
    except DescriptorParseError as exc:
        raise ConfigurationError(str(exc)) from exc

    ns = _detect_namespace(root)
    parent_elem = _child(root, "parent", ns)
    parent_group = parent_version = None
    if parent_elem is not None:
        parent_group = _child_text(parent_elem, "groupId", ns)
        parent_version = _child_text(parent_elem, "version", ns)

    group_id = _child_text(root, "groupId", ns) or parent_group
    artifact_id = _child_text(root, "artifactId", ns)
    version = _child_text(root, "version", ns) or parent_version

    properties: Dict[str, str] = {}
    props_elem = _child(root, "properties", ns)
    if props_elem is not None:
        for prop in list(props_elem):
            if isinstance(prop.tag, str):
                properties[_local_name(prop.tag)] = (prop.text or "").strip()
    for key, value in (
        ("project.groupId", group_id),
        ("project.artifactId", artifact_id),
        ("project.version", version),
        ("project.parent.groupId", parent_group),
        ("project.parent.version", parent_version),
    ):
        if value:
            properties.setdefault(key, value)
            properties.setdefault(key.replace("project.", "pom.", 1), value)

    model = ProjectModel(
        group_id=group_id,
        artifact_id=artifact_id,
        version=version,
        properties=properties,
    )

    for dep in _children(root, "dependencyManagement/dependencies/dependency", ns):
        d_group = _child_text(dep, "groupId", ns)
        d_artifact = _child_text(dep, "artifactId", ns)
        d_version = _child_text(dep, "version", ns)
        if d_group and d_artifact and d_version:
            model.managed_versions[f"{d_group}:{d_artifact}"] = d_version

    for dep in _children(root, "dependencies/dependency", ns):
        d_artifact = _child_text(dep, "artifactId", ns)
        if not d_artifact:
            continue
        d_group = model.interpolate(_child_text(dep, "groupId", ns)) or ""
        model.dependencies.append(
            DeclaredDependency(
                group_id=d_group,
                artifact_id=d_artifact,
                version=_child_text(dep, "version", ns),
                scope=(_child_text(dep, "scope", ns) or "compile").lower(),
                optional=(_child_text(dep, "optional", ns) or "").lower() == "true",
            )
        )

    logger.debug(
        "Parsed project %s:%s with %d dependencies",
        group_id,
        artifact_id,
        len(model.dependencies),
    )
    return model


__all__ = [
    "parse_descriptor",
    "parse_project",
    "ProjectModel",
    "DeclaredDependency",
]
