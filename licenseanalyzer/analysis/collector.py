"""Coordinate collection from named dependency groups.

A dependency group is a named set of declared dependencies: a Maven
scope, a Gradle configuration, or an entry of a static manifest. The
collector materializes the requested groups into one ordered,
deduplicated list of coordinates. Groups that cannot be materialized
are skipped so that a compliance report degrades instead of aborting.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from licenseanalyzer.core.errors import ConfigurationError, UnresolvableGroupError
from licenseanalyzer.core.models import Coordinate
from licenseanalyzer.parsers.pom import ProjectModel, parse_project

logger = logging.getLogger("licenseanalyzer.analysis.collector")

MAVEN_SCOPES = ("compile", "provided", "runtime", "test", "system")


class DependencyGroupSource(ABC):
    """Dependency-graph resolver the collector reads groups from."""

    @abstractmethod
    def group_names(self) -> List[str]:
        """Return the names of all groups this source offers, in order."""
        raise NotImplementedError

    @abstractmethod
    def resolve_group(self, name: str) -> Iterable[Coordinate]:
        """Return the coordinates declared under a group.

        Raises:
            UnresolvableGroupError: If the group cannot be materialized.
        """
        raise NotImplementedError


class CoordinateCollector:
    """Collect coordinates declared under requested dependency groups."""

    def __init__(self, source: DependencyGroupSource) -> None:
        self.source = source

    def collect(self, group_names: Iterable[str]) -> List[Coordinate]:
        """Collect coordinates of the requested groups.

        Groups are visited in the source's own order. Duplicates across
        groups keep their first-seen position.

        Args:
            group_names: Names of the groups to analyse.

        Returns:
            List[Coordinate]: Ordered, deduplicated coordinates.
        """
        requested = set(group_names)
        if not requested:
            return []

        available = self.source.group_names()
        for name in sorted(requested.difference(available)):
            logger.debug("Dependency group %s does not exist; ignoring", name)

        seen = set()
        collected: List[Coordinate] = []
        for name in available:
            if name not in requested:
                continue
            try:
                coordinates = list(self.source.resolve_group(name))
            except UnresolvableGroupError as exc:
                logger.info("Cannot resolve dependency group %s: %s", name, exc)
                continue
            for coordinate in coordinates:
                if coordinate not in seen:
                    seen.add(coordinate)
                    collected.append(coordinate)

        logger.info(
            "Collected %d coordinate(s) from group(s): %s",
            len(collected),
            ", ".join(n for n in available if n in requested) or "<none>",
        )
        return collected


class PomDependencyGroups(DependencyGroupSource):
    """Dependency groups backed by a project pom.xml, one group per scope."""

    def __init__(self, pom_path: Path, include_optional: bool = True) -> None:
        """Parse the project file.

        Raises:
            ConfigurationError: If the project file is missing or malformed.
        """
        self.pom_path = Path(pom_path)
        self.include_optional = include_optional
        self.project: ProjectModel = parse_project(self.pom_path)

    def group_names(self) -> List[str]:
        return list(MAVEN_SCOPES)

    def resolve_group(self, name: str) -> Iterable[Coordinate]:
        if name not in MAVEN_SCOPES:
            raise UnresolvableGroupError(f"Unknown Maven scope '{name}'")
        if name == "system":
            raise UnresolvableGroupError(
                "system-scoped dependencies are not available from repositories"
            )

        coordinates: List[Coordinate] = []
        for dep in self.project.dependencies:
            if dep.scope != name:
                continue
            if dep.optional and not self.include_optional:
                continue
            version = self.project.version_for(dep)
            if not dep.group_id or not version:
                logger.warning(
                    "Skipping %s:%s in scope %s: version cannot be determined",
                    dep.group_id or "?",
                    dep.artifact_id,
                    name,
                )
                continue
            coordinates.append(Coordinate(dep.group_id, dep.artifact_id, version))
        return coordinates


class StaticDependencyGroups(DependencyGroupSource):
    """Dependency groups given as a mapping of name to coordinate notations."""

    def __init__(self, groups: Mapping[str, Sequence[Union[str, Coordinate]]]) -> None:
        self._groups: Dict[str, List[Union[str, Coordinate]]] = {
            str(name): list(entries) for name, entries in groups.items()
        }

    def group_names(self) -> List[str]:
        return list(self._groups)

    def resolve_group(self, name: str) -> Iterable[Coordinate]:
        entries = self._groups.get(name)
        if entries is None:
            raise UnresolvableGroupError(f"Unknown dependency group '{name}'")
        coordinates: List[Coordinate] = []
        for entry in entries:
            if isinstance(entry, Coordinate):
                coordinates.append(entry)
                continue
            try:
                coordinates.append(Coordinate.parse(str(entry)))
            except ValueError as exc:
                raise UnresolvableGroupError(str(exc)) from exc
        return coordinates


def load_group_manifest(path: Path) -> StaticDependencyGroups:
    """Load a JSON or TOML manifest of ``{group: [coordinates]}``.

    Raises:
        ConfigurationError: If the manifest cannot be read or is not a mapping
            of group names to lists.
    """
    from licenseanalyzer.config.loader import parse_toml

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read manifest {path}: {exc}") from exc

    try:
        if path.suffix.lower() in {".toml", ".tml"}:
            data = parse_toml(text)
        else:
            data = json.loads(text)
    except ValueError as exc:
        raise ConfigurationError(f"Malformed manifest {path}: {exc}") from exc

    groups: Optional[Mapping] = data.get("groups", data) if isinstance(data, dict) else None
    if not isinstance(groups, dict) or not all(
        isinstance(v, list) for v in groups.values()
    ):
        raise ConfigurationError(
            f"Manifest {path} must map group names to lists of coordinates"
        )
    return StaticDependencyGroups(groups)


__all__ = [
    "MAVEN_SCOPES",
    "DependencyGroupSource",
    "CoordinateCollector",
    "PomDependencyGroups",
    "StaticDependencyGroups",
    "load_group_manifest",
]
