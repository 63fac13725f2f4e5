"""Maven repository descriptor retriever."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import requests

from licenseanalyzer.core.errors import RetrievalError
from licenseanalyzer.core.models import Coordinate
from licenseanalyzer.retrieval.base import DescriptorRetriever
from licenseanalyzer.utils.validation import validate_safe_path, validate_url

logger = logging.getLogger("licenseanalyzer.retrieval.maven")

MAVEN_CENTRAL = "https://repo1.maven.org/maven2"
GOOGLE_MAVEN = "https://maven.google.com"


def pom_relative_path(coordinate: Coordinate) -> str:
    """Return the Maven-layout path of a coordinate's POM."""
    return "/".join(
        [
            coordinate.group.replace(".", "/"),
            coordinate.name,
            coordinate.version,
            f"{coordinate.name}-{coordinate.version}.pom",
        ]
    )


class MavenRepositoryRetriever(DescriptorRetriever):
    """Fetch POM descriptors from local Maven repositories and remote mirrors.

    Local repository directories are searched first, then remote
    repositories in order. A 404 from a remote means "try the next one";
    any other failure is remembered and reported if nothing succeeds.
    """

    NAME = "maven_repository"

    def __init__(
        self,
        local_repositories: Optional[Iterable[Path]] = None,
        remote_repositories: Optional[Iterable[str]] = None,
        cache_dir: Optional[Path] = None,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the retriever.

        Args:
            local_repositories: Maven-layout directories (e.g. ~/.m2/repository).
            remote_repositories: Base URLs of remote repositories.
            cache_dir: Directory where downloaded POMs are stored and reused.
            timeout: Per-request timeout in seconds.
        """
        self.local_repositories: List[Path] = [
            Path(p).expanduser() for p in (local_repositories or [])
        ]
        self.remote_repositories: List[str] = []
        for url in remote_repositories or []:
            if validate_url(url):
                self.remote_repositories.append(url.rstrip("/"))
            else:
                logger.warning("Ignoring invalid repository URL: %s", url)
        self.cache_dir = Path(cache_dir).expanduser() if cache_dir else None
        self.timeout = timeout
        logger.debug(
            "MavenRepositoryRetriever initialized (%d local, %d remote)",
            len(self.local_repositories),
            len(self.remote_repositories),
        )

    def fetch(self, coordinate: Coordinate) -> bytes:
        rel_path = pom_relative_path(coordinate)

        for base in self._file_roots():
            if not validate_safe_path(rel_path, base):
                raise RetrievalError(
                    f"Unsafe coordinate {coordinate}", coordinate=coordinate
                )
            candidate = base / rel_path
            if candidate.is_file():
                try:
                    return candidate.read_bytes()
                except OSError as exc:
                    logger.debug("Failed reading %s: %s", candidate, exc)

        last_error: Optional[BaseException] = None
        for repo in self.remote_repositories:
            url = f"{repo}/{rel_path}"
            try:
                logger.info("Downloading descriptor: %s", url)
                response = requests.get(url, timeout=self.timeout)
                if response.status_code == 404:
                    logger.debug("Not found in %s: %s", repo, coordinate)
                    continue
                response.raise_for_status()
            except requests.RequestException as exc:
                logger.debug("Failed to download %s: %s", url, exc)
                last_error = exc
                continue

            data = response.content
            self._store(rel_path, data)
            return data

        if last_error is not None:
            raise RetrievalError(
                f"Failed to retrieve descriptor for {coordinate}: {last_error}",
                coordinate=coordinate,
                cause=last_error,
            )
        raise RetrievalError(
            f"Descriptor not found for {coordinate}", coordinate=coordinate
        )

    def _file_roots(self) -> List[Path]:
        roots = list(self.local_repositories)
        if self.cache_dir is not None:
            roots.append(self.cache_dir)
        return roots

    def _store(self, rel_path: str, data: bytes) -> None:
        if self.cache_dir is None:
            return
        target = self.cache_dir / rel_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            logger.warning("Failed to cache descriptor at %s: %s", target, exc)


__all__ = [
    "MavenRepositoryRetriever",
    "pom_relative_path",
    "MAVEN_CENTRAL",
    "GOOGLE_MAVEN",
]
