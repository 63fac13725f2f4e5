"""License analysis for one project run.

Wires the collector, the descriptor retriever (memoized for the run),
the license resolver and the aggregator together.
"""

from __future__ import annotations

import logging
from collections import Counter
from functools import partial
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from licenseanalyzer.analysis.aggregator import resolve_all, to_rows
from licenseanalyzer.analysis.collector import CoordinateCollector, DependencyGroupSource
from licenseanalyzer.analysis.license_resolver import (
    LicenseResolution,
    ResolutionStatus,
    resolve_coordinate,
)
from licenseanalyzer.config.schema import AnalyserConfig
from licenseanalyzer.core.models import Coordinate, Dependency
from licenseanalyzer.retrieval.base import DescriptorRetriever
from licenseanalyzer.retrieval.cache import CachingRetriever
from licenseanalyzer.retrieval.maven import MavenRepositoryRetriever

logger = logging.getLogger("licenseanalyzer.analysis.analyser")


def build_retriever(config: AnalyserConfig) -> DescriptorRetriever:
    """Create the repository retriever described by a configuration."""
    return MavenRepositoryRetriever(
        local_repositories=[Path(p) for p in config.local_repositories],
        remote_repositories=[repo.url for repo in config.repositories],
        cache_dir=Path(config.cache_dir) if config.cache_dir else None,
        timeout=config.fetch_timeout,
    )


class LicenseAnalyser:
    """Determine the licenses of every dependency in the requested groups."""

    def __init__(
        self,
        source: DependencyGroupSource,
        retriever: DescriptorRetriever,
        config: Optional[AnalyserConfig] = None,
    ) -> None:
        self.config = config or AnalyserConfig.default()
        self.collector = CoordinateCollector(source)
        self.retriever = retriever
        self.last_resolutions: Dict[Coordinate, LicenseResolution] = {}

    @classmethod
    def from_config(
        cls, source: DependencyGroupSource, config: Optional[AnalyserConfig] = None
    ) -> "LicenseAnalyser":
        config = config or AnalyserConfig.default()
        return cls(source, build_retriever(config), config)

    def analyse(self, group_names: Optional[Iterable[str]] = None) -> List[Dependency]:
        """Run the analysis.

        Args:
            group_names: Groups to analyse; defaults to ``config.groups``.

        Returns:
            List[Dependency]: One row per coordinate, sorted by id.
        """
        groups = list(group_names) if group_names is not None else list(self.config.groups)
        coordinates = self.collector.collect(groups)

        retriever = self.retriever
        if self.config.enable_caching and not isinstance(retriever, CachingRetriever):
            retriever = CachingRetriever(retriever)

        resolve_fn = partial(
            resolve_coordinate,
            retriever=retriever,
            overrides=self.config.override_map(),
            max_depth=self.config.max_parent_depth,
        )
        self.last_resolutions = resolve_all(
            coordinates, resolve_fn, max_workers=self.config.max_workers
        )

        if isinstance(retriever, CachingRetriever):
            logger.debug(
                "Descriptor cache: %d hit(s), %d miss(es)", retriever.hits, retriever.misses
            )

        summary = self.status_counts()
        logger.info(
            "Analysed %d dependencies (%s)",
            len(self.last_resolutions),
            ", ".join(f"{k.value}={v}" for k, v in sorted(summary.items(), key=lambda i: i[0].value)),
        )
        return to_rows(self.last_resolutions)

    def status_counts(self) -> Dict[ResolutionStatus, int]:
        """Count resolution statuses of the last run."""
        return dict(Counter(r.status for r in self.last_resolutions.values()))


__all__ = ["LicenseAnalyser", "build_retriever"]
