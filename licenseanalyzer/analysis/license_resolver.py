"""License resolution over POM parent chains.

Given a descriptor, licenses are determined in priority order:

1. Group override: ecosystems that uniformly omit license metadata get a
   fixed license (by default ``com.android.support`` is Apache 2.0).
2. Direct declaration: the descriptor's own ``licenses`` entries.
3. Parent fallback: retrieve the parent descriptor and start over.
4. Termination: nothing applies, the result is empty.

Every recursive step carries an explicit ``visited`` set and a hop
counter, so malformed or cyclic parent chains terminate. Retrieval and
parse failures are caught at the step where they happen and degrade to
an empty result with a typed status; they never abort a scan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Dict, Mapping, Optional, Tuple

from licenseanalyzer.core.errors import DescriptorParseError, RetrievalError
from licenseanalyzer.core.models import Coordinate, Descriptor, License
from licenseanalyzer.retrieval.base import DescriptorRetriever

logger = logging.getLogger("licenseanalyzer.analysis.license_resolver")

ANDROID_SUPPORT_GROUP_ID = "com.android.support"
APACHE_LICENSE_NAME = "Apache License 2.0"
APACHE_LICENSE_URL = "https://www.apache.org/licenses/LICENSE-2.0.txt"

DEFAULT_OVERRIDES: Dict[str, License] = {
    ANDROID_SUPPORT_GROUP_ID: License(name=APACHE_LICENSE_NAME, url=APACHE_LICENSE_URL),
}
DEFAULT_MAX_PARENT_DEPTH = 32


class ResolutionStatus(Enum):
    """Outcome of resolving licenses for one coordinate."""

    OVERRIDE = "override"
    DECLARED = "declared"
    INHERITED = "inherited"
    NOT_DECLARED = "not_declared"
    CYCLE = "cycle"
    DEPTH_EXCEEDED = "depth_exceeded"
    RETRIEVAL_FAILED = "retrieval_failed"
    MALFORMED = "malformed"

    @property
    def is_failure(self) -> bool:
        return self in (ResolutionStatus.RETRIEVAL_FAILED, ResolutionStatus.MALFORMED)


@dataclass(frozen=True)
class LicenseResolution:
    """Typed result of a license resolution.

    Attributes:
        coordinate: Coordinate the resolution started from (if known).
        licenses: Resolved licenses, empty unless a license was found.
        status: Why resolution ended.
        reason: Human readable detail for non-success statuses.
        chain: Coordinates visited, starting with the original one.
    """

    coordinate: Optional[Coordinate]
    licenses: Tuple[License, ...] = ()
    status: ResolutionStatus = ResolutionStatus.NOT_DECLARED
    reason: Optional[str] = None
    chain: Tuple[Coordinate, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return bool(self.licenses)


def resolve_licenses(
    descriptor: Descriptor,
    retriever: DescriptorRetriever,
    visited: Optional[AbstractSet[Coordinate]] = None,
    *,
    overrides: Mapping[str, License] = DEFAULT_OVERRIDES,
    max_depth: int = DEFAULT_MAX_PARENT_DEPTH,
    coordinate: Optional[Coordinate] = None,
) -> LicenseResolution:
    """Resolve the licenses governing a descriptor.

    Args:
        descriptor: Descriptor to inspect.
        retriever: Retriever used to fetch parent descriptors.
        visited: Coordinates already on the chain. Copied, never mutated.
        overrides: Group id to fixed license.
        max_depth: Maximum number of parent hops.
        coordinate: Coordinate of ``descriptor``, used for logging and in
            the returned chain.

    Returns:
        LicenseResolution: Licenses plus the status explaining the result.
    """
    seen = set(visited or ())
    chain: Tuple[Coordinate, ...] = ()
    if coordinate is not None:
        seen.add(coordinate)
        chain = (coordinate,)
    return _resolve(
        descriptor,
        retriever,
        seen,
        overrides=overrides,
        max_depth=max_depth,
        origin=coordinate,
        chain=chain,
        depth=0,
    )


def _resolve(
    descriptor: Descriptor,
    retriever: DescriptorRetriever,
    visited: set,
    *,
    overrides: Mapping[str, License],
    max_depth: int,
    origin: Optional[Coordinate],
    chain: Tuple[Coordinate, ...],
    depth: int,
) -> LicenseResolution:
    override = overrides.get(descriptor.group_id or "")
    if override is not None:
        return LicenseResolution(
            origin, (override,), ResolutionStatus.OVERRIDE, chain=chain
        )

    if descriptor.licenses:
        status = ResolutionStatus.DECLARED if depth == 0 else ResolutionStatus.INHERITED
        return LicenseResolution(origin, descriptor.licenses, status, chain=chain)

    parent = descriptor.parent
    if parent is None:
        if descriptor.parent_incomplete:
            logger.warning(
                "Failed to analyse %s: incomplete parent reference",
                chain[-1] if chain else "<descriptor>",
            )
            return LicenseResolution(
                origin,
                status=ResolutionStatus.MALFORMED,
                reason="incomplete parent reference",
                chain=chain,
            )
        return LicenseResolution(origin, status=ResolutionStatus.NOT_DECLARED, chain=chain)

    if parent in visited:
        logger.warning("Parent cycle detected at %s (chain: %s)", parent, _format(chain))
        return LicenseResolution(
            origin,
            status=ResolutionStatus.CYCLE,
            reason=f"parent {parent} already visited",
            chain=chain,
        )

    if depth >= max_depth:
        logger.warning(
            "Parent chain of %s exceeds %d hops; giving up at %s",
            origin or "<descriptor>",
            max_depth,
            parent,
        )
        return LicenseResolution(
            origin,
            status=ResolutionStatus.DEPTH_EXCEEDED,
            reason=f"more than {max_depth} parent hops",
            chain=chain,
        )

    visited.add(parent)
    chain = chain + (parent,)
    try:
        parent_descriptor = retriever.resolve(parent)
    except RetrievalError as exc:
        logger.warning("Failed to analyse %s: %s", parent, exc)
        return LicenseResolution(
            origin, status=ResolutionStatus.RETRIEVAL_FAILED, reason=str(exc), chain=chain
        )
    except DescriptorParseError as exc:
        logger.warning("Failed to analyse %s: %s", parent, exc)
        return LicenseResolution(
            origin, status=ResolutionStatus.MALFORMED, reason=str(exc), chain=chain
        )

    return _resolve(
        parent_descriptor,
        retriever,
        visited,
        overrides=overrides,
        max_depth=max_depth,
        origin=origin,
        chain=chain,
        depth=depth + 1,
    )


def resolve_coordinate(
    coordinate: Coordinate,
    retriever: DescriptorRetriever,
    *,
    overrides: Mapping[str, License] = DEFAULT_OVERRIDES,
    max_depth: int = DEFAULT_MAX_PARENT_DEPTH,
) -> LicenseResolution:
    """Retrieve a coordinate's descriptor and resolve its licenses.

    A chain of N parent hops costs N + 1 retrieval calls.
    """
    try:
        descriptor = retriever.resolve(coordinate)
    except RetrievalError as exc:
        logger.warning("Failed to analyse %s: %s", coordinate, exc)
        return LicenseResolution(
            coordinate,
            status=ResolutionStatus.RETRIEVAL_FAILED,
            reason=str(exc),
            chain=(coordinate,),
        )
    except DescriptorParseError as exc:
        logger.warning("Failed to analyse %s: %s", coordinate, exc)
        return LicenseResolution(
            coordinate,
            status=ResolutionStatus.MALFORMED,
            reason=str(exc),
            chain=(coordinate,),
        )

    return resolve_licenses(
        descriptor,
        retriever,
        overrides=overrides,
        max_depth=max_depth,
        coordinate=coordinate,
    )


def _format(chain: Tuple[Coordinate, ...]) -> str:
    return " -> ".join(str(c) for c in chain) or "<empty>"


__all__ = [
    "ANDROID_SUPPORT_GROUP_ID",
    "APACHE_LICENSE_NAME",
    "APACHE_LICENSE_URL",
    "DEFAULT_OVERRIDES",
    "DEFAULT_MAX_PARENT_DEPTH",
    "ResolutionStatus",
    "LicenseResolution",
    "resolve_licenses",
    "resolve_coordinate",
]
