"""Aggregation of per-coordinate resolutions into sorted report rows."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List

from licenseanalyzer.analysis.license_resolver import LicenseResolution, ResolutionStatus
from licenseanalyzer.core.errors import RecoverableError
from licenseanalyzer.core.models import Coordinate, Dependency, sort_dependencies

logger = logging.getLogger("licenseanalyzer.analysis.aggregator")

ResolveFn = Callable[[Coordinate], LicenseResolution]


def _safe_resolve(resolve_fn: ResolveFn, coordinate: Coordinate) -> LicenseResolution:
    try:
        return resolve_fn(coordinate)
    except RecoverableError as exc:
        logger.warning("Failed to analyse %s: %s", coordinate, exc)
        return LicenseResolution(
            coordinate,
            status=ResolutionStatus.RETRIEVAL_FAILED,
            reason=str(exc),
            chain=(coordinate,),
        )


def resolve_all(
    coordinates: Iterable[Coordinate],
    resolve_fn: ResolveFn,
    max_workers: int = 1,
) -> Dict[Coordinate, LicenseResolution]:
    """Resolve every distinct coordinate.

    Args:
        coordinates: Coordinates to resolve; duplicates are resolved once.
        resolve_fn: Retriever + resolver composition for one coordinate.
        max_workers: Thread count; 1 resolves sequentially.

    Returns:
        Dict[Coordinate, LicenseResolution]: Results in input order.
    """
    unique = list(dict.fromkeys(coordinates))
    if max_workers <= 1 or len(unique) <= 1:
        return {c: _safe_resolve(resolve_fn, c) for c in unique}

    with ThreadPoolExecutor(
        max_workers=max_workers, thread_name_prefix="license-resolve"
    ) as executor:
        results = list(executor.map(lambda c: _safe_resolve(resolve_fn, c), unique))
    return dict(zip(unique, results))


def to_rows(resolutions: Dict[Coordinate, LicenseResolution]) -> List[Dependency]:
    """Turn resolutions into report rows sorted by display id."""
    rows = [
        Dependency(id=coordinate.display_id, licenses=tuple(resolution.licenses))
        for coordinate, resolution in resolutions.items()
    ]
    return sort_dependencies(rows)


def aggregate(
    coordinates: Iterable[Coordinate],
    resolve_fn: ResolveFn,
    max_workers: int = 1,
) -> List[Dependency]:
    """Resolve coordinates and return one sorted row per coordinate.

    Rows with no license data are kept (empty license list).
    """
    return to_rows(resolve_all(coordinates, resolve_fn, max_workers=max_workers))


__all__ = ["ResolveFn", "resolve_all", "to_rows", "aggregate"]
