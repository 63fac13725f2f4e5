"""CLI command resolving the licenses of a single coordinate."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console

from licenseanalyzer.analysis.analyser import build_retriever
from licenseanalyzer.analysis.license_resolver import resolve_coordinate
from licenseanalyzer.config.loader import load_config
from licenseanalyzer.core.errors import ConfigurationError
from licenseanalyzer.core.models import Coordinate

logger = logging.getLogger("licenseanalyzer.cli.resolve")


def resolve_command(args, console: Optional[Console] = None) -> int:
    """Execute the resolve command.

    Returns:
        int: 0 when a license was found, 1 otherwise.
    """
    console = console or Console()
    try:
        coordinate = Coordinate.parse(args.coordinate)
        config = load_config(getattr(args, "config", None))
    except (ValueError, ConfigurationError) as e:
        logger.error("Resolve failed: %s", e)
        return 1

    resolution = resolve_coordinate(
        coordinate,
        build_retriever(config),
        overrides=config.override_map(),
        max_depth=config.max_parent_depth,
    )

    console.print(f"[bold]{coordinate}[/bold] ({resolution.status.value})", highlight=False)
    for lic in resolution.licenses:
        console.print(f"  {lic.name}  {lic.url}", highlight=False, markup=False)
    if len(resolution.chain) > 1:
        console.print(
            "  chain: " + " -> ".join(str(c) for c in resolution.chain),
            highlight=False,
            markup=False,
        )
    if resolution.reason:
        console.print(f"  reason: {resolution.reason}", highlight=False, markup=False)
    return 0 if resolution.found else 1
