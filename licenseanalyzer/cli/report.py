"""CLI command producing a license report for a project."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from licenseanalyzer.analysis.analyser import LicenseAnalyser
from licenseanalyzer.analysis.collector import (
    DependencyGroupSource,
    PomDependencyGroups,
    load_group_manifest,
)
from licenseanalyzer.config.loader import load_config
from licenseanalyzer.core.errors import ConfigurationError
from licenseanalyzer.core.models import Dependency
from licenseanalyzer.export.json import export_json

logger = logging.getLogger("licenseanalyzer.cli.report")


def report_command(args, console: Optional[Console] = None) -> int:
    """Execute the report command.

    Args:
        args: Parsed command-line arguments.
        console: Console for table output (defaults to stdout).

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    console = console or Console()
    try:
        config = load_config(getattr(args, "config", None))
        workers = getattr(args, "workers", None)
        if workers is not None:
            if workers < 1:
                logger.error("--workers must be at least 1")
                return 1
            config = config.model_copy(update={"max_workers": workers})

        source: DependencyGroupSource
        manifest = getattr(args, "manifest", None)
        if manifest:
            source = load_group_manifest(Path(manifest))
        else:
            source = PomDependencyGroups(Path(args.project))

        analyser = LicenseAnalyser.from_config(source, config)
        dependencies = analyser.analyse(getattr(args, "groups", None))
    except ConfigurationError as e:
        logger.error("Report failed: %s", e)
        return 1

    try:
        export_json(dependencies, Path(args.output))
    except OSError as e:
        logger.error("Failed to write report %s: %s", args.output, e)
        return 1

    if not getattr(args, "no_table", False):
        console.print(render_table(dependencies))

    counts = analyser.status_counts()
    failures = sum(n for status, n in counts.items() if status.is_failure)
    missing = sum(1 for dep in dependencies if not dep.licenses)
    console.print(
        f"{len(dependencies)} dependencies, {missing} without license information"
        + (f", {failures} failed to resolve" if failures else "")
    )
    return 0


def render_table(dependencies: List[Dependency]) -> Table:
    """Render report rows as a Rich table."""
    table = Table(title="Dependency licenses", show_lines=False)
    table.add_column("Dependency", style="cyan", no_wrap=True)
    table.add_column("License")
    table.add_column("URL", style="dim")

    for dep in dependencies:
        if not dep.licenses:
            table.add_row(dep.id, "[yellow]unknown[/yellow]", "")
            continue
        for idx, lic in enumerate(dep.licenses):
            table.add_row(dep.id if idx == 0 else "", Text(lic.name), Text(lic.url))
    return table
