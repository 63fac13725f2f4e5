"""JSON export for license reports."""

import json
import logging
from pathlib import Path
from typing import Iterable

from licenseanalyzer.core.models import Dependency

logger = logging.getLogger("licenseanalyzer.export.json")


def export_json(dependencies: Iterable[Dependency], output_path: Path) -> None:
    """Export dependency rows to JSON format.

    Args:
        dependencies: Report rows, already sorted.
        output_path: Output file path.
    """
    logger.info("Exporting license report to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = [dep.to_dict() for dep in dependencies]

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")

    logger.info("JSON export completed: %d dependencies", len(data))
