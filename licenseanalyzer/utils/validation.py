"""Input validation utilities for security and correctness."""

import logging
from pathlib import Path
from urllib.parse import urlparse

logger = logging.getLogger("licenseanalyzer.utils.validation")

# Allowed URL schemes for remote repositories
ALLOWED_SCHEMES = {"http", "https"}


def validate_url(url: str) -> bool:
    """Validate a repository URL for safety.

    Checks:
    1. Scheme is allowed.
    2. Does not start with '-' (prevent argument injection).
    3. Has a network location.

    Args:
        url: URL string to validate.

    Returns:
        bool: True if valid, False otherwise.
    """
    if not url:
        return False

    if url.startswith("-"):
        logger.warning("URL starts with '-': %s", url)
        return False

    try:
        parsed = urlparse(url)
    except ValueError as e:
        logger.warning("Failed to parse URL %s: %s", url, e)
        return False

    if parsed.scheme not in ALLOWED_SCHEMES:
        logger.warning("URL scheme not allowed: %s", parsed.scheme or "<none>")
        return False

    if not parsed.netloc:
        logger.warning("URL has no host: %s", url)
        return False

    return True


def validate_safe_path(path: str | Path, base_dir: Path) -> bool:
    """Validate that a path resolves to a location inside the base directory.

    Prevents path traversal through crafted coordinate segments.

    Args:
        path: Path to check (relative paths are joined to base_dir).
        base_dir: Directory the path must stay inside.

    Returns:
        bool: True if the resolved path is inside base_dir.
    """
    base = base_dir.resolve()
    target = Path(path)
    if not target.is_absolute():
        target = base / target
    try:
        target.resolve().relative_to(base)
    except ValueError:
        logger.warning("Path escapes base directory %s: %s", base, path)
        return False
    return True
