"""License analysis components."""

__all__ = [
    "collector",
    "license_resolver",
    "aggregator",
    "analyser",
]
