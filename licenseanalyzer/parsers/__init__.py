"""Descriptor parsers."""

__all__ = ["pom"]
