"""Coordinate, License and Dependency value semantics."""

from __future__ import annotations

import pytest

from licenseanalyzer.core.models import Coordinate, Dependency, License, sort_dependencies


def test_coordinate_parse_and_display_id() -> None:
    """Canonical notation round-trips through display_id."""
    coordinate = Coordinate.parse("com.example:lib:1.0")
    assert coordinate == Coordinate("com.example", "lib", "1.0")
    assert coordinate.display_id == "com.example:lib:1.0"
    assert str(coordinate) == "com.example:lib:1.0"


def test_coordinate_parse_strips_artifact_type_suffix() -> None:
    """Dependency notation with @pom is accepted."""
    assert Coordinate.parse("org.x:y:2.0@pom") == Coordinate("org.x", "y", "2.0")


@pytest.mark.parametrize("notation", ["", "a:b", "a::c", "a:b:c:d", ":b:c"])
def test_coordinate_parse_rejects_invalid(notation: str) -> None:
    with pytest.raises(ValueError):
        Coordinate.parse(notation)


def test_coordinate_ordering_follows_canonical_string() -> None:
    """Ordering compares the whole canonical string, not field tuples."""
    a = Coordinate("com.a", "z", "1")
    b = Coordinate("com.a.b", "a", "1")
    # "com.a:z:1" > "com.a.b:a:1" because ':' sorts after '.'
    assert sorted([a, b]) == [b, a]
    assert len({a, Coordinate("com.a", "z", "1")}) == 1


def test_license_equality_requires_both_fields() -> None:
    assert License("MIT", "u") == License("MIT", "u")
    assert License("MIT", "u") != License("MIT", "")


def test_sort_dependencies_by_id() -> None:
    rows = [Dependency("b:b:1"), Dependency("a:a:1"), Dependency("a:a:0")]
    assert [r.id for r in sort_dependencies(rows)] == ["a:a:0", "a:a:1", "b:b:1"]


def test_dependency_to_dict() -> None:
    row = Dependency("com.example:lib:1.0", (License("MIT", "https://opensource.org/licenses/MIT"),))
    assert row.to_dict() == {
        "id": "com.example:lib:1.0",
        "licenses": [{"name": "MIT", "url": "https://opensource.org/licenses/MIT"}],
    }
