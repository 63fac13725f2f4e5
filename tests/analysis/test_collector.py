"""Coordinate collection from dependency groups."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List

import pytest

from licenseanalyzer.analysis.collector import (
    CoordinateCollector,
    DependencyGroupSource,
    PomDependencyGroups,
    StaticDependencyGroups,
    load_group_manifest,
)
from licenseanalyzer.core.errors import ConfigurationError, UnresolvableGroupError
from licenseanalyzer.core.models import Coordinate


def _c(notation: str) -> Coordinate:
    return Coordinate.parse(notation)


class _BrokenSource(DependencyGroupSource):
    def group_names(self) -> List[str]:
        return ["compile", "broken"]

    def resolve_group(self, name: str) -> Iterable[Coordinate]:
        if name == "broken":
            raise UnresolvableGroupError("cannot materialize")
        return [_c("a:a:1")]


def test_collect_empty_request_returns_empty() -> None:
    source = StaticDependencyGroups({"compile": ["a:a:1"]})
    assert CoordinateCollector(source).collect([]) == []


def test_collect_dedupes_preserving_first_seen_order() -> None:
    source = StaticDependencyGroups(
        {
            "compile": ["b:b:1", "a:a:1"],
            "runtime": ["a:a:1", "c:c:1", "b:b:1"],
        }
    )
    collected = CoordinateCollector(source).collect({"runtime", "compile"})
    assert collected == [_c("b:b:1"), _c("a:a:1"), _c("c:c:1")]


def test_collect_ignores_unknown_and_unresolvable_groups() -> None:
    collected = CoordinateCollector(_BrokenSource()).collect(["compile", "broken", "nope"])
    assert collected == [_c("a:a:1")]


def test_static_groups_invalid_entry_makes_group_unresolvable() -> None:
    source = StaticDependencyGroups({"compile": ["not-a-coordinate"], "runtime": ["r:r:1"]})
    assert CoordinateCollector(source).collect(["compile", "runtime"]) == [_c("r:r:1")]


def test_pom_groups_by_scope(tmp_path: Path) -> None:
    pom_path = tmp_path / "pom.xml"
    pom_path.write_text(
        """
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <groupId>com.example</groupId>
  <artifactId>demo</artifactId>
  <version>1.0.0</version>
  <dependencies>
    <dependency>
      <groupId>org.sample</groupId>
      <artifactId>lib</artifactId>
      <version>0.1.0</version>
    </dependency>
    <dependency>
      <groupId>org.sample</groupId>
      <artifactId>rt</artifactId>
      <version>2.0</version>
      <scope>runtime</scope>
    </dependency>
    <dependency>
      <groupId>junit</groupId>
      <artifactId>junit</artifactId>
      <version>4.13.2</version>
      <scope>test</scope>
    </dependency>
    <dependency>
      <groupId>org.sample</groupId>
      <artifactId>unversioned</artifactId>
    </dependency>
    <dependency>
      <groupId>com.sun</groupId>
      <artifactId>tools</artifactId>
      <version>1.8</version>
      <scope>system</scope>
    </dependency>
  </dependencies>
</project>
""",
        encoding="utf-8",
    )

    source = PomDependencyGroups(pom_path)
    collector = CoordinateCollector(source)

    assert collector.collect(["compile", "runtime"]) == [
        _c("org.sample:lib:0.1.0"),
        _c("org.sample:rt:2.0"),
    ]
    assert collector.collect(["test"]) == [_c("junit:junit:4.13.2")]
    assert collector.collect(["system"]) == []
    with pytest.raises(UnresolvableGroupError):
        source.resolve_group("system")


def test_pom_groups_exclude_optional(tmp_path: Path) -> None:
    pom_path = tmp_path / "pom.xml"
    pom_path.write_text(
        "<project><artifactId>a</artifactId><dependencies>"
        "<dependency><groupId>g</groupId><artifactId>opt</artifactId><version>1</version>"
        "<optional>true</optional></dependency>"
        "</dependencies></project>",
        encoding="utf-8",
    )
    assert list(PomDependencyGroups(pom_path, include_optional=False).resolve_group("compile")) == []
    assert list(PomDependencyGroups(pom_path).resolve_group("compile")) == [_c("g:opt:1")]


def test_pom_groups_missing_project_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        PomDependencyGroups(tmp_path / "pom.xml")


def test_load_group_manifest_json(tmp_path: Path) -> None:
    manifest = tmp_path / "deps.json"
    manifest.write_text(json.dumps({"groups": {"compile": ["a:a:1"]}}), encoding="utf-8")
    source = load_group_manifest(manifest)
    assert source.group_names() == ["compile"]
    assert list(source.resolve_group("compile")) == [_c("a:a:1")]


def test_load_group_manifest_toml(tmp_path: Path) -> None:
    manifest = tmp_path / "deps.toml"
    manifest.write_text('compile = ["a:a:1"]\nruntime = ["b:b:2"]\n', encoding="utf-8")
    source = load_group_manifest(manifest)
    assert source.group_names() == ["compile", "runtime"]


@pytest.mark.parametrize("content", ["[1, 2]", '{"compile": "a:a:1"}', "{not json"])
def test_load_group_manifest_rejects_bad_shape(tmp_path: Path, content: str) -> None:
    manifest = tmp_path / "deps.json"
    manifest.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_group_manifest(manifest)
