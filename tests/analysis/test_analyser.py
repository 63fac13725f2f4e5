"""End-to-end analysis over an in-memory repository."""

from __future__ import annotations

from licenseanalyzer.analysis.analyser import LicenseAnalyser, build_retriever
from licenseanalyzer.analysis.collector import StaticDependencyGroups
from licenseanalyzer.analysis.license_resolver import ResolutionStatus
from licenseanalyzer.config.schema import AnalyserConfig
from licenseanalyzer.core.models import Coordinate, Dependency, License
from licenseanalyzer.retrieval.maven import MavenRepositoryRetriever


def _populate(retriever, pom) -> None:
    retriever.add("org.shared:parent:5", pom(group="org.shared", artifact="parent", licenses=[("EPL-2.0", "e")]))
    retriever.add("org.shared:one:1", pom(group="org.shared", artifact="one", parent="org.shared:parent:5"))
    retriever.add("org.shared:two:1", pom(group="org.shared", artifact="two", parent="org.shared:parent:5"))


def test_analyse_shares_parent_through_run_cache(retriever, pom) -> None:
    """A parent shared by several children is fetched once per run."""
    _populate(retriever, pom)
    source = StaticDependencyGroups(
        {"compile": ["org.shared:two:1", "org.shared:one:1"], "test": ["org.missing:x:1"]}
    )
    analyser = LicenseAnalyser(source, retriever, AnalyserConfig())

    rows = analyser.analyse(["compile"])

    assert rows == [
        Dependency("org.shared:one:1", (License("EPL-2.0", "e"),)),
        Dependency("org.shared:two:1", (License("EPL-2.0", "e"),)),
    ]
    assert retriever.calls.count(Coordinate.parse("org.shared:parent:5")) == 1
    assert len(retriever.calls) == 3
    assert analyser.status_counts() == {ResolutionStatus.INHERITED: 2}


def test_analyse_without_cache_matches_cached_output(retriever, pom) -> None:
    _populate(retriever, pom)
    source = StaticDependencyGroups({"compile": ["org.shared:one:1", "org.shared:two:1"]})

    cached = LicenseAnalyser(source, retriever, AnalyserConfig()).analyse()
    uncached = LicenseAnalyser(
        source, retriever, AnalyserConfig(enable_caching=False)
    ).analyse()

    assert cached == uncached


def test_analyse_uses_configured_groups_by_default(retriever, pom) -> None:
    _populate(retriever, pom)
    source = StaticDependencyGroups(
        {"compile": ["org.shared:one:1"], "runtime": ["org.shared:two:1"], "test": ["t:t:1"]}
    )
    rows = LicenseAnalyser(source, retriever).analyse()
    assert [r.id for r in rows] == ["org.shared:one:1", "org.shared:two:1"]


def test_analyse_records_failures(retriever, pom) -> None:
    source = StaticDependencyGroups({"compile": ["org.missing:x:1"]})
    analyser = LicenseAnalyser(source, retriever)

    rows = analyser.analyse()

    assert rows == [Dependency("org.missing:x:1", ())]
    assert analyser.status_counts() == {ResolutionStatus.RETRIEVAL_FAILED: 1}


def test_build_retriever_from_config(tmp_path) -> None:
    config = AnalyserConfig(
        local_repositories=[str(tmp_path / "m2")],
        repositories=[{"name": "central", "url": "https://repo.example.org/maven2/"}],
        cache_dir=str(tmp_path / "cache"),
        fetch_timeout=5,
    )
    retriever = build_retriever(config)
    assert isinstance(retriever, MavenRepositoryRetriever)
    assert retriever.remote_repositories == ["https://repo.example.org/maven2"]
    assert retriever.local_repositories == [tmp_path / "m2"]
    assert retriever.timeout == 5
