"""Configuration schema definitions using Pydantic for validation.

Using Pydantic ensures configuration errors are caught early with clear
error messages rather than surfacing halfway through a scan.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from licenseanalyzer.analysis.license_resolver import (
    ANDROID_SUPPORT_GROUP_ID,
    APACHE_LICENSE_NAME,
    APACHE_LICENSE_URL,
    DEFAULT_MAX_PARENT_DEPTH,
)
from licenseanalyzer.core.models import License
from licenseanalyzer.retrieval.maven import GOOGLE_MAVEN, MAVEN_CENTRAL


class RepositoryConfig(BaseModel):
    """A remote Maven-layout repository.

    Attributes:
        name: Display name.
        url: Base URL (http or https).
    """

    name: str
    url: str

    @field_validator("url")
    @classmethod
    def validate_scheme(cls, v: str) -> str:
        """Only http(s) repositories are supported."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Repository URL must be http(s): {v}")
        return v.rstrip("/")


class LicenseOverride(BaseModel):
    """Fixed license for every descriptor of a group.

    Attributes:
        group_id: Descriptor group id the override applies to.
        name: License name.
        url: License URL.
    """

    group_id: str = Field(min_length=1)
    name: str
    url: str = ""

    def to_license(self) -> License:
        return License(name=self.name, url=self.url)


def _default_repositories() -> List[RepositoryConfig]:
    return [
        RepositoryConfig(name="central", url=MAVEN_CENTRAL),
        RepositoryConfig(name="google", url=GOOGLE_MAVEN),
    ]


def _default_overrides() -> List[LicenseOverride]:
    return [
        LicenseOverride(
            group_id=ANDROID_SUPPORT_GROUP_ID,
            name=APACHE_LICENSE_NAME,
            url=APACHE_LICENSE_URL,
        )
    ]


class AnalyserConfig(BaseModel):
    """Top-level configuration for a license analysis run.

    Attributes:
        groups: Dependency groups analysed when none are given explicitly.
        local_repositories: Maven-layout directories searched first.
        repositories: Remote repositories searched in order.
        cache_dir: Directory for downloaded descriptors (None disables it).
        fetch_timeout: Per-request timeout for remote fetches (seconds).
        max_parent_depth: Maximum parent hops per resolution chain.
        max_workers: Coordinates resolved concurrently.
        enable_caching: Memoize descriptors for the duration of a run.
        overrides: Group-wide fixed licenses.
    """

    groups: List[str] = Field(default_factory=lambda: ["compile", "runtime"])
    local_repositories: List[str] = Field(
        default_factory=lambda: ["~/.m2/repository"]
    )
    repositories: List[RepositoryConfig] = Field(default_factory=_default_repositories)
    cache_dir: Optional[str] = None
    fetch_timeout: float = Field(default=30.0, ge=1.0, le=600.0)
    max_parent_depth: int = Field(default=DEFAULT_MAX_PARENT_DEPTH, ge=1, le=256)
    max_workers: int = Field(default=1, ge=1, le=64)
    enable_caching: bool = True
    overrides: List[LicenseOverride] = Field(default_factory=_default_overrides)

    model_config = {"extra": "forbid"}

    @field_validator("overrides")
    @classmethod
    def validate_unique_overrides(cls, v: List[LicenseOverride]) -> List[LicenseOverride]:
        """Each group may be overridden at most once."""
        seen = set()
        for override in v:
            if override.group_id in seen:
                raise ValueError(f"Duplicate override for group '{override.group_id}'")
            seen.add(override.group_id)
        return v

    def override_map(self) -> Dict[str, License]:
        """Return overrides keyed by group id."""
        return {o.group_id: o.to_license() for o in self.overrides}

    @classmethod
    def default(cls) -> "AnalyserConfig":
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalyserConfig":
        """Create configuration from dictionary.

        Raises:
            ValidationError: If configuration is invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()
