"""Pydantic models for plugin configuration."""

from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_validator


class GitReference(BaseModel):
    """A git tag name or commit SHA pinning a remote plugin revision."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["tag", "sha"]
    value: str = Field(min_length=1)

    @classmethod
    def tag(cls, name: str) -> "GitReference":
        return cls(kind="tag", value=name)

    @classmethod
    def sha(cls, commit: str) -> "GitReference":
        return cls(kind="sha", value=commit)

    def __str__(self) -> str:
        return self.value


class LocalPluginLocation(BaseModel):
    """A plugin that lives in a directory on the local filesystem."""

    model_config = ConfigDict(frozen=True)

    type: Literal["local"] = "local"
    path: Path


class GitPluginLocation(BaseModel):
    """A plugin fetched from a git repository at a pinned revision.

    ``directory`` points at the plugin root inside the repository and
    ``release_url`` at an optional pre-built zip bundle. Neither takes
    part in the cache key, which is derived from ``url`` and
    ``reference`` only.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["git"] = "git"
    url: str = Field(min_length=1)
    reference: GitReference
    directory: str | None = None
    release_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, data: Any) -> Any:
        # Accepts {git: <url>, tag: <name>} and {git: <url>, sha: <commit>}
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "git" in data and "url" not in data:
            data["url"] = data.pop("git")
        if "reference" not in data:
            for kind in ("tag", "sha"):
                if kind in data:
                    data["reference"] = {"kind": kind, "value": data.pop(kind)}
                    break
        return data


def _location_kind(value: Any) -> str | None:
    if isinstance(value, dict):
        if "type" in value:
            return value["type"]
        if "git" in value or "url" in value:
            return "git"
        if "path" in value:
            return "local"
        return None
    return getattr(value, "type", None)


PluginLocation = Annotated[
    Union[
        Annotated[LocalPluginLocation, Tag("local")],
        Annotated[GitPluginLocation, Tag("git")],
    ],
    Discriminator(_location_kind),
]


class PluginsConfig(BaseModel):
    """Project-level plugin configuration."""

    plugins: list[PluginLocation] = Field(default_factory=list)
    cache_dir: Path | None = None  # None = PLUMB_CACHE_DIR / XDG default

    @property
    def git_locations(self) -> list[GitPluginLocation]:
        return [p for p in self.plugins if isinstance(p, GitPluginLocation)]
