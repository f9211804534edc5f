"""
Static build and job configuration loaded from JSON files.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from interactor.core.exceptions import ConfigurationError
from interactor.core.logging import get_logger

logger = get_logger(__name__)


class BuildDefinition(BaseModel):
    """A TeamCity build type and the names it can be requested by."""

    model_config = ConfigDict(frozen=True)

    id: str
    names: frozenset[str]

    def matches(self, request_id: str) -> bool:
        return any(name.casefold() == request_id.casefold() for name in self.names)


class Exclusion(BaseModel):
    """Project and build type ids skipped while walking a project tree."""

    model_config = ConfigDict(frozen=True)

    projects: frozenset[str] = frozenset()
    builds: frozenset[str] = frozenset()


class ProjectRef(BaseModel):
    """A TeamCity project id (or `%s` template) with its exclusions."""

    model_config = ConfigDict(frozen=True)

    id: str
    exclusion: Exclusion = Field(default_factory=Exclusion)

    @property
    def is_excluded(self) -> bool:
        return self.id in self.exclusion.projects

    def substitute(self, value: str) -> ProjectRef:
        """Return a copy with `value` put into the id template."""
        if "%s" not in self.id:
            return self
        return self.model_copy(update={"id": self.id % value})


class ProjectGroup(BaseModel):
    """Named set of TeamCity project roots reported together."""

    model_config = ConfigDict(frozen=True)

    # Kept in file order: regex aliases are tried in this order.
    names: tuple[str, ...]
    projects: tuple[ProjectRef, ...] = ()

    def matches(self, request_id: str) -> bool:
        return any(name.casefold() == request_id.casefold() for name in self.names)

    def patterns(self) -> list[re.Pattern]:
        """Aliases that compile to a regex with exactly one capture group."""
        result = []
        for name in self.names:
            try:
                pattern = re.compile(name, re.IGNORECASE)
            except re.error:
                continue
            if pattern.groups == 1:
                result.append(pattern)
        return result


class BuildConfig(BaseModel):
    """Contents of the build configuration file."""

    model_config = ConfigDict(frozen=True)

    groups: tuple[ProjectGroup, ...] = ()
    builds: tuple[BuildDefinition, ...] = ()

    def duplicate_names(self) -> tuple[set[str], set[str]]:
        """Aliases claimed by more than one build definition / project group."""
        return (
            _duplicates(name for build in self.builds for name in build.names),
            _duplicates(name for group in self.groups for name in set(group.names)),
        )


class Job(BaseModel):
    """Schedule of one periodic job, in milliseconds."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    initial_delay: int = Field(default=0, alias="initialDelay", ge=0)
    period: int = Field(gt=0)


class JobConfig(BaseModel):
    """Contents of the job configuration file."""

    model_config = ConfigDict(frozen=True)

    jobs: tuple[Job, ...] = ()

    def get(self, name: str) -> Job | None:
        return next((job for job in self.jobs if job.name == name), None)


def _duplicates(names) -> set[str]:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for name in names:
        key = name.casefold()
        if key in seen:
            duplicates.add(name)
        seen.add(key)
    return duplicates


def _read_json(path: str | Path) -> object:
    try:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Failed to read {path}: {exc}") from exc


def load_build_config(path: str | Path) -> BuildConfig:
    """
    Load the build configuration file.

    Aliases shared between definitions (or groups) are logged; the first
    configured match wins at resolution time.

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    try:
        config = BuildConfig.model_validate(_read_json(path))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid build config {path}: {exc}") from exc

    build_duplicates, group_duplicates = config.duplicate_names()
    if build_duplicates:
        logger.warning("Build names claimed by several builds, first one wins: %s", sorted(build_duplicates))
    if group_duplicates:
        logger.warning("Group names claimed by several groups, first one wins: %s", sorted(group_duplicates))

    logger.info("Loaded %d builds and %d groups from %s", len(config.builds), len(config.groups), path)
    return config


def load_job_config(path: str | Path) -> JobConfig:
    """
    Load the job schedule file.

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    try:
        return JobConfig.model_validate(_read_json(path))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid job config {path}: {exc}") from exc
