"""
Data model for tracked build lifecycle.
"""

from dataclasses import dataclass
from typing import Any

from interactor.models.teamcity import Build


@dataclass(frozen=True)
class TrackedBuild:
    """A build submitted to TeamCity that has not been seen finished yet."""

    build: Build
    response_url: str

    @property
    def build_id(self) -> str:
        return self.build.id

    @property
    def build_type_id(self) -> str:
        return self.build.build_type.id

    def to_dict(self) -> dict[str, Any]:
        return {**self.build.to_dict(), "responseUrl": self.response_url}
