"""
TeamCity REST resources and request bodies.
"""

from dataclasses import dataclass, field
from typing import Any

import xmltodict


def _field(node: dict[str, Any], name: str) -> Any:
    """Read a value given either as an XML attribute or a child element."""
    if f"@{name}" in node:
        return node[f"@{name}"]
    return node.get(name)


def _as_list(value: Any) -> list[dict[str, Any]]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass(frozen=True)
class BuildType:
    """TeamCity build configuration reference."""

    id: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class Build:
    """Snapshot of a TeamCity build as reported by the server."""

    build_type: BuildType
    id: str
    number: str | None
    state: str
    status: str | None = None

    @classmethod
    def from_xml(cls, body: str | bytes) -> "Build":
        node = xmltodict.parse(body)["build"]
        build_type = node.get("buildType") or {}
        return cls(
            build_type=BuildType(
                id=_field(build_type, "id") or _field(node, "buildTypeId"),
                name=_field(build_type, "name"),
            ),
            id=_field(node, "id"),
            number=_field(node, "number"),
            state=_field(node, "state"),
            status=_field(node, "status"),
        )

    def with_state(self, state: str) -> "Build":
        """Return a copy with another lifecycle state."""
        return Build(self.build_type, self.id, self.number, state, self.status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "buildTypeId": self.build_type.id,
            "buildTypeName": self.build_type.name,
            "buildId": self.id,
            "number": self.number,
            "state": self.state,
            "status": self.status,
        }


@dataclass(frozen=True)
class Project:
    """TeamCity project: owned build types and direct sub-projects."""

    id: str
    build_type_ids: list[str] = field(default_factory=list)
    project_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_xml(cls, body: str | bytes) -> "Project":
        node = xmltodict.parse(body)["project"]
        build_types = node.get("buildTypes") or {}
        projects = node.get("projects") or {}
        return cls(
            id=_field(node, "id"),
            build_type_ids=[_field(item, "id") for item in _as_list(build_types.get("buildType"))],
            project_ids=[_field(item, "id") for item in _as_list(projects.get("project"))],
        )


def build_request_xml(build_type_id: str) -> str:
    """Body of a build queue submission."""
    return xmltodict.unparse({"build": {"buildType": {"@id": build_type_id}}}, full_document=False)


def cancel_request_xml(comment: str = "Build cancelled by the user", readd_into_queue: bool = False) -> str:
    """Body of a queued or running build cancellation."""
    return xmltodict.unparse(
        {
            "buildCancelRequest": {
                "@comment": comment,
                "@readdIntoQueue": "true" if readd_into_queue else "false",
            }
        },
        full_document=False,
    )
