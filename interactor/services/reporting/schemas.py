"""
Slack-style block messages posted to response URLs.
"""

from dataclasses import dataclass, field
from typing import Any

from interactor.models.status import BuildStatus


@dataclass(frozen=True)
class ReportingMessage:
    """A markdown section with the status icon as accessory."""

    text: str
    status: BuildStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "section",
            "text": {"type": "mrkdwn", "text": self.text},
            "accessory": {
                "type": "image",
                "image_url": self.status.image_url,
                "alt_text": self.status.alt_text,
            },
        }


@dataclass(frozen=True)
class Report:
    """Ordered list of message blocks."""

    messages: list[ReportingMessage] = field(default_factory=list)

    @classmethod
    def of(cls, text: str, status: BuildStatus) -> "Report":
        """Create a single-message report."""
        return cls([ReportingMessage(text, status)])

    def to_dict(self) -> dict[str, Any]:
        return {"blocks": [message.to_dict() for message in self.messages]}
