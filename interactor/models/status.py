"""
Display statuses for TeamCity builds and the classifier that produces them.
"""

from enum import Enum

from interactor.core.exceptions import UnknownBuildStatusError

_ICONS = "https://cdn0.iconfinder.com/data/icons/social-messaging-ui-color-shapes/128"


class BuildStatus(Enum):
    """Closed set of statuses shown in notifications."""

    QUEUED = (
        "queued",
        "https://cdn1.iconfinder.com/data/icons/company-business-people-1/32/busibess_people-40-512.png",
        "Queued",
    )
    RUNNING = (
        "running",
        "https://cdn3.iconfinder.com/data/icons/living/24/254_running_activity_fitness-512.png",
        "Running",
    )
    SUCCESS = (
        "finished successfully",
        f"{_ICONS}/check-circle-green-512.png",
        "Success",
    )
    FAILURE = (
        "failed",
        f"{_ICONS}/close-circle-red-512.png",
        "Failure",
    )
    CANCELLED = (
        "cancelled",
        "https://cdn3.iconfinder.com/data/icons/cleaning-icons/512/Dumpster-512.png",
        "Cancelled",
    )
    NOT_FOUND = (
        "not found",
        "https://cdn3.iconfinder.com/data/icons/network-and-communications-8/32/"
        "network_Error_lost_no_page_not_found-512.png",
        "Not Found",
    )

    def __init__(self, label: str, image_url: str, alt_text: str):
        self.label = label
        self.image_url = image_url
        self.alt_text = alt_text


def classify(state: str, status: str | None) -> BuildStatus:
    """
    Map a TeamCity (state, status) pair to a display status.

    Args:
        state: Build lifecycle state (queued, running, finished)
        status: Build outcome, only meaningful for finished builds

    Returns:
        The matching BuildStatus; NOT_FOUND is never returned

    Raises:
        UnknownBuildStatusError: If the state is not a TeamCity lifecycle state
    """
    if state == "queued":
        return BuildStatus.QUEUED
    if state == "running":
        return BuildStatus.RUNNING
    if state == "finished":
        if status == "SUCCESS":
            return BuildStatus.SUCCESS
        if status == "FAILURE":
            return BuildStatus.FAILURE
        return BuildStatus.CANCELLED
    raise UnknownBuildStatusError(f"Cannot classify build state {state!r} with status {status!r}")
