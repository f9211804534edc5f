# TeamCity services - REST API integration
from .client import BUILDS_PATH, QUEUE_PATH, TeamCityClient
from interactor.models.teamcity import Build, BuildType, Project

__all__ = ["TeamCityClient", "Build", "BuildType", "Project", "QUEUE_PATH", "BUILDS_PATH"]
