"""
Custom application exceptions.
"""


class InteractorError(Exception):
    """Base exception for interactor errors."""
    pass


class ConfigurationError(InteractorError):
    """Static configuration could not be loaded."""
    pass


class UnknownBuildStatusError(InteractorError):
    """TeamCity reported a state/status pair that cannot be classified."""
    pass


class APIError(InteractorError):
    """External API call failed."""
    pass


class BuildServerAPIError(APIError):
    """Build server API call failed."""
    pass


class TeamCityAPIError(APIError):
    """TeamCity API call failed."""
    pass


class TeamCityNotFoundError(TeamCityAPIError):
    """TeamCity answered 404 for the requested resource."""
    pass


class ReportingAPIError(APIError):
    """Posting a report to the response URL failed."""
    pass
