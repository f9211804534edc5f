"""TeamCity interactor: bridges build server requests to TeamCity."""

__version__ = "1.0.0"
