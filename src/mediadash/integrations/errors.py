"""Exceptions shared by dashboard integrations."""


class IntegrationError(Exception):
    """Base class for integration failures."""


class IntegrationInputError(IntegrationError):
    """The caller asked for something the configuration cannot satisfy."""


class AppNotFoundError(IntegrationInputError):
    """No app with the requested id exists in the configuration set."""


class WrongIntegrationError(IntegrationInputError):
    """The app exists but is not configured for the requested integration."""
