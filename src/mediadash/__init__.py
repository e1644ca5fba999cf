"""mediadash - Dashboard integrations for self-hosted media services."""

__version__ = "0.1.0"
