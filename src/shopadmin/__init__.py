"""Shop Admin Service - back-office maintenance API."""

__version__ = "0.1.0"
