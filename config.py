"""
Test-suite configuration module.

This module defines configuration classes for the environments the
automation API suite runs against (live remote host, local stub).
Configuration values are loaded from environment variables with
sensible defaults.
"""

from __future__ import annotations

import os

from automation_client.auth import Credentials


def _optional_float(name: str, default: str | None = None) -> float | None:
    """Read a float from the environment, treating blank values as unset."""
    value = os.environ.get(name, default)
    if value is None or not value.strip():
        return None
    return float(value)


class Config:
    """Base configuration with default settings."""

    # Root of the service under test; resource URLs hang off /api/automation.
    API_BASE_URL: str = os.environ.get(
        "API_BASE_URL",
        "https://mobilewebserver9-pokertest8ext.installprogram.eu/TestApi",
    )

    API_USERNAME: str = os.environ.get("API_USERNAME", "testName1")
    API_PASSWORD: str = os.environ.get("API_PASSWORD", "test")
    API_GRANT_TYPE: str = os.environ.get("API_GRANT_TYPE", "password")

    # None keeps the transport default (block until the server answers).
    REQUEST_TIMEOUT: float | None = _optional_float("API_REQUEST_TIMEOUT")

    @classmethod
    def credentials(cls) -> Credentials:
        """Build the credentials submitted to the token endpoint."""
        return Credentials(
            username=cls.API_USERNAME,
            password=cls.API_PASSWORD,
            grant_type=cls.API_GRANT_TYPE,
        )


class LiveConfig(Config):
    """Configuration for runs against the remote automation API."""

    DEBUG: bool = False
    TESTING: bool = False


class TestingConfig(Config):
    """Configuration for runs against the in-process stub API."""

    DEBUG: bool = True
    TESTING: bool = True

    REQUEST_TIMEOUT: float | None = _optional_float("TEST_API_REQUEST_TIMEOUT", "5")

    # Port 0 lets the OS pick a free port for the stub server.
    STUB_HOST: str = os.environ.get("STUB_HOST", "127.0.0.1")
    STUB_PORT: int = int(os.environ.get("STUB_PORT", "0"))

    # Stub-only settings: HS256 signing key and token lifetime.
    STUB_SECRET_KEY: str = os.environ.get(
        "STUB_SECRET_KEY", "stub-secret-key-for-local-tests-123456"
    )
    STUB_TOKEN_EXPIRY_SECONDS: int = int(os.environ.get("STUB_TOKEN_EXPIRY_SECONDS", "3600"))


# Configuration mapping for easy access
config = {
    "live": LiveConfig,
    "testing": TestingConfig,
    "default": TestingConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (live, testing).
             If None, uses API_TEST_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("API_TEST_ENV", "testing")
    return config.get(env, config["default"])
