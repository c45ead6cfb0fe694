"""Configuration management for fedoractl.

Supports YAML profiles and environment variable overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from fedoractl.core.exceptions import ConfigurationError, ProfileNotFoundError

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "fedoractl"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_TIMEOUT = 30

# Keys handed to the HTTP client; anything else in a profile stays local
VALID_CLIENT_OPTIONS = (
    "user",
    "password",
    "timeout",
    "open_timeout",
    "ssl_client_cert",
    "ssl_client_key",
)

# Environment variable names
ENV_URL = "FEDORA_URL"
ENV_USER = "FEDORA_USER"
ENV_PASS = "FEDORA_PASSWORD"
ENV_PROFILE = "FEDORA_PROFILE"
ENV_VERIFY_SSL = "FEDORA_VERIFY_SSL"
ENV_TIMEOUT = "FEDORA_TIMEOUT"


# =============================================================================
# Profile
# =============================================================================


@dataclass
class Profile:
    """Configuration profile for a Fedora repository."""

    url: str
    user: Optional[str] = None
    password: Optional[str] = None
    timeout: int = DEFAULT_TIMEOUT
    open_timeout: Optional[int] = None
    ssl_client_cert: Optional[str] = None
    ssl_client_key: Optional[str] = None
    verify_ssl: bool = True
    validate_checksum: bool = False

    def client_options(self) -> dict[str, Any]:
        """Options accepted by the HTTP client.

        ``open_timeout`` falls back to ``timeout``.
        """
        options = {key: getattr(self, key) for key in VALID_CLIENT_OPTIONS}
        if options["open_timeout"] is None:
            options["open_timeout"] = options["timeout"]
        return {key: value for key, value in options.items() if value is not None}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization (password excluded)."""
        data: dict[str, Any] = {
            "url": self.url,
            "verify_ssl": self.verify_ssl,
            "timeout": self.timeout,
            "validate_checksum": self.validate_checksum,
        }
        for key in ("user", "open_timeout", "ssl_client_cert", "ssl_client_key"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        return cls(
            url=data.get("url", ""),
            user=data.get("user"),
            password=data.get("password"),
            timeout=data.get("timeout", DEFAULT_TIMEOUT),
            open_timeout=data.get("open_timeout"),
            ssl_client_cert=data.get("ssl_client_cert"),
            ssl_client_key=data.get("ssl_client_key"),
            verify_ssl=data.get("verify_ssl", True),
            validate_checksum=data.get("validate_checksum", False),
        )


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """Application configuration."""

    default_profile: str = "default"
    output_format: str = "table"
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load config from file with environment variable overrides.

        Priority (highest to lowest):
        1. Environment variables
        2. Config file
        3. Defaults

        Args:
            config_path: Optional path to config file.

        Returns:
            Loaded configuration.
        """
        path = config_path or CONFIG_FILE
        config = cls()

        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

                config.default_profile = data.get("default_profile", "default")
                config.output_format = data.get("output_format", "table")

                for name, pdata in data.get("profiles", {}).items():
                    config.profiles[name] = Profile.from_dict(pdata)
            except (OSError, yaml.YAMLError, AttributeError) as e:
                raise ConfigurationError(f"Failed to load config: {e}")

        # Environment variable overrides
        if url := os.getenv(ENV_URL):
            verify_ssl = os.getenv(ENV_VERIFY_SSL, "true").lower() in ("true", "1", "yes")
            try:
                timeout = int(os.getenv(ENV_TIMEOUT, str(DEFAULT_TIMEOUT)))
            except ValueError as e:
                raise ConfigurationError(
                    f"{ENV_TIMEOUT} must be an integer", field="timeout"
                ) from e

            config.profiles["default"] = Profile(
                url=url,
                verify_ssl=verify_ssl,
                timeout=timeout,
            )

        for profile in config.profiles.values():
            profile.user = os.getenv(ENV_USER, profile.user)
            profile.password = os.getenv(ENV_PASS, profile.password)

        if profile_name := os.getenv(ENV_PROFILE):
            config.default_profile = profile_name

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save config to file (excludes secrets).

        Args:
            config_path: Optional path to config file.
        """
        path = config_path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "default_profile": self.default_profile,
            "output_format": self.output_format,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Get profile by name or default.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        name = name or self.default_profile
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        return self.profiles[name]

    def has_profile(self, name: str) -> bool:
        """Check if profile exists."""
        return name in self.profiles

    def add_profile(self, name: str, url: str, **settings: Any) -> Profile:
        """Add or update a profile.

        Args:
            name: Profile name.
            url: Repository base URL.
            **settings: Any other ``Profile`` field.

        Returns:
            Created profile.
        """
        profile = Profile(url=url, **settings)
        self.profiles[name] = profile
        return profile

    def set_default_profile(self, name: str) -> None:
        """Set the default profile.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        self.default_profile = name
