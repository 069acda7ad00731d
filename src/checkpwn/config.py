"""
Configuration for the checkpwn client and CLI.

The API key can come from a config file or the environment. Environment
values override the file.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from checkpwn.client import CHECKPWN_USER_AGENT, CheckpwnClient
from checkpwn.errors import MissingApiKeyError


def default_config_path() -> Path:
    """Get default config file path."""
    return Path.home() / ".checkpwn" / "config"


@dataclass
class CheckpwnConfig:
    """checkpwn configuration."""

    api_key: str | None = None
    user_agent: str = CHECKPWN_USER_AGENT

    # Timeouts in seconds
    connect_timeout: float = CheckpwnClient.DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = CheckpwnClient.DEFAULT_READ_TIMEOUT

    # Sleep before each account check (HIBP limit is 1.5s)
    account_delay: float = CheckpwnClient.DEFAULT_ACCOUNT_DELAY

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CheckpwnConfig":
        """Create config from dictionary."""
        return cls(
            api_key=data.get("api_key") or None,
            user_agent=data.get("user_agent", CHECKPWN_USER_AGENT),
            connect_timeout=float(data.get("connect_timeout", CheckpwnClient.DEFAULT_CONNECT_TIMEOUT)),
            read_timeout=float(data.get("read_timeout", CheckpwnClient.DEFAULT_READ_TIMEOUT)),
            account_delay=float(data.get("account_delay", CheckpwnClient.DEFAULT_ACCOUNT_DELAY)),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "CheckpwnConfig":
        """Load configuration from file.

        Supports JSON and simple key=value format.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        content = path.read_text()

        # Try JSON first
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict):
            return cls.from_dict(data)

        # Parse key=value format
        data = {}
        for line in content.split("\n"):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                data[key.strip()] = value.strip().strip('"').strip("'")

        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> "CheckpwnConfig":
        """Create config from environment variables."""
        return cls(
            api_key=os.environ.get("CHECKPWN_API_KEY") or os.environ.get("HIBP_API_KEY"),
            account_delay=float(os.environ.get(
                "CHECKPWN_ACCOUNT_DELAY", CheckpwnClient.DEFAULT_ACCOUNT_DELAY
            )),
            connect_timeout=float(os.environ.get(
                "CHECKPWN_CONNECT_TIMEOUT", CheckpwnClient.DEFAULT_CONNECT_TIMEOUT
            )),
        )

    @classmethod
    def load(cls, path: str | Path | None = None) -> "CheckpwnConfig":
        """Load the config file (if any), then apply environment overrides."""
        path = Path(path) if path else default_config_path()
        config = cls.from_file(path) if path.exists() else cls()

        env = cls.from_env()
        if env.api_key:
            config.api_key = env.api_key
        if "CHECKPWN_ACCOUNT_DELAY" in os.environ:
            config.account_delay = env.account_delay
        if "CHECKPWN_CONNECT_TIMEOUT" in os.environ:
            config.connect_timeout = env.connect_timeout

        return config

    def save(self, path: str | Path | None = None) -> Path:
        """Write the config in key=value format, readable by the owner only."""
        path = Path(path) if path else default_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)

        lines = [
            "# checkpwn configuration",
            f"api_key={self.api_key or ''}",
            f"account_delay={self.account_delay}",
            f"connect_timeout={self.connect_timeout}",
            f"read_timeout={self.read_timeout}",
        ]
        # Created owner-only; chmod covers files that already existed
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w") as f:
            f.write("\n".join(lines) + "\n")
        return path

    def require_api_key(self) -> str:
        """Return the API key.

        Raises:
            MissingApiKeyError: If no API key is configured
        """
        if not self.api_key:
            raise MissingApiKeyError()
        return self.api_key

    def create_client(self) -> CheckpwnClient:
        """Build a client from this configuration."""
        return CheckpwnClient(
            api_key=self.api_key,
            user_agent=self.user_agent,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            account_delay=self.account_delay,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "api_key": "***" if self.api_key else "",
            "user_agent": self.user_agent,
            "connect_timeout": self.connect_timeout,
            "read_timeout": self.read_timeout,
            "account_delay": self.account_delay,
        }
