"""Client configuration for anondocs."""

import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional, Union

from anondocs.errors import ConfigurationError
from anondocs.types import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 30.0

# matched with ==; LLMProvider members do not hash like their values
_PROVIDER_VALUES = tuple(p.value for p in LLMProvider)


@dataclass
class ClientConfig:
    """Configuration for :class:`anondocs.AnonDocsClient`.

    Attributes:
        base_url: Server root URL. Trailing slashes are removed.
        default_provider: LLM provider used when a call does not name one.
        timeout: Request timeout in seconds. Streaming calls apply it to
            connecting and sending only, never to waiting for events.
        headers: Extra headers sent with every request.
    """

    base_url: str = DEFAULT_BASE_URL
    default_provider: Optional[Union[LLMProvider, str]] = None
    timeout: float = DEFAULT_TIMEOUT
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.base_url, str):
            self.base_url = self.base_url.rstrip("/")
        if isinstance(self.default_provider, str) and self.default_provider in _PROVIDER_VALUES:
            self.default_provider = LLMProvider(self.default_provider)

    def validate(self) -> "ClientConfig":
        """Check every field and report all problems at once.

        Returns:
            Self for method chaining.

        Raises:
            ConfigurationError: If any field is invalid.
        """
        errors: List[str] = []

        if not isinstance(self.base_url, str) or not self.base_url:
            errors.append("base_url must be a non-empty string")
        elif not self.base_url.startswith(("http://", "https://")):
            errors.append(f"base_url must start with http:// or https:// (got '{self.base_url}')")

        if self.default_provider is not None and self.default_provider not in _PROVIDER_VALUES:
            valid = ", ".join(p.value for p in LLMProvider)
            errors.append(
                f"default_provider '{self.default_provider}' is not one of: {valid}"
            )

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            errors.append("timeout must be a number of seconds")
        elif self.timeout <= 0:
            errors.append(f"timeout must be positive (got {self.timeout})")

        if errors:
            raise ConfigurationError("Invalid client configuration", errors)

        return self

    def merge(self, **overrides: Any) -> "ClientConfig":
        """Return a copy with the given fields replaced; ``None`` values are ignored.

        The copy gets its own ``headers`` dict.
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration options",
                [f"'{name}' is not a ClientConfig field" for name in unknown],
            )
        changes = {k: v for k, v in overrides.items() if v is not None}
        changes["headers"] = dict(changes.get("headers", self.headers))
        return replace(self, **changes)

    @classmethod
    def from_env(cls, prefix: str = "ANONDOCS_") -> "ClientConfig":
        """Build a config from environment variables.

        Reads ``<prefix>BASE_URL``, ``<prefix>PROVIDER`` and
        ``<prefix>TIMEOUT``; unset variables keep their defaults.
        """
        settings: Dict[str, Any] = {}

        base_url = os.environ.get(f"{prefix}BASE_URL")
        if base_url:
            settings["base_url"] = base_url

        provider = os.environ.get(f"{prefix}PROVIDER")
        if provider:
            settings["default_provider"] = provider

        timeout = os.environ.get(f"{prefix}TIMEOUT")
        if timeout:
            try:
                settings["timeout"] = float(timeout)
            except ValueError:
                raise ConfigurationError(
                    "Invalid client configuration",
                    [f"{prefix}TIMEOUT must be a number of seconds (got '{timeout}')"],
                )

        config = cls(**settings)
        logger.debug(f"Configuration loaded from environment: {config}")
        return config
