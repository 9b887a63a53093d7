"""
Configuration models for OKX client.

Immutable configuration structures following state-first design.
"""

from dataclasses import dataclass

from ..constants import DEFAULT_BASE_URL, DEFAULT_INSTRUMENT_TYPE, DEFAULT_TIMEOUT


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for OKX client connection."""
    api_key: str
    api_secret: str
    passphrase: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    simulated: bool = False  # demo trading environment
    instrument_type: str = DEFAULT_INSTRUMENT_TYPE

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_credentials()
        self._validate_base_url()

        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    def _validate_credentials(self):
        """Validate that every credential is present."""
        if not self.api_key:
            raise ValueError("API key cannot be empty")
        if not self.api_secret:
            raise ValueError("API secret cannot be empty")
        if not self.passphrase:
            raise ValueError("API passphrase cannot be empty")

    def _validate_base_url(self):
        """Validate base URL format."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must be a valid HTTP/HTTPS URL, got {self.base_url!r}")
