"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://a11.gdl.netease.com"
URL_TEMPLATE = "{base_url}/MuMuNG-setup-V{version_major}-{version_minor}{candidate}.exe"

DEFAULT_CONCURRENCY = 1000
DEFAULT_PROBE_TIMEOUT = 10.0
DEFAULT_SEARCH_TIMEOUT = 30.0
DEFAULT_DOWNLOAD_TIMEOUT = 3600.0


class SearchConfig(BaseModel):
    """A validated configuration model for one search (and optional download)."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Installer version, e.g. "4.1.21.3664" and "0325"
    version_major: str
    version_minor: str

    # Network Settings
    base_url: str = DEFAULT_BASE_URL
    concurrency: int = DEFAULT_CONCURRENCY
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    search_timeout: float = DEFAULT_SEARCH_TIMEOUT
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT

    # Internal fields not loaded from INI file
    download_dir: Path | None = Field(default=None, repr=False)

    @field_validator("version_major", "version_minor")
    @classmethod
    def validate_version_part(cls, v: str) -> str:
        """Rejects version parts that would break the URL path."""
        if not v:
            raise ValueError("Version parts cannot be empty.")
        if any(c in v for c in "/?#\\ "):
            raise ValueError(f"Version part contains invalid characters: {v!r}")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URL must start with http:// or https://.")
        return v.rstrip("/")

    @field_validator("concurrency")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        """Ensures a reasonable number of simultaneous probes."""
        if v < 1 or v > 10000:
            raise ValueError("Concurrency must be between 1 and 10000.")
        return v

    @field_validator("probe_timeout", "search_timeout", "download_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be greater than zero.")
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns the set of keys that may be set in the INI file."""
        internal_fields = {"version_major", "version_minor", "download_dir"}
        return {key for key in cls.model_fields if key not in internal_fields}
