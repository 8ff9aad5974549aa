"""
Species Explorer configuration handling.

Provides YAML configuration loading, environment overrides and validation.
"""

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigError

if TYPE_CHECKING:
    from .utils.retry import RetryConfig

DEFAULT_UNIPROT_URL = (
    "https://ftp.uniprot.org/pub/databases/uniprot/knowledgebase/complete/docs/speclist.txt"
)
DEFAULT_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

ENV_PREFIX = "SPECIES_EXPLORER_"

# Settings the host application must provide before start-up.
REQUIRED_SETTINGS = (
    "backend_base_url",
    "uniprot_url",
    "youtube_embed_base_url",
    "default_video_id",
    "default_image_url",
)


@dataclass
class ExplorerConfig:
    """
    Species Explorer configuration.

    Can be loaded from a YAML file, the environment, or created programmatically.
    All durations are in seconds.
    """
    # Red List backend
    backend_base_url: str = ""
    browse_class: str = "MAMMALIA"
    request_timeout: float = 30.0
    retry_attempts: int = 3
    retry_backoff: float = 1.0
    user_agent: str = "species-explorer/0.3"

    # UniProt species list
    uniprot_url: str = DEFAULT_UNIPROT_URL
    uniprot_timeout: float = 60.0
    uniprot_cache_ttl: float = 24 * 60 * 60
    uniprot_min_length: int = 1000

    # Session cache
    species_cache_ttl: float = 24 * 60 * 60
    cache_quota_bytes: int = 5 * 1024 * 1024

    # Display defaults (consumed by the host UI)
    youtube_embed_base_url: str = ""
    default_video_id: str = ""
    default_image_url: str = ""

    # Logging
    log_level: str = "INFO"
    log_file: str = ""
    log_format: str = DEFAULT_LOG_FORMAT
    log_max_bytes: int = 10485760  # 10MB
    log_backup_count: int = 3

    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise ConfigError("request_timeout must be greater than 0")
        if self.uniprot_timeout <= 0:
            raise ConfigError("uniprot_timeout must be greater than 0")
        if self.retry_attempts < 1:
            raise ConfigError("retry_attempts must be at least 1")
        if self.retry_backoff < 0:
            raise ConfigError("retry_backoff must not be negative")
        if self.cache_quota_bytes <= 0:
            raise ConfigError("cache_quota_bytes must be greater than 0")

    @classmethod
    def load(cls, path: str) -> "ExplorerConfig":
        """
        Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            ExplorerConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If config file is invalid YAML
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExplorerConfig":
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary with optional ``api``, ``uniprot``,
                ``cache``, ``display`` and ``logging`` sections

        Returns:
            ExplorerConfig instance
        """
        api_cfg = data.get("api", {})
        uniprot_cfg = data.get("uniprot", {})
        cache_cfg = data.get("cache", {})
        display_cfg = data.get("display", {})
        logging_cfg = data.get("logging", {})

        known = {"api", "uniprot", "cache", "display", "logging"}
        extra = {k: v for k, v in data.items() if k not in known}

        return cls(
            backend_base_url=str(api_cfg.get("backend_base_url", "")).rstrip("/"),
            browse_class=api_cfg.get("browse_class", "MAMMALIA"),
            request_timeout=float(api_cfg.get("timeout", 30.0)),
            retry_attempts=int(api_cfg.get("retry_attempts", 3)),
            retry_backoff=float(api_cfg.get("retry_backoff", 1.0)),
            user_agent=api_cfg.get("user_agent", "species-explorer/0.3"),
            uniprot_url=uniprot_cfg.get("url", DEFAULT_UNIPROT_URL),
            uniprot_timeout=float(uniprot_cfg.get("timeout", 60.0)),
            uniprot_cache_ttl=float(uniprot_cfg.get("cache_ttl", 24 * 60 * 60)),
            uniprot_min_length=int(uniprot_cfg.get("min_length", 1000)),
            species_cache_ttl=float(cache_cfg.get("species_ttl", 24 * 60 * 60)),
            cache_quota_bytes=int(cache_cfg.get("quota_bytes", 5 * 1024 * 1024)),
            youtube_embed_base_url=display_cfg.get("youtube_embed_base_url", ""),
            default_video_id=display_cfg.get("default_video_id", ""),
            default_image_url=display_cfg.get("default_image_url", ""),
            log_level=logging_cfg.get("level", "INFO"),
            log_file=logging_cfg.get("file", ""),
            log_format=logging_cfg.get("format", DEFAULT_LOG_FORMAT),
            log_max_bytes=logging_cfg.get("max_bytes", 10485760),
            log_backup_count=logging_cfg.get("backup_count", 3),
            extra=extra,
        )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["ExplorerConfig"] = None,
    ) -> "ExplorerConfig":
        """
        Overlay ``SPECIES_EXPLORER_*`` environment variables on a config.

        Args:
            environ: Mapping to read from (default: os.environ)
            base: Config to start from (default: built-in defaults)

        Returns:
            New ExplorerConfig instance
        """
        environ = os.environ if environ is None else environ
        data = (base or cls()).to_dict()

        overrides = {
            "BACKEND_BASE_URL": ("api", "backend_base_url"),
            "UNIPROT_URL": ("uniprot", "url"),
            "YOUTUBE_EMBED_BASE_URL": ("display", "youtube_embed_base_url"),
            "DEFAULT_VIDEO_ID": ("display", "default_video_id"),
            "DEFAULT_IMAGE_URL": ("display", "default_image_url"),
            "LOG_LEVEL": ("logging", "level"),
        }
        for suffix, (section, key) in overrides.items():
            value = environ.get(ENV_PREFIX + suffix)
            if value:
                data[section][key] = value

        return cls.from_dict(data)

    def missing_settings(self) -> List[str]:
        """
        List required settings that are empty.

        Returns:
            Names of missing settings, empty when the config is complete
        """
        return [name for name in REQUIRED_SETTINGS if not getattr(self, name)]

    def retry_config(self) -> "RetryConfig":
        """Build the retry policy for Red List API calls."""
        from .utils.retry import RetryConfig

        return RetryConfig(
            max_attempts=self.retry_attempts,
            backoff_base=self.retry_backoff,
            timeout=self.request_timeout,
        )

    def api_url(self, path: str) -> str:
        """Resolve an endpoint path against the backend proxy."""
        return f"{self.backend_base_url}/proxy-api{path}"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        data: Dict[str, Any] = dict(self.extra)
        data.update({
            "api": {
                "backend_base_url": self.backend_base_url,
                "browse_class": self.browse_class,
                "timeout": self.request_timeout,
                "retry_attempts": self.retry_attempts,
                "retry_backoff": self.retry_backoff,
                "user_agent": self.user_agent,
            },
            "uniprot": {
                "url": self.uniprot_url,
                "timeout": self.uniprot_timeout,
                "cache_ttl": self.uniprot_cache_ttl,
                "min_length": self.uniprot_min_length,
            },
            "cache": {
                "species_ttl": self.species_cache_ttl,
                "quota_bytes": self.cache_quota_bytes,
            },
            "display": {
                "youtube_embed_base_url": self.youtube_embed_base_url,
                "default_video_id": self.default_video_id,
                "default_image_url": self.default_image_url,
            },
            "logging": {
                "level": self.log_level,
                "file": self.log_file,
                "format": self.log_format,
                "max_bytes": self.log_max_bytes,
                "backup_count": self.log_backup_count,
            },
        })
        return data

    def save(self, path: str) -> None:
        """
        Save configuration to a YAML file.

        Args:
            path: Path to save the configuration file
        """
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, allow_unicode=True)
