"""
Runtime configuration.

Values come from environment variables; call load_dotenv() first so a local
.env file is honored.

Environment Variables:
- DATA_DIR: Repository root for projects and snapshots (default: ./data)
- HOST / PORT: API bind address (default: 0.0.0.0 / 3000)
- POLL_INTERVAL: Worker poll interval in milliseconds (default: 5000)
- JOB_MAX_RETRIES: Retry ceiling for new jobs (default: 3)
- WORKER_ENABLED: Run the worker thread inside the API (default: true)
- REQUEUE_RETRIES: Re-admit RETRYING jobs automatically (default: true)
- CRAWL_MAX_PAGES: Page ceiling for full-domain crawls (default: 100)
- RATE_LIMIT: Per-client API rate limit, empty to disable (default: 100/minute)
- LOG_LEVEL: Logging level (default: INFO)
- LOG_DIR: Daily log file directory, empty to disable (default: logs)
- API_URL: Default API server for the CLI (default: http://localhost:3000)
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_RATE_LIMIT = "100/minute"


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    val = os.getenv(key, "").strip().lower()
    if val in ("true", "1", "yes", "on"):
        return True
    elif val in ("false", "0", "no", "off"):
        return False
    elif val:
        logger.warning(f"[Settings] Invalid boolean for {key}: {val}, using default: {default}")
    return default


def _get_env_int(key: str, default: int, minimum: Optional[int] = None) -> int:
    """Get integer value from environment variable."""
    val = os.getenv(key)
    if val is not None and val.strip():
        try:
            parsed = int(val)
        except ValueError:
            logger.warning(f"[Settings] Invalid integer for {key}: {val}, using default: {default}")
            return default
        if minimum is not None and parsed < minimum:
            logger.warning(f"[Settings] {key} must be >= {minimum}, got {parsed}, using default: {default}")
            return default
        return parsed
    return default


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    data_dir: Path = Path("./data")
    host: str = "0.0.0.0"
    port: int = 3000
    poll_interval_ms: int = 5000
    job_max_retries: int = 3
    worker_enabled: bool = True
    requeue_retries: bool = True
    crawl_max_pages: int = 100
    rate_limit: Optional[str] = DEFAULT_RATE_LIMIT
    log_level: str = "INFO"
    log_dir: Optional[Path] = Path("logs")
    api_url: str = DEFAULT_API_URL

    @property
    def poll_interval(self) -> float:
        """Worker poll interval in seconds."""
        return self.poll_interval_ms / 1000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        log_dir = os.getenv("LOG_DIR", "logs").strip()

        return cls(
            data_dir=Path(os.getenv("DATA_DIR", "./data")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_get_env_int("PORT", 3000, minimum=1),
            poll_interval_ms=_get_env_int("POLL_INTERVAL", 5000, minimum=1),
            job_max_retries=_get_env_int("JOB_MAX_RETRIES", 3, minimum=0),
            worker_enabled=_get_env_bool("WORKER_ENABLED", True),
            requeue_retries=_get_env_bool("REQUEUE_RETRIES", True),
            crawl_max_pages=_get_env_int("CRAWL_MAX_PAGES", 100, minimum=1),
            rate_limit=os.getenv("RATE_LIMIT", DEFAULT_RATE_LIMIT).strip() or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=Path(log_dir) if log_dir else None,
            api_url=os.getenv("API_URL", DEFAULT_API_URL),
        )
