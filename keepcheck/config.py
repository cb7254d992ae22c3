import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://keep.google.com/u/0/"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime configuration. Timeouts are in seconds."""

    base_url: str = DEFAULT_BASE_URL
    browser: str = "chromium"
    headless: bool = True
    user_data_dir: Optional[str] = None
    timeout: float = 10.0
    short_timeout: float = 3.0
    view_timeout: float = 5.0
    nav_timeout: float = 10.0
    action_timeout: float = 20.0
    poll_interval: float = 0.25
    artifacts_dir: str = "verification"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Settings":
        env = os.environ if environ is None else environ

        def text(name, default):
            return env.get(f"KEEPCHECK_{name}", default)

        def seconds(name, default):
            raw = env.get(f"KEEPCHECK_{name}")
            if raw is None or raw == "":
                return default
            try:
                return float(raw)
            except ValueError:
                raise ValueError(f"KEEPCHECK_{name} must be a number of seconds, got {raw!r}")

        headless = env.get("KEEPCHECK_HEADLESS")
        values = dict(
            base_url=text("BASE_URL", cls.base_url),
            browser=text("BROWSER", cls.browser),
            headless=cls.headless if headless is None else headless.strip().lower() in _TRUE,
            user_data_dir=text("USER_DATA_DIR", None) or None,
            timeout=seconds("TIMEOUT", cls.timeout),
            short_timeout=seconds("SHORT_TIMEOUT", cls.short_timeout),
            view_timeout=seconds("VIEW_TIMEOUT", cls.view_timeout),
            nav_timeout=seconds("NAV_TIMEOUT", cls.nav_timeout),
            action_timeout=seconds("ACTION_TIMEOUT", cls.action_timeout),
            poll_interval=seconds("POLL_INTERVAL", cls.poll_interval),
            artifacts_dir=text("ARTIFACTS_DIR", cls.artifacts_dir),
            log_level=text("LOG_LEVEL", cls.log_level).upper(),
        )
        values.update(overrides)
        return cls(**values)


def configure_logging(level="INFO"):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)
