"""Load engine configuration from the environment.

This is the single source of truth for configuration.
A .env file at the repo root is loaded when present; every setting has a default.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from .types import EngineConfig

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES = ('gbp', 'usd', 'eur', 'cad', 'aud')


def load_config() -> EngineConfig:
    """Load configuration from .env (if any) and the process environment.

    Unlike a scanner target, nothing here is mandatory - an assessment can
    run with no configuration at all.
    """
    env_file = get_repo_root() / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    currency = os.getenv("DEFAULT_CURRENCY", "gbp").strip().lower()
    if currency not in SUPPORTED_CURRENCIES:
        logger.warning(f"Unsupported DEFAULT_CURRENCY '{currency}', falling back to gbp")
        currency = "gbp"

    config = EngineConfig(
        default_currency=currency,
        state_dir=os.getenv("STATE_DIR", "state"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("LOG_FILE") or None,
    )

    return config


def get_repo_root() -> Path:
    """Return the repository root directory."""
    return Path(__file__).parent.parent.parent
