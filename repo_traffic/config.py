#!/usr/bin/env python3
"""
Application settings, read from the environment once and passed explicitly.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_GITHUB_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class Settings:
    """Configuration injected into the verifier, store and fetcher."""
    jwt_secret: str
    database_path: str = "github_stats.db"
    use_firestore: bool = False
    github_api_url: str = DEFAULT_GITHUB_API_URL
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Load configuration from environment variables."""
    environ = os.environ if environ is None else environ

    jwt_secret = environ.get('JWT_SECRET')
    if not jwt_secret:
        raise ValueError("JWT_SECRET environment variable not set.")

    use_firestore = (
        environ.get('USE_FIRESTORE', '').lower() == 'true'
        or environ.get('GAE_ENV', '').startswith('standard')
    )

    return Settings(
        jwt_secret=jwt_secret,
        database_path=environ.get('DATABASE_PATH', 'github_stats.db'),
        use_firestore=use_firestore,
        github_api_url=environ.get('GITHUB_API_URL', DEFAULT_GITHUB_API_URL).rstrip('/'),
        log_level=environ.get('LOG_LEVEL', 'INFO').upper(),
    )


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
