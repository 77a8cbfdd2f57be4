#!/usr/bin/env python3
"""
Database factory to switch between SQLite and Firestore based on settings.
"""

import logging
import os

from .config import Settings
from .storage import DatabaseManager, TrafficStore


def get_database_manager(settings: Settings) -> TrafficStore:
    """
    Return the traffic store selected by the settings.

    Firestore is used when USE_FIRESTORE is true or when running on App
    Engine; SQLite otherwise. The SQLite file's directory is created if
    missing.
    """
    logger = logging.getLogger(__name__)

    if settings.use_firestore:
        from .firestore_db import FirestoreDatabaseManager
        logger.info("Using Firestore database")
        return FirestoreDatabaseManager()

    db_path = os.path.abspath(settings.database_path)
    os.makedirs(os.path.dirname(db_path) or ".", mode=0o755, exist_ok=True)
    logger.info(f"Using SQLite database at {db_path}")
    return DatabaseManager(db_path)
