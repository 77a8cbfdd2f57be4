#!/usr/bin/env python3
"""
One-shot refresh of the traffic of every registered repository.
"""

import logging
from typing import Tuple

from .github_client import GitHubTrafficFetcher
from .storage import TrafficStore

logger = logging.getLogger(__name__)


def update_all_repositories(store: TrafficStore, fetcher: GitHubTrafficFetcher) -> Tuple[int, int]:
    """
    Fetch and store traffic for each registered repository once.

    A repository registered by several users is fetched with the first
    owner whose account still exists. One repository failing does not stop
    the others.

    Returns:
        (number refreshed, number failed)
    """
    logger.info("Starting update for all repositories")
    owners = {}
    for registration in store.get_all_registrations():
        owners.setdefault(registration.repo, []).append(registration.username)

    refreshed, failed = 0, 0
    for repo, usernames in owners.items():
        account = next(
            (a for a in (store.get_account(u) for u in usernames) if a is not None),
            None
        )
        if account is None:
            logger.error(f"No account available to fetch {repo}")
            failed += 1
            continue
        try:
            fetcher.fetch_and_store(repo, account.access_token)
            refreshed += 1
        except Exception as e:
            logger.error(f"Failed to update {repo}: {e}")
            failed += 1

    logger.info(f"Finished updating all repositories: {refreshed} refreshed, {failed} failed")
    return refreshed, failed


def run_sync(store: TrafficStore, fetcher: GitHubTrafficFetcher) -> Tuple[bool, str]:
    """Runs the traffic synchronization."""
    try:
        refreshed, failed = update_all_repositories(store, fetcher)
    except Exception as e:
        logger.error(f"Sync error: {e}")
        return False, str(e)
    if failed:
        return False, f"Sync finished with {failed} failures ({refreshed} refreshed)"
    return True, f"Sync successful ({refreshed} refreshed)"
