#!/usr/bin/env python3
"""
Adding repositories to a user's dashboard.
"""

import logging
import re
from typing import List

from .auth import TokenVerifier
from .errors import NotFoundError, PermissionDeniedError
from .github_client import GitHubTrafficFetcher
from .models import RepoRegistration
from .storage import TrafficStore

REPO_PATH_PATTERN = re.compile(r"^[\w.-]+/[\w.-]+$")


class RepoRegistrar:
    """Checks a user's right to a repository's traffic and registers it."""

    def __init__(self, store: TrafficStore, verifier: TokenVerifier, fetcher: GitHubTrafficFetcher):
        self.store = store
        self.verifier = verifier
        self.fetcher = fetcher
        self.logger = logging.getLogger(__name__)

    def add_repo(self, username: str, repo_path: str, token: str) -> str:
        """
        Register a repository for a user after one successful fetch.

        The fetch both proves the user's GitHub token can read the
        repository's traffic and seeds its first snapshot.

        Args:
            username: User adding the repository
            repo_path: Repository as "org/name"
            token: Signed token issued to the user at login

        Returns:
            "ok" once the repository is registered

        Raises:
            BadTokenError: If the token cannot be decoded
            TokenMismatchError: If the token belongs to another user
            NotFoundError: If the user has no stored account
            PermissionDeniedError: If the traffic fetch fails for any reason
        """
        if not REPO_PATH_PATTERN.match(repo_path or ""):
            raise ValueError(f"Repository must be given as org/name, got {repo_path!r}")

        self.verifier.verify_user(token, username)

        account = self.store.get_account(username)
        if account is None:
            raise NotFoundError(f"No account for {username}")

        try:
            self.fetcher.fetch_and_store(repo_path, account.access_token)
        except Exception as e:
            self.logger.warning(f"Cannot read traffic of {repo_path} for {username}: {type(e).__name__}")
            raise PermissionDeniedError("github token permission insufficient") from e

        self.store.put_registration(RepoRegistration(username=username, repo=repo_path))
        self.logger.info(f"Registered {repo_path} for {username}")
        return "ok"

    def list_repos(self, username: str) -> List[RepoRegistration]:
        """Get every repository the user has registered."""
        return self.store.get_registrations_for_user(username)
