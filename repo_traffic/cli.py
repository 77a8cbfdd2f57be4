#!/usr/bin/env python3
"""
Command-line interface for repo-traffic.
"""

import argparse
import json
import sys
from typing import Optional

from .auth import TokenVerifier
from .config import configure_logging, load_settings
from .db_factory import get_database_manager
from .errors import TrafficError
from .github_client import GitHubTrafficFetcher
from .models import Account
from .reconciler import TrafficReconciler
from .registrar import RepoRegistrar
from .sync import run_sync


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="repo-traffic",
        description="GitHub repository traffic history"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("sync", help="Fetch traffic for every registered repository")

    show_parser = subparsers.add_parser("show", help="Print the merged traffic of a repository as JSON")
    show_parser.add_argument("repo", help="Repository as org/name")

    add_parser = subparsers.add_parser("add", help="Register a repository for a user")
    add_parser.add_argument("username")
    add_parser.add_argument("repo", help="Repository as org/name")
    add_parser.add_argument("--token", required=True, help="Signed token issued at login")

    repos_parser = subparsers.add_parser("repos", help="List the repositories registered by a user")
    repos_parser.add_argument("username")

    account_parser = subparsers.add_parser("add-account", help="Store a user's GitHub access token")
    account_parser.add_argument("username")
    account_parser.add_argument("--access-token", required=True)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    configure_logging(settings)

    with get_database_manager(settings) as store:
        store.setup_database()
        fetcher = GitHubTrafficFetcher(store, api_url=settings.github_api_url)
        try:
            if args.command == "sync":
                success, message = run_sync(store, fetcher)
                print(message)
                return 0 if success else 1
            elif args.command == "show":
                traffic = TrafficReconciler(store).reconcile(args.repo)
                print(json.dumps({"traffic": traffic.to_dict()}, indent=2))
            elif args.command == "add":
                registrar = RepoRegistrar(store, TokenVerifier(settings.jwt_secret), fetcher)
                print(registrar.add_repo(args.username, args.repo, args.token))
            elif args.command == "repos":
                repos = store.get_registrations_for_user(args.username)
                print(json.dumps({"repos": [r.repo for r in repos]}, indent=2))
            elif args.command == "add-account":
                store.put_account(Account(username=args.username, access_token=args.access_token))
                print("ok")
        except TrafficError as e:
            print(f"{e.kind}: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
