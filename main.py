#!/usr/bin/env python3
"""
Main entry point for the repo-traffic command line.
"""

import sys

from repo_traffic.cli import main

if __name__ == "__main__":
    sys.exit(main())
