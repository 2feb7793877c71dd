"""Entry point for the Touchégg configuration daemon when run as a module."""

import sys

from .daemon import cli

if __name__ == "__main__":
    sys.exit(cli())
