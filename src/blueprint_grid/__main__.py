"""Entry point for blueprint-grid CLI."""

import sys

from blueprint_grid.cli import build_parser
from blueprint_grid.cli._common import configure_logging


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    configure_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
