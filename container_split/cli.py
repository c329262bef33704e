"""container-split — split a concatenated container log into one file per container."""

import logging
import os
import sys
from argparse import ArgumentParser

from container_split.config import load_config, load_yaml_config
from container_split.errors import SplitError, UsageError
from container_split.reader import iter_lines, open_input
from container_split.splitter import split_stream

logger = logging.getLogger(__name__)

PROG = "container-split"


class _Parser(ArgumentParser):
    """ArgumentParser that reports problems as UsageError instead of exiting 2."""

    def error(self, message):
        raise UsageError(f"usage: {self.prog} containers.log ({message})")


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = _Parser(
        prog=PROG,
        add_help=False,
        description="Split a concatenated container log into one file per container.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="The concatenated container log (exactly one)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for per-container logs (default: $CONTAINERS_DIR or containers)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file with output_dir and classification rules",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress diagnostics to stderr",
    )
    return parser


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, split the input, and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.files) != 1:
        raise UsageError(f"usage: {parser.prog} containers.log")

    config = load_config(args, load_yaml_config(args.config))
    logging.getLogger().setLevel(config.log_level)
    logger.info("Config: output_dir=%s, %d classification rule(s)",
                config.output_dir, len(config.rules))

    with open_input(args.files[0]) as f:
        os.makedirs(config.output_dir, mode=0o700, exist_ok=True)
        split_stream(iter_lines(f), config.output_dir, config.rules)
    return 0


def main(argv: list[str] | None = None):
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [SPLITTER] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    try:
        status = run(argv)
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
    except (SplitError, OSError, UnicodeError) as e:
        sys.stdout.flush()
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
