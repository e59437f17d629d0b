"""
Command-line interface for rawtweet.

Sends one OAuth 1.0a signed request described by a template file and prints
the raw response body.

Usage:
    rawtweet templates/user_timeline.json -p screen_name=twitterapi -p count=5
"""

import argparse
import sys
from typing import List, Optional, Sequence

from rawtweet.core.exceptions import RawTweetException
from rawtweet.core.logger import configure_root_logger, get_logger
from rawtweet.models.settings import load_settings
from rawtweet.models.template import load_template
from rawtweet.runner import run_request

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rawtweet",
        description="Send a raw request to Twitter.",
    )
    parser.add_argument(
        "template_file",
        help="Request template file (*.json, *.yaml)",
    )
    parser.add_argument(
        "--param", "-p",
        dest="parameters",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Overrides some parameters in template file (repeatable)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Dotenv file with TWITTER_CK/TWITTER_CS/TWITTER_AT/TWITTER_ATS (default: .env)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    verbosity.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for rawtweet messages (default: WARNING)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run one request and print its body.

    Returns:
        0 when the request was sent and its body printed, 1 on any fatal error.
    """
    args = build_parser().parse_args(argv)
    configure_root_logger("DEBUG" if args.verbose else args.log_level)

    try:
        settings = load_settings(args.env_file)
        template = load_template(args.template_file)
        overrides: List[str] = args.parameters
        result = run_request(template, overrides, settings)
    except RawTweetException as e:
        logger.error(str(e))
        return 1

    print(result.body)
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
