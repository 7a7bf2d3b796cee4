#!/usr/bin/env python3
"""
Show the current Spotify track as a desktop notification.

USAGE:
    spotify-notify [-h] [-V] [-v] [--spotifyd] [IDENTIFIER]

SYNOPSIS:
    Looks up a track through the Spotify Web API and displays its title,
    artist and cover art with notify-send or terminal-notifier.

    With --spotifyd the track is taken from the environment set by
    spotifyd's on_song_change_hook (PLAYER_EVENT, TRACK_ID).

COMMAND LINE ARGUMENT:
    [IDENTIFIER]  Spotify track ID, spotify:track: URI or open.spotify.com URL
"""

import argparse
import logging
import sys
from typing import List, Optional

from spotnotify import __version__
from spotnotify.config import Settings
from spotnotify.controller import resolve_track_id, run, scratch_files, terminate_as_exit
from spotnotify.exceptions import SpotNotifyError, UsageError
from spotnotify.logging_handler import PROG_NAME, setup_logging

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=PROG_NAME,
        description="Show a Spotify track as a desktop notification.",
        add_help=False,
    )
    parser.add_argument(
        "-h", "--help", action="store_true", help="Show this help message and exit."
    )
    parser.add_argument(
        "-V", "--version", action="store_true", help="Show version and exit."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Trace each step on stderr."
    )
    parser.add_argument(
        "--spotifyd",
        action="store_true",
        help="Run as a spotifyd on_song_change_hook (reads PLAYER_EVENT and TRACK_ID).",
    )
    parser.add_argument(
        "identifier",
        nargs="*",
        metavar="IDENTIFIER",
        help="Spotify track ID or URL.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]

    setup_logging()
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        if len(args.identifier) > 1:
            raise UsageError("Too many arguments: expected at most one IDENTIFIER")
    except UsageError as e:
        logger.error(str(e))
        return 1

    setup_logging(verbose=args.verbose)

    if args.help:
        print(parser.format_help(), end="")
        return 1
    if args.version:
        print(f"{PROG_NAME} {__version__}")
        return 1
    if not argv:
        print(parser.format_usage(), end="")
        return 1

    identifier = args.identifier[0] if args.identifier else None

    try:
        settings = Settings.from_environment(verbose=args.verbose, hook_mode=args.spotifyd)
        with terminate_as_exit(), scratch_files(settings):
            track_id = resolve_track_id(identifier, settings.hook_mode)
            run(settings, track_id)
    except SpotNotifyError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except Exception as e:
        logger.critical(f"Unexpected error: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
