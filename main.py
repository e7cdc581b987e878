#!/usr/bin/env python3
"""
Fast Reader Application Entry Point

Usage:
    python main.py <document> [--wpm 300] [--preview 2] [--no-ovp] [--tap-to-launch]

Sets up the Python path, logging and settings, opens the document and
starts the reader window.
"""

import argparse
import os
import sys

# Add the src directory to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from dotenv import load_dotenv

load_dotenv()

from utils.structured_logging import configure_logging, get_logger
from utils.error_codes import get_error_message
from utils.exceptions import DocumentError

configure_logging()
logger = get_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="RSVP speed reader")
    parser.add_argument("document", help="PDF or plain-text file to read")
    parser.add_argument("--lines-per-screen", type=int, default=20,
                        help="View height for plain-text documents")
    parser.add_argument("--wpm", type=int, help="Reading rate in words per minute")
    parser.add_argument("--preview", type=int, help="Units shown per frame (1-10)")
    parser.add_argument("--no-ovp", action="store_true", help="Disable ORP alignment")
    parser.add_argument("--no-indicator", action="store_true",
                        help="Hide the position indicator")
    parser.add_argument("--tap-to-launch", action="store_true",
                        help="Start RSVP by clicking the page")
    parser.add_argument("--width", type=int, help="Overlay width as a percent of the window")
    parser.add_argument("--height", type=int, help="Overlay height as a percent of the window")
    return parser.parse_args(argv)


def settings_overrides(args: argparse.Namespace) -> dict:
    """Map command-line options onto setting keys.

    Only options the user actually gave are returned, so the rest keep
    their defaults. Out-of-range values are left for settings validation
    to report.
    """
    overrides = {
        "rsvp_speed": args.wpm,
        "words_preview_count": args.preview,
        "display_width_percent": args.width,
        "display_height_percent": args.height,
    }
    if args.no_ovp:
        overrides["ovp_alignment_enabled"] = False
    if args.no_indicator:
        overrides["show_position_indicator"] = False
    if args.tap_to_launch:
        overrides["tap_to_launch_enabled"] = True
    return {key: value for key, value in overrides.items() if value is not None}


def main(argv=None) -> int:
    args = parse_args(argv)

    env = os.getenv('FAST_READER_ENV', 'production')
    logger.info("Fast Reader starting", env=env, document=args.document)

    from processing.documents import open_document
    from settings import MemorySettingsStore, SettingsManager

    settings_manager = SettingsManager(MemorySettingsStore(settings_overrides(args)))

    try:
        document = open_document(args.document, lines_per_screen=args.lines_per_screen)
    except DocumentError as e:
        title, message = get_error_message(e.error_code, e.message)
        logger.error(title, error_code=e.error_code, path=args.document)
        sys.stderr.write(f"{title}: {message}\n")
        return 1

    from ui.reader_app import ReaderApp

    app = ReaderApp(document, settings_manager=settings_manager)
    app.mainloop()

    logger.info("Fast Reader shutting down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
