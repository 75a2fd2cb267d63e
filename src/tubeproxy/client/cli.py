"""Command-line front end for the format picker."""

import argparse
import sys

from ..utils import setup_logging
from .picker import FormatOption, FormatPicker
from .schema import ClientDataError


def build_location(server: str, video: str) -> str:
    """Accept either a page URL carrying ?v= or a bare video id."""
    if "://" in video:
        return video
    return f"{server.rstrip('/')}/?v={video}"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pick the best MP4 or MP3 of a video and download it.")
    parser.add_argument("video", help="Video id, or a page URL with a v= parameter")
    parser.add_argument("--server", default="http://127.0.0.1:3000", help="tubeproxy server (default: %(default)s)")
    parser.add_argument("--format", choices=[o.value for o in FormatOption], default=None,
                        help="Option to download; only lists the options when omitted")
    parser.add_argument("--no-open", action="store_true", help="Print the download URL instead of opening it")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(debug=args.debug)
    picker = FormatPicker(args.server)

    try:
        view = picker.initialize(build_location(args.server, args.video))
        print(view.title)
        print(view.meta)
        if args.format is None:
            for option in view.options:
                entry = view.format_for(option)
                print(f"  {option.value}: {option.label}" + ("" if entry else " (unavailable)"))
            return 0

        action = picker.select(view, FormatOption(args.format))
    except ClientDataError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(action.label)
    if args.no_open:
        print(action.url)
    else:
        picker.download(action)
    return 0


if __name__ == "__main__":
    sys.exit(main())
