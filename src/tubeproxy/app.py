"""Main entry point for the tubeproxy server."""

import argparse
import logging
from pathlib import Path

from .utils import Config, ServerSettings, log_error, setup_logging
from .version import __version__
from .web import create_app

logger = logging.getLogger(__name__)


class Application:
    """The server process: settings plus the Flask app built from them."""

    def __init__(self, settings: ServerSettings, client=None):
        self.settings = settings
        self.flask_app = create_app(settings, client=client)

    def run(self, debug: bool = False):
        logger.info(f"Server running at http://{self.settings.host}:{self.settings.port}")
        self.flask_app.run(
            host=self.settings.host,
            port=self.settings.port,
            debug=debug,
            threaded=True,
            use_reloader=False,
        )


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the video picker UI and the download proxy API.")
    parser.add_argument("--config", type=Path, default=None, help="Settings JSON file")
    parser.add_argument("--host", default=None, help="Interface to bind")
    parser.add_argument("--port", type=int, default=None, help="Port to bind")
    parser.add_argument("--static-root", default=None, help="Directory of static assets to serve")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"tubeproxy {__version__}")
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(debug=args.debug)
    try:
        logger.info(f"Starting tubeproxy v{__version__}")
        config = Config(args.config)
        config.update(host=args.host, port=args.port, static_root=args.static_root)
        Application(config.snapshot()).run(debug=args.debug)
    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
    except Exception as e:
        logger.error(f"Fatal error in main(): {e}", exc_info=True)
        log_error("Fatal error in main()", e)
        raise


if __name__ == "__main__":
    main()
