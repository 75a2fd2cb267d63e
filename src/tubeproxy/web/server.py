"""HTTP endpoints for video info and proxied downloads."""

import logging

from flask import Flask, Response, jsonify, request, stream_with_context
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from ..core import DownloadProxy, InvalidFormat, MetadataResolver, TubeProxyError, YouTubeClient
from ..utils import ServerSettings

logger = logging.getLogger(__name__)


def create_app(settings: ServerSettings, client=None) -> Flask:
    """Build the Flask application.

    ``client`` is the extraction client; a :class:`YouTubeClient` built
    from ``settings`` is used when none is given.
    """
    if client is None:
        headers = {'User-Agent': settings.user_agent} if settings.user_agent else None
        client = YouTubeClient(headers=headers, chunk_size=settings.chunk_size)

    app = Flask(__name__, static_folder=str(settings.static_root), static_url_path="")
    app.config["SETTINGS"] = settings
    CORS(app)

    resolver = MetadataResolver(client)
    proxy = DownloadProxy(client)

    @app.route("/")
    def index():
        return app.send_static_file("index.html")

    @app.route("/api/video-info")
    def video_info():
        video_id = request.args.get("v", "")
        try:
            summary = resolver.resolve(video_id)
        except TubeProxyError:
            logger.exception(f"Error fetching video info for {video_id!r}")
            return jsonify({"error": "Failed to fetch video information"}), 500

        logger.info(f"Highest quality formats for {video_id}: {[e.itag for e in summary.candidate_encodings]}")
        return jsonify(summary.to_dict())

    @app.route("/api/download")
    def download():
        video_id = request.args.get("v", "")
        itag = request.args.get("itag", "")
        try:
            prepared = proxy.download(video_id, itag)
        except InvalidFormat as e:
            logger.warning(str(e))
            return jsonify({"error": "Invalid format selected"}), 400
        except TubeProxyError:
            logger.exception(f"Download error for {video_id!r} encoding {itag!r}")
            return jsonify({"error": "Download failed"}), 500

        try:
            headers = {"Content-Disposition": prepared.content_disposition}
            if prepared.content_length:
                headers["Content-Length"] = str(prepared.content_length)
            if prepared.content_encoding:
                headers["Content-Encoding"] = prepared.content_encoding
            # A failure inside the generator aborts the connection; the status is already sent.
            response = Response(
                stream_with_context(prepared.chunks),
                content_type=prepared.content_type,
                headers=headers,
            )
        except Exception:
            prepared.close()
            raise
        # Runs even when the body is never read (HEAD, early disconnect)
        response.call_on_close(prepared.close)
        return response

    @app.errorhandler(Exception)
    def unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500

    return app
