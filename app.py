import logging
import os
from urllib.parse import quote

from flask import Flask, request, jsonify, redirect

from bilibili import BilibiliClient, HttpFetcher
from bvid import extract_bvid
from resolver import ResolutionError, resolve
from settings import Settings

logger = logging.getLogger(__name__)


def create_app(settings=None, fetcher=None):
    settings = settings or Settings.from_env()
    fetcher = fetcher or HttpFetcher(timeout=settings.request_timeout, max_retries=settings.max_retries)

    app = Flask(__name__, static_folder="public", static_url_path="")
    client = BilibiliClient(fetcher, api_base=settings.api_base)

    # Root route (for browser check)
    @app.route('/')
    def home():
        url = request.args.get("url")
        if url:
            return redirect(f"/api/parse?url={quote(url, safe='')}")

        if app.static_folder and os.path.isfile(os.path.join(app.static_folder, "index.html")):
            return app.send_static_file("index.html")
        return "Bilibili Parser Running!"

    @app.route('/health')
    def health():
        return jsonify({"status": "ok"})

    # Parse route
    @app.route('/api/parse', methods=['GET'])
    def parse_video():
        url = request.args.get("url")

        if not url:
            return jsonify({"error": "missing url parameter"}), 400

        bvid = extract_bvid(url)
        if not bvid:
            return jsonify({"error": "no valid identifier found"}), 400

        logger.info(f"Parsing BVID: {bvid}")

        try:
            result = resolve(bvid, url, client)
        except ResolutionError as e:
            logger.warning(f"Failed to resolve {bvid}: {e.kind.name} {e}")
            return jsonify(e.to_dict()), e.kind.status
        except Exception as e:
            logger.exception(f"Unexpected error while resolving {bvid}")
            return jsonify({"error": "internal server error", "message": str(e)}), 502

        return jsonify(result.to_dict())

    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_app(settings)
    logger.info(f"Server started at http://localhost:{settings.port}")
    app.run(host=settings.host, port=settings.port)
