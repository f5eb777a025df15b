import logging
import traceback
from datetime import datetime
from flask import Flask, request, jsonify
from flask_cors import CORS
from config import Config
from services import GeoReferenceService, MessageTooLong

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app, origins=Config.CORS_ORIGINS)

geo_service = GeoReferenceService()


def _read_message():
    """Return (message, None) or (None, error response) for the current request"""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or not payload:
        return None, (jsonify({"error": "Invalid request"}), 400)

    message = payload.get('message')
    if not isinstance(message, str) or not message.strip():
        return None, (jsonify({"error": "No message provided"}), 400)

    return message, None


def _handle(endpoint, operation):
    """Run a service operation on the request message with shared error handling"""
    try:
        message, error = _read_message()
        if error:
            return error

        result = operation(message)
        return jsonify({"success": True, **result}), 200

    except MessageTooLong as e:
        logger.warning(f"{endpoint}: {e}")
        return jsonify({"error": str(e)}), 413

    except Exception as e:
        geo_service.record_error()
        logger.error(f"{endpoint} error: {e}")
        logger.error(traceback.format_exc())
        return jsonify({"error": "Failed to process message"}), 500


@app.route('/health', methods=['GET'])
def health():
    """Service health and request counters"""
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "stats": dict(geo_service.stats)
    }), 200


@app.route('/extract', methods=['POST'])
def extract():
    """Reduce text to its coordinate substrings"""
    return _handle('/extract', geo_service.extract)


@app.route('/geo_references', methods=['POST'])
def geo_references():
    """Convert every coordinate in the text and return its geo-URI"""
    return _handle('/geo_references', geo_service.geo_references)


@app.route('/linkify', methods=['POST'])
def linkify():
    """Coordinate-only text with link spans for the client to render"""
    return _handle('/linkify', geo_service.linkify)


@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": "Endpoint not found"}), 404

@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"error": "Method not allowed"}), 405

@app.errorhandler(500)
def internal_error(e):
    logger.error(f"Internal error: {e}")
    return jsonify({"error": "Internal server error"}), 500


if __name__ == '__main__':
    logger.info("="*60)
    logger.info("STARTING COORDINATE LINKER BACKEND")
    logger.info("="*60)
    logger.info(f"Debug: {Config.DEBUG}")
    logger.info(f"Strict ranges: {Config.STRICT_RANGES}")
    logger.info(f"Starting Flask server on port {Config.PORT}")

    app.run(debug=Config.DEBUG, port=Config.PORT, threaded=True)
