import logging

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS

import config
from reports.pdf_generator import generate_terrain_report
from storage import ResultStore
from suitability_factors.pipeline import run_rainfall_prediction, run_terrain_analysis

log = logging.getLogger('werkzeug')
log.setLevel(logging.ERROR)

logger = logging.getLogger(__name__)
logging.basicConfig(level=config.LOG_LEVEL)

# --- Flask App Initialization ---
app = Flask(__name__)
app.config["DATABASE_PATH"] = config.DATABASE_PATH
app.config["REGIONS"] = config.REGIONS
app.config["DEFAULT_REQUESTED_BY"] = config.DEFAULT_REQUESTED_BY

CORS(app, resources={r"/*": {
    "origins": config.ALLOWED_ORIGINS,
    "methods": ["GET", "POST", "OPTIONS"],
    "allow_headers": ["Content-Type", "Authorization", "Accept"]
}})


def get_store() -> ResultStore:
    """One store per configured database path, created on first use."""
    path = app.config["DATABASE_PATH"]
    store = app.extensions.get("result_store")
    if store is None or store.db_path != path:
        store = ResultStore(path)
        app.extensions["result_store"] = store
    return store


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "healthy"}), 200


# --- Terrain investment analysis ---

@app.route('/api/terrain-analysis', methods=['GET'])
def list_terrain_analysis():
    try:
        return jsonify({"ok": True, "results": get_store().list_analyses()})
    except Exception as e:
        logger.exception(f"Terrain history error: {e}")
        return jsonify({"ok": False, "error": str(e)}), 500


@app.route('/api/terrain-analysis', methods=['POST'])
def terrain_analysis():
    try:
        results = run_terrain_analysis(get_store(), _json_body())
        return jsonify({"ok": True, "total": len(results), "results": results})
    except Exception as e:
        logger.exception(f"Terrain analysis error: {e}")
        return jsonify({"ok": False, "error": str(e)}), 500


@app.route('/api/terrain-analysis/report', methods=['GET'])
def terrain_report():
    try:
        pdf_buffer = generate_terrain_report(get_store().list_analyses())
        return send_file(
            pdf_buffer,
            as_attachment=True,
            download_name="terrain_analysis.pdf",
            mimetype="application/pdf"
        )
    except Exception as e:
        logger.exception("Terrain report generation error")
        return jsonify({"ok": False, "error": str(e)}), 500


# --- Rainfall / temperature risk ---

@app.route('/api/regions', methods=['GET'])
def regions():
    return jsonify({"regions": app.config["REGIONS"]})


@app.route('/api/predict', methods=['POST'])
def predict():
    try:
        prediction = run_rainfall_prediction(
            get_store(),
            _json_body(),
            regions=app.config["REGIONS"],
            model_id=config.PREDICTION_MODEL_ID,
            default_requested_by=app.config["DEFAULT_REQUESTED_BY"],
        )
        return jsonify({"prediction": prediction}), 200
    except Exception as e:
        logger.exception(f"Prediction error: {e}")
        return jsonify({"error": str(e)}), 500


@app.route('/api/predict', methods=['GET'])
def prediction_history():
    try:
        limit = int(request.args.get("limit", 5))
        return jsonify({"predictions": get_store().list_predictions(limit=limit)})
    except Exception as e:
        logger.exception(f"Prediction history error: {e}")
        return jsonify({"error": str(e)}), 500


if __name__ == "__main__":
    app.run(debug=False, host="0.0.0.0", port=config.PORT, threaded=True)
