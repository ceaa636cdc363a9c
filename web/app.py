from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, Dict

from flask import Flask, jsonify, request
from loguru import logger

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from core.errors import InvalidConfiguration
from core.grade_progression import DIFFICULTY_CHOICES, GRADE_LABELS, TOPIC_ALIASES, TOPIC_POLICIES
from core.settings import get_settings
from schemas.worksheet import GRID_OPERATIONS
from tools.generate_worksheet_tool import run_check_answer, run_generate_grid, run_generate_worksheet

settings = get_settings()
logger.remove()
logger.add(
    sys.stderr,
    level=settings.log_level,
    format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
)

app = Flask(__name__)


def get_topics_map() -> Dict[str, Any]:
    """
    Everything the worksheet form needs to populate its pickers:
    { "topics": [{"id", "description", "aliases"}], "grades": [...], ... }
    """
    topics = []
    for topic, policy in TOPIC_POLICIES.items():
        aliases = sorted(alias for alias, target in TOPIC_ALIASES.items() if target == topic)
        topics.append({"id": topic, "description": policy["description"], "aliases": aliases})
    return {
        "topics": topics,
        "grades": list(GRADE_LABELS),
        "difficulties": list(DIFFICULTY_CHOICES),
        "gridOperations": list(GRID_OPERATIONS),
    }


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidConfiguration("Request body must be a JSON object.")
    return payload


@app.errorhandler(InvalidConfiguration)
def invalid_configuration(exc: InvalidConfiguration):
    logger.warning("Rejected {} {}: {}", request.method, request.path, exc)
    return jsonify({"ok": False, "error": str(exc)}), 400


@app.route("/api/topics", methods=["GET"])
def topics():
    return jsonify({"ok": True, **get_topics_map()})


@app.route("/api/worksheets/math", methods=["POST"])
def generate_worksheet():
    payload = _json_body()
    config = payload.get("config", payload)
    worksheet = run_generate_worksheet(
        config,
        title=payload.get("title"),
        instructions=payload.get("instructions"),
        special_message=payload.get("specialMessage", payload.get("special_message")),
    )
    return jsonify({"ok": True, "worksheet": worksheet})


@app.route("/api/worksheets/grid", methods=["POST"])
def generate_grid():
    payload = _json_body()
    grid = run_generate_grid(payload.get("config", payload))
    return jsonify({"ok": True, **grid})


@app.route("/api/answers/check", methods=["POST"])
def check_answer():
    result = run_check_answer(_json_body())
    return jsonify({"ok": True, **result})


if __name__ == "__main__":
    app.run(debug=True, port=5000)
