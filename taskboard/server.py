#!/usr/bin/env python3
"""
Task Board Server
-----------------
JSON API over an in-memory TaskBoard, for the board UI.

Usage:
    taskboard-server --port 3000
    taskboard-server --config taskboard.yaml

API:
    GET    /api/board                → { board, stats }   (?category=&dueDate=&q= filters)
    POST   /api/tasks                → create             { title, dueDate, ... }
    POST   /api/tasks/quick          → quick add          { title }
    GET    /api/tasks/<id>           → { task, form }
    PUT    /api/tasks/<id>           → edit               { any editable field }
    POST   /api/tasks/<id>/toggle    → flip isChecked
    DELETE /api/tasks/<id>           → delete
    POST   /api/moves                → drag-end result    { draggableId, source, destination }
    POST   /api/validate             → { ok, errors, payload }
    POST   /api/attachments          → { files: [{name, type, size}] } → { accepted }
    GET    /health

State lives in memory only and is lost on restart.
"""

import logging
import sys

from flask import Flask, jsonify, request

from .config import BoardConfig
from .errors import InvalidMoveError, NotFoundError, ValidationError
from .filters import board_stats
from .schema import FilterCriteria
from .store import TaskBoard
from .validation import AttachmentCandidate, UploadLimits, accept_attachments

logger = logging.getLogger(__name__)

FILTER_ARGS = ("category", "dueDate", "q", "searchQuery")


def create_app(board: TaskBoard = None, config: BoardConfig = None) -> Flask:
    """Build the Flask app around one board instance."""
    if config is None:
        config = BoardConfig()
    if board is None:
        board = TaskBoard.from_config(config)
    limits = UploadLimits.from_config(config)

    app = Flask(__name__)
    app.config["BOARD"] = board

    # ── Errors ───────────────────────────────────────────────────────────────

    @app.errorhandler(ValidationError)
    def validation_failed(e):
        return jsonify({"error": str(e), "errors": e.errors}), 400

    @app.errorhandler(NotFoundError)
    def task_not_found(e):
        return jsonify({"error": str(e), "id": e.task_id}), 404

    @app.errorhandler(InvalidMoveError)
    def move_rejected(e):
        return jsonify({"error": str(e)}), 409

    def body() -> dict:
        data = request.get_json(force=True, silent=True)
        return data if isinstance(data, dict) else {}

    # ── Board ────────────────────────────────────────────────────────────────

    @app.route("/api/board")
    def api_board():
        if any(request.args.get(k) for k in FILTER_ARGS):
            criteria = FilterCriteria.from_params(request.args)
            snapshot = board.get_filtered_board(criteria)
        else:
            snapshot = board.get_board()
        return jsonify({
            "board": snapshot.to_dict(),
            "stats": board_stats(board.get_board()),
        })

    # ── Tasks ────────────────────────────────────────────────────────────────

    @app.route("/api/tasks", methods=["POST"])
    def api_create_task():
        task = board.create(body())
        return jsonify({"task": task.to_dict(), "id": task.id}), 201

    @app.route("/api/tasks/quick", methods=["POST"])
    def api_quick_add():
        task = board.quick_add(body().get("title") or "")
        return jsonify({"task": task.to_dict(), "id": task.id}), 201

    @app.route("/api/tasks/<task_id>", methods=["GET"])
    def api_get_task(task_id):
        task = board.get(task_id)
        return jsonify({"task": task.to_dict(), "form": board.form_data(task_id)})

    @app.route("/api/tasks/<task_id>", methods=["PUT"])
    def api_edit_task(task_id):
        task = board.edit(task_id, body())
        return jsonify({"task": task.to_dict()})

    @app.route("/api/tasks/<task_id>/toggle", methods=["POST"])
    def api_toggle_task(task_id):
        task = board.toggle_checked(task_id)
        return jsonify({"task": task.to_dict()})

    @app.route("/api/tasks/<task_id>", methods=["DELETE"])
    def api_delete_task(task_id):
        task = board.delete(task_id)
        return jsonify({"deleted": task.id})

    # ── Drag and drop ────────────────────────────────────────────────────────

    @app.route("/api/moves", methods=["POST"])
    def api_move():
        moved = board.apply_drop(body())
        if moved is None:
            return "", 204
        return jsonify({"task": moved.to_dict(), "board": board.get_board().to_dict()})

    # ── Form helpers ─────────────────────────────────────────────────────────

    @app.route("/api/validate", methods=["POST"])
    def api_validate():
        return jsonify(board.validate(body()).to_dict())

    @app.route("/api/attachments", methods=["POST"])
    def api_attachments():
        files = body().get("files") or []
        if not isinstance(files, list):
            return jsonify({"error": "files must be a list"}), 400
        try:
            candidates = [AttachmentCandidate.from_dict(f) for f in files]
        except (AttributeError, TypeError, ValueError):
            return jsonify({"error": "each file needs name, type and size"}), 400
        return jsonify({"accepted": accept_attachments(candidates, limits)})

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "tasks": len(board)})

    return app


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None) -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Task Board Server")
    parser.add_argument("--config", help="Path to taskboard.yaml (overrides TASKBOARD_CONFIG)")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("--port", type=int)
    parser.add_argument("--sample", action="store_true", help="Seed the demo tasks")
    args = parser.parse_args(argv)

    config = BoardConfig.load(args.config)
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    if args.sample:
        config.seed_sample_tasks = True

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [taskboard] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    app = create_app(config=config)
    logger.info(f"Serving task board on http://{config.host}:{config.port}")
    # Single-threaded: each request sees the result of the previous one
    app.run(host=config.host, port=config.port, debug=False, threaded=False)


if __name__ == "__main__":
    main()
