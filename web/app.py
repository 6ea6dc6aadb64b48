from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chesstoe import AIPlayer, Color, Difficulty, Game
from chesstoe.config import Settings
from chesstoe.errors import ChesstoeError
from chesstoe.wire import move_to_wire, square_from_wire

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or Settings()
    app = Flask(__name__)

    game = Game(difficulty=settings.difficulty)
    ai = AIPlayer(depth=settings.hard_depth, time_limit_s=settings.hard_time_limit_s, seed=settings.seed)
    # Color the human plays in "ai" mode; the CPU takes the other one.
    session = {"human": Color.WHITE}

    def ai_turn() -> bool:
        return (
            game.state.mode == "ai"
            and not game.is_game_over()
            and game.turn != session["human"]
        )

    def ai_reply() -> Optional[dict]:
        if game.state.difficulty == Difficulty.HARD.value and settings.think_delay_s:
            time.sleep(settings.think_delay_s)
        move = game.play_ai(ai)
        return move_to_wire(move) if move else None

    @app.errorhandler(ChesstoeError)
    def handle_game_error(exc: ChesstoeError):
        payload = {"error": str(exc)}
        reason = getattr(exc, "reason", None)
        if reason:
            payload["reason"] = reason
        return jsonify(payload), 400

    @app.get("/api/state")
    def api_state():
        return jsonify(game.snapshot())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        mode = (data.get("mode") or "ai").lower()
        if mode not in ("ai", "local", "online"):
            return jsonify({"error": f"Unknown mode: {mode}"}), 400
        try:
            difficulty = Difficulty((data.get("difficulty") or settings.difficulty).lower())
            human = Color((data.get("color") or "white").lower())
            first = Color((data.get("first_player") or "white").lower())
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        session["human"] = human
        game.reset(mode, difficulty, first)

        # If the player chose to wait, the CPU opens
        ai_move = ai_reply() if ai_turn() else None

        snap = game.snapshot()
        snap["ai_move"] = ai_move
        return jsonify(snap)

    @app.post("/api/validate")
    def api_validate():
        data = request.get_json(silent=True) or {}
        origin = square_from_wire(data.get("from"), "from")
        to = square_from_wire(data.get("to"), "to")
        result = game.check(origin, to)
        return jsonify(
            {
                "legal": result.legal,
                "reason": result.reason.value if result.reason else None,
                "message": result.message,
            }
        )

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        if not payload.get("move"):
            return jsonify({"error": "Missing move"}), 400
        if ai_turn():
            return jsonify({"error": "It is the CPU's turn"}), 400

        recorded = game.push_wire(payload["move"])

        ai_move = ai_reply() if ai_turn() else None

        snap = game.snapshot()
        snap["move"] = move_to_wire(recorded)
        snap["ai_move"] = ai_move
        return jsonify(snap)

    @app.post("/api/remote")
    def api_remote():
        payload = request.get_json(silent=True) or {}
        if not payload.get("move"):
            return jsonify({"error": "Missing move"}), 400
        recorded = game.push_wire(payload["move"], remote=True)
        snap = game.snapshot()
        snap["move"] = move_to_wire(recorded)
        return jsonify(snap)

    @app.post("/api/ai")
    def api_ai():
        if game.is_game_over():
            return jsonify({"error": "The game is over."}), 400
        ai_move = ai_reply()
        snap = game.snapshot()
        snap["ai_move"] = ai_move
        return jsonify(snap)

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=Settings().log_level.upper())
    app.run(host="0.0.0.0", port=5000, debug=True)
