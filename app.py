from __future__ import annotations

import logging
import os
from threading import Lock
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

from game import (
    GameState,
    InvalidDepth,
    Node,
    Resolved,
    RulesError,
    apply_move,
    current_turn,
    describe_status,
    effective_mark,
    is_stalemate,
    new_game,
    remaining_moves,
    status,
    visit_children,
)

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = int(os.getenv("FRACTAL_DEPTH", "2"))
MAX_DEPTH = int(os.getenv("FRACTAL_MAX_DEPTH", "5"))

app = Flask(__name__)


class GameSession:
    """
    The single hotseat game hosted by this process.

    Flask serves requests from several threads, so every read or write of the
    game state happens under one lock.
    """

    def __init__(self, depth: int) -> None:
        self._lock = Lock()
        self.state: GameState = new_game(_check_depth(depth))

    def restart(self, depth: Optional[int] = None) -> Dict[str, Any]:
        with self._lock:
            target = self.state.depth if depth is None else depth
            self.state = new_game(_check_depth(target))
            logger.info("New game at depth %d", self.state.depth)
            return _state_to_json(self.state)

    def change_layers(self, delta: int) -> Dict[str, Any]:
        with self._lock:
            target = min(max(self.state.depth + delta, 1), MAX_DEPTH)
            self.state = new_game(target)
            logger.info("New game at depth %d", self.state.depth)
            return _state_to_json(self.state)

    def move(self, path: Any) -> Dict[str, Any]:
        with self._lock:
            apply_move(self.state, path)
            return _state_to_json(self.state)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return _state_to_json(self.state)


def _check_depth(depth: Any) -> int:
    if not isinstance(depth, int) or isinstance(depth, bool) or not 1 <= depth <= MAX_DEPTH:
        raise InvalidDepth(f"Depth must be between 1 and {MAX_DEPTH}, got {depth!r}")
    return depth


def _node_to_json(node: Node) -> Dict[str, Any]:
    # One-way view for a front-end; there is no matching loader.
    if isinstance(node, Resolved):
        return {"mark": str(node.mark) if node.mark else None}
    cells: List[List[Dict[str, Any]]] = [[{} for _ in range(3)] for _ in range(3)]
    for (x, y), child in visit_children(node):
        cells[x][y] = _node_to_json(child)
    winner = effective_mark(node)
    return {
        "winner": str(winner) if winner else None,
        "stalemate": winner is None and is_stalemate(node),
        "cells": cells,
    }


def _status_to_json(state: GameState) -> Dict[str, Any]:
    st = status(state)
    out: Dict[str, Any] = {"over": st.is_over, "winner": None, "stalemate": False}
    if st.is_over:
        out["winner"] = str(st.outcome.winner) if st.outcome.winner else None
        out["stalemate"] = st.outcome.is_stalemate
    out["message"] = describe_status(st)
    return out


def _state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "layers": int(s.depth),
        "turn": str(current_turn(s)),
        "movesMade": int(s.moves_made),
        "movesLeft": int(remaining_moves(s)),
        "status": _status_to_json(s),
        "board": _node_to_json(s.board),
    }


session = GameSession(DEFAULT_DEPTH)


@app.errorhandler(RulesError)
def handle_rules_error(e: RulesError) -> Any:
    return jsonify({"ok": False, "error": str(e), "kind": type(e).__name__}), 400


# ---------- Game API ----------

@app.get("/api/state")
def api_state() -> Any:
    return jsonify({"ok": True, "state": session.snapshot()})


def _json_object() -> Optional[Dict[str, Any]]:
    # An empty or unparsable body counts as {}; any other non-object is rejected.
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _bad_body() -> Any:
    return jsonify({"ok": False, "error": "request body must be a JSON object"}), 400


@app.post("/api/new")
def api_new() -> Any:
    body = _json_object()
    if body is None:
        return _bad_body()
    state = session.restart(body.get("depth"))
    return jsonify({"ok": True, "state": state})


@app.post("/api/reset")
def api_reset() -> Any:
    state = session.restart()
    return jsonify({"ok": True, "state": state})


@app.post("/api/layers")
def api_layers() -> Any:
    body = _json_object()
    if body is None:
        return _bad_body()
    delta = body.get("delta")
    if type(delta) is not int or delta not in (1, -1):
        return jsonify({"ok": False, "error": "delta must be 1 or -1"}), 400
    state = session.change_layers(delta)
    return jsonify({"ok": True, "state": state})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_object()
    if body is None:
        return _bad_body()
    if "path" not in body:
        return jsonify({"ok": False, "error": "missing path"}), 400
    state = session.move(body["path"])
    return jsonify({"ok": True, "state": state})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
