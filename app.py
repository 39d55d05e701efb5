from __future__ import annotations

import logging
import os
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from flask import Flask, jsonify, request, send_from_directory

from game import (
    CategoryProvider,
    EmojiTicTacToeError,
    InvalidPositionError,
    Match,
    MatchNotFound,
    MatchSnapshot,
    PlacedMark,
    UnknownCategoryError,
)

logger = logging.getLogger(__name__)

VANISH_DELAY_MS = int(os.getenv("EMOJI_TTT_VANISH_MS", "800"))
# Matches untouched for this long are dropped from memory
MATCH_TTL_S = float(os.getenv("EMOJI_TTT_MATCH_TTL_S", "3600"))

# Serve static assets from ./static (explicit absolute path)
STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)


class InvalidRequest(EmojiTicTacToeError):
    """Request body is not a JSON object."""
    pass


@dataclass
class _Entry:
    match: Match
    lock: threading.Lock
    last_access: float


class MatchRegistry:
    """In-memory matches keyed by id. Each match has its own lock so a request is its only writer.

    Matches idle for longer than ``ttl`` seconds are dropped whenever a new one
    is created, and a lookup of an idle match behaves as if it were gone.
    """

    def __init__(
        self,
        provider: Optional[CategoryProvider] = None,
        clock: Callable[[], float] = time.monotonic,
        vanish_delay: float = VANISH_DELAY_MS / 1000.0,
        ttl: float = MATCH_TTL_S,
    ) -> None:
        self.provider = provider or CategoryProvider()
        self.clock = clock
        self.vanish_delay = vanish_delay
        self.ttl = ttl
        self._matches: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def _is_expired(self, entry: _Entry, now: float) -> bool:
        return now - entry.last_access > self.ttl

    def purge_expired(self) -> List[str]:
        now = self.clock()
        with self._lock:
            expired = [mid for mid, entry in self._matches.items() if self._is_expired(entry, now)]
            for mid in expired:
                del self._matches[mid]
        if expired:
            logger.info("dropped %d idle matches", len(expired))
        return expired

    def create(self, player1_category: str, player2_category: str) -> Tuple[str, Match]:
        match = Match(
            player1_category,
            player2_category,
            provider=self.provider,
            clock=self.clock,
            vanish_delay=self.vanish_delay,
        )
        self.purge_expired()
        match_id = uuid.uuid4().hex
        with self._lock:
            self._matches[match_id] = _Entry(match, threading.Lock(), self.clock())
        return match_id, match

    @contextmanager
    def locked(self, match_id: str) -> Iterator[Match]:
        now = self.clock()
        with self._lock:
            entry = self._matches.get(match_id)
            if entry is not None and self._is_expired(entry, now):
                del self._matches[match_id]
                entry = None
            if entry is not None:
                entry.last_access = now
        if entry is None:
            raise MatchNotFound(match_id)
        with entry.lock:
            yield entry.match

    def discard(self, match_id: str) -> bool:
        with self._lock:
            return self._matches.pop(match_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._matches)


registry = MatchRegistry()


def _mark_to_json(m: Optional[PlacedMark]) -> Optional[Dict[str, Any]]:
    if m is None:
        return None
    return {"position": int(m.position), "symbol": m.symbol, "owner": int(m.owner)}


def snapshot_to_json(s: MatchSnapshot) -> Dict[str, Any]:
    return {
        "cells": [_mark_to_json(c) for c in s.cells],
        "currentPlayer": int(s.current_player),
        "winner": s.winner,
        "winningLine": list(s.winning_line) if s.winning_line else None,
        "moveCounts": {"1": s.move_counts[0], "2": s.move_counts[1]},
        "maxMarks": s.max_marks,
        "vanishing": s.vanishing,
        "vanishRemainingMs": int(round(s.vanish_remaining * 1000)),
        "categories": {"1": s.categories[0], "2": s.categories[1]},
    }


def _error(message: str, status: int) -> Any:
    return jsonify({"ok": False, "error": message}), status


def _json_body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidRequest("request body must be a JSON object")
    return body


def _match_id(body: Dict[str, Any]) -> str:
    return str(body.get("matchId", ""))


@app.errorhandler(MatchNotFound)
def _match_not_found(e: MatchNotFound) -> Any:
    return _error(str(e), 404)


@app.errorhandler(InvalidRequest)
def _invalid_request(e: InvalidRequest) -> Any:
    return _error(str(e), 400)


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


@app.get("/styles.css")
def styles_css() -> Any:
    resp = send_from_directory(app.static_folder, "styles.css")
    resp.headers["Content-Type"] = "text/css; charset=utf-8"
    return resp


# ---------- Game API (used by main.js) ----------

@app.get("/api/categories")
def api_categories() -> Any:
    table = registry.provider.as_dict()
    return jsonify({"ok": True, "categories": {name: list(symbols) for name, symbols in table.items()}})


@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    p1 = body.get("player1Category")
    p2 = body.get("player2Category")
    if not isinstance(p1, str) or not isinstance(p2, str):
        return _error("player1Category and player2Category required", 400)
    try:
        match_id, match = registry.create(p1, p2)
    except UnknownCategoryError as e:
        return _error(str(e), 400)
    return jsonify({"ok": True, "matchId": match_id, "state": snapshot_to_json(match.snapshot())})


@app.post("/api/state")
def api_state() -> Any:
    body = _json_body()
    with registry.locked(_match_id(body)) as match:
        match.tick()
        return jsonify({"ok": True, "state": snapshot_to_json(match.snapshot())})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    position = body.get("position")
    with registry.locked(_match_id(body)) as match:
        try:
            accepted = match.attempt_move(position)  # type: ignore[arg-type]
        except InvalidPositionError as e:
            return _error(str(e), 400)
        return jsonify({"ok": True, "accepted": accepted, "state": snapshot_to_json(match.snapshot())})


@app.post("/api/reset")
def api_reset() -> Any:
    body = _json_body()
    with registry.locked(_match_id(body)) as match:
        match.reset()
        return jsonify({"ok": True, "state": snapshot_to_json(match.snapshot())})


@app.post("/api/play_again")
def api_play_again() -> Any:
    body = _json_body()
    match_id = _match_id(body)
    if not registry.discard(match_id):
        raise MatchNotFound(match_id)
    return jsonify({"ok": True})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
