"""
main.py — Graph Algorithm Animator Flask App
==============================================
JSON API over the trace generators, the playback controller and the
comparison (synchronization) layer.  Rendering lives in the client: every
response carries complete Step snapshots, never diffs.

Routes:
  GET  /api/topics                – registry listing
  GET  /api/topics/<key>          – one topic card + its sample graph
  GET  /api/comparisons           – side-by-side pairings
  POST /api/run                   – generate a trace {topic, start?, end?, graph?, seed?}
  POST /api/step/next|prev|reset|play|pause|tick
  POST /api/step/goto             – jump to step {index}
  POST /api/config/speed          – {speed: ms | "slow" | "medium" | "fast" | "turbo"}
  GET  /api/state                 – current run + playback state
  POST /api/compare/start         – enter comparison mode {pair}
  POST /api/compare/next|prev|reset|play|pause|tick
  GET  /api/compare/state         – both sides at the shared index
  GET  /api/compare/result        – analytics for both runs
  GET  /api/explain/<topic>       – prose explanation from the remote model
  GET  /api/feedback/<topic>      – stored like / dislike
  POST /api/feedback/<topic>      – {feedback: "like" | "dislike"}

State management:
  The Flask session cookie only carries an opaque id.  Everything else
  (traces, playback controllers, comparison runs) lives in an in-process
  table keyed by that id, so it is lost on restart and is not shared
  between worker processes.  Only requests that store something (run,
  compare/start, speed) create a table entry, and the table keeps the
  MAX_SESSIONS most recently used entries.
"""

import logging
import random
import secrets
import threading
import time
from collections import OrderedDict
from dataclasses import asdict, dataclass
from typing import Callable, Dict, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import BadRequest

from config import Config
from graph import Graph, GraphError
from algorithms import get_algorithm, list_algorithms
from algorithms.comparisons import get_comparison, list_comparisons
from engine import (
    SPEED_PRESETS, PlaybackController, Recorder, SyncController, TickScheduler, compare,
)
from engine.playback import clamp_speed
from services import ExplanationClient, ExplanationServiceError, FeedbackStore


logger = logging.getLogger(__name__)

PLAYBACK_ACTIONS = ("next", "prev", "reset", "play", "pause", "tick")


# ---------------------------------------------------------------------------
# Per-browser state
# ---------------------------------------------------------------------------
@dataclass
class SessionState:
    scheduler:  TickScheduler
    speed_ms:   int
    recorder:   Optional[Recorder]           = None
    playback:   Optional[PlaybackController] = None
    pair_key:   Optional[str]                = None
    pair_runs:  tuple                        = ()
    sync:       Optional[SyncController]     = None


class SessionTable:
    """
    Live SessionStates keyed by session id, least recently used first.
    At most `limit` entries are kept: creating one more drops the least
    recently used.
    """

    def __init__(self, speed_ms: int, clock: Callable[[], float] = time.monotonic, limit: int = 256):
        self.speed_ms = speed_ms
        self.clock    = clock
        self.limit    = max(1, limit)
        self._states: "OrderedDict[str, SessionState]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid: Optional[str]) -> Optional[SessionState]:
        with self._lock:
            state = self._states.get(sid) if sid is not None else None
            if state is not None:
                self._states.move_to_end(sid)
            return state

    def create(self, sid: str) -> SessionState:
        with self._lock:
            state = self._states.get(sid)
            if state is None:
                state = SessionState(scheduler=TickScheduler(self.clock), speed_ms=self.speed_ms)
                self._states[sid] = state
                while len(self._states) > self.limit:
                    evicted, _ = self._states.popitem(last=False)
                    logger.debug("Dropped idle session %s", evicted)
            self._states.move_to_end(sid)
            return state

    def __len__(self) -> int:
        return len(self._states)


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _parse_speed(value):
    if isinstance(value, str) and not value.isdigit():
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"Invalid speed: {value!r}") from None


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Config] = None, clock: Optional[Callable[[], float]] = None) -> Flask:
    config = config or Config.from_env()

    app = Flask(__name__)
    app.config.from_object(config)
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    sessions  = SessionTable(
        app.config["DEFAULT_SPEED_MS"], clock or time.monotonic, limit=app.config["MAX_SESSIONS"],
    )
    explainer = ExplanationClient(
        api_key=app.config["EXPLANATION_API_KEY"],
        model=app.config["EXPLANATION_MODEL"],
        base_url=app.config["EXPLANATION_URL"],
        timeout=app.config["EXPLANATION_TIMEOUT"],
    )
    feedback  = FeedbackStore(app.config["FEEDBACK_PATH"])
    app.extensions["graph_animator"] = {
        "sessions":  sessions,
        "explainer": explainer,
        "feedback":  feedback,
    }

    def current(create: bool = False) -> Optional[SessionState]:
        """This browser's state; only requests that store something create one."""
        sid = session.get("sid")
        if not create:
            return sessions.get(sid)
        if sid is None:
            sid = session["sid"] = secrets.token_hex(16)
        return sessions.create(sid)

    def active_playback() -> PlaybackController:
        state = current()
        if state is None or state.playback is None:
            raise BadRequest("No active run. POST /api/run first.")
        return state.playback

    def active_sync() -> SyncController:
        state = current()
        if state is None or state.sync is None:
            raise BadRequest("No active comparison. POST /api/compare/start first.")
        return state.sync

    # -----------------------------------------------------------------------
    # Errors → JSON
    # -----------------------------------------------------------------------
    @app.errorhandler(BadRequest)
    def handle_bad_request(e):
        return jsonify({"error": e.description}), 400

    @app.errorhandler(ExplanationServiceError)
    def handle_explanation_error(e):
        return jsonify({"error": str(e), "kind": "explanation_service"}), 502

    # -----------------------------------------------------------------------
    # API: Topics
    # -----------------------------------------------------------------------
    @app.route("/api/topics")
    def api_topics():
        return jsonify({"topics": [info.to_dict() for info in list_algorithms()]})

    @app.route("/api/topics/<key>")
    def api_topic(key):
        info = get_algorithm(key)
        if info is None:
            raise BadRequest(f"Unknown algorithm: {key}")
        card = info.to_dict()
        card["sample_graph"] = info.sample_graph.to_dict()
        return jsonify(card)

    @app.route("/api/comparisons")
    def api_comparisons():
        return jsonify({"comparisons": [c.to_dict() for c in list_comparisons()]})

    # -----------------------------------------------------------------------
    # API: Run Algorithm
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data  = _body()
        topic = data.get("topic")
        info  = get_algorithm(topic) if topic else None
        if info is None:
            raise BadRequest(f"Unknown algorithm: {topic}")

        params = {}
        if info.randomized and data.get("seed") is not None:
            params["rng"] = random.Random(data["seed"])

        graph = None
        if data.get("graph"):
            try:
                graph = Graph.from_dict(data["graph"])
            except (GraphError, KeyError, TypeError) as e:
                raise BadRequest(f"Invalid graph input: {e}") from None

        rec = Recorder()
        rec.start(info.key, graph, data.get("start"), data.get("end"), **params)
        try:
            rec.run_to_completion()
        except GraphError as e:
            raise BadRequest(str(e)) from None

        state = current(create=True)
        if state.playback is not None:
            state.playback.pause()
        state.recorder = rec
        state.playback = PlaybackController(rec.steps, scheduler=state.scheduler, speed_ms=state.speed_ms)
        logger.info("Run %s: %d steps", info.key, len(rec.steps))

        payload = state.playback.to_dict()
        payload.update({
            "topic":          info.key,
            "label":          info.label,
            "data_structure": info.data_structure,
            "pseudocode":     info.pseudocode,
            "graph":          rec.graph.to_dict(),
            "metrics":        asdict(rec.metrics),
        })
        return jsonify(payload)

    # -----------------------------------------------------------------------
    # API: Step Navigation
    # -----------------------------------------------------------------------
    @app.route("/api/step/<action>", methods=["POST"])
    def api_step(action):
        if action not in PLAYBACK_ACTIONS:
            raise BadRequest(f"Unknown playback action: {action}")
        playback = active_playback()
        getattr(playback, action)()
        return jsonify(playback.to_dict())

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        playback = active_playback()
        idx = _body().get("index")
        if not isinstance(idx, int) or isinstance(idx, bool):
            raise BadRequest("index must be an integer")
        playback.seek(idx)
        return jsonify(playback.to_dict())

    @app.route("/api/state")
    def api_state():
        state = current()
        if state is None:
            return jsonify({
                "topic": None, "speed_ms": sessions.speed_ms, "playback": None, "comparison": None,
            })
        if state.playback is not None:
            state.playback.tick()
        return jsonify({
            "topic":      state.recorder.algo_info.key if state.recorder else None,
            "speed_ms":   state.speed_ms,
            "playback":   state.playback.to_dict() if state.playback else None,
            "comparison": state.pair_key,
        })

    # -----------------------------------------------------------------------
    # API: Config Changes
    # -----------------------------------------------------------------------
    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        speed = _parse_speed(_body().get("speed", "medium"))
        if isinstance(speed, str):
            if speed not in SPEED_PRESETS:
                raise BadRequest(f"Unknown speed preset: {speed}")
            speed = SPEED_PRESETS[speed]
        state = current(create=True)
        state.speed_ms = clamp_speed(speed)
        for controller in (state.playback, state.sync):
            if controller is not None:
                controller.set_speed(state.speed_ms)
        return jsonify({"speed_ms": state.speed_ms})

    # -----------------------------------------------------------------------
    # API: Comparison Mode
    # -----------------------------------------------------------------------
    @app.route("/api/compare/start", methods=["POST"])
    def api_compare_start():
        key  = _body().get("pair")
        pair = get_comparison(key) if key else None
        if pair is None:
            raise BadRequest(f"Unknown comparison: {key}")

        runs = []
        for algo_key in (pair.left, pair.right):
            rec = Recorder()
            rec.start(algo_key, pair.graph, pair.start_node)
            rec.run_to_completion()
            runs.append(rec)

        state = current(create=True)
        if state.sync is not None:
            state.sync.pause()
        state.pair_key  = pair.key
        state.pair_runs = tuple(runs)
        state.sync      = SyncController(
            runs[0].steps, runs[1].steps, scheduler=state.scheduler, speed_ms=state.speed_ms,
        )
        logger.info("Comparison %s: %d vs %d steps", pair.key, len(runs[0].steps), len(runs[1].steps))

        payload = state.sync.to_dict()
        payload["comparison"] = pair.to_dict()
        return jsonify(payload)

    @app.route("/api/compare/<action>", methods=["POST"])
    def api_compare_action(action):
        if action not in PLAYBACK_ACTIONS:
            raise BadRequest(f"Unknown playback action: {action}")
        sync = active_sync()
        getattr(sync, action)()
        return jsonify(sync.to_dict())

    @app.route("/api/compare/state")
    def api_compare_state():
        sync = active_sync()
        sync.tick()
        return jsonify(sync.to_dict())

    @app.route("/api/compare/result")
    def api_compare_result():
        active_sync()
        left, right = current().pair_runs
        return jsonify(compare(left, right).to_dict())

    # -----------------------------------------------------------------------
    # API: Explanations & Feedback
    # -----------------------------------------------------------------------
    @app.route("/api/explain/<topic>")
    def api_explain(topic):
        return jsonify({"topic": topic, "markdown": explainer.explain(topic)})

    @app.route("/api/feedback/<topic>", methods=["GET", "POST"])
    def api_feedback(topic):
        if request.method == "POST":
            try:
                feedback.save(topic, _body().get("feedback"))
            except ValueError as e:
                raise BadRequest(str(e)) from None
        return jsonify({"topic": topic, "feedback": feedback.load(topic)})

    return app


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    print("=" * 60)
    print("  Graph Algorithm Animator")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000/api/topics")
    print("=" * 60)
    create_app().run(debug=True, port=5000)
