from __future__ import annotations

import logging
import threading
from typing import Any

from flask import Flask, jsonify, render_template_string, request

from .config import ViewerSettings
from .errors import SelectionRequiredError, UnknownNodeError
from .session import GraphSession
from .svg import render_svg

logger = logging.getLogger(__name__)


APP_HTML = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Graph Traversal Canvas</title>
  <style>
    body { font-family: Arial, sans-serif; margin: 16px; background: #0f172a; color: #e2e8f0; }
    .card { background: #111827; border: 1px solid #334155; border-radius: 10px; padding: 12px; margin-bottom: 12px; }
    h1 { margin: 0 0 8px 0; }
    .muted { color: #94a3b8; }
    button { padding: 6px 10px; border: none; border-radius: 6px; background: #2563eb; color: #fff; margin-right: 6px; }
    #canvas { width: {{ width }}px; height: {{ height }}px; border: 1px solid #334155; border-radius: 6px; cursor: grab; user-select: none; }
    #tooltip { position: fixed; display: none; background: #0b1220; border: 1px solid #233047; border-radius: 6px; padding: 4px 8px; font-size: 12px; pointer-events: none; }
  </style>
</head>
<body>
  <div class="card">
    <h1>Graph Traversal Canvas</h1>
    <div class="muted">Left click selects, shift/right click toggles, middle click or long press runs BFS.
      Enter deletes the edge between two selected nodes, c clears, a runs BFS.</div>
    <div style="margin-top:8px;">
      <button onclick="post('/api/clear')">Clear</button>
      <button onclick="traverse('bfs')">BFS from selection</button>
      <button onclick="traverse('dfs')">DFS from selection</button>
      <button onclick="post('/api/restore')">Restore graph</button>
    </div>
    <div id="status" class="muted" style="margin-top:8px;"></div>
  </div>
  <div id="canvas" tabindex="0"></div>
  <div id="tooltip"></div>

<script>
const canvas = document.getElementById('canvas');
const tooltip = document.getElementById('tooltip');
let drag = null;
let pressTimer = null;

async function refresh() {
  const res = await fetch('/api/svg');
  canvas.innerHTML = await res.text();
}

async function post(url, body) {
  const res = await fetch(url, {method: 'POST', headers: {'Content-Type': 'application/json'}, body: JSON.stringify(body || {})});
  const data = await res.json();
  document.getElementById('status').textContent = res.ok ? '' : (data.error || res.status);
  await refresh();
  return {ok: res.ok, data};
}

async function animate() {
  const {ok, data} = await post('/api/step');
  if (ok && data.frame && !data.frame.done) {
    setTimeout(animate, data.frame.delay * 1000);
  }
}

async function traverse(kind) {
  const {ok} = await post('/api/traverse', {kind});
  if (ok) animate();
}

function local(ev) {
  const r = canvas.getBoundingClientRect();
  return {x: ev.clientX - r.left, y: ev.clientY - r.top};
}

canvas.addEventListener('contextmenu', ev => ev.preventDefault());
canvas.addEventListener('mousedown', async ev => {
  ev.preventDefault();
  const p = local(ev);
  drag = {x: ev.clientX, y: ev.clientY, moved: false};
  pressTimer = setTimeout(async () => {
    pressTimer = null;
    const {ok} = await post('/api/longpress', p);
    if (ok) animate();
  }, {{ long_press_ms }});
  const {ok, data} = await post('/api/pointer', {button: ev.button, x: p.x, y: p.y, shift: ev.shiftKey});
  if (ok && data.started) animate();
});
window.addEventListener('mousemove', ev => {
  if (drag) {
    const dx = ev.clientX - drag.x, dy = ev.clientY - drag.y;
    if (Math.abs(dx) + Math.abs(dy) > 2) {
      if (pressTimer) { clearTimeout(pressTimer); pressTimer = null; }
      drag = {x: ev.clientX, y: ev.clientY, moved: true};
      post('/api/pan', {dx, dy});
    }
  }
});
window.addEventListener('mouseup', () => { drag = null; if (pressTimer) { clearTimeout(pressTimer); pressTimer = null; } });
canvas.addEventListener('wheel', ev => {
  ev.preventDefault();
  const p = local(ev);
  post('/api/wheel', {delta: ev.deltaY, x: p.x, y: p.y});
}, {passive: false});
canvas.addEventListener('mousemove', async ev => {
  const p = local(ev);
  const res = await fetch(`/api/tooltip?x=${p.x}&y=${p.y}`);
  const data = await res.json();
  if (data.text) {
    tooltip.style.display = 'block';
    tooltip.style.left = ev.clientX + 'px';
    tooltip.style.top = (ev.clientY - 28) + 'px';
    tooltip.textContent = data.text;
  } else {
    tooltip.style.display = 'none';
  }
});
window.addEventListener('keydown', async ev => {
  const {ok, data} = await post('/api/key', {key: ev.key});
  if (ok && data.started) animate();
});

refresh();
</script>
</body>
</html>
"""


def _number(data: dict[str, Any], key: str, default: float | None = None) -> float:
    value = data.get(key, default)
    if value is None:
        raise ValueError("missing {}".format(key))
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError("invalid {}: {!r}".format(key, value))


def _node(session: GraphSession, value: Any) -> int:
    try:
        node = int(value)
    except (TypeError, ValueError):
        raise UnknownNodeError(value)
    if node not in session.store:
        raise UnknownNodeError(node)
    return node


def create_app(session: GraphSession | None = None, settings: ViewerSettings | None = None) -> Flask:
    app = Flask(__name__)
    settings = settings or ViewerSettings.from_env()
    if session is None:
        session = GraphSession(width=settings.width, height=settings.height)
    lock = threading.Lock()
    app.config["GRAPH_SESSION"] = session

    def _payload() -> dict[str, Any]:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _state(**extra: Any):
        body = {"info": session.info()}
        body.update(extra)
        return jsonify(body)

    @app.errorhandler(ValueError)
    def bad_value(exc):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(UnknownNodeError)
    def unknown_node(exc):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(SelectionRequiredError)
    def selection_required(exc):
        return jsonify({"error": str(exc)}), 409

    @app.get("/")
    def index() -> str:
        return render_template_string(
            APP_HTML,
            width=int(session.width),
            height=int(session.height),
            long_press_ms=int(session.config.timings.long_press * 1000),
        )

    @app.get("/api/state")
    def api_state():
        with lock:
            return jsonify(session.frame().to_dict())

    @app.get("/api/svg")
    def api_svg():
        with lock:
            svg = render_svg(session.frame(), session.width, session.height, session.config.palette)
        return app.response_class(svg, mimetype="image/svg+xml")

    @app.get("/api/tooltip")
    def api_tooltip():
        with lock:
            if request.args.get("node"):
                node = _node(session, request.args.get("node"))
            else:
                node = session.node_at(_number(request.args, "x"), _number(request.args, "y"))
            text = session.tooltip(node) if node is not None else ""
        return jsonify({"node": node, "text": text})

    @app.post("/api/pointer")
    def api_pointer():
        data = _payload()
        with lock:
            button = int(_number(data, "button", 0))
            run = session.pointer_down(button, _number(data, "x"), _number(data, "y"), bool(data.get("shift")))
            return _state(started=run is not None)

    @app.post("/api/longpress")
    def api_longpress():
        data = _payload()
        with lock:
            run = session.long_press(_number(data, "x"), _number(data, "y"))
            return _state(started=run is not None)

    @app.post("/api/select")
    def api_select():
        data = _payload()
        with lock:
            node = _node(session, data.get("node"))
            if data.get("toggle"):
                session.toggle(node)
            else:
                session.select(node)
            return _state()

    @app.post("/api/key")
    def api_key():
        data = _payload()
        key = str(data.get("key") or "")
        if not key:
            raise ValueError("missing key")
        with lock:
            run = session.key(key)
            return _state(started=run is not None)

    @app.post("/api/wheel")
    def api_wheel():
        data = _payload()
        with lock:
            session.wheel(_number(data, "delta"), _number(data, "x"), _number(data, "y"))
            return jsonify({"view": session.viewport.snapshot()})

    @app.post("/api/pan")
    def api_pan():
        data = _payload()
        with lock:
            session.pan(_number(data, "dx", 0.0), _number(data, "dy", 0.0))
            return jsonify({"view": session.viewport.snapshot()})

    @app.post("/api/resize")
    def api_resize():
        data = _payload()
        with lock:
            session.resize(_number(data, "width"), _number(data, "height"))
            return jsonify({"view": session.viewport.snapshot()})

    @app.post("/api/traverse")
    def api_traverse():
        data = _payload()
        kind = str(data.get("kind") or "bfs").lower()
        if kind not in ("bfs", "dfs"):
            raise ValueError("unknown traversal kind: {}".format(kind))
        with lock:
            if data.get("node") is not None:
                run = session.start_traversal(kind, _node(session, data.get("node")))
            else:
                run = session.start_from_selection(kind)
            logger.info("%s requested, generation %s", kind, run.generation if run else None)
            return _state(started=run is not None)

    @app.post("/api/step")
    def api_step():
        with lock:
            frame = session.step()
            return _state(frame=frame.to_dict() if frame is not None else None)

    @app.post("/api/clear")
    def api_clear():
        with lock:
            session.clear()
            return _state()

    @app.post("/api/restore")
    def api_restore():
        with lock:
            session.restore()
            return _state()

    return app


def main():
    settings = ViewerSettings.from_env()
    logging.basicConfig(level=logging.INFO)
    app = create_app(settings=settings)
    app.run(host=settings.host, port=settings.port, debug=False)


if __name__ == "__main__":
    main()
