from __future__ import annotations
import argparse
from flask import Flask, jsonify, request
from promptsearch import config as CFG
from promptsearch.engine import Engine

app = Flask(__name__)
_engine: Engine | None = None

_FALSE = {"0", "false", "no", "off"}


def _flag(name: str, default: bool) -> bool:
    raw = request.args.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE


def _not_ready():
    return jsonify({"ok": False, "error": "engine not initialized"}), 503


# ---------- API ----------
@app.get("/api/search")
def api_search():
    if _engine is None:
        return _not_ready()
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", CFG.TOP_K, type=int)
    rows = _engine.search(q, top_k=k)
    return jsonify([r.to_dict() for r in rows])

@app.get("/api/prompts")
def api_prompts():
    if _engine is None:
        return _not_ready()
    q = request.args.get("q", "", type=str)
    return jsonify([p.to_dict() for p in _engine.filter(q)])

@app.get("/api/suggestions")
def api_suggestions():
    if _engine is None:
        return _not_ready()
    q = request.args.get("q", "", type=str)
    out = _engine.suggest(
        q,
        max_suggestions=request.args.get("max", CFG.MAX_SUGGESTIONS, type=int),
        include_tags=_flag("tags", True),
        include_quick_access=_flag("quick", True),
    )
    return jsonify(out.to_dict())

@app.get("/api/complete")
def api_complete():
    if _engine is None:
        return _not_ready()
    q = request.args.get("q", "", type=str)
    return jsonify(_engine.complete(q).to_dict())

@app.get("/health")
def health():
    if _engine is None:
        return _not_ready()
    return jsonify({"ok": True, "prompts": _engine.store.count()})

@app.get("/")
def home():
    routes = sorted(r.rule for r in app.url_map.iter_rules() if r.rule.startswith("/api/"))
    return jsonify({"service": "promptsearch", "endpoints": routes})


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask JSON API on top of Engine")
    ap.add_argument("--roots", nargs="+", default=[])
    ap.add_argument("--db", dest="db", default=None)  # DSN: "json:///path" or "memory://"
    ap.add_argument("--weights", default=None)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)
    if not args.roots and not args.db:
        ap.error("need --roots or --db")

    global _engine
    _engine = Engine(CFG.load_weights(args.weights) if args.weights else None)
    _engine.build(roots=args.roots, db_dsn=args.db, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
