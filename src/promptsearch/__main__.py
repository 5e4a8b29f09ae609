from __future__ import annotations
import argparse, json

from . import config as CFG
from .engine import Engine


def _print_results(rows, as_json: bool) -> None:
    if as_json:
        print(json.dumps([r.to_dict() for r in rows], ensure_ascii=False, indent=2))
        return
    if not rows:
        print("(no matches)"); return
    print("#  Score  Match        Key        Title")
    for i, r in enumerate(rows, 1):
        p = r.item
        key = f"/{p.quick_access_key}" if p.quick_access_key else ""
        title = p.title or (p.content.splitlines() or [""])[0]
        print(f"{i:<2} {r.score:<6g} {r.match_type:<12} {key:<10} {title}")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Prompt search CLI (Engine-backed)")
    p.add_argument("--roots", nargs="+", default=[], help="JSON files or folders of prompts")
    p.add_argument("--db", default=None, help='Store DSN: "memory://" or "json:///path"')
    p.add_argument("--weights", default=None, help="JSON file with score weights")
    p.add_argument("-k", type=int, default=CFG.TOP_K, help="Limit number of results")
    p.add_argument("--q", default=None, help="Single query to run once")
    p.add_argument("--suggest", action="store_true", help="Show dropdown suggestions for --q")
    p.add_argument("--complete", action="store_true", help="Show inline completion for --q")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if not args.roots and not args.db:
        p.error("need --roots or --db")

    weights = CFG.load_weights(args.weights) if args.weights else None
    eng = Engine(weights)
    try:
        eng.build(roots=args.roots, db_dsn=args.db, verbose=args.verbose)

        def run_query(q: str):
            if args.suggest:
                out = eng.suggest(q)
                if args.json:
                    print(json.dumps(out.to_dict(), ensure_ascii=False, indent=2))
                else:
                    for s in out.suggestions:
                        print(f"{s.text:<24} {s.description or ''}")
                return
            if args.complete:
                c = eng.complete(q)
                if args.json:
                    print(json.dumps(c.to_dict(), ensure_ascii=False))
                else:
                    print(c.full_text if c.type else "(no completion)")
                return
            _print_results(eng.search(q, top_k=args.k), args.json)

        if args.q:
            run_query(args.q)

        if args.repl:
            print("Type a query (empty line to exit).")
            while True:
                try:
                    q = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not q.strip():
                    break
                run_query(q)

        return 0
    finally:
        eng.shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
