"""Entry point: ``python -m paradesim``.

Supports three modes:
  - ``python -m paradesim``                        → Launch the FastAPI playback server
  - ``python -m paradesim eval FILE --time T``     → Print one evaluated frame as JSON
  - ``python -m paradesim bench FILE --frames N``  → Time evaluation over a full playback
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parade ground timeline engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI playback server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--fps", type=float, default=60.0, help="Playback clock frame rate")
    srv.add_argument("--speed", type=float, default=1.0, help="Timeline seconds per wall second")
    srv.add_argument("--storage", type=str, default="saves", help="Directory for saved parades")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    srv.add_argument("--frame-debug", action="store_true", help="Also log every evaluated frame at DEBUG")

    # --- One-shot evaluation ---
    ev = sub.add_parser("eval", help="Evaluate a saved parade at one instant")
    ev.add_argument("file", type=str, help="Parade JSON (a single parade or a save index)")
    ev.add_argument("--time", type=float, default=0.0)
    ev.add_argument("--parade", type=str, default=None, help="Parade id when FILE is a save index")
    ev.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])
    ev.add_argument("--frame-debug", action="store_true", help="Also log the evaluator at DEBUG")

    # --- Throughput check ---
    bench = sub.add_parser("bench", help="Evaluate every frame of a parade and report timing")
    bench.add_argument("file", type=str)
    bench.add_argument("--frames", type=int, default=600)
    bench.add_argument("--parade", type=str, default=None)
    bench.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _load_state(path: str, parade_id: str | None):
    from paradesim.core.errors import ParadeNotFoundError
    from paradesim.core.parade import ParadeState

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        return ParadeState.from_dict(raw)
    records = [r for r in raw if isinstance(r, dict)]
    if parade_id is not None:
        records = [r for r in records if (r.get("config") or {}).get("id") == parade_id]
    if not records:
        raise ParadeNotFoundError(parade_id or path)
    return ParadeState.from_dict(records[0])


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from paradesim.api.app import create_app
    from paradesim.config import EngineConfig

    config = EngineConfig(
        frame_rate=args.fps,
        playback_speed=args.speed,
        storage_dir=args.storage,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        frame_debug=args.frame_debug,
    )
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=args.log_level.lower())


def _run_eval(args: argparse.Namespace) -> None:
    from paradesim.engine.timeline import evaluate
    from paradesim.systems.digest import frame_digest
    from paradesim.utils.logging import setup_logging

    setup_logging(args.log_level, frame_debug=args.frame_debug)
    state = _load_state(args.file, args.parade)
    snapshot = evaluate(state, args.time)
    out = {"time": args.time, "digest": frame_digest(snapshot), **snapshot.to_dict()}
    json.dump(out, sys.stdout, indent=2)
    sys.stdout.write("\n")


def _run_bench(args: argparse.Namespace) -> None:
    from paradesim.engine.timeline import evaluate
    from paradesim.utils.logging import setup_logging

    setup_logging(args.log_level)
    state = _load_state(args.file, args.parade)
    frames = max(1, args.frames)
    duration = max(state.animation.duration, 0.0)

    start = time.perf_counter()
    for i in range(frames):
        evaluate(state, duration * i / max(frames - 1, 1))
    elapsed = max(time.perf_counter() - start, 1e-9)

    logger.info("Evaluated %d frames in %.3fs", frames, elapsed)
    print(f"{frames} frames, {len(state.entities)} entities, {len(state.animation.tracks)} tracks")
    print(f"{elapsed:.3f}s total, {elapsed / frames * 1000:.3f}ms/frame, {frames / elapsed:.1f} frames/sec")


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])

    match args.command:
        case "serve":
            _run_server(args)
        case "eval":
            _run_eval(args)
        case "bench":
            _run_bench(args)


if __name__ == "__main__":
    main()
