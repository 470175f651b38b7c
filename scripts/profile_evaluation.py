#!/usr/bin/env python3
"""Timeline evaluation profiler.

Usage:
    python scripts/profile_evaluation.py --blocks 8 --frames 1800
    python scripts/profile_evaluation.py --blocks 20 --frames 600 --cprofile eval.prof
    python scripts/profile_evaluation.py --file saves/parades.json

Reports:
    - Per-frame timing statistics (min, max, mean, p50, p95, p99)
    - Throughput (frames/sec) against the playback frame rate
    - Digest of the first and last frame (stable across runs)
    - Optional: cProfile dump for flame graph generation
"""

from __future__ import annotations

import argparse
import cProfile
import io
import json
import os
import pstats
import statistics
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from paradesim.core.actions import AnimationState, AnimationTrack, MoveAction, TurnAction, WheelAction
from paradesim.core.enums import EntityType, MovePathMode, PivotCorner
from paradesim.core.models import Entity, GroupMetadata
from paradesim.core.parade import ParadeConfig, ParadeState
from paradesim.engine.timeline import evaluate
from paradesim.systems.digest import frame_digest


def _synthetic_parade(blocks: int, rows: int, cols: int) -> ParadeState:
    """Contingent blocks that march on, wheel, march and turn to face the dais."""
    entities: list[Entity] = []
    groups: dict[str, GroupMetadata] = {}
    tracks: dict[str, AnimationTrack] = {}

    for b in range(blocks):
        gid = f"block-{b}"
        groups[gid] = GroupMetadata(id=gid, label=f"Contingent {b + 1}", group_type="CONTINGENT")
        ox, oy = 5.0 + b * (cols + 3), 50.0
        for r in range(rows):
            for c in range(cols):
                entities.append(Entity(
                    id=f"{gid}-{r}-{c}", type=EntityType.TROOPER.value,
                    x=ox + c, y=oy + r, group_id=gid,
                ))
        t0 = b * 2.0
        tracks[gid] = AnimationTrack(owner_id=gid, actions=(
            MoveAction(id=f"{gid}-m1", start_time=t0, duration=8.0, target_x=ox, target_y=20.0,
                       path_mode=MovePathMode.DIRECT),
            WheelAction(id=f"{gid}-w1", start_time=t0 + 8.0, duration=4.0, pivot_corner=PivotCorner.TR),
            MoveAction(id=f"{gid}-m2", start_time=t0 + 12.0, duration=6.0, target_x=ox + 10.0, target_y=10.0),
            TurnAction(id=f"{gid}-t1", start_time=t0 + 18.0, duration=1.0, target_rotation=180.0),
        ))

    officer = Entity(id="parade-commander", type=EntityType.OFFICER.value, x=50.0, y=58.0)
    entities.append(officer)
    tracks[officer.id] = AnimationTrack(owner_id=officer.id, actions=(
        MoveAction(id="pc-m1", start_time=0.0, duration=10.0, target_x=50.0, target_y=5.0),
        TurnAction(id="pc-t1", start_time=10.0, duration=1.0, target_rotation=180.0),
    ))

    return ParadeState(
        config=ParadeConfig(title=f"Synthetic ({blocks} blocks)"),
        entities=entities,
        groups=groups,
        animation=AnimationState(duration=blocks * 2.0 + 20.0, tracks=tracks, track_order=list(tracks)),
    )


def _load_file(path: str) -> ParadeState:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if isinstance(raw, list):
        raw = raw[0]
    return ParadeState.from_dict(raw)


def _run_frames(state: ParadeState, num_frames: int) -> dict:
    """Evaluate *num_frames* evenly spaced instants and time each one."""
    duration = max(state.animation.duration, 0.0)
    frame_times: list[float] = []
    digests: list[str] = []

    for i in range(num_frames):
        t = duration * i / max(num_frames - 1, 1)
        t_start = time.perf_counter()
        snapshot = evaluate(state, t)
        frame_times.append(time.perf_counter() - t_start)
        if i == 0 or i == num_frames - 1:
            digests.append(frame_digest(snapshot))

    return {"frame_times": frame_times, "digests": digests}


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(state: ParadeState, data: dict, wall_time: float, fps: float) -> None:
    """Print a formatted performance report."""
    frame_times = data["frame_times"]
    num_frames = len(frame_times)

    if num_frames == 0:
        print("No frames evaluated.")
        return

    print("\n" + "=" * 70)
    print("  TIMELINE EVALUATION REPORT")
    print("=" * 70)

    actions = sum(len(t.actions) for t in state.animation.tracks.values())
    print(f"\n  Parade:            {state.config.title}")
    print(f"  Entities:          {len(state.entities)}")
    print(f"  Groups / tracks:   {len(state.groups)} / {len(state.animation.tracks)} ({actions} actions)")
    print(f"  Frames evaluated:  {num_frames}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_frames / wall_time:.1f} frames/sec")
    print(f"  Frame budget:      {1000.0 / fps:.2f}ms at {fps:.0f} fps")

    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(frame_times) * 1000:>10.3f}")
    print(f"  {'Mean':<16} {statistics.mean(frame_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(frame_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(frame_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(frame_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(frame_times) * 1000:>10.3f}")
    if num_frames > 1:
        print(f"  {'StdDev':<16} {statistics.stdev(frame_times) * 1000:>10.3f}")

    over = sum(1 for t in frame_times if t > 1.0 / fps)
    print(f"\n  Frames over budget: {over} ({over / num_frames * 100:.1f}%)")
    print(f"  First/last digest:  {' / '.join(data['digests'])}")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile timeline evaluation")
    parser.add_argument("--frames", type=int, default=1800, help="Frames to evaluate across the timeline")
    parser.add_argument("--blocks", type=int, default=8, help="Contingent blocks in the synthetic parade")
    parser.add_argument("--rows", type=int, default=4)
    parser.add_argument("--cols", type=int, default=6)
    parser.add_argument("--file", type=str, default=None, help="Profile a saved parade instead")
    parser.add_argument("--fps", type=float, default=60.0, help="Playback frame rate for the budget line")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    state = _load_file(args.file) if args.file else _synthetic_parade(args.blocks, args.rows, args.cols)
    print(f"Profiling: {args.frames} frames, {len(state.entities)} entities")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_frames(state, max(args.frames, 1))
    wall_time = max(time.perf_counter() - wall_start, 1e-9)

    if profiler:
        profiler.disable()

    _print_report(state, data, wall_time, args.fps)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"  View with: python -m pstats {args.cprofile}")

        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
