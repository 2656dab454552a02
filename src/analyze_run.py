"""Analyze a recorded universe run and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
EVENT_TYPES = ("spawn", "drag_start", "drag_end", "resize")


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            planet_raw = row.get("planet", "")
            events.append(
                {
                    "tick": int(float(row["tick"])),
                    "type": row["type"],
                    "planet": int(float(planet_raw)) if planet_raw else None,
                    "x": float(row["x"]),
                    "y": float(row["y"]),
                    "details": row.get("details", ""),
                }
            )
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {etype: 0 for etype in EVENT_TYPES}
    for event in events:
        if event["type"] in summary:
            summary[event["type"]] += 1
    return summary


def summarize_run(ts: Dict[str, np.ndarray], events: List[dict]) -> dict:
    ticks = ts.get("tick", np.array([]))
    planets = ts.get("planets", np.array([]))
    satellites = ts.get("satellites", np.array([]))
    max_radius = ts.get("max_radius", np.array([]))
    reassignments = ts.get("reassignments", np.array([]))
    return {
        "ticks": int(ticks[-1]) if ticks.size else 0,
        "final_planets": int(planets[-1]) if planets.size else 0,
        "final_satellites": int(satellites[-1]) if satellites.size else 0,
        "peak_radius": float(max_radius.max()) if max_radius.size else 0.0,
        "total_reassignments": int(reassignments.sum()) if reassignments.size else 0,
        "events": summarize_events(events),
    }


def plot_population(fig_dir: Path, ts: Dict[str, np.ndarray], events: List[dict]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["tick"], ts["planets"], color="#6478e6", label="Planets")
    ax.plot(ts["tick"], ts["satellites"], color="#eaeaea", label="Satellites")
    spawn_ticks = [event["tick"] for event in events if event["type"] == "spawn"]
    if spawn_ticks:
        ax.vlines(spawn_ticks, 0, 1, transform=ax.get_xaxis_transform(), color="#ffa94d", alpha=0.2, label="Spawn")
    ax.set_facecolor("#121212")
    ax.set_xlabel("tick")
    ax.set_ylabel("count")
    ax.set_title("Population over time")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "population.png", dpi=150)
    plt.close(fig)


def plot_radius(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["tick"], ts["mean_radius"], color="#4dabf7", label="Mean radius")
    ax.plot(ts["tick"], ts["max_radius"], color="#9775fa", label="Max radius")
    ax.set_xlabel("tick")
    ax.set_ylabel("radius [px]")
    ax.set_title("Planet radius over time")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "radius.png", dpi=150)
    plt.close(fig)


def plot_reassignments(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.step(ts["tick"], ts["reassignments"], where="post", color="#94d82d")
    ax.set_xlabel("tick")
    ax.set_ylabel("reassignments per sample")
    ax.set_title("Satellites changing planet")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "reassignments.png", dpi=150)
    plt.close(fig)


def print_summary(run_dir: Path, meta: dict, summary: dict) -> None:
    print(f"Run: {run_dir.name}")
    print(f" Scenario: {meta.get('scenario_name', 'unknown')} (seed {meta.get('seed')})")
    print(f" Ticks: {summary['ticks']}")
    print(f" Final population: {summary['final_planets']} planets, {summary['final_satellites']} satellites")
    print(f" Peak planet radius: {summary['peak_radius']:.2f}")
    print(f" Reassignments: {summary['total_reassignments']}")
    print(
        " Events:" + ",".join(f" {etype}: {count}" for etype, count in summary["events"].items())
    )


def resolve_run_dir(parser: argparse.ArgumentParser, run_dir: str | None, base_runs_dir: Path) -> Path:
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / run_dir
    else:
        last_run_file = base_runs_dir / "last_run.txt"
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_path = base_runs_dir / last_run_file.read_text(encoding="utf-8").strip()
    if not run_path.is_dir():
        parser.error(f"Could not find run directory: {run_path}")
    return run_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a logged universe run and write figures.")
    parser.add_argument("run_dir", nargs="?", help="Path or id of a specific run directory")
    parser.add_argument("--runs-dir", type=Path, default=Path("data") / "runs")
    args = parser.parse_args(argv)

    run_path = resolve_run_dir(parser, args.run_dir, args.runs_dir)

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing required files (meta/timeseries/events).")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)
    if not ts or ts["tick"].size == 0:
        parser.error("timeseries.csv is empty; nothing to analyze.")

    fig_dir = ensure_fig_dir(run_path)
    plot_population(fig_dir, ts, events)
    plot_radius(fig_dir, ts)
    plot_reassignments(fig_dir, ts)

    print_summary(run_path, meta, summarize_run(ts, events))


if __name__ == "__main__":
    main()
