#!/usr/bin/env python3
"""
Script to delete recorded universe runs from data/runs/.

Removes run directories (e.g., 20261019_124236_run/), optionally keeping the
newest few, and clears the last_run.txt marker when the run it names is gone.
"""

import argparse
import shutil
from pathlib import Path

LAST_RUN_MARKER = "last_run.txt"


def find_runs(runs_dir: Path) -> list[Path]:
    """Run directories sorted oldest first (names start with a timestamp)."""
    return sorted(d for d in runs_dir.iterdir() if d.is_dir())


def select_for_deletion(run_dirs: list[Path], keep: int = 0) -> list[Path]:
    if keep <= 0:
        return list(run_dirs)
    return list(run_dirs[:-keep])


def delete_runs(run_dirs: list[Path]) -> tuple[int, int]:
    deleted_count = 0
    failed_count = 0
    for run_dir in run_dirs:
        try:
            shutil.rmtree(run_dir)
        except OSError as e:
            print(f"Error deleting {run_dir.name}: {e}")
            failed_count += 1
            continue
        print(f"Deleted: {run_dir.name}")
        deleted_count += 1
    return deleted_count, failed_count


def clear_stale_marker(runs_dir: Path) -> bool:
    """Remove last_run.txt if the run it points at no longer exists."""
    marker = runs_dir / LAST_RUN_MARKER
    if not marker.exists():
        return False
    run_id = marker.read_text(encoding="utf-8").strip()
    if run_id and (runs_dir / run_id).is_dir():
        return False
    marker.unlink()
    print(f"Deleted: {marker.name}")
    return True


def prune_runs(runs_dir: Path, *, keep: int = 0, dry_run: bool = False, confirm: bool = True) -> int:
    """
    Delete run directories from ``runs_dir``.

    Parameters
    ----------
    runs_dir : Path
        Path to the runs directory (e.g., data/runs)
    keep : int
        Number of newest runs to leave in place
    dry_run : bool
        Only print what would be deleted
    confirm : bool
        Ask before deleting

    Returns the number of deleted directories.
    """
    if not runs_dir.exists():
        print(f"Error: Directory {runs_dir} does not exist.")
        return 0

    targets = select_for_deletion(find_runs(runs_dir), keep)
    if not targets:
        print(f"No run directories to delete in {runs_dir}")
        return 0

    print(f"Found {len(targets)} run directories to delete:")
    for run_dir in targets:
        print(f"  - {run_dir.name}")

    if dry_run:
        print("\n[DRY RUN] Would delete the above directories.")
        return 0

    if confirm:
        response = input(f"\nDelete {len(targets)} run directories? (yes/no): ")
        if response.lower() not in ("yes", "y"):
            print("Deletion cancelled.")
            return 0

    deleted_count, failed_count = delete_runs(targets)
    clear_stale_marker(runs_dir)
    print(f"\nSummary: {deleted_count} directories deleted, {failed_count} failed.")
    return deleted_count


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Delete recorded universe runs from data/runs/",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview what would be deleted
  python delete_runs.py --dry-run

  # Delete everything except the three newest runs
  python delete_runs.py --keep 3

  # Delete all runs without confirmation
  python delete_runs.py --yes
        """,
    )
    parser.add_argument(
        "--runs-dir",
        type=Path,
        default=Path("data/runs"),
        help="Path to the runs directory (default: data/runs)",
    )
    parser.add_argument("--keep", type=int, default=0, help="Keep the N newest runs")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview what would be deleted without actually deleting",
    )
    parser.add_argument("--yes", action="store_true", help="Skip confirmation prompt")
    args = parser.parse_args(argv)
    if args.keep < 0:
        parser.error("--keep must not be negative")

    prune_runs(args.runs_dir, keep=args.keep, dry_run=args.dry_run, confirm=not args.yes)


if __name__ == "__main__":
    main()
