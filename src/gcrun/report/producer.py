from collections import Counter
from pathlib import Path
from typing import Any, Dict, List
import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


def strategy_labels(paths: List[str]) -> Dict[str, str]:
    """Short class-name labels, falling back to the full entrypoint where class names collide."""
    short = {path: path.rsplit(":", 1)[-1] for path in paths}
    counts = Counter(short.values())
    return {path: label if counts[label] == 1 else path for path, label in short.items()}


def produce_report(record: Dict[str, Any], output_dir: Path) -> Dict[str, str]:
    """Write GC content and strategy timing tables plus a timing chart into ``output_dir``."""
    output_dir = Path(output_dir)
    results: List[Dict[str, Any]] = record.get("results", [])
    timings: Dict[str, Dict[str, Any]] = record.get("timings", {})

    gc_df = pd.DataFrame(results, columns=["name", "length", "weighted_sum", "gc_content"])
    gc_df.to_csv(output_dir / "gc_content.csv", index=False)

    labels = strategy_labels(list(timings))
    timing_df = pd.DataFrame(
        [{"strategy": labels[path], "entrypoint": path, **t} for path, t in timings.items()],
        columns=["strategy", "entrypoint", "calls", "total_ns", "mean_ns"],
    )
    timing_df.to_csv(output_dir / "strategy_timings.csv", index=False)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(timing_df["strategy"], timing_df["mean_ns"] / 1000.0, color="steelblue", edgecolor="black", alpha=0.85)
    ax.set_ylabel("Mean time per sequence (µs)")
    ax.set_title(f"Strategy timings ({record.get('manifest', {}).get('job_id', 'job')})")
    for i, v in enumerate(timing_df["mean_ns"] / 1000.0):
        ax.text(i, v, f"{v:.1f}", ha="center", va="bottom")
    fig.tight_layout()
    fig.savefig(output_dir / "strategy_timings.png", dpi=150)
    plt.close(fig)

    return {
        "gc_csv": "gc_content.csv",
        "timings_csv": "strategy_timings.csv",
        "timings_png": "strategy_timings.png",
    }
