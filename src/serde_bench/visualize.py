"""Visualization functions for comparison reports."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from serde_bench.analysis import ComparisonReport

logger = logging.getLogger(__name__)

COLUMNS = ["codec", "encoded_size", "encode_ms", "decode_ms", "total_ms", "bandwidth_bytes_per_second"]


def report_frame(report: ComparisonReport) -> pd.DataFrame:
    """One row per surviving codec, in registration order."""
    return pd.DataFrame(
        [
            {
                "codec": name,
                "encoded_size": r.encoded_size,
                "encode_ms": r.encode_avg * 1000,
                "decode_ms": r.decode_avg * 1000,
                "total_ms": r.total_avg * 1000,
                "bandwidth_bytes_per_second": report.bandwidth[name].bytes_per_second,
            }
            for name, r in report.results.items()
        ],
        columns=COLUMNS,
    )


def plot_report(report: ComparisonReport, output_dir: Path | str = ".") -> list[Path]:
    """
    Save charts and a CSV for a comparison report.

    Creates a 2x2 chart comparing:
    - Average encode time
    - Average decode time
    - Average total time
    - Encoded size

    Args:
        report: ComparisonReport to plot
        output_dir: Directory to save files (default: current directory)

    Returns:
        Paths of the files written. An empty report only gets the CSV.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    df = report_frame(report)
    written = []

    csv_path = output_dir / "serde_bench_results.csv"
    df.to_csv(csv_path, index=False)
    logger.info("Results saved to CSV: %s", csv_path)
    written.append(csv_path)

    if df.empty:
        return written

    indexed = df.set_index("codec")
    fig, ((ax1, ax2), (ax3, ax4)) = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle("Serialization Format Benchmark Results", fontsize=16, fontweight="bold")

    panels = [
        (ax1, "encode_ms", "Encode Time (lower is better)", "Time (ms)", "#2E86AB"),
        (ax2, "decode_ms", "Decode Time (lower is better)", "Time (ms)", "#A23B72"),
        (ax3, "total_ms", "Total Time (lower is better)", "Time (ms)", "#F18F01"),
        (ax4, "encoded_size", "Encoded Size (lower is better)", "Size (bytes)", "#3B8EA5"),
    ]
    for ax, column, title, ylabel, color in panels:
        indexed[column].plot(kind="bar", ax=ax, color=color)
        ax.set_title(title, fontweight="bold")
        ax.set_xlabel("Format")
        ax.set_ylabel(ylabel)
        ax.grid(axis="y", alpha=0.3)
        ax.set_xticklabels(ax.get_xticklabels(), rotation=45, ha="right")

    plt.tight_layout()
    png_path = output_dir / "serde_bench_results.png"
    plt.savefig(png_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Plot saved to: %s", png_path)
    written.append(png_path)

    return written
