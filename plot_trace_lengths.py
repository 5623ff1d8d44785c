"""Plot histograms of trace lengths (events per solve) for generated datasets."""

import argparse
import json
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np


DATA_FILES = [
    "train.json",
    "test.json",
]


def load_trace_lengths(filepath: Path) -> dict:
    """Return event counts per example, split by SAT/UNSAT outcome."""
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    lengths = {"SAT": [], "UNSAT": []}
    for obj in data:
        key = "SAT" if obj["satisfiable"] else "UNSAT"
        lengths[key].append(len(obj["events"]))
    return lengths


def plot_histogram(lengths: dict, filename: str, output_path: Path):
    """Create and save a histogram of trace lengths."""
    fig, ax = plt.subplots(figsize=(10, 6))

    all_lengths = np.array(lengths["SAT"] + lengths["UNSAT"])
    bins = np.histogram_bin_edges(all_lengths, bins=60)
    for label, values in lengths.items():
        if values:
            ax.hist(values, bins=bins, edgecolor="black", linewidth=0.5, alpha=0.6, label=label)

    ax.set_xlabel("Trace Length (events per solve)", fontsize=12)
    ax.set_ylabel("Count", fontsize=12)
    ax.set_title(f"Trace Length Distribution: {filename}", fontsize=14)
    ax.legend(loc="upper left")

    # Add stats text box
    stats_text = (
        f"N = {len(all_lengths):,}\n"
        f"Mean = {all_lengths.mean():.0f}\n"
        f"Median = {np.median(all_lengths):.0f}\n"
        f"Min = {all_lengths.min():,}\n"
        f"Max = {all_lengths.max():,}\n"
        f"Std = {all_lengths.std():.0f}"
    )
    ax.text(
        0.97, 0.95, stats_text,
        transform=ax.transAxes,
        fontsize=10,
        verticalalignment="top",
        horizontalalignment="right",
        bbox=dict(boxstyle="round,pad=0.4", facecolor="wheat", alpha=0.8),
    )

    ax.ticklabel_format(axis="y", style="plain")
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    print(f"  Saved: {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Plot trace length histograms")
    parser.add_argument("--data_dir", type=str, default="output")
    parser.add_argument("--output_dir", type=str, default="trace_length_plots")
    parser.add_argument("--prefix", type=str, default="")
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(exist_ok=True)

    for filename in DATA_FILES:
        filename = args.prefix + filename
        filepath = data_dir / filename
        if not filepath.exists():
            print(f"Skipping {filename} (not found)")
            continue

        print(f"Processing {filename}...")
        lengths = load_trace_lengths(filepath)
        if not lengths["SAT"] and not lengths["UNSAT"]:
            print(f"  No examples found, skipping.")
            continue

        out_path = output_dir / f"{filepath.stem}_trace_lengths.png"
        plot_histogram(lengths, filename, out_path)

    print("\nDone!")


if __name__ == "__main__":
    main()
