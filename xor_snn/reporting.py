"""
Reporting helpers for SNN training runs.

Console lines, CSV exports (pandas), loss curve and decision-boundary GIF
(matplotlib + imageio). Nothing here feeds back into training.
"""

from io import BytesIO

import matplotlib

matplotlib.use("Agg")

import imageio.v2 as imageio
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from xor_snn.activations import sigmoid
from xor_snn.network import TestRecord, TrainRecord


def _fmt_value(v):
    # 0.0 -> "0", 1.0 -> "1", anything else as is
    return f"{v:g}"


def format_train_record(record):
    inputs = " ".join(_fmt_value(v) for v in record.input)
    return (f"INPUT: {inputs} "
            f"EXPECTED OUTPUT: {_fmt_value(record.expected)} "
            f"ACTUAL OUTPUT: {record.actual:.5f} "
            f"COST: {record.cost:.10f}")


def format_test_record(record):
    inputs = " ".join(_fmt_value(v) for v in record.input)
    return (f"INPUT: {inputs} "
            f"EXPECTED OUTPUT: {_fmt_value(record.expected)} "
            f"ACTUAL OUTPUT: {record.actual_rounded}")


class ConsoleReporter:
    """Prints records as they arrive.

    verbose=True prints every training record. Otherwise the mean cost of an
    epoch is printed every log_interval epochs.
    """

    def __init__(self, verbose=False, log_interval=1000):
        self.verbose = verbose
        self.log_interval = max(1, log_interval)
        self._epoch = None
        self._epoch_costs = []
        self._test_header_printed = False

    def __call__(self, record):
        if isinstance(record, TrainRecord):
            self._on_train(record)
        elif isinstance(record, TestRecord):
            self._on_test(record)

    def _on_train(self, record):
        if self.verbose:
            print(format_train_record(record))
            return

        if record.epoch != self._epoch:
            self.flush()
            self._epoch = record.epoch
        self._epoch_costs.append(record.cost)

    def _on_test(self, record):
        self.flush()
        if not self._test_header_printed:
            print("\nTEST:")
            self._test_header_printed = True
        print(format_test_record(record))

    def flush(self):
        """Print the summary for the epoch collected so far, if it is due."""
        if self._epoch is not None and self._epoch_costs and self._epoch % self.log_interval == 0:
            avg_cost = sum(self._epoch_costs) / len(self._epoch_costs)
            print(f"Epoch {self._epoch:05d} | avg cost {avg_cost:.10f}")
        self._epoch_costs = []


class HistoryRecorder:
    """Collects every record it receives, in order."""

    def __init__(self):
        self.records = []

    def __call__(self, record):
        self.records.append(record)

    @property
    def train_records(self):
        return [r for r in self.records if isinstance(r, TrainRecord)]

    @property
    def test_records(self):
        return [r for r in self.records if isinstance(r, TestRecord)]

    def clear(self):
        self.records = []


def records_to_frame(records):
    """One row per record; the input tuple is split into x0, x1, ..."""
    rows = []
    for record in records:
        row = {f"x{i}": v for i, v in enumerate(record.input)}
        if isinstance(record, TrainRecord):
            row.update({
                "epoch": record.epoch,
                "expected": record.expected,
                "actual": record.actual,
                "cost": record.cost,
            })
        else:
            row.update({
                "expected": record.expected,
                "actual_rounded": record.actual_rounded,
                "correct": int(round(record.expected)) == record.actual_rounded,
            })
        rows.append(row)
    return pd.DataFrame(rows)


def epoch_costs(records):
    """Mean cost per epoch as a pandas Series indexed by epoch."""
    df = records_to_frame([r for r in records if isinstance(r, TrainRecord)])
    if df.empty:
        return pd.Series(dtype=float, name="cost")
    return df.groupby("epoch")["cost"].mean()


def save_history_to_csv(records, filename="training_history.csv"):
    print(f"Saving training history to {filename}...")
    df = records_to_frame([r for r in records if isinstance(r, TrainRecord)])
    df.to_csv(filename, index=False)
    print(f"Training history saved to {filename} ({len(df)} rows)")


def save_test_results_to_csv(records, filename="test_results.csv"):
    print(f"Saving test results to {filename}...")
    df = records_to_frame([r for r in records if isinstance(r, TestRecord)])
    df.to_csv(filename, index=False)
    print(f"Test results saved to {filename}")


def save_performance_stats(stats, filename="performance_stats.csv"):
    """
    Save performance statistics to CSV

    Parameters:
    - stats: Dictionary containing performance metrics
    - filename: Output CSV filename
    """
    print(f"Saving performance statistics to {filename}...")
    df = pd.DataFrame([stats])
    df.to_csv(filename, index=False)
    print(f"Performance stats saved to {filename}")


def plot_loss_curve(records, filename="loss_curve.png"):
    costs = epoch_costs(records)

    plt.figure(figsize=(8, 5))
    plt.plot(costs.index, costs.values)
    plt.title("Cost vs Epoch")
    plt.xlabel("Epoch")
    plt.ylabel("Mean squared error")
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(filename)
    plt.close()
    print(f"Loss curve saved to {filename}")


# --- Grid for Decision Boundary ---
def _grid(resolution=200):
    xx, yy = np.meshgrid(np.linspace(-0.5, 1.5, resolution), np.linspace(-0.5, 1.5, resolution))
    return xx, yy, np.c_[xx.ravel(), yy.ravel()]


def network_surface(trainer, points):
    """Output activation for many points at once; leaves the trainer's scratch state alone."""
    hidden = sigmoid(np.dot(points, trainer.hidden_weights) + trainer.hidden_bias)
    return sigmoid(np.dot(hidden, trainer.output_weights) + trainer.output_bias)[:, 0]


def decision_boundary_frame(trainer, epoch, resolution=200):
    """Render the 0.5 contour and the corpus points into an RGB(A) image array."""
    xx, yy, grid_points = _grid(resolution)
    grid_output = network_surface(trainer, grid_points).reshape(xx.shape)

    plt.figure(figsize=(6, 5))
    plt.contourf(xx, yy, grid_output, levels=20, cmap="coolwarm", alpha=0.6)
    if grid_output.min() < 0.5 < grid_output.max():
        plt.contour(xx, yy, grid_output, levels=[0.5], colors="cyan", linewidths=2)

    for x, y in zip(trainer.train_input, trainer.train_output):
        color = "yellow" if y[0] == 1 else "black"
        plt.scatter(x[0], x[1], c=color, edgecolors="k", s=100)

    plt.title(f"Epoch {epoch}")
    plt.xlabel("Input 1")
    plt.ylabel("Input 2")
    plt.grid(True)
    plt.tight_layout()

    buf = BytesIO()
    plt.savefig(buf, format="png")
    plt.close()
    buf.seek(0)
    frame = imageio.imread(buf)
    buf.close()
    return frame


def save_training_gif(frames, filename="xor_training.gif", duration=0.05):
    if not frames:
        print("No frames captured, skipping GIF.")
        return
    imageio.mimsave(filename, frames, duration=duration)
    print(f"Training GIF saved to {filename} ({len(frames)} frames)")
