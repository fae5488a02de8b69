"""Tests for console formatting, CSV export and plotting helpers."""

import numpy as np
import pandas as pd
import pytest

from xor_snn.config import NetworkConfig
from xor_snn.network import SNN, TestRecord, TrainRecord
from xor_snn.reporting import (
    ConsoleReporter,
    HistoryRecorder,
    decision_boundary_frame,
    epoch_costs,
    format_test_record,
    format_train_record,
    network_surface,
    plot_loss_curve,
    records_to_frame,
    save_history_to_csv,
    save_performance_stats,
    save_test_results_to_csv,
    save_training_gif,
)


@pytest.fixture
def trained():
    history = HistoryRecorder()
    network = SNN(NetworkConfig(seed=2), reporter=history)
    network.train(5)
    network.test()
    return network, history


def test_format_train_record():
    record = TrainRecord(epoch=0, input=(0.0, 1.0), expected=1.0, actual=0.987654321, cost=0.000152)
    assert format_train_record(record) == (
        "INPUT: 0 1 EXPECTED OUTPUT: 1 ACTUAL OUTPUT: 0.98765 COST: 0.0001520000"
    )


def test_format_test_record():
    record = TestRecord(input=(1.0, 1.0), expected=0.0, actual_rounded=0)
    assert format_test_record(record) == "INPUT: 1 1 EXPECTED OUTPUT: 0 ACTUAL OUTPUT: 0"


class TestConsoleReporter:
    def test_verbose_prints_every_step(self, capsys):
        network = SNN(NetworkConfig(seed=1), reporter=ConsoleReporter(verbose=True))
        network.train(2)
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 8
        assert all(line.startswith("INPUT: ") and "COST: " in line for line in lines)

    def test_summary_every_log_interval(self, capsys):
        console = ConsoleReporter(log_interval=2)
        network = SNN(NetworkConfig(seed=1), reporter=console)
        network.train(5)
        console.flush()
        lines = capsys.readouterr().out.strip().splitlines()
        assert [line.split(" |")[0] for line in lines] == ["Epoch 00000", "Epoch 00002", "Epoch 00004"]

    def test_test_records_under_header(self, capsys):
        console = ConsoleReporter(log_interval=1000)
        network = SNN(NetworkConfig(seed=1), reporter=console)
        network.train(1)
        network.test()
        out = capsys.readouterr().out
        assert out.count("TEST:") == 1
        assert out.index("Epoch 00000") < out.index("TEST:")
        assert len([line for line in out.splitlines() if line.startswith("INPUT: ")]) == 4


class TestHistory:
    def test_splits_train_and_test(self, trained):
        _, history = trained
        assert len(history.train_records) == 20
        assert len(history.test_records) == 4
        history.clear()
        assert history.records == []

    def test_records_to_frame(self, trained):
        _, history = trained
        df = records_to_frame(history.train_records)
        assert list(df.columns) == ["x0", "x1", "epoch", "expected", "actual", "cost"]
        assert len(df) == 20

        tf = records_to_frame(history.test_records)
        assert list(tf.columns) == ["x0", "x1", "expected", "actual_rounded", "correct"]

    def test_epoch_costs(self, trained):
        _, history = trained
        costs = epoch_costs(history.records)
        assert list(costs.index) == [0, 1, 2, 3, 4]
        first = [r.cost for r in history.train_records[:4]]
        assert costs.loc[0] == pytest.approx(sum(first) / 4)

    def test_epoch_costs_empty(self):
        assert epoch_costs([]).empty


class TestFileOutputs:
    def test_history_csv(self, trained, tmp_path):
        _, history = trained
        path = tmp_path / "history.csv"
        save_history_to_csv(history.records, path)
        df = pd.read_csv(path)
        assert len(df) == 20
        assert set(df["epoch"]) == {0, 1, 2, 3, 4}

    def test_results_csv(self, trained, tmp_path):
        _, history = trained
        path = tmp_path / "results.csv"
        save_test_results_to_csv(history.records, path)
        df = pd.read_csv(path)
        assert len(df) == 4
        assert set(zip(df["x0"], df["x1"])) == {(0, 0), (0, 1), (1, 0), (1, 1)}

    def test_performance_stats(self, tmp_path):
        path = tmp_path / "stats.csv"
        save_performance_stats({"epochs": 10, "train_time_sec": 0.5}, path)
        df = pd.read_csv(path)
        assert df.loc[0, "epochs"] == 10

    def test_loss_curve(self, trained, tmp_path):
        _, history = trained
        path = tmp_path / "loss.png"
        plot_loss_curve(history.records, path)
        assert path.stat().st_size > 0

    def test_gif(self, trained, tmp_path):
        network, _ = trained
        frames = [decision_boundary_frame(network, epoch, resolution=20) for epoch in (0, 5)]
        assert frames[0].ndim == 3
        path = tmp_path / "xor.gif"
        save_training_gif(frames, path)
        assert path.stat().st_size > 0

    def test_gif_without_frames(self, tmp_path, capsys):
        path = tmp_path / "none.gif"
        save_training_gif([], path)
        assert not path.exists()
        assert "skipping" in capsys.readouterr().out


def test_network_surface_matches_predict(trained):
    network, _ = trained
    points = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0], [0.5, 0.25]])
    surface = network_surface(network, points)
    for point, value in zip(points, surface):
        assert value == pytest.approx(network.predict(point))
