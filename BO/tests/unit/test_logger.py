#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Sat Feb  7 14:22:10 2026

@author: petermillington
"""

"""
Unit tests for the run logger and the rolling simulation log
"""
import json
import os
import numpy as np
import pandas as pd
from core.game_config import ReturnsType
from utils.logger import RunLogger, log_simulation


class TestLogSimulation:

    def test_appends_blocks(self, tmp_path):
        path = tmp_path / "logs" / "simulation_log.txt"
        log_simulation(["first", 1], str(path))
        log_simulation(["second"], str(path))
        text = path.read_text()

        assert "first\n1\n" in text
        assert "second\n" in text
        assert text.count("=" * 60) == 4

    def test_bare_filename(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        log_simulation(["line"], "sim.txt")

        assert (tmp_path / "sim.txt").exists()


class TestRunLogger:

    def test_creates_run_dir_and_info(self, tmp_path):
        logger = RunLogger(base_save_dir=str(tmp_path), module="RandomPlayout",
                           returns_type="win_loss", seed=3)
        run_dir = logger.get_dir()

        assert os.path.isdir(run_dir)
        assert run_dir.endswith("_RandomPlayout_win_loss")
        with open(os.path.join(run_dir, "run_info.json")) as f:
            info = json.load(f)
        assert info["seed"] == 3
        assert info["end_time"] is None

        logger.close()
        with open(os.path.join(run_dir, "run_info.json")) as f:
            assert json.load(f)["end_time"] is not None

    def test_params_with_numpy_and_enum(self, tmp_path):
        logger = RunLogger(base_save_dir=str(tmp_path))
        path = logger.log_params({"players": np.int64(3),
                                  "points": np.array([0.5, 1.5]),
                                  "returns_type": ReturnsType.TOTAL_POINTS})
        with open(path) as f:
            params = json.load(f)

        assert params == {"players": 3, "points": [0.5, 1.5], "returns_type": "total_points"}

    def test_metrics_rows_aligned(self, tmp_path):
        logger = RunLogger(base_save_dir=str(tmp_path))
        logger.log_metrics({"a": 1.0, "b": 2.0}, step=0)
        path = logger.log_metrics({"b": 4.0, "a": 3.0, "c": 9.0}, step=1)
        df = pd.read_csv(path)

        assert list(df.columns) == ["step", "a", "b"]
        assert df["a"].tolist() == [1.0, 3.0]
        assert df["b"].tolist() == [2.0, 4.0]

    def test_table_and_dict(self, tmp_path):
        logger = RunLogger(base_save_dir=str(tmp_path))
        table = logger.log_table(pd.DataFrame({"x": [1, 2]}), "table")
        summary = logger.save_dict("summary", {"mean": np.float64(0.25)})

        assert table.endswith("table.csv")
        assert pd.read_csv(table)["x"].tolist() == [1, 2]
        with open(summary) as f:
            assert json.load(f) == {"mean": 0.25}
