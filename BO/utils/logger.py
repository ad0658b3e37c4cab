#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Wed Feb  4 10:26:50 2026

@author: petermillington

Run artefacts for Bertrand oligopoly experiments.

Two outputs: a rolling text log shared by every run (log_simulation), and
one directory per run (RunLogger) holding the run description, game
parameters, per-game metrics and any tables or summaries the experiment
produces.
"""
import os
import json
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, List

import numpy as np
import pandas as pd

SEPARATOR = "=" * 60


def log_simulation(metadata: List[str], log_path: str = "logs/simulation_log.txt") -> None:
    """Append a timestamped block of lines to the rolling log at log_path."""
    parent = os.path.dirname(log_path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    block = [SEPARATOR, f"[{stamp}]", *(str(line) for line in metadata), SEPARATOR]
    with open(log_path, "a") as f:
        f.write("\n" + "\n".join(block) + "\n")


def _run_stamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def _jsonable(value):
    # game params and results carry numpy values and ReturnsType members
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, Enum):
        return value.value
    return str(value)


def _dump_json(path: str, data) -> str:
    with open(path, "w") as f:
        json.dump(data, f, indent=2, default=_jsonable)
    return path


class RunLogger:
    """
    One directory per experiment run, named
    <timestamp>_<module>_<returns_type>_<run_id> (empty parts left out).

    run_info.json is written on creation and stamped with end_time by close().
    metrics.csv gets one row per log_metrics call; its columns are those of
    the first row.
    """

    def __init__(
        self,
        base_save_dir: str = "simulation_runs",
        module: Optional[str] = None,
        run_id: Optional[str] = None,
        returns_type: Optional[str] = None,
        tags: Optional[List[str]] = None,
        extra_info: Optional[Dict[str, Any]] = None,
        seed: Optional[int] = None,
    ):
        started = _run_stamp()
        name_parts = [part for part in (started, module, returns_type, run_id) if part]
        self.save_dir = os.path.join(base_save_dir, "_".join(name_parts))
        os.makedirs(self.save_dir, exist_ok=True)

        self._metrics_columns: Optional[List[str]] = None
        self.run_info = {
            "start_time": started,
            "end_time": None,
            "module": module,
            "returns_type": returns_type,
            "run_id": run_id,
            "tags": list(tags or []),
            "extra_info": dict(extra_info or {}),
            "seed": seed,
            "save_dir": self.save_dir,
        }
        _dump_json(self._path("run_info.json"), self.run_info)

    def _path(self, name: str, suffix: str = "") -> str:
        if suffix and not name.lower().endswith(suffix):
            name += suffix
        return os.path.join(self.save_dir, name)

    def close(self) -> None:
        self.run_info["end_time"] = _run_stamp()
        _dump_json(self._path("run_info.json"), self.run_info)

    def log_params(self, params: Dict[str, Any], filename: str = "params.json") -> str:
        return _dump_json(self._path(filename), params)

    def log_metrics(self, metrics: Dict[str, Any], step: Optional[int] = None) -> str:
        """Append one row to metrics.csv; keys absent from the first row are dropped."""
        row = {} if step is None else {"step": step}
        row.update(metrics)
        frame = pd.DataFrame([row])
        path = self._path("metrics.csv")

        if self._metrics_columns is None:
            self._metrics_columns = list(frame.columns)
            frame.to_csv(path, index=False)
        else:
            frame.reindex(columns=self._metrics_columns).to_csv(
                path, mode="a", header=False, index=False)
        return path

    def log_table(self, df: pd.DataFrame, name: str) -> str:
        path = self._path(name, ".csv")
        df.to_csv(path, index=False)
        return path

    def save_dict(self, name: str, data: Dict[str, Any]) -> str:
        return _dump_json(self._path(name, ".json"), data)

    def get_dir(self) -> str:
        return self.save_dir
