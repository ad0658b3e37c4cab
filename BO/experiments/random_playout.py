#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Thu Feb  5 16:40:02 2026

@author: petermillington

Random playouts of the Bertrand oligopoly game.

Every firm picks a uniformly random legal price tier each turn. Each game is
recorded with StatsRecorder; per-game metrics, the per-turn table of the last
game and a summary are written through RunLogger, and a summary block is
appended to the rolling simulation log.
"""

import os
import json
import logging
import argparse
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np
import matplotlib.pyplot as plt

from core.game import BertrandOligopolyGame
from core.game_config import GameConfig
from data.stats_recorder import StatsRecorder
from utils.logger import RunLogger, log_simulation

@dataclass
class PlayoutConfig:
    """
    Configuration of a batch of random playouts, loadable from a JSON file.
    game_params holds the flat game parameters (see GameConfig.from_params).
    """
    games: int = 10
    seed: Optional[int] = None
    game_params: Dict[str, Any] = field(default_factory=dict)
    save_dir: str = "simulation_runs"
    log_path: str = "logs/simulation_log.txt"
    plot: bool = False

def load_config(path: str) -> PlayoutConfig:
    with open(path, 'r') as f:
        data = json.load(f)
        config_data = {k: v for k, v in data.items() if not k.startswith('_')}
    return PlayoutConfig(**config_data)

def play_random_game(game, rng):
    """Play one game to the end with uniformly random actions; returns (state, results)."""
    state = game.new_initial_state()
    stats = StatsRecorder(N=game.num_players(),
                          rounds=game.max_game_length(),
                          num_options=game.num_distinct_actions())
    stats.record_initial_state(state)

    t = 0
    while not state.is_terminal():
        actions = [int(rng.choice(state.legal_actions(p))) for p in range(game.num_players())]
        state.apply_actions(actions)
        stats.record_round(t, state)
        t += 1

    return state, stats

def plot_last_game(stats, path):
    """Prices and cumulative points of every firm over one game."""
    fig, axes = plt.subplots(2, 1, figsize=(8, 7), sharex=True)
    turns = np.arange(stats.turns_recorded)

    for p in range(stats.N):
        axes[0].step(turns, stats.prices[:stats.turns_recorded, p], where="post", label=f"P{p}")
        axes[1].plot(np.arange(stats.turns_recorded + 1),
                     stats.points_per_round[:stats.turns_recorded + 1, p], label=f"P{p}")

    axes[0].set_ylabel("Price")
    axes[1].set_ylabel("Cumulative points")
    axes[1].set_xlabel("Turn")
    for ax in axes:
        ax.grid(True, alpha=0.3)
        ax.legend()
    fig.tight_layout()
    fig.savefig(path, format="pdf", dpi=300)
    plt.close(fig)
    return path

def run_playouts(cfg: PlayoutConfig):
    """Play cfg.games random games and log them; returns the summary dict."""
    game = BertrandOligopolyGame(GameConfig.from_params(cfg.game_params))
    rng = np.random.default_rng(cfg.seed)

    logger = RunLogger(base_save_dir=cfg.save_dir,
                       module="RandomPlayout",
                       returns_type=game.returns_type().value,
                       seed=cfg.seed)
    logger.log_params(game.config.to_params())

    final_points = np.zeros((cfg.games, game.num_players()))
    final_returns = np.zeros((cfg.games, game.num_players()))
    tie_rounds = np.zeros(cfg.games, dtype=int)
    stats = None

    for g in range(cfg.games):
        state, stats = play_random_game(game, rng)
        results = stats.finalize(state)
        final_points[g] = results["final_points"]
        final_returns[g] = results["final_returns"]
        tie_rounds[g] = results["tie_rounds"]

        metrics = {"mean_price": results["mean_price"], "tie_rounds": results["tie_rounds"],
                   "winners": " ".join(str(w) for w in results["winners"])}
        for p in range(game.num_players()):
            metrics[f"points_P{p}"] = results["final_points"][p]
            metrics[f"return_P{p}"] = results["final_returns"][p]
        logger.log_metrics(metrics, step=g)

    if stats is not None:
        logger.log_table(stats.to_frame(), "last_game")

    summary = {
        "games": cfg.games,
        "mean_points": final_points.mean(axis=0),
        "mean_returns": final_returns.mean(axis=0),
        "mean_tie_rounds": float(tie_rounds.mean()) if cfg.games else 0.0,
        "min_utility": game.min_utility(),
        "max_utility": game.max_utility(),
        "save_dir": logger.get_dir(),
    }
    logger.save_dict("summary", summary)

    if cfg.plot and stats is not None:
        summary["plot_path"] = plot_last_game(
            stats, os.path.join(logger.get_dir(), "last_game.pdf"))

    logger.close()

    log_simulation([
        "Random playout",
        f"Game: {game!r}",
        f"Games: {cfg.games}, seed: {cfg.seed}",
        f"Mean points: {np.round(summary['mean_points'], 4).tolist()}",
        f"Mean returns: {np.round(summary['mean_returns'], 4).tolist()}",
        f"Run dir: {logger.get_dir()}",
    ], cfg.log_path)

    return summary

def main(argv=None):
    parser = argparse.ArgumentParser(description="Random playouts of the Bertrand oligopoly game")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to JSON config file for the playouts")
    parser.add_argument("--games", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--players", type=int, default=None)
    parser.add_argument("--num_options", type=int, default=None)
    parser.add_argument("--num_turns", type=int, default=None)
    parser.add_argument("--returns_type", type=str, default=None,
                        choices=["win_loss", "point_difference", "total_points"])
    parser.add_argument("--imp_info", action="store_true")
    parser.add_argument("--egocentric", action="store_true")
    parser.add_argument("--save_dir", type=str, default=None)
    parser.add_argument("--log_path", type=str, default=None,
                        help="Rolling simulation log the run summary is appended to")
    parser.add_argument("--log_level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--plot", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    cfg = load_config(args.config) if args.config else PlayoutConfig()
    for key in ("games", "seed", "save_dir", "log_path"):
        value = getattr(args, key)
        if value is not None:
            setattr(cfg, key, value)
    for key in ("players", "num_options", "num_turns", "returns_type"):
        value = getattr(args, key)
        if value is not None:
            cfg.game_params[key] = value
    for key in ("imp_info", "egocentric"):
        if getattr(args, key):
            cfg.game_params[key] = True
    cfg.plot = cfg.plot or args.plot

    summary = run_playouts(cfg)
    print(summary["save_dir"])
    return summary

if __name__ == "__main__":
    main()
