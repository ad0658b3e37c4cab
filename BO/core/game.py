#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mon Feb  2 13:20:44 2026

@author: petermillington
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from core.game_config import GameConfig, ConfigError, ReturnsType, MIN_PLAYERS, MAX_PLAYERS
from core.state import BertrandOligopolyState
from payoffs.returns import RETURNS_REGISTRY
from observation.observer import (
    BertrandOligopolyObserver,
    ObservationType,
    DEFAULT_OBS_TYPE,
    INFO_STATE_OBS_TYPE,
    PRIVATE_OBS_TYPE,
    PUBLIC_OBS_TYPE,
)


@dataclass(frozen=True)
class GameType:
    """Static description of the game for hosts that catalogue games."""
    short_name: str = "bertrand_oligopoly"
    long_name: str = "Bertrand Oligopoly"
    dynamics: str = "simultaneous"
    chance_mode: str = "deterministic"
    information: str = "perfect_information"
    utility: str = "general_sum"
    reward_model: str = "rewards"
    min_num_players: int = MIN_PLAYERS
    max_num_players: int = MAX_PLAYERS
    provides_information_state_string: bool = True
    provides_information_state_tensor: bool = True
    provides_observation_string: bool = True
    provides_observation_tensor: bool = True


GAME_TYPE = GameType()


class BertrandOligopolyGame:
    """
    Factory and static information for the Bertrand oligopoly pricing game.

    Pass either a GameConfig or a flat parameter dict (see
    GameConfig.from_params); with neither, defaults are used.

    Parameters
    ----------
    cfg : GameConfig or dict, optional
        Game configuration.

    Attributes
    ----------
    config : GameConfig
    price_grid : PriceGrid
        Real price of every option, derived once from the config.
    returns_scheme : PointsReturnsScheme
        Scoring policy picked from RETURNS_REGISTRY.
    default_observer, info_state_observer, private_observer, public_observer
        Observers used by the state's string/tensor queries.
    """
    def __init__(self, cfg: Optional[GameConfig | Dict[str, Any]] = None):
        if cfg is None or isinstance(cfg, dict):
            cfg = GameConfig.from_params(cfg)
        self.config = cfg
        self.price_grid = cfg.price_grid
        self.returns_scheme = RETURNS_REGISTRY[cfg.returns_type]

        self.num_options = cfg.num_options
        self.num_turns = cfg.num_turns

        obs_params = {"egocentric": cfg.egocentric}
        self.default_observer = self.make_observer(DEFAULT_OBS_TYPE, obs_params)
        self.info_state_observer = self.make_observer(INFO_STATE_OBS_TYPE, obs_params)
        self.private_observer = self.make_observer(PRIVATE_OBS_TYPE, obs_params)
        self.public_observer = self.make_observer(PUBLIC_OBS_TYPE, obs_params)

    def __repr__(self):
        params = ",".join(f"{k}={v}" for k, v in self.config.to_params().items())
        return f"{GAME_TYPE.short_name}({params})"

    def new_initial_state(self) -> BertrandOligopolyState:
        return BertrandOligopolyState(self)

    def game_type(self) -> GameType:
        information = "imperfect_information" if self.config.imp_info else "perfect_information"
        utility = "zero_sum" if self.returns_scheme.zero_sum else "general_sum"
        return replace(GAME_TYPE, information=information, utility=utility)

    def num_players(self) -> int:
        return self.config.players

    def num_distinct_actions(self) -> int:
        return self.num_options

    def max_game_length(self) -> int:
        return self.num_turns

    def max_chance_outcomes(self) -> int:
        return 0

    def min_utility(self) -> float:
        return self.returns_scheme.min_utility(self.price_grid, self.config)

    def max_utility(self) -> float:
        return self.returns_scheme.max_utility(self.price_grid, self.config)

    def utility_sum(self) -> Optional[float]:
        return self.returns_scheme.utility_sum()

    def returns_type(self) -> ReturnsType:
        return self.config.returns_type

    def information_state_tensor_shape(self):
        return [self.config.players * self.num_options]

    def observation_tensor_shape(self):
        return [self.config.players * self.num_options]

    def information_state_tensor_size(self) -> int:
        return self.information_state_tensor_shape()[0]

    def observation_tensor_size(self) -> int:
        return self.observation_tensor_shape()[0]

    def make_observer(self, obs_type: Optional[ObservationType] = None,
                      params: Optional[Dict[str, Any]] = None) -> BertrandOligopolyObserver:
        """Observer for obs_type; params may override 'egocentric'."""
        params = dict(params or {})
        egocentric = params.pop("egocentric", self.config.egocentric)
        if params:
            raise ConfigError(f"Unknown observer parameters: {', '.join(sorted(params))}")
        return BertrandOligopolyObserver(obs_type if obs_type is not None else DEFAULT_OBS_TYPE,
                                         egocentric=bool(egocentric))
