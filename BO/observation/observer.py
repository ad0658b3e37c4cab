#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Feb  3 10:05:48 2026

@author: petermillington

Player-specific views of a Bertrand oligopoly state.

What a player may see is described by an ObservationType. Three fields can be
disclosed:

    point totals            public info; own total first, then the others
    win sequence            public info in the imperfect-information variant;
                            one-hot winner per round, all zero on a tie
    own action sequence     private info with perfect recall in the
                            imperfect-information variant

Tensors are written field by field into one flat buffer of size
players * num_options; strings follow one of the DisclosureMode layouts.
"""
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Optional

import numpy as np

from observation.allocator import ContiguousAllocator

logger = logging.getLogger(__name__)


class PrivateInfoType(Enum):
    NONE = "none"
    SINGLE_PLAYER = "single_player"


@dataclass(frozen=True)
class ObservationType:
    public_info: bool = True
    perfect_recall: bool = False
    private_info: PrivateInfoType = PrivateInfoType.SINGLE_PLAYER


DEFAULT_OBS_TYPE = ObservationType(public_info=True, perfect_recall=False,
                                   private_info=PrivateInfoType.SINGLE_PLAYER)
INFO_STATE_OBS_TYPE = ObservationType(public_info=True, perfect_recall=True,
                                      private_info=PrivateInfoType.SINGLE_PLAYER)
PRIVATE_OBS_TYPE = ObservationType(public_info=False, perfect_recall=False,
                                   private_info=PrivateInfoType.SINGLE_PLAYER)
PUBLIC_OBS_TYPE = ObservationType(public_info=True, perfect_recall=False,
                                  private_info=PrivateInfoType.NONE)


class DisclosureMode(Enum):
    """Layouts of the string view."""
    FULL_PRIVATE_RECALL = "full_private_recall"
    PRIVATE_SUMMARY = "private_summary"
    PUBLIC_ONLY = "public_only"

    @classmethod
    def resolve(cls, obs_type: ObservationType, imp_info: bool) -> Optional["DisclosureMode"]:
        """Layout for an observation type, or None when nothing is disclosed."""
        single = obs_type.private_info == PrivateInfoType.SINGLE_PLAYER
        if imp_info and single:
            if obs_type.perfect_recall:
                return cls.FULL_PRIVATE_RECALL
            return cls.PRIVATE_SUMMARY
        if obs_type.public_info:
            return cls.PUBLIC_ONLY
        return None


def _fmt(x) -> str:
    return f"{x:g}"


class BertrandOligopolyObserver:
    """
    Writes the fields an ObservationType allows into a tensor or a string.

    Parameters
    ----------
    obs_type : ObservationType
        Which kinds of information the observer discloses.
    egocentric : bool
        Rotate win sequences so that index 0 means "the observer won".
    """

    def __init__(self, obs_type: Optional[ObservationType] = None, egocentric: bool = False):
        self.obs_type = obs_type if obs_type is not None else DEFAULT_OBS_TYPE
        self.egocentric = egocentric
        self._reported_clips = set()

    # -------- Tensor --------
    def write_tensor(self, state, player: int, allocator: ContiguousAllocator) -> None:
        game = state.game
        self._check_player(game, player)

        imp_info = game.config.imp_info
        pub_info = self.obs_type.public_info
        perf_rec = self.obs_type.perfect_recall
        priv_one = self.obs_type.private_info == PrivateInfoType.SINGLE_PLAYER

        if pub_info:
            self.write_points_total(state, player, allocator)
        if imp_info and pub_info:
            self.write_win_sequence(state, player, allocator)
        if imp_info and perf_rec and priv_one:
            self.write_player_action_sequence(state, player, allocator)

        self._report_clips(allocator)

    def write_points_total(self, state, player, allocator):
        num_players = state.num_players
        out = allocator.get("point_totals", (num_players,))
        for n in range(min(num_players, out.shape[0])):
            out[n] = state.points[(player + n) % num_players]

    def write_win_sequence(self, state, player, allocator):
        num_players = state.num_players
        out = allocator.get("win_sequence", (state.game.num_turns, num_players))
        for i, winner in enumerate(state.win_sequence[:out.shape[0]]):
            if winner < 0:
                continue
            one_hot = winner
            if self.egocentric:
                # positive, relative distance to the winner
                one_hot = (num_players + winner - player) % num_players
            out[i, one_hot] = 1.0

    def write_player_action_sequence(self, state, player, allocator):
        out = allocator.get("player_action_sequence",
                            (state.game.num_turns, state.game.num_options))
        for t, joint in enumerate(state.actions_history[:out.shape[0]]):
            out[t, joint[player]] = 1.0

    def tensor(self, state, player: int) -> np.ndarray:
        values = np.zeros(state.game.observation_tensor_size(), dtype=np.float32)
        self.write_tensor(state, player, ContiguousAllocator(values))
        return values

    # -------- String --------
    def string_from(self, state, player: int) -> str:
        self._check_player(state.game, player)
        mode = DisclosureMode.resolve(self.obs_type, state.game.config.imp_info)
        if mode is None:
            return ""
        return _STRING_ENCODERS[mode](state, player)

    def _check_player(self, game, player):
        if not 0 <= player < game.num_players():
            raise ValueError(f"player must be in [0, {game.num_players()}), got {player}")

    def _report_clips(self, allocator):
        for name, requested, granted in allocator.clipped:
            if name in self._reported_clips:
                continue
            self._reported_clips.add(name)
            logger.warning("Tensor field %s clipped from %s to %s to fit %d values",
                           name, requested, granted, allocator.buffer.size)


def string_action_sequence(state, player):
    seq = "".join(f"{joint[player]} " for joint in state.actions_history)
    return f"P{player} action sequence: {seq}\n"


def string_win_sequence(state):
    seq = "".join(f"{w} " for w in state.win_sequence)
    return f"Win sequence: {seq}\n"


def string_points(state):
    pts = "".join(f"{_fmt(p)} " for p in state.points)
    return f"Points: {pts}\n"


def string_is_terminal(state):
    return f"Terminal?: {int(state.is_terminal())}\n"


def encode_full_private_recall(state, player):
    # own actions are needed for perfect recall: different opponent play can
    # lead to the same win sequence and points
    return (string_action_sequence(state, player)
            + string_win_sequence(state)
            + string_points(state)
            + string_is_terminal(state))


def encode_private_summary(state, player):
    return string_points(state) + string_win_sequence(state)


def encode_public_only(state, player):
    return string_win_sequence(state) + string_points(state)


_STRING_ENCODERS = {
    DisclosureMode.FULL_PRIVATE_RECALL: encode_full_private_recall,
    DisclosureMode.PRIVATE_SUMMARY: encode_private_summary,
    DisclosureMode.PUBLIC_ONLY: encode_public_only,
}
