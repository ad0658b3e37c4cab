#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Tue Feb  3 09:40:12 2026

@author: petermillington
"""
from typing import List, Sequence, Tuple
import numpy as np


class ContiguousAllocator:
    """
    Hands out named, shaped views into one flat buffer, in request order.

    Every view is a numpy view, so writes go straight into the buffer. The
    buffer is zeroed on construction: regions nobody asks for stay zero.

    If a request does not fit in the remaining capacity it is clipped to the
    whole leading rows that do fit (possibly zero rows); the clip is kept in
    `clipped` as (name, requested_shape, granted_shape).
    """

    def __init__(self, buffer: np.ndarray):
        if buffer.ndim != 1:
            raise ValueError(f"Expected a flat buffer, got shape {buffer.shape}")
        self.buffer = buffer
        self.buffer.fill(0)
        self.offset = 0
        self.fields: List[Tuple[str, Tuple[int, ...], int]] = []
        self.clipped: List[Tuple[str, Tuple[int, ...], Tuple[int, ...]]] = []

    @property
    def remaining(self) -> int:
        return self.buffer.size - self.offset

    def get(self, name: str, shape: Sequence[int]) -> np.ndarray:
        shape = tuple(int(s) for s in shape)
        size = int(np.prod(shape))
        if size > self.remaining:
            row = int(np.prod(shape[1:]))
            rows = self.remaining // row if row else 0
            granted = (rows,) + shape[1:]
            self.clipped.append((name, shape, granted))
            shape, size = granted, rows * row

        view = self.buffer[self.offset:self.offset + size].reshape(shape)
        self.fields.append((name, shape, self.offset))
        self.offset += size
        return view
