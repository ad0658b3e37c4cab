#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Sat Feb  7 11:30:04 2026

@author: petermillington
"""

"""
Unit tests for ContiguousAllocator
"""
import pytest
import numpy as np
from observation.allocator import ContiguousAllocator


class TestContiguousAllocator:

    def test_buffer_zeroed(self):
        buf = np.ones(6, dtype=np.float32)
        ContiguousAllocator(buf)

        assert np.all(buf == 0.0)

    def test_views_are_consecutive(self):
        buf = np.zeros(10, dtype=np.float32)
        alloc = ContiguousAllocator(buf)
        a = alloc.get("a", (2,))
        b = alloc.get("b", (2, 3))
        a[:] = 1.0
        b[1, 2] = 5.0

        assert np.array_equal(buf[:2], [1.0, 1.0])
        assert buf[2 + 5] == 5.0
        assert alloc.remaining == 2
        assert [name for name, _, _ in alloc.fields] == ["a", "b"]
        assert alloc.clipped == []

    def test_clips_to_whole_rows(self):
        buf = np.zeros(10, dtype=np.float32)
        alloc = ContiguousAllocator(buf)
        alloc.get("a", (3,))
        view = alloc.get("b", (4, 3))

        assert view.shape == (2, 3)
        assert alloc.clipped == [("b", (4, 3), (2, 3))]
        assert alloc.remaining == 1

    def test_clips_to_nothing(self):
        alloc = ContiguousAllocator(np.zeros(4, dtype=np.float32))
        alloc.get("a", (4,))
        view = alloc.get("b", (1, 2))

        assert view.shape == (0, 2)

    def test_clips_flat_field(self):
        alloc = ContiguousAllocator(np.zeros(3, dtype=np.float32))
        view = alloc.get("a", (5,))

        assert view.shape == (3,)

    def test_rejects_non_flat_buffer(self):
        with pytest.raises(ValueError):
            ContiguousAllocator(np.zeros((2, 2), dtype=np.float32))
