"""Tests for cycle_finder.config module."""

import os
import pytest
from unittest.mock import patch


class TestDefaultMaxIterations:
    """Tests for get_default_max_iterations."""

    def test_unset_is_unbounded(self):
        from cycle_finder.config import get_default_max_iterations

        with patch.dict(os.environ, {}, clear=True):
            assert get_default_max_iterations() is None

    def test_reads_environment(self):
        from cycle_finder.config import get_default_max_iterations

        with patch.dict(os.environ, {"CYCLE_FINDER_MAX_ITERATIONS": "500"}):
            assert get_default_max_iterations() == 500

    @pytest.mark.parametrize("raw", ["", "  ", "abc", "0", "-5"])
    def test_bad_values_are_unbounded(self, raw):
        from cycle_finder.config import get_default_max_iterations

        with patch.dict(os.environ, {"CYCLE_FINDER_MAX_ITERATIONS": raw}):
            assert get_default_max_iterations() is None


class TestDefaultDishSpins:
    """Tests for get_default_dish_spins."""

    def test_default(self):
        from cycle_finder.config import DEFAULT_DISH_SPINS, get_default_dish_spins

        with patch.dict(os.environ, {}, clear=True):
            assert get_default_dish_spins() == DEFAULT_DISH_SPINS == 1_000_000_000

    def test_reads_environment(self):
        from cycle_finder.config import get_default_dish_spins

        with patch.dict(os.environ, {"CYCLE_FINDER_DISH_SPINS": "12"}):
            assert get_default_dish_spins() == 12

    @pytest.mark.parametrize("raw", ["many", "-1"])
    def test_bad_values_fall_back(self, raw):
        from cycle_finder.config import get_default_dish_spins

        with patch.dict(os.environ, {"CYCLE_FINDER_DISH_SPINS": raw}):
            assert get_default_dish_spins() == 1_000_000_000
