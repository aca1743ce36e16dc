"""
Tests for landscape I/O and generation.
"""

import numpy as np
import pytest

from valley_basics.utils.data import load_landscape, random_landscape, save_landscape


class TestLoadSave:
    """.npy and .txt landscapes."""

    def test_save_then_load_npy(self, tmp_path):
        path = tmp_path / "nested" / "land.npy"
        save_landscape(path, np.array([3, -1, 8], dtype=np.int32))
        arr = load_landscape(path)
        assert arr.dtype == np.int64
        assert arr.tolist() == [3, -1, 8]

    def test_load_txt(self, tmp_path):
        path = tmp_path / "land.txt"
        path.write_text("5 2 6 1 8\n")
        assert load_landscape(path).tolist() == [5, 2, 6, 1, 8]

    def test_load_txt_one_per_line(self, tmp_path):
        path = tmp_path / "land.txt"
        path.write_text("9\n4\n-2\n7\n")
        arr = load_landscape(path)
        assert arr.dtype == np.int64
        assert arr.tolist() == [9, 4, -2, 7]

    def test_load_single_value_txt(self, tmp_path):
        path = tmp_path / "land.txt"
        path.write_text("7\n")
        assert load_landscape(path).tolist() == [7]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_landscape(tmp_path / "nope.npy")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "land.csv"
        path.write_text("1,2,3")
        with pytest.raises(ValueError):
            load_landscape(path)


class TestRandomLandscape:
    """random_landscape."""

    def test_distinct_and_in_range(self):
        arr = random_landscape(500, -1000, 1000, seed=3)
        assert arr.shape == (500,)
        assert len(set(arr.tolist())) == 500
        assert arr.min() >= -1000
        assert arr.max() < 1000

    def test_seeded(self):
        a = random_landscape(50, 0, 10_000, seed=7)
        b = random_landscape(50, 0, 10_000, seed=7)
        assert np.array_equal(a, b)

    def test_exact_range(self):
        arr = random_landscape(5, 10, 15, seed=0)
        assert sorted(arr.tolist()) == [10, 11, 12, 13, 14]

    def test_range_too_small(self):
        with pytest.raises(ValueError):
            random_landscape(10, 0, 5)

    def test_non_positive_size(self):
        with pytest.raises(ValueError):
            random_landscape(0, 0, 5)
