import os
from pathlib import Path

import numpy as np
import numpy.typing as npt


def load_landscape(path: str | os.PathLike) -> npt.NDArray[np.int64]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Landscape file not found: {path}")
    if path.suffix == ".npy":
        arr = np.load(path)
    elif path.suffix == ".txt":
        arr = np.loadtxt(path, dtype=np.int64, ndmin=1)
    else:
        raise ValueError(f"Unsupported landscape format: {path.suffix!r}")
    return np.asarray(arr, dtype=np.int64).reshape(-1)


def save_landscape(path: str | os.PathLike, arr: npt.NDArray) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.save(path, np.asarray(arr, dtype=np.int64))


def random_landscape(size: int, low: int, high: int, seed: int | None = None) -> npt.NDArray[np.int64]:
    """Draw ``size`` distinct elevations from ``[low, high)``."""
    if size < 1:
        raise ValueError(f"size must be positive, got {size}")
    if high - low < size:
        raise ValueError(f"range [{low}, {high}) cannot hold {size} distinct elevations")
    rng = np.random.default_rng(seed)
    return rng.choice(high - low, size=size, replace=False).astype(np.int64) + low
