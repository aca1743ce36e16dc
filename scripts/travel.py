from __future__ import annotations

import logging
import math
import time
from pathlib import Path

import hydra
from omegaconf import DictConfig

import numpy as np
from tqdm.auto import tqdm

from valley_basics.tracker.impl import ValleyTracker
from valley_basics.tracker.reference import brute_treasure
from valley_basics.utils.data import load_landscape, random_landscape, save_landscape

PROJECT_ROOT = Path(__file__).resolve().parents[1]

log = logging.getLogger(__name__)


def validate_cfg(cfg: DictConfig) -> None:
    if cfg.landscape.path is None and cfg.landscape.size < 1:
        raise ValueError(f"cfg.landscape.size must be positive, got {cfg.landscape.size!r}")
    if cfg.plan.removals < 0:
        raise ValueError(f"cfg.plan.removals must be non-negative, got {cfg.plan.removals!r}")
    if cfg.plan.insert_every < 0:
        raise ValueError(f"cfg.plan.insert_every must be non-negative, got {cfg.plan.insert_every!r}")


def build_landscape(cfg: DictConfig) -> np.ndarray:
    if cfg.landscape.path is not None:
        path = PROJECT_ROOT / cfg.landscape.path
        log.info(f"Loading landscape from {path}")
        return load_landscape(path)

    arr = random_landscape(
        size=cfg.landscape.size,
        low=cfg.landscape.low,
        high=cfg.landscape.high,
        seed=cfg.landscape.seed,
    )
    if cfg.landscape.save_to is not None:
        out = PROJECT_ROOT / cfg.landscape.save_to
        save_landscape(out, arr)
        log.info(f"Saved generated landscape to {out}")
    return arr


def fresh_height(rng: np.random.Generator, used: set[int], low: int, high: int) -> int:
    if len(used) >= high - low:
        raise ValueError(f"no unused elevation left in [{low}, {high})")
    while True:
        height = int(rng.integers(low, high))
        if height not in used:
            used.add(height)
            return height


def verify_step(tracker: ValleyTracker, step: int) -> None:
    if tracker.is_empty():
        return
    expected = brute_treasure(tracker.to_list())
    actual = tracker.peek_treasure()
    if not math.isclose(actual, expected):
        raise AssertionError(f"step {step}: tracker treasure {actual} != brute force {expected}")


def run_plan(cfg: DictConfig, tracker: ValleyTracker, used: set[int]) -> list[float]:
    rng = np.random.default_rng(cfg.landscape.seed)
    low, high = cfg.landscape.low, cfg.landscape.high

    treasures = []
    for step in tqdm(range(cfg.plan.removals), desc="Excavating", disable=not cfg.run.progress):
        if tracker.is_empty():
            log.info(f"Landscape exhausted after {step} removals")
            break
        treasures.append(tracker.remove_valley())

        if cfg.plan.insert_every > 0 and (step + 1) % cfg.plan.insert_every == 0:
            tracker.insert_at_valley(fresh_height(rng, used, low, high))

        if cfg.run.verify:
            verify_step(tracker, step)

    if cfg.plan.drain:
        remaining = len(tracker)
        for treasure in tqdm(tracker.drain(), total=remaining, desc="Draining", disable=not cfg.run.progress):
            treasures.append(treasure)
            if cfg.run.verify:
                verify_step(tracker, len(treasures))
    return treasures


@hydra.main(version_base=None, config_path="conf", config_name="travel")
def main(cfg: DictConfig) -> None:
    validate_cfg(cfg)
    arr = build_landscape(cfg)
    tracker = ValleyTracker.from_array(arr)
    used = set(arr.tolist())
    log.info(f"Landscape of {len(tracker)} elevations, first treasure {tracker.peek_treasure():.4f}")

    start_time = time.perf_counter()
    treasures = run_plan(cfg, tracker, used)
    duration = time.perf_counter() - start_time

    print(f"✅ Collected {len(treasures)} treasures in {duration:.2f} seconds.")
    print(f"Total treasure: {tracker.total_treasure():.4f}")
    if tracker.is_empty():
        print("Landscape fully excavated.")
    else:
        print(f"Remaining elevations: {len(tracker)}, next treasure {tracker.peek_treasure():.4f}")


if __name__ == "__main__":
    main()
