#!/usr/bin/env python3
"""
Generate DPLL solver trace datasets.

Solves random 3-SAT formulas, checks every result against PySAT, replays
every trace, and writes train/test JSON files.

Usage:
    python generate.py
    python generate.py collect.var_max=12 collect.target_count=500
    python generate.py collect.use_pysat_verification=false output_dir=out
"""

import logging
import random
from pathlib import Path

import hydra
from omegaconf import DictConfig

from dpll_trace import collect_traces, create_datasets

logger = logging.getLogger(__name__)


def resolve_path(path: str, orig_cwd: str) -> str:
    """Resolve a potentially relative path against the original working directory."""
    p = Path(path)
    if not p.is_absolute():
        p = Path(orig_cwd) / p
    return str(p)


@hydra.main(version_base=None, config_path="configs", config_name="default")
def main(cfg: DictConfig):
    # Ensure logging shows on console (Hydra can redirect it)
    logging.basicConfig(level=cfg.log_level, format="%(levelname)s: %(message)s", force=True)

    # Hydra changes cwd; resolve all paths relative to the original cwd
    orig_cwd = hydra.utils.get_original_cwd()
    output_dir = resolve_path(cfg.output_dir, orig_cwd)

    print("=" * 60)
    print("DPLL Trace Generation")
    print("=" * 60)
    print(f"  Variables: {cfg.collect.var_min}-{cfg.collect.var_max}, "
          f"clause length: {cfg.collect.clause_length}")
    print(f"  Formulas: {cfg.collect.target_count}, seed: {cfg.seed}")
    print(f"  Verify traces: {cfg.collect.verify}, "
          f"PySAT cross-check: {cfg.collect.use_pysat_verification}")
    print("=" * 60)

    data = collect_traces(
        var_min=cfg.collect.var_min,
        var_max=cfg.collect.var_max,
        target_count=cfg.collect.target_count,
        clause_length=cfg.collect.clause_length,
        verify=cfg.collect.verify,
        use_pysat_verification=cfg.collect.use_pysat_verification,
        seed=cfg.seed,
    )

    print(f"\nCollected {len(data['examples'])} traces "
          f"({data['n_sat']} SAT, {data['n_unsat']} UNSAT)")
    if data["verification_failures"]:
        logger.warning("%d traces failed verification", data["verification_failures"])

    create_datasets(
        data,
        output_dir,
        test_size=cfg.datasets.test_size,
        prefix=cfg.datasets.prefix,
        rng=random.Random(cfg.seed),
    )

    print(f"\n=== GENERATION COMPLETE ===")
    print(f"Output directory: {output_dir}")


if __name__ == "__main__":
    main()
