#!/usr/bin/env python3
"""
Device Layout Comparison.

Runs every predefined device layout under every wind direction and prints
capture, efficiency and cost-per-unit figures side by side.

Usage:
    python experiments/run_device_comparison.py
    python experiments/run_device_comparison.py --wind E --seed 3
    python experiments/run_device_comparison.py --quiet
"""

import sys
import os
import argparse

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import numpy as np

from analysis.metrics import aggregate, summary_rows
from config import TRAFFIC_SEED
from data.city_layout import get_emission_sources
from models.entities import WindDirection
from validation.scenarios import (
    scenario_a_factory_scrubbers,
    scenario_b_highway_gardens,
    scenario_c_biofilters,
    scenario_d_intersection_mix,
    scenario_e_empty,
)


ALL_SCENARIOS = {
    "A (factory scrubbers)": scenario_a_factory_scrubbers,
    "B (highway gardens)": scenario_b_highway_gardens,
    "C (biofilters)": scenario_c_biofilters,
    "D (intersection mix)": scenario_d_intersection_mix,
    "E (empty)": scenario_e_empty,
}


def run_comparison(winds, seed: int, verbose: bool = True):
    """Aggregate every scenario under each wind.

    Returns:
        List of dicts, one per (scenario, wind) pair.
    """
    sources = get_emission_sources(seed=seed)
    rows = []

    for sc_name, sc_fn in ALL_SCENARIOS.items():
        sc = sc_fn()

        if verbose:
            print(f"\n{'='*70}")
            print(f"Scenario {sc_name}: {sc['description']}")
            print(f"{'='*70}")
            print(f"  {'Wind':<8} {'Captured':>10} {'Eff %':>8} "
                  f"{'Invest $':>10} {'$/unit':>10}")
            print(f"  {'-'*8} {'-'*10} {'-'*8} {'-'*10} {'-'*10}")

        for wind in winds:
            stats = aggregate(sources, sc["devices"], wind)
            rows.append({
                "scenario": sc_name,
                "wind": wind.name,
                "devices": len(sc["devices"]),
                "total_captured": stats.total_captured,
                "efficiency_pct": stats.efficiency_pct,
                "total_investment": stats.total_investment,
                "cost_per_unit": stats.cost_per_unit_captured,
            })

            if verbose:
                print(
                    f"  {wind.name:<8} {stats.total_captured:>10.1f} "
                    f"{stats.efficiency_pct:>7.2f}% "
                    f"{stats.total_investment:>10.0f} "
                    f"{stats.cost_per_unit_captured:>10.2f}"
                )
                for kind_row in summary_rows(stats):
                    print(f"      {kind_row['name']:<22} x{kind_row['count']:<3} "
                          f"{kind_row['captured']:>9.1f} captured")

    return rows


def summarize(rows):
    """Average each scenario's runs across winds.

    Cost per unit is averaged only over runs that captured something; a run
    with zero capture reports a cost of 0, which would otherwise drag the
    average down. ``avg_cost`` is None when no run of the scenario captured.

    Returns:
        List of (scenario, avg_eff, avg_cost) tuples, cheapest first,
        scenarios without a cost last.
    """
    summaries = []
    for name in ALL_SCENARIOS:
        sc_rows = [r for r in rows if r["scenario"] == name]
        if not sc_rows or sc_rows[0]["devices"] == 0:
            continue
        avg_eff = float(np.mean([r["efficiency_pct"] for r in sc_rows]))
        costs = [r["cost_per_unit"] for r in sc_rows if r["total_captured"] > 0]
        avg_cost = float(np.mean(costs)) if costs else None
        summaries.append((name, avg_eff, avg_cost))

    summaries.sort(key=lambda x: (x[2] is None, x[2] or 0.0))
    return summaries


def print_summary(rows):
    """Rank scenarios by average cost per unit captured (cheapest first)."""
    print(f"\n\n{'='*70}")
    print("SUMMARY: Average across winds")
    print(f"{'='*70}")
    print(f"  {'Scenario':<24} {'Avg Eff %':>10} {'Avg $/unit':>12}")
    print(f"  {'-'*24} {'-'*10} {'-'*12}")

    for name, avg_eff, avg_cost in summarize(rows):
        cost_text = f"{avg_cost:>12.2f}" if avg_cost is not None else f"{'n/a':>12}"
        print(f"  {name:<24} {avg_eff:>9.2f}% {cost_text}")


def main():
    parser = argparse.ArgumentParser(description="Device Layout Comparison")
    parser.add_argument("--wind", nargs="+", default=None,
                        help="Wind directions to evaluate (N S E W calm); default all")
    parser.add_argument("--seed", type=int, default=TRAFFIC_SEED, help="Traffic emission seed")
    parser.add_argument("--quiet", action="store_true", help="Suppress per-scenario output")
    args = parser.parse_args()

    if args.wind:
        winds = [WindDirection.parse(w) for w in args.wind]
    else:
        winds = list(WindDirection)

    seed = args.seed

    print("Device Layout Comparison")
    print(f"Winds: {', '.join(w.name for w in winds)}, Seed: {seed}")

    rows = run_comparison(winds, seed=seed, verbose=not args.quiet)
    print_summary(rows)

    print(f"\nTotal: {len(rows)} runs completed.")


if __name__ == "__main__":
    main()
