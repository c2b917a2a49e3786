#!/usr/bin/env python3
"""
Multi-coil MI-MAC vs traditional CSMA/CA comparison.

Runs one deterministic session of each protocol, narrates every state
transition and packet on the console, then prints the comparison table.
With --variant only that protocol's session runs and its energy breakdown
is printed instead.

Usage:
  python scripts/compare_protocols.py
  python scripts/compare_protocols.py --config configs/default.yaml --plot results/energy
  python scripts/compare_protocols.py --variant mi_mac
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pandas as pd
from rich.console import Console

from mimac.reporting import ConsoleReportSink, render_report, render_session
from mimac.simulation import SCRIPTS, ProtocolRunner, ScenarioConfig, run_comparison
from mimac.utils import (
    default_config,
    load_config,
    plot_energy_comparison,
    save_figure,
    setup_logging,
)


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('--config', type=Path, default=None,
                        help='YAML scenario overriding the defaults')
    parser.add_argument('--variant', choices=sorted(SCRIPTS), default=None,
                        help='Run a single protocol session instead of the comparison')
    parser.add_argument('--log-level', default='WARNING',
                        help='Logging level for the mimac logger')
    parser.add_argument('--log-file', type=Path, default=None,
                        help='Also write the log to this file')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the final summary')
    parser.add_argument('--plot', type=Path, default=None,
                        help='Save an energy bar chart to this path (no extension)')
    parser.add_argument('--events-csv', type=Path, default=None,
                        help='Write the session event logs to this CSV file')
    parser.add_argument('--json', type=Path, default=None,
                        help='Write the results to this JSON file')
    args = parser.parse_args()

    setup_logging(level=args.log_level, log_file=args.log_file)
    console = Console()

    config = load_config(args.config) if args.config else default_config()
    scenario = ScenarioConfig.from_config(config)
    sink = None if args.quiet else ConsoleReportSink(console)

    if args.variant is not None:
        result = ProtocolRunner(scenario, sink).run(SCRIPTS[args.variant])
        console.rule("[bold]Session Summary")
        render_session(result, scenario.profile, console)
        sessions = [result]
        output = result.to_dict()
    else:
        report = run_comparison(scenario, sink)
        console.rule("[bold]Protocol Comparison")
        render_report(report, scenario.profile, console)
        sessions = [report.mi_mac, report.csma_ca]
        output = report.to_dict()

    if args.plot is not None:
        fig = plot_energy_comparison(sessions)
        for path in save_figure(fig, args.plot):
            console.print(f"[Figure saved to: {path}]", markup=False)

    if args.events_csv is not None:
        frame = pd.concat([s.to_frame() for s in sessions], ignore_index=True)
        args.events_csv.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(args.events_csv, index=False)
        console.print(f"[Events saved to: {args.events_csv}]", markup=False)

    if args.json is not None:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        with open(args.json, 'w') as f:
            json.dump(output, f, indent=2)
        console.print(f"[Results saved to: {args.json}]", markup=False)

    return output


if __name__ == "__main__":
    main()
