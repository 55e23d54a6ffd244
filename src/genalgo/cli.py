"""Command line interface for the project.

Commands:
- show-settings: print the resolved Settings
- run: execute one optimisation run from a YAML file and/or flags
- benchmarks: list the registered objective functions
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Iterable

from genalgo.config import (
    RunFileConfig,
    Settings,
    build_run_configuration,
    configure_logging,
    get_settings,
    load_config,
)
from genalgo.errors import GenalgoError
from genalgo.optimization.benchmarks import OBJECTIVES
from genalgo.optimization.ga import CrossoverKind, Executor

__all__ = ["build_parser", "main"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="genalgo CLI")
    parser.add_argument(
        "--structured-logs",
        dest="structured_logs",
        action="store_true",
        help="force JSON structured logs",
    )
    parser.add_argument(
        "--plain-logs",
        dest="structured_logs",
        action="store_false",
        help="force plain text logs",
    )
    parser.set_defaults(structured_logs=None)

    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show-settings", help="Show the resolved Settings")
    show.add_argument("--json", action="store_true", help="JSON output")

    run = subparsers.add_parser("run", help="Run the genetic algorithm")
    run.add_argument("--config", type=str, help="YAML run configuration file")
    run.add_argument("--n-pop", dest="n_pop", type=int, help="Population size")
    run.add_argument("--n-dim", dest="n_dim", type=int, help="Number of genes")
    run.add_argument("--n-eval", dest="n_eval", type=int, help="Evaluation budget")
    run.add_argument("--lower", dest="lower_limit", type=float, help="Lower gene bound")
    run.add_argument("--upper", dest="upper_limit", type=float, help="Upper gene bound")
    run.add_argument(
        "--crossover",
        choices=[kind.value for kind in CrossoverKind],
        help="Crossover operator",
    )
    run.add_argument("--seed", type=int, help="Random seed")
    run.add_argument(
        "--objective",
        choices=sorted(OBJECTIVES),
        help="Benchmark objective to minimise",
    )
    run.add_argument("--history-csv", dest="history_csv", type=str, help="Write the history to CSV")
    run.add_argument("--json", action="store_true", help="JSON output")

    subparsers.add_parser("benchmarks", help="List the available objectives")

    return parser


def _configure_logging(structured: bool | None, settings: Settings, command: str) -> None:
    configure_logging(settings=settings, structured=structured, context={"command": command})


def _print_payload(payload: dict[str, Any], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        for key, value in payload.items():
            print(f"{key}: {value}")


def _run(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    if args.config:
        file_config = load_config(args.config, RunFileConfig, project_root=settings.project_root)
    else:
        file_config = RunFileConfig()

    overrides = {
        "n_pop": args.n_pop,
        "n_dim": args.n_dim,
        "n_eval": args.n_eval,
        "lower_limit": args.lower_limit,
        "upper_limit": args.upper_limit,
        "crossover": args.crossover,
        "seed": args.seed,
        "objective": args.objective,
    }
    if file_config.seed is None and args.seed is None:
        overrides["seed"] = settings.random_seed

    configuration = build_run_configuration(file_config, overrides=overrides)
    executor = Executor(configuration)
    executor.execute()
    summary = executor.summary()

    if args.history_csv:
        path = Path(args.history_csv)
        path.parent.mkdir(parents=True, exist_ok=True)
        summary.history.to_frame().to_csv(path, index=False)

    payload = summary.to_dict()
    payload["seed"] = configuration.seed
    payload["crossover"] = configuration.crossover.value
    return payload


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    settings = get_settings()
    _configure_logging(args.structured_logs, settings, args.command)

    try:
        if args.command == "show-settings":
            _print_payload(settings.to_dict(), as_json=args.json)
        elif args.command == "run":
            _print_payload(_run(args, settings), as_json=args.json)
        elif args.command == "benchmarks":
            for name in sorted(OBJECTIVES):
                print(name)
        else:  # pragma: no cover
            parser.error(f"Unknown command: {args.command}")
    except GenalgoError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
