from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest

from genalgo.cli import build_parser, main
from genalgo.config.settings import reset_settings_cache


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GENALGO_LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("GENALGO_LOG_LEVEL", "WARNING")
    reset_settings_cache()


RUN_FLAGS = [
    "run",
    "--n-pop", "10",
    "--n-dim", "3",
    "--n-eval", "50",
    "--lower=-5",
    "--upper=5",
    "--seed", "12345",
    "--objective", "abs_sum",
]


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parser_log_flags() -> None:
    parser = build_parser()
    assert parser.parse_args(["benchmarks"]).structured_logs is None
    assert parser.parse_args(["--structured-logs", "benchmarks"]).structured_logs is True
    assert parser.parse_args(["--plain-logs", "benchmarks"]).structured_logs is False


def test_show_settings_json(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    assert main(["show-settings", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["logs_dir"] == str(tmp_path / "logs")
    assert payload["log_level"] == "WARNING"


def test_run_with_flags(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([*RUN_FLAGS, "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["evaluations"] == 50
    assert payload["generations"] == 20
    assert payload["seed"] == 12345
    assert payload["crossover"] == "blx_alpha"
    assert len(payload["best_chromosome"]) == 3
    assert payload["best_fitness"] >= 0.0


def test_run_is_reproducible(capsys: pytest.CaptureFixture[str]) -> None:
    main([*RUN_FLAGS, "--json"])
    first = json.loads(capsys.readouterr().out)
    main([*RUN_FLAGS, "--json"])
    second = json.loads(capsys.readouterr().out)
    assert first == second


def test_run_from_config_with_history(capsys: pytest.CaptureFixture[str], tmp_path: Path) -> None:
    history_path = tmp_path / "out" / "history.csv"
    code = main(
        [
            "run",
            "--config", "configs/sphere_blx.yaml",
            "--n-eval", "100",
            "--history-csv", str(history_path),
        ]
    )
    assert code == 0
    output = capsys.readouterr().out
    assert "evaluations: 100" in output

    frame = pd.read_csv(history_path)
    assert frame["evaluations"].tolist() == list(range(30, 101, 2))
    assert {"best_fitness", "x0", "x4"} <= set(frame.columns)


def test_run_uses_settings_seed_when_none_given(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GENALGO_RANDOM_SEED", "321")
    reset_settings_cache()
    flags = [flag for flag in RUN_FLAGS if flag not in {"--seed", "12345"}]
    assert main([*flags, "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["seed"] == 321


def test_run_simplex_population_too_small(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(
        [
            "run",
            "--n-pop", "3",
            "--n-dim", "3",
            "--n-eval", "30",
            "--lower=-1",
            "--upper=1",
            "--crossover", "simplex",
        ]
    )
    assert code == 2
    assert "Simplex crossover requires" in capsys.readouterr().err


def test_run_without_parameters_reports_missing(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run"]) == 2
    assert "Missing required parameters" in capsys.readouterr().err


def test_run_missing_config_file(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["run", "--config", "does/not/exist.yaml"]) == 2
    assert "not found" in capsys.readouterr().err


def test_benchmarks_lists_objectives(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["benchmarks"]) == 0
    names = capsys.readouterr().out.split()
    assert names == ["abs_sum", "ackley", "rastrigin", "rosenbrock", "sphere"]
