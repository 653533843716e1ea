"""Tests for the command line interface."""

import pytest

from seedcalc import main as cli
from seedcalc.data.ingestion.coordinator import AcquisitionResult
from seedcalc.errors import AcquisitionError, DataCorruptionError, ValidationError
from seedcalc.models.matrix import ResultMatrix
from seedcalc.predictors.seed_history import compare


class _StubService:
    def __init__(self, matrix=None, error=None, persisted=True, failed=None):
        self.matrix = matrix
        self.error = error
        self.persisted = persisted
        self.failed = failed or {}
        self.calls = []

    def compare(self, seed_a, seed_b, force=False):
        self.calls.append(("compare", seed_a, seed_b, force))
        if self.error:
            raise self.error
        return compare(seed_a, seed_b, self.matrix)

    def refresh(self):
        self.calls.append(("refresh",))
        if self.error:
            raise self.error
        return AcquisitionResult(
            matrix=ResultMatrix(),
            expected_seasons=[2022, 2023, 2024],
            completed_seasons=[s for s in (2022, 2023, 2024) if s not in self.failed],
            failed_seasons=self.failed,
            persisted=self.persisted,
        )


@pytest.fixture
def matrix():
    matrix = ResultMatrix()
    matrix.lookup(1, 16).total_played = 140
    matrix.lookup(1, 16).total_won = 139
    return matrix


@pytest.mark.parametrize("token", ["help", "?", "/help", "/?"])
def test_help_tokens_print_usage(token, capsys):
    service = _StubService()

    assert cli.run(["3", token], service) == 0
    assert "Usage: seedcalc" in capsys.readouterr().out
    assert service.calls == []


def test_compare_prints_report(matrix, capsys):
    service = _StubService(matrix)

    assert cli.run(["16", "1"], service) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Team 1 (seed: 16) win percentage: 0.71%"
    assert out[-1] == "You should pick team 2 (seed: 1). | Certainty: 140"
    assert service.calls == [("compare", 16, 1, False)]


def test_force_with_seeds_passes_flag(matrix):
    service = _StubService(matrix)

    assert cli.run(["force", "1", "16"], service) == 0
    assert service.calls == [("compare", 1, 16, True)]


def test_force_alone_refreshes(capsys):
    service = _StubService()

    assert cli.run(["force"], service) == 0
    assert "Successfully retrieved and stored fresh game data." in capsys.readouterr().out


def test_force_alone_reports_failed_seasons(capsys):
    service = _StubService(failed={2023: "HTTP 503"})

    assert cli.run(["force"], service) == 0
    captured = capsys.readouterr()
    assert "Retrieved 2 of 3 seasons" in captured.err


def test_force_alone_reports_unsaved_partial(capsys):
    service = _StubService(persisted=False)

    assert cli.run(["force"], service) == 1
    assert "kept the existing data file" in capsys.readouterr().err


@pytest.mark.parametrize(
    "params,message",
    [
        (["3"], "Not enough or improper arguments entered."),
        ([], "Not enough or improper arguments entered."),
        (["1", "2", "3"], "Too many arguments entered."),
        (["1", "seventeen"], "Entered team seed is not an acceptable number."),
        (["0", "4"], "Entered team seed is not an acceptable number."),
    ],
)
def test_argument_errors(params, message, capsys):
    service = _StubService()

    assert cli.run(params, service) == 1
    assert message in capsys.readouterr().err
    assert service.calls == []


def test_parse_params_returns_int_seeds():
    assert cli.parse_params(["12", "force", "5"]) == ([12, 5], True)
    with pytest.raises(ValidationError):
        cli.parse_params(["force", "1"])


def test_corruption_error_is_reported(capsys):
    service = _StubService(error=DataCorruptionError("Match data has become corrupt"))

    assert cli.run(["2", "7"], service) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Match data has become corrupt")
    assert "'force'" in err


def test_acquisition_error_is_reported(capsys):
    service = _StubService(error=AcquisitionError("no data retrieved"))

    assert cli.run(["2", "7"], service) == 1
    assert "could not acquire game data (no data retrieved)" in capsys.readouterr().err


def test_main_parses_options(monkeypatch, tmp_path):
    seen = {}

    def fake_run(params, service):
        seen["params"] = params
        seen["data_file"] = service.config.data_file
        return 0

    monkeypatch.setattr(cli, "run", fake_run)

    assert cli.main(["-v", "--data-file", str(tmp_path / "d.json"), "4", "13", "/?"]) == 0
    assert seen["params"] == ["4", "13", "/?"]
    assert seen["data_file"] == str(tmp_path / "d.json")
