import json

import pytest

import run
from scripts import diagnose_seeds


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        run.main(["--version"])
    assert exc.value.code == 0
    assert "cavecrawl" in capsys.readouterr().out


def test_preview_json(capsys):
    code = run.main(["preview", "--seed", "5", "--width", "40", "--height", "32", "--json"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["width"] == 40 and data["height"] == 32
    assert len(data["grid"]) == 32
    assert data["seed"] >= 5


def test_preview_text_defaults_to_preview_command(capsys):
    assert run.main(["--log-level", "error"]) == 0
    out = capsys.readouterr().out
    lines = out.rstrip("\n").split("\n")
    assert len(lines) == 50 + 1
    assert lines[-1].startswith("seed=")
    assert "\x1b[" not in out  # captured stdout is not a tty


def test_preview_reports_bad_parameters(capsys):
    assert run.main(["preview", "--width", "3", "--log-level", "error"]) == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_diagnose_seed_report_shape():
    report = diagnose_seeds.run_for_seed(1234)
    assert report["seed"] == 1234
    assert report["issues"]["border_not_void"] == 0
    assert report["issues"]["goal_key_same_quadrant"] == 0
    assert report["ok"] == all(v == 0 for v in report["issues"].values())


def test_preview_flags_without_subcommand(capsys):
    assert run.main(["--seed", "42", "--width", "24", "--height", "20", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["width"] == 24 and data["height"] == 20


@pytest.mark.parametrize(
    "argv, expected",
    [
        ([], ["preview"]),
        (["preview", "--seed", "3"], ["preview", "--seed", "3"]),
        (["preview", "--json", "--log-level", "debug"], ["--log-level", "debug", "preview", "--json"]),
        (["--seed", "3", "--env-file=.env.local"], ["--env-file=.env.local", "preview", "--seed", "3"]),
        (["--version"], ["--version", "preview"]),
        (["--help"], ["--help", "preview"]),
        (["preview", "--help"], ["preview", "--help"]),
    ],
)
def test_global_options_move_before_subcommand(argv, expected):
    assert run._with_preview_command(argv) == expected
