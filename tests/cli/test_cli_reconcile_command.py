import json
from pathlib import Path

from typer.testing import CliRunner

from cli.main import app


runner = CliRunner()


def test_cli_reconcile_json(write_file):
    active = write_file("active.yaml", "A: '1'\nX: '9'\nB: '2'\n")
    previous = write_file("previous.yaml", "A: '1'\nB: '2'\n")
    new = write_file("new.yaml", "A: '1'\nC: '3'\n")

    res = runner.invoke(
        app,
        ["reconcile", "--active", str(active), "--previous", str(previous), "--new", str(new), "--json"],
    )

    assert res.exit_code == 0, res.stdout
    assert json.loads(res.stdout) == {"A": "1", "C": "3", "X": "9"}


def test_cli_reconcile_without_previous_keeps_active(write_file):
    active = write_file("active.json", '[{"Key": "Legacy", "Value": "x"}]')
    new = write_file("new.yaml", "Owner: team\n")

    res = runner.invoke(app, ["reconcile", "--active", str(active), "--new", str(new), "--output", "yaml"])

    assert res.exit_code == 0, res.stdout
    assert "Legacy: x" in res.stdout
    assert "Owner: team" in res.stdout


def test_cli_reconcile_text(write_file):
    active = write_file("active.yaml", "A: '1'\nB: '2'\nX: '9'\n")
    previous = write_file("previous.yaml", "A: '1'\nB: '2'\n")
    new = write_file("new.yaml", "A: '1'\n")

    res = runner.invoke(
        app,
        ["reconcile", "--active", str(active), "--previous", str(previous), "--new", str(new), "--text"],
    )

    assert res.exit_code == 0, res.stdout
    assert "Reconciled Tags" in res.stdout
    assert "[-]" in res.stdout  # B saiu do template
    assert "[•]" in res.stdout  # X é out-of-band


def test_cli_reconcile_rejects_two_output_flags(write_file):
    active = write_file("active.yaml", "A: '1'\n")
    res = runner.invoke(app, ["reconcile", "--active", str(active), "--new", str(active), "--json", "--yaml"])
    assert res.exit_code != 0


def test_cli_reconcile_invalid_tag_file(write_file):
    active = write_file("active.yaml", "not tags\n")
    new = write_file("new.yaml", "A: '1'\n")
    res = runner.invoke(app, ["reconcile", "--active", str(active), "--new", str(new)])
    assert res.exit_code == 2


def test_cli_reconcile_numeric_key(write_file):
    active = write_file("active.yaml", "Owner: a\n2024: legacy\n")
    new = write_file("new.yaml", "Owner: b\n")

    res = runner.invoke(app, ["reconcile", "--active", str(active), "--new", str(new), "--json"])

    assert res.exit_code == 0, res.stdout
    assert json.loads(res.stdout) == {"2024": "legacy", "Owner": "b"}
