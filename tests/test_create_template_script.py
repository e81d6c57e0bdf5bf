"""Tests for the template seeding script."""

import importlib.util
import json
import sys
from pathlib import Path

import pytest

from hns.config import reset_settings_cache

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "create_template.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("create_template_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture()
def database_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    reset_settings_cache()
    yield url
    reset_settings_cache()


def test_script_creates_template_from_definition(tmp_path, monkeypatch, capsys, database_url):
    definition = tmp_path / "template.json"
    definition.write_text(
        json.dumps(
            {
                "name": "edge",
                "max_length": 10,
                "sequence_length": 4,
                "groups": [
                    {"name": "prefix", "length": 2, "validation_type": "fixed", "validation_value": "eg"},
                    {"name": "seq", "length": 4, "validation_type": "sequence"},
                ],
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setattr(sys, "argv", ["create_template.py", str(definition)])

    _load_script().main()

    output = capsys.readouterr().out
    assert "Name: edge" in output
    assert "Groups: prefix, seq" in output


def test_script_exits_on_invalid_definition(tmp_path, monkeypatch, database_url):
    definition = tmp_path / "template.json"
    definition.write_text(
        json.dumps(
            {
                "name": "edge",
                "max_length": 3,
                "sequence_length": 4,
                "groups": [{"name": "seq", "length": 4, "validation_type": "sequence"}],
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setattr(sys, "argv", ["create_template.py", str(definition)])

    with pytest.raises(SystemExit, match="Could not create the template"):
        _load_script().main()
