# tests/test_path_utils.py

import os

from cli.path_utils import STORE_DIR_ENV_VAR, get_store_dir, resolve_store_dir


def test_explicit_input_wins(monkeypatch, tmp_path):
    monkeypatch.setenv(STORE_DIR_ENV_VAR, str(tmp_path / "from_env"))

    assert get_store_dir(str(tmp_path / "chosen")) == str(tmp_path / "chosen")


def test_environment_variable_used_when_blank(monkeypatch, tmp_path):
    monkeypatch.setenv(STORE_DIR_ENV_VAR, str(tmp_path / "from_env"))

    assert get_store_dir(None) == str(tmp_path / "from_env")
    assert get_store_dir("   ") == str(tmp_path / "from_env")


def test_default_location(monkeypatch):
    monkeypatch.delenv(STORE_DIR_ENV_VAR, raising=False)

    expected = os.path.join(os.path.expanduser("~"), "Documents", "Gradebooks")

    assert get_store_dir(None) == expected


def test_resolve_store_dir_creates_directory(tmp_path):
    target = tmp_path / "nested" / "store"

    resolved = resolve_store_dir(str(target))

    assert resolved == str(target)
    assert os.path.isdir(resolved)
