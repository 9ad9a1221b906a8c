"""Pytest fixtures for mixchain tests."""

import sys

import pytest

from mixchain import config


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """Point the config directory at a temp dir."""
    config_dir = tmp_path / "mixchain"
    config_dir.mkdir()
    monkeypatch.setattr(config, "get_config_dir", lambda: config_dir)
    return config_dir


@pytest.fixture
def isolated_sys_path(monkeypatch):
    """Restore sys.path after a test that adds import directories."""
    monkeypatch.setattr(sys, "path", list(sys.path))


@pytest.fixture
def counting():
    """Wrap a behavior factory so its calls are recorded.

    The wrapper keeps the bases it was applied to in ``.calls``.
    """

    def _wrap(factory):
        calls = []

        def counted(base=object):
            calls.append(base)
            return factory(base)

        counted.calls = calls
        counted.__qualname__ = f"counted_{factory.__name__}"
        return counted

    return _wrap


@pytest.fixture
def write_recipes(tmp_path):
    """Write a recipe file and return its path."""

    def _write(content: str, name: str = "recipes.yaml"):
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write
