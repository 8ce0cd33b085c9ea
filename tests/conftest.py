"""Shared pytest fixtures and test helpers for bumpctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from bumpctl.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo logging/telemetry configuration done by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    bump = logging.getLogger("bumpctl")
    bump_level = bump.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    bump.setLevel(bump_level)
    disable_telemetry()


WriteManifest = Callable[[str, str], Path]


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty workspace root directory."""
    root = tmp_path / "ws"
    root.mkdir()
    return root


@pytest.fixture
def write_manifest(workspace: Path) -> WriteManifest:
    """Write ``<workspace>/<rel>/Cargo.toml`` and return its path.

    ``rel`` of ``""`` or ``"."`` writes the root manifest.
    """

    def _write(rel: str, text: str) -> Path:
        directory = workspace / rel if rel not in ("", ".") else workspace
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "Cargo.toml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


def package_manifest(name: str, version: str = "0.1.0", deps: str = "") -> str:
    """Minimal Cargo manifest text with an optional ``[dependencies]`` body."""
    text = f'[package]\nname = "{name}"\nversion = "{version}"\n'
    if deps:
        text += f"\n[dependencies]\n{deps}\n"
    return text
