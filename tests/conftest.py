"""Shared pytest fixtures for rulefilter tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from rulefilter.config.settings import RuleFilterSettings
from rulefilter.domain.registry import RULE_REGISTRY

# Rule test classes declare data providers; each one feeds a row fixture.
_PROVIDERS = (
    ("is_row", "provider_is"),
    ("is_not_row", "provider_is_not"),
    ("fix_row", "provider_fix"),
)


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    """Parametrize rule tests from the ``provider_*`` methods of their class."""
    if metafunc.cls is None:
        return
    for fixture_name, provider_name in _PROVIDERS:
        if fixture_name not in metafunc.fixturenames:
            continue
        provider = getattr(metafunc.cls, provider_name, None)
        if provider is None:
            continue
        rows = provider(metafunc.cls)
        metafunc.parametrize(fixture_name, rows, ids=[repr(row) for row in rows])


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's RULEFILTER_* environment out of the tests."""
    monkeypatch.delenv("RULEFILTER_CONFIG", raising=False)
    monkeypatch.delenv("RULEFILTER_JSON_OUTPUT", raising=False)
    monkeypatch.delenv("RULEFILTER_VERBOSE", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> RuleFilterSettings:
    """Default settings, isolated from any rulefilter.toml above tmp_path."""
    return RuleFilterSettings.from_cli(config_path=str(tmp_path / "absent.toml"))


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temp directory."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def restore_registry() -> Generator[None]:
    """Undo rule registrations made during a test."""
    original = RULE_REGISTRY.copy()
    try:
        yield
    finally:
        RULE_REGISTRY.clear()
        RULE_REGISTRY.update(original)
