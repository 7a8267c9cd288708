"""Tests for the CLI helpers."""

import argparse

import pytest

from aether_swarm import main
from aether_swarm.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for var in ("LLM_PROVIDER", "LLM_MODEL", "GOOGLE_API_KEY", "GEMINI_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def args(**kwargs):
    defaults = {"provider": None, "model": None}
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


def test_cli_beats_yaml():
    yaml_config = {"llm": {"provider": "google", "model": "gemini-2.5-pro"}}
    assert main.get_provider_and_model(args(provider="anthropic"), yaml_config) == ("anthropic", "gemini-2.5-pro")


def test_yaml_beats_env(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "anthropic")
    get_settings.cache_clear()
    assert main.get_provider_and_model(args(), {"llm": {"provider": "google"}}) == ("google", None)


def test_provider_detected_from_keys(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "key")
    get_settings.cache_clear()
    assert main.get_provider_and_model(args(), {}) == ("google", None)


def test_no_provider():
    assert main.get_provider_and_model(args(), {}) == (None, None)


@pytest.mark.asyncio
async def test_observer_commands(swarm, capsys):
    ceo = await swarm.start()
    swarm.work_queue.create({"title": "Build login", "description": "d"})

    main.handle_command(swarm, "/roster")
    main.handle_command(swarm, f"/history {ceo.name}")
    main.handle_command(swarm, "/items")
    main.handle_command(swarm, "/items completed")
    main.handle_command(swarm, "/history")
    main.handle_command(swarm, "/dance")

    out = capsys.readouterr().out.splitlines()
    assert out[0] == f"{ceo.name}: Ceo"
    assert out[1].endswith("] unassigned: Build login")
    assert out[2] == "(no work items)"
    assert out[3] == "Usage: /history <name>"
    assert out[4].startswith("Unknown command: /dance")
