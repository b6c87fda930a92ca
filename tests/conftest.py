# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskchat.core.service import ChatTaskService
from taskchat.llm.client import CompletionClient, LLMConfig

from .fakes import FakeBackend, FakeClock

OWNER = "owner"


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the composition root.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskchat-test",
        owner_id=OWNER,
        console_user_id=OWNER,
        llm_api_key=None,
        llm_base_url="http://127.0.0.1:9/v1",
        llm_model="test-model",
        llm_max_tokens=64,
        llm_temperature=0.5,
        llm_top_p=0.8,
        llm_timeout_seconds=2.0,
        llm_connect_timeout_seconds=0.5,
        extra_headers={},
        data_dir=tmp_path / "data",
        state_path=tmp_path / "data" / "state.json",
    )


@pytest.fixture()
def llm_config() -> LLMConfig:
    return LLMConfig(model="test-model", max_tokens=64, temperature=0.5, top_p=0.8)


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend(next_text="hi there")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def service(backend: FakeBackend, llm_config: LLMConfig, clock: FakeClock) -> ChatTaskService:
    """Fresh service with the fake backend and a deterministic clock."""
    completion = CompletionClient(backend, llm_config, timeout_seconds=1.0)
    return ChatTaskService.from_snapshot(None, owner_id=OWNER, completion=completion, clock=clock)


@pytest.fixture()
def authorized(service: ChatTaskService) -> str:
    """An identity the owner has granted access to."""
    service.add_authorized_user(OWNER, "alice")
    return "alice"
