# src/taskchat/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the generation backend into the completion client,
- restores state from the restart snapshot and saves it again on shutdown.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.persistence import load_snapshot, save_snapshot
from ..core.ports import GenerationBackend
from ..core.service import ChatTaskService
from ..llm.client import CompletionClient, LLMConfig, OpenAICompatibleBackend
from ..llm.offline import OfflineBackend

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.state_path).parent.mkdir(parents=True, exist_ok=True)


def build_backend(settings) -> GenerationBackend:
    try:
        return OpenAICompatibleBackend(settings)
    except RuntimeError as e:
        # Fallback for demos / local runs without external services.
        logger.warning("%s Using offline backend.", e)
        return OfflineBackend()


def open_service(*, settings=None, backend: GenerationBackend | None = None) -> ChatTaskService:
    """
    Build the service and restore the previous run's state (if any).

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if backend is None:
        backend = build_backend(settings)

    completion = CompletionClient(
        backend,
        LLMConfig.from_settings(settings),
        timeout_seconds=settings.llm_timeout_seconds,
    )

    snap = load_snapshot(settings.state_path)
    service = ChatTaskService.from_snapshot(snap, owner_id=settings.owner_id, completion=completion)
    logger.info(
        "Service ready owner=%s restored=%s",
        settings.owner_id,
        "yes" if snap is not None else "no",
    )
    return service


def close_service(service: ChatTaskService, *, settings=None) -> None:
    """Flatten live state to disk; the next open_service() picks it up."""
    if settings is None:
        settings = get_settings()
    save_snapshot(settings.state_path, service.snapshot())
