"""Tests for the in-memory session registry."""

from __future__ import annotations

import asyncio

import pytest

from studio.services.orchestrator import Orchestrator
from studio.services.session_store import SessionStore
from studio.services.uploads import UploadIntake

from .conftest import FakeProvider


@pytest.fixture
def store(orchestrator: Orchestrator, intake: UploadIntake) -> SessionStore:
    return SessionStore(orchestrator, intake, max_sessions=2)


def test_new_session_for_unknown_id(store: SessionStore) -> None:
    session_id, controller = store.get_or_create("not-a-session")
    assert session_id != "not-a-session"
    assert session_id in store
    assert store.get_or_create(session_id)[1] is controller


def test_sessions_are_isolated(store: SessionStore, png_bytes: bytes) -> None:
    _, first = store.get_or_create(None)
    _, second = store.get_or_create(None)
    first.upload(png_bytes)
    assert first.state.image is not None
    assert second.state.image is None


def test_least_recently_used_evicted(store: SessionStore) -> None:
    a, _ = store.get_or_create(None)
    b, _ = store.get_or_create(None)
    store.get_or_create(a)
    c, _ = store.get_or_create(None)
    assert len(store) == 2
    assert a in store and c in store
    assert b not in store


@pytest.mark.asyncio
async def test_busy_session_not_evicted(store: SessionStore, provider: FakeProvider, png_bytes: bytes) -> None:
    a, busy = store.get_or_create(None)
    busy.upload(png_bytes)
    provider.gate = asyncio.Event()
    task = asyncio.create_task(busy.describe())
    await asyncio.sleep(0)

    b, _ = store.get_or_create(None)
    c, _ = store.get_or_create(None)
    assert a in store and c in store
    assert b not in store

    provider.gate.set()
    await task
