"""Tests for the command-line invite runner."""

import pytest

import run_invite_dispatch
from admissions.services import invite_service
from admissions.services.invite_service import InviteDispatcher
from tests.conftest import RecordingBackend

ARGS = [
    "--parent-email", "asha@example.com",
    "--parent-name", "Asha Rao",
    "--student-name", "Kiran Rao",
    "--token-id", "TKN-1001",
    "--date", "2024-03-10",
    "--start", "10:00",
    "--end", "10:30",
    "--location", "Room A",
]


@pytest.fixture
def backend(monkeypatch, prod_settings):
    backend = RecordingBackend()
    monkeypatch.setattr(invite_service, "_dispatcher", InviteDispatcher(prod_settings, backend))
    return backend


@pytest.mark.asyncio
async def test_parent_invite_exit_code(backend):
    assert await run_invite_dispatch.main(ARGS) == 0
    assert backend.sent[0].to == ["asha@example.com"]


@pytest.mark.asyncio
async def test_principal_role(backend):
    assert await run_invite_dispatch.main(["--role", "principal", *ARGS]) == 0
    assert backend.sent[0].to == ["principal@school.com"]


@pytest.mark.asyncio
async def test_invalid_slot_exits_non_zero(backend):
    args = [*ARGS[:-4], "--end", "09:00", "--location", "Room A"]

    assert await run_invite_dispatch.main(args) == 1
    assert backend.sent == []
