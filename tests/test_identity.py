# tests/test_identity.py

from __future__ import annotations

import pytest

from taskchat.core.errors import ErrorKind, InvalidRequestError, UnauthorizedError
from taskchat.core.identity import IdentityGate


def test_only_explicit_true_entries_authorize() -> None:
    gate = IdentityGate("root", [("alice", True), ("bob", False)])

    assert gate.is_authorized("alice")
    assert not gate.is_authorized("bob")
    assert not gate.is_authorized("carol")
    assert not gate.is_authorized(None)
    assert not gate.is_authorized("")


def test_truthy_non_boolean_entries_do_not_authorize() -> None:
    gate = IdentityGate("root", [("mallory", "false"), ("eve", 1), ("trent", "yes")])

    assert not gate.is_authorized("mallory")
    assert not gate.is_authorized("eve")
    assert not gate.is_authorized("trent")


def test_owner_is_not_implicitly_authorized_but_can_grant_itself() -> None:
    gate = IdentityGate("root")
    assert not gate.is_authorized("root")

    gate.add_authorized_user("root", "root")
    assert gate.is_authorized("root")


def test_non_owner_cannot_grant_even_when_authorized() -> None:
    gate = IdentityGate("root", [("alice", True)])

    with pytest.raises(UnauthorizedError) as exc:
        gate.add_authorized_user("alice", "mallory")

    assert exc.value.kind is ErrorKind.UNAUTHORIZED
    assert exc.value.message == "Unauthorized"
    assert not gate.is_authorized("mallory")
    assert ("mallory", True) not in gate.entries()


def test_revoke_keeps_explicit_false_entry() -> None:
    gate = IdentityGate("root")
    gate.add_authorized_user("root", "alice")
    gate.revoke_authorized_user("root", "alice")

    assert not gate.is_authorized("alice")
    assert ("alice", False) in gate.entries()

    with pytest.raises(UnauthorizedError):
        gate.revoke_authorized_user("alice", "root")


def test_owner_grant_requires_target() -> None:
    gate = IdentityGate("root")
    with pytest.raises(InvalidRequestError):
        gate.add_authorized_user("root", "")


def test_owner_id_required() -> None:
    with pytest.raises(ValueError):
        IdentityGate("  ")
