# src/taskchat/core/identity.py

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import InvalidRequestError, UnauthorizedError

logger = logging.getLogger(__name__)


class IdentityGate:
    """
    Caller identity -> permission flag.

    Only explicit True entries authorize. The owner identity is the single root of
    trust: it alone may grant or revoke, and it is not itself authorized until it
    grants itself.
    """

    def __init__(self, owner_id: str, entries: Iterable[tuple[str, bool]] = ()) -> None:
        if not owner_id or not owner_id.strip():
            raise ValueError("owner_id is required")
        self._owner_id = owner_id
        self._authorized: dict[str, bool] = {str(k): v is True for k, v in entries}

    @property
    def owner_id(self) -> str:
        return self._owner_id

    def is_authorized(self, caller: str | None) -> bool:
        if not caller:
            return False
        return self._authorized.get(caller, False) is True

    def add_authorized_user(self, granter: str | None, target: str) -> None:
        self._require_owner(granter, action="grant", target=target)
        self._authorized[target] = True
        logger.info("Authorized user=%s", target)

    def revoke_authorized_user(self, granter: str | None, target: str) -> None:
        self._require_owner(granter, action="revoke", target=target)
        # Keep the entry: an explicit False survives the snapshot.
        self._authorized[target] = False
        logger.info("Revoked user=%s", target)

    def entries(self) -> list[tuple[str, bool]]:
        return list(self._authorized.items())

    def _require_owner(self, granter: str | None, *, action: str, target: str) -> None:
        if granter != self._owner_id:
            logger.warning("Rejected %s for user=%s by granter=%s", action, target, granter)
            raise UnauthorizedError("Unauthorized")
        if not target:
            raise InvalidRequestError("User identity is required")
