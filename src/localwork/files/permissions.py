"""Grant registry: the set of filesystem roots the user has authorized.

The registry is an explicitly owned object; hosts create one and pass it to
the file operations and the agent. All access goes through an internal lock
held only for the duration of a single read or mutation, so a UI thread can
grant or revoke between tool executions of a running agent.
"""

import threading
import time
import uuid
from collections.abc import Iterable

from localwork.files.types import Grant
from localwork.telemetry import GRANT_ADDED, GRANT_REVOKED, get_logger

log = get_logger(__name__)


def _covered(path: str, roots: Iterable[str]) -> bool:
    # Plain string prefix: "/docs" also covers "/docs-backup"
    return any(path.startswith(root) for root in roots)


class GrantRegistry:
    """Thread-safe registry of folder grants.

    Authorization decisions are computed from the current contents on every
    call; nothing is cached.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._grants: dict[str, Grant] = {}
        self._lock = threading.Lock()

    def grant(self, root_path: str) -> Grant:
        """Authorize a new root.

        A fresh id is allocated even if the same root is already granted;
        duplicates are revoked independently.

        Args:
            root_path: Root path to authorize.

        Returns:
            The stored Grant.

        Raises:
            ValueError: If root_path is empty.
        """
        grant = Grant(id=str(uuid.uuid4()), root_path=root_path, granted_at=int(time.time()))
        with self._lock:
            self._grants[grant.id] = grant
        log.info(GRANT_ADDED, grant_id=grant.id, root_path=root_path)
        return grant

    def revoke(self, grant_id: str) -> bool:
        """Remove a grant by id.

        Args:
            grant_id: Identifier returned by grant().

        Returns:
            True if a grant was removed, False if the id was unknown.
        """
        with self._lock:
            removed = self._grants.pop(grant_id, None)
        if removed is None:
            log.debug("grant_revoke_unknown_id", grant_id=grant_id)
            return False
        log.info(GRANT_REVOKED, grant_id=grant_id, root_path=removed.root_path)
        return True

    def get(self, grant_id: str) -> Grant | None:
        """Look up a grant by id."""
        with self._lock:
            return self._grants.get(grant_id)

    def list(self) -> list[Grant]:
        """Return a snapshot of all grants.

        Later mutations of the registry do not affect the returned list.
        """
        with self._lock:
            return list(self._grants.values())

    def clear(self) -> None:
        """Revoke every grant."""
        with self._lock:
            self._grants.clear()

    def is_authorized(self, candidate_path: str) -> bool:
        """Check whether a path starts with the root of any grant.

        Args:
            candidate_path: Path to check, compared textually.

        Returns:
            True if some grant's root_path is a string prefix of candidate_path.
        """
        return self.is_authorized_all(candidate_path)

    def is_authorized_all(self, *paths: str) -> bool:
        """Check several paths against one snapshot of the registry.

        Args:
            *paths: Paths that must all be authorized.

        Returns:
            True only if every path is covered by some grant. False when no
            paths are given.
        """
        if not paths:
            return False
        with self._lock:
            roots = [g.root_path for g in self._grants.values()]
        return all(_covered(path, roots) for path in paths)

    def __len__(self) -> int:
        with self._lock:
            return len(self._grants)

    def __contains__(self, grant_id: object) -> bool:
        with self._lock:
            return grant_id in self._grants
