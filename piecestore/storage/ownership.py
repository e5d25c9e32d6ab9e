"""Ownership checks for storage roots."""
from __future__ import annotations
import os
import logging
from typing import Protocol

from piecestore.storage.errors import PathError

log = logging.getLogger("piecestore")


class OwnerProvider(Protocol):
    def owner_of(self, path: str | os.PathLike) -> int | None:
        """Returns the owner uid of `path`, or None if the platform has no such notion."""
        ...


class StatOwnerProvider:
    """Reads the owner uid from `os.stat`."""

    def owner_of(self, path: str | os.PathLike) -> int | None:
        try:
            return os.stat(path).st_uid
        except OSError as e:
            raise PathError(f"Failed to get stat for path: {e.strerror}", path=str(path)) from e


class AnyOwnerProvider:
    """Stub for platforms without POSIX ownership: every path counts as owned."""

    def owner_of(self, path: str | os.PathLike) -> int | None:
        return None


def default_owner_provider() -> OwnerProvider:
    if hasattr(os, "geteuid"):
        return StatOwnerProvider()
    return AnyOwnerProvider()


def is_owned_by_current_user(path: str | os.PathLike, provider: OwnerProvider | None = None) -> bool:
    provider = provider or default_owner_provider()
    owner = provider.owner_of(path)
    if owner is None or not hasattr(os, "geteuid"):
        return True
    uid = os.geteuid()
    if owner != uid:
        log.debug("Path %s is owned by uid=%s, current euid=%s", path, owner, uid)
        return False
    return True
