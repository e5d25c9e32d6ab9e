"""Storage root layout: `<root>/.pieces/<index>.piece`."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from piecestore.storage.errors import OwnershipError, PathError
from piecestore.storage.ownership import OwnerProvider, is_owned_by_current_user

log = logging.getLogger("piecestore")

PIECES_DIR_NAME = ".pieces"


@dataclass(frozen=True)
class StorageRoot:
    path: Path
    pieces_path: Path


def init_storage_root(base_path: str | os.PathLike, provider: OwnerProvider | None = None) -> StorageRoot:
    """
    Makes sure `base_path` and its pieces directory exist and may be used.

    A missing root is created together with the pieces directory. A root
    that already exists must be a directory owned by the current user;
    existing piece files inside it are kept as they are.

    Raises:
        PathError: the root or the pieces entry exists but is not a directory,
            or the root cannot be stat'ed
        OwnershipError: the existing root belongs to another user
        OSError: directory creation failed
    """
    path = Path(base_path)
    pieces_path = path / PIECES_DIR_NAME

    if path.exists():
        if not path.is_dir():
            log.warning("Storage root %s exists and is not a directory", path)
            raise PathError("Provided path exists and is not a directory", path=str(path))

        if not is_owned_by_current_user(path, provider):
            log.warning("Storage root %s is not owned by the current user", path)
            raise OwnershipError("Current user is not the owner of the directory at the given path", path=str(path))

        if pieces_path.exists():
            if not pieces_path.is_dir():
                log.warning("Pieces path %s exists and is not a directory", pieces_path)
                raise PathError("Invalid pieces path inside of provided path", path=str(pieces_path))
        else:
            pieces_path.mkdir()
            log.info("Created pieces directory: %s", pieces_path)
    else:
        pieces_path.mkdir(parents=True)
        log.info("Created storage root: %s", path)

    return StorageRoot(path=path, pieces_path=pieces_path)
