from __future__ import annotations
import logging
import os
from pathlib import Path

from piecestore.storage.cache import BoundedCache
from piecestore.storage.directory import StorageRoot, init_storage_root
from piecestore.storage.ownership import OwnerProvider

log = logging.getLogger("piecestore")

MAX_PIECE_INDEX = 2**32 - 1
PIECE_SUFFIX = ".piece"


def _check_index(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError(f"Piece index must be an integer, got {index!r}")
    if index < 0 or index > MAX_PIECE_INDEX:
        raise ValueError(f"Piece index out of range [0, {MAX_PIECE_INDEX}]: {index}")
    return index


class PieceStore:
    """
    One file per piece under `<root>/.pieces`, plus a small cache of
    recently retrieved payloads.

    Not thread-safe: `retrieve_piece` mutates the cache, so concurrent
    callers must serialize access to the store.
    """

    def __init__(self, root: StorageRoot, cache: BoundedCache[bytes]):
        self._root = root
        self._cache = cache

    @classmethod
    def create(cls, base_path: str | os.PathLike, cache_size: int, provider: OwnerProvider | None = None) -> "PieceStore":
        root = init_storage_root(base_path, provider)
        cache: BoundedCache[bytes] = BoundedCache(cache_size)
        log.info("Piece store ready: root=%s cache_size=%s", root.path, cache.max_size)
        return cls(root, cache)

    @property
    def root(self) -> Path:
        return self._root.path

    @property
    def pieces_path(self) -> Path:
        return self._root.pieces_path

    @property
    def cache(self) -> BoundedCache[bytes]:
        return self._cache

    def piece_path(self, index: int) -> Path:
        return self._root.pieces_path / f"{_check_index(index)}{PIECE_SUFFIX}"

    def has_piece(self, index: int) -> bool:
        return self.piece_path(index).is_file()

    def store_piece(self, index: int, data: bytes) -> None:
        # Write-through only; the cache is filled by retrieve_piece.
        p = self.piece_path(index)
        with open(p, "wb") as f:
            f.write(data)
        log.debug("Stored piece %s (%s bytes)", index, len(data))

    def retrieve_piece(self, index: int) -> bytes:
        """Reads the piece from disk and caches the returned payload under `index`."""
        data = self.piece_path(index).read_bytes()
        self._cache.put(index, data)
        log.debug("Retrieved piece %s (%s bytes), cache size=%s", index, len(data), len(self._cache))
        return data
