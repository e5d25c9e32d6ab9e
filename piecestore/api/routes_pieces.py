import logging
from typing import Annotated
from fastapi import APIRouter, HTTPException, Path, Request, Response
from fastapi.concurrency import run_in_threadpool

from piecestore.api.schemas import CacheStats
from piecestore.storage.pieces import MAX_PIECE_INDEX

router = APIRouter()
log = logging.getLogger("piecestore")

PieceIndex = Annotated[int, Path(ge=0, le=MAX_PIECE_INDEX)]


def _check_auth(req: Request):
    settings = req.app.state.settings
    if not settings.require_auth:
        return
    auth = req.headers.get("authorization", "")
    if not auth.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing Authorization Bearer token")
    token = auth.split(" ", 1)[1].strip()
    if token != settings.api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


@router.put("/v1/pieces/{index}", status_code=204)
async def put_piece(request: Request, index: PieceIndex):
    _check_auth(request)
    store = request.app.state.store
    data = await request.body()
    await run_in_threadpool(store.store_piece, index, data)
    return Response(status_code=204)


@router.get("/v1/pieces/{index}")
def get_piece(request: Request, index: PieceIndex):
    _check_auth(request)
    store = request.app.state.store

    # retrieve_piece mutates the cache
    with request.app.state.store_lock:
        try:
            data = store.retrieve_piece(index)
        except FileNotFoundError:
            log.info("Piece %s requested but not stored", index)
            raise HTTPException(status_code=404, detail=f"Piece {index} not found")
    return Response(content=data, media_type="application/octet-stream")


@router.get("/v1/cache", response_model=CacheStats)
def get_cache_stats(request: Request):
    _check_auth(request)
    store = request.app.state.store
    with request.app.state.store_lock:
        return CacheStats(size=len(store.cache), max_size=store.cache.max_size)
