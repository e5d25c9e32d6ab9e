import logging
import threading
from fastapi import FastAPI
from piecestore.settings import Settings
from piecestore.storage.pieces import PieceStore
from piecestore.api.routes_pieces import router as pieces_router


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger("piecestore").info("Starting app...")

    # StorageError and OSError are fatal here: the service has nothing to serve without its root
    store = PieceStore.create(settings.storage_root, settings.cache_size)

    app = FastAPI(title="Piece store", version="0.1.0")
    app.state.settings = settings
    app.state.store = store
    app.state.store_lock = threading.Lock()

    app.include_router(pieces_router)
    return app


app = create_app()
