# freshbite/main.py
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import uvicorn

from freshbite.api import api_router
from freshbite.api.errors import register_error_handlers
from freshbite.data.database import Base, engine
from freshbite.services.payment_service import build_payment_provider
from freshbite.utils.settings import UPLOAD_DIR
from freshbite.utils.logging import get_logger

# import wszystkich modeli zanim padnie create_all
import freshbite.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db(bind=engine):
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=bind)
        logger.info("Database tables created")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


def create_app() -> FastAPI:
    app = FastAPI(
        title="FreshBite Storefront",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # dostawca platnosci wybierany raz, przy starcie
    app.state.payment_provider = build_payment_provider()

    register_error_handlers(app)
    app.include_router(api_router)

    os.makedirs(UPLOAD_DIR, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=UPLOAD_DIR), name="uploads")

    return app


init_db()
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 5000)))
