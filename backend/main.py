# Run from project root: uvicorn backend.main:app --reload

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from backend.api.routes import router
from backend.core.config import PUBLIC_UPLOAD_PREFIX
from backend.core.db import init_db
from backend.services.photo_service import upload_root

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    upload_root().mkdir(parents=True, exist_ok=True)
    init_db()
    logger.info("[main:lifespan] startup complete")
    yield


app = FastAPI(title="LH Partners Backend", lifespan=lifespan)
app.include_router(router)
app.mount(PUBLIC_UPLOAD_PREFIX, StaticFiles(directory=upload_root(), check_dir=False), name="uploads")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("backend.main:app", host="127.0.0.1", port=8000, reload=True)
