import logging

from fastapi import FastAPI

from bell_api.core.config import settings
from bell_api.db.base import Base
from bell_api.db.session import engine
import bell_api.models  # noqa: F401  registra as tabelas

from bell_api.api.routes.upload import router as upload_router
from bell_api.api.routes.schedules import router as schedules_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("bell_api")

app = FastAPI(title="Bell Schedule API", version="0.1.0")

app.include_router(upload_router)
app.include_router(schedules_router)

@app.on_event("startup")
def ensure_tables():
    Base.metadata.create_all(bind=engine)
    logger.info("[BOOTSTRAP] tabelas OK: %s", ", ".join(sorted(Base.metadata.tables)))

@app.get("/health")
def health():
    return {"status": "ok"}
