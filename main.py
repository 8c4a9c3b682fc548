import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database

import customers
import games
from config import get_settings
from database import close_db, ensure_indexes_once, get_db, init_db
from errors import BoutiqueError, ResourceNotFoundError
from observability import setup_logging

logger = logging.getLogger(__name__)

SERVER_ERROR = "Une erreur est survenue sur le serveur"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db = init_db(settings.database_url, settings.database_name, settings.database_timeout_ms)
    try:
        ensure_indexes_once(db)
        logger.info("Connexion à MongoDB établie")
    except Exception as e:
        # retried before the first write; requests report the store error meanwhile
        logger.error("Erreur de connexion à MongoDB : %s", e)
    yield
    close_db()


settings = get_settings()
app = FastAPI(title="Boutique Jeux API", lifespan=lifespan)


# Registered before CORS so the generic 500 still carries the CORS headers
@app.middleware("http")
async def catch_unhandled_errors(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(
            "Unhandled exception on %s: %s", request.url.path, exc,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": SERVER_ERROR},
        )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(games.router)
app.include_router(customers.router)


# ---------------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------------
@app.exception_handler(BoutiqueError)
async def boutique_error_handler(request: Request, exc: BoutiqueError):
    if isinstance(exc, ResourceNotFoundError):
        logger.info(
            "%s %s: %s", request.method, request.url.path, exc.message,
            extra={"path": request.url.path, "resource_id": exc.resource_id},
        )
    else:
        logger.error(
            "Store error on %s %s: %s", request.method, request.url.path, exc.message,
            extra={"path": request.url.path, "method": request.method},
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


# ---------------------------------------------------------------------------------
# Health and info
# ---------------------------------------------------------------------------------
@app.get("/")
def read_root():
    return {"message": "Boutique Jeux API running"}


@app.get("/api/health")
def health_check(db: Database = Depends(get_db)):
    try:
        db.command("ping")
    except Exception as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unavailable"},
        )
    return {"status": "ok", "database": "connected"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
