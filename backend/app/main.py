import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.health import router as health_router
from app.api.routes_articles import router as articles_router
from app.api.routes_auth import router as auth_router
from app.api.routes_cart import router as cart_router
from app.api.routes_chat import router as chat_router
from app.api.routes_documents import router as documents_router
from app.config import settings
from app.db import init_db
from app.utils.log_config import configure_logging

configure_logging(settings.LOG_LEVEL)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    init_db(reset=os.environ.get("RESET_DB", "0") in ("1", "true", "True"))
    os.makedirs(settings.DATA_DIR, exist_ok=True)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    log.info(
        "Startup complete environment=%s data_dir=%s", settings.ENVIRONMENT, settings.DATA_DIR
    )
    yield


app = FastAPI(title="Articles & Cart API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# public
app.include_router(health_router, tags=["health"])

app.include_router(auth_router, tags=["auth"])

app.include_router(chat_router, tags=["chat"])

# bearer token + role gate per route
app.include_router(articles_router, tags=["articles"])

app.include_router(cart_router, tags=["cart"])

app.include_router(documents_router, tags=["documents"])
