import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api import auth, notifications, posts, users
from app.config import settings
from app.errors import register_error_handlers

logging.basicConfig(level=logging.INFO)

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from app import database

    await database.init_db()
    log.info("Banco de dados inicializado")
    yield
    await database.close_db()


api = FastAPI(title="Bailanysta API", version="1.0.0", lifespan=lifespan)

api.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(api)

api.include_router(auth.router)
api.include_router(posts.router)
api.include_router(users.router)
api.include_router(notifications.router)


@api.get("/api/ping", response_class=PlainTextResponse)
async def ping():
    return "pong"


@api.get("/", response_class=PlainTextResponse)
async def root():
    return "Bailanysta Server is running!"


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:api", host="0.0.0.0", port=int(settings.port))
