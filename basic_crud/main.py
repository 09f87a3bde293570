import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from basic_crud import __version__
from basic_crud.config import settings
from basic_crud.database import engine
from basic_crud.exceptions import register_exception_handlers
from basic_crud.logging_config import configure_logging
from basic_crud.middleware import TimingMiddleware
from basic_crud.routers import posts, users

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    logger.info("Starting basic-crud API (%s), database dialect: %s", settings.APP_ENV, engine.dialect.name)
    yield
    # Shutdown
    await engine.dispose()
    logger.info("basic-crud API stopped")

app = FastAPI(
    title="Basic CRUD API",
    description="Users, posts and categories over a relational store",
    version=__version__,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(users.router)
app.include_router(posts.router)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": __version__}
