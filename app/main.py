# Run from project root: uvicorn app.main:app --reload

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.agent.llm import TextGenerator, build_generator
from app.api.handlers import register_exception_handlers
from app.api.routes import router
from app.core.config import ASK_PATH, CORS_ORIGINS, LOG_LEVEL
from app.core.knowledge import get_knowledge_record

logging.basicConfig(level=LOG_LEVEL, format="[%(asctime)s] %(levelname)s %(name)s - %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the profile and the provider before serving; any StartupConfigurationError aborts startup."""
    record = get_knowledge_record()
    if getattr(app.state, "generator", None) is None:
        app.state.generator = build_generator()
    logger.info(
        "Profile assistant for %s ready: model=%s endpoint=POST %s",
        record.name,
        getattr(app.state.generator, "model", "?"),
        ASK_PATH,
    )
    yield
    logger.info("Profile assistant shutting down")


def create_app(generator: TextGenerator | None = None) -> FastAPI:
    """Build the API. Pass a generator to skip provider construction (tests, embedding)."""
    app = FastAPI(title="Profile Assistant", lifespan=lifespan)
    app.state.generator = generator
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()
