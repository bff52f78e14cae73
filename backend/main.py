import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

from config import AppConfig, config
from database import build_engine, build_session_factory, init_db
from enrichment import MetadataEnricher, build_enricher
from errors import DumpItError
from api.collections import router as collections_router
from api.enrich import router as enrich_router
from api.public_resources import router as public_resources_router
from api.resources import router as resources_router
from api.users import router as users_router

logger = logging.getLogger(__name__)


def configure_logging(cfg: AppConfig):
    logging.basicConfig(level=cfg.logging.level.upper(), format=cfg.logging.format)


async def handle_dumpit_error(request: Request, exc: DumpItError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"error": "validation_error", "detail": jsonable_encoder(exc.errors())},
    )


def create_app(
    cfg: AppConfig = config,
    session_factory: sessionmaker[Session] | None = None,
    enricher: MetadataEnricher | None = None,
) -> FastAPI:
    """
    Build the application with its own store client.

    The session factory is created once here and handed to request handlers
    through app.state; tests pass their own factory and enricher.
    """
    configure_logging(cfg)

    if session_factory is None:
        engine = build_engine(cfg)
        init_db(engine)
        session_factory = build_session_factory(engine)

    app = FastAPI(title=cfg.branding, version="0.1.0")
    app.state.session_factory = session_factory
    app.state.enricher = enricher or build_enricher(cfg.enrichment)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DumpItError, handle_dumpit_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)

    app.include_router(resources_router)
    app.include_router(collections_router)
    app.include_router(public_resources_router)
    app.include_router(users_router)
    app.include_router(enrich_router)

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
