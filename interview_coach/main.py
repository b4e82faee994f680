from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from interview_coach.api.v1 import sessions, responses, interview_ai, users
from interview_coach.core.config import settings
from interview_coach.core.database import init_db
from interview_coach.core.errors import InterviewError
from interview_coach.core.logging import configure_logging

logger = structlog.get_logger(__name__)


async def interview_error_handler(request: Request, exc: InterviewError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_failed",
        path=request.url.path,
        kind=exc.kind,
        error=exc.message,
        cause=repr(exc.cause) if exc.cause else None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


def create_app(create_tables: bool = True) -> FastAPI:
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_tables:
            init_db()
        yield

    app = FastAPI(
        title="Interview Coach API",
        description="Backend for AI-assisted mock interview practice",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InterviewError, interview_error_handler)

    # Health check
    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok"}

    # API Routers
    prefix = settings.API_V1_PREFIX
    app.include_router(sessions.router, prefix=prefix, tags=["Sessions"])
    app.include_router(responses.router, prefix=prefix, tags=["Responses"])
    app.include_router(interview_ai.router, prefix=prefix, tags=["Interview AI"])
    app.include_router(users.router, prefix=prefix, tags=["Users"])

    return app


app = create_app()
