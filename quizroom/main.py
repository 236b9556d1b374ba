"""
Main FastAPI application entry point.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from quizroom.api.answers import router as answers_router
from quizroom.api.auth import router as auth_router
from quizroom.api.questions import router as questions_router
from quizroom.api.statistics import router as statistics_router
from quizroom.api.users import router as users_router
from quizroom.core.config import Settings, get_settings
from quizroom.core.database import Database
from quizroom.core.errors import QuizroomError, Unavailable
from quizroom.core.security import PasswordHasher, TokenService
from quizroom.services.users import UserService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO), format=settings.LOG_FORMAT)


def _error(status_code: int, message, error_type: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "type": error_type, "status_code": status_code, **extra}},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager: schema creation and owner seeding.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.APP_NAME} API...")
    app.state.db.create_all()
    with app.state.db.session() as db:
        UserService(db, settings, app.state.hasher).seed_owner()
    yield
    logger.info(f"Shutting down {settings.APP_NAME} API...")
    app.state.db.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url=None if settings.is_production() else "/docs",
        redoc_url=None if settings.is_production() else "/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = Database(settings)
    app.state.hasher = PasswordHasher(settings.BCRYPT_ROUNDS)
    app.state.tokens = TokenService.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    @app.exception_handler(QuizroomError)
    async def quizroom_exception_handler(request: Request, exc: QuizroomError):
        return _error(exc.status_code, exc.message, exc.error_type)

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Persistence failure on {request.method} {request.url.path}: {exc}")
        return _error(Unavailable.status_code, Unavailable.default_message, Unavailable.error_type)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, exc.detail, "http_error")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Validation error",
            "validation_error",
            details=jsonable_errors(exc),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        message = str(exc) if settings.DEBUG else "An internal error occurred"
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "internal_error")

    @app.get("/health", tags=["Health"])
    def health_check():
        """Basic health check endpoint."""
        return {"status": "healthy", "version": settings.APP_VERSION, "environment": settings.ENVIRONMENT}

    app.include_router(auth_router, tags=["auth"])
    app.include_router(questions_router, prefix="/questions", tags=["questions"])
    app.include_router(answers_router, prefix="/answers", tags=["answers"])
    app.include_router(users_router, prefix="/users", tags=["users"])
    app.include_router(statistics_router, prefix="/statistics", tags=["statistics"])
    return app


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold the raised exception object
    return jsonable_encoder([{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()])


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "quizroom.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
