import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager

from config import settings
from constants import WELCOME_MESSAGE, INTERNAL_ERROR_MESSAGE
from limiter import limiter
from exceptions import AppError, UnauthorizedError, app_error_handler, error_response
from endpoints.endpoints_auth import router_auth
from endpoints.endpoints_notes import router_notes
from database import db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("notes")


# lifespan (before yield - on start, after yield - on exit)
@asynccontextmanager
async def lifespan(
    app: FastAPI,
):
    await db.create_all_tables()
    logger.info("Database tables ready")
    yield
    await db.dispose()


app = FastAPI(
    title="Notes",
    description="Register, log in and keep your personal notes",
    summary="Notes manager",
    lifespan=lifespan,
    version="1.0",
)

app.state.limiter = limiter

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UnauthorizedError)
def unauthorized_error_handler(request: Request, exc: UnauthorizedError):
    logger.info(
        "Rejected %s %s: %s", request.method, request.url.path, exc.reason
    )
    return app_error_handler(request, exc)


app.add_exception_handler(AppError, app_error_handler)


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Invalid request body %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(400, "Invalid request body.")


@app.exception_handler(RateLimitExceeded)
def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return error_response(429, f"Rate limit exceeded: {exc.detail}")


@app.exception_handler(Exception)
def generic_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error %s %s", request.method, request.url.path)
    return error_response(500, INTERNAL_ERROR_MESSAGE)


@app.get("/", summary="Welcome message")
def welcome():
    return {"error": False, "message": WELCOME_MESSAGE}


app.include_router(router_auth)
app.include_router(router_notes)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
