"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import admin, ajax, content, health
from core.config import get_settings
from services.exceptions import InvalidNonceError, UnknownActionError, UserNotFoundError

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Admin fragments are embedded by the admin shell only
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        return response


app_settings = get_settings()

app = FastAPI(
    title="Admin Bookmarks API",
    description="Bookmark posts, pages and custom content types inside the admin area.",
    version="1.0.0",
)


@app.exception_handler(InvalidNonceError)
async def invalid_nonce_exception_handler(
    request: Request, exc: InvalidNonceError,
) -> JSONResponse:
    """Reject requests with a missing or invalid anti-forgery token."""
    logger.warning("Rejected request with invalid nonce: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": str(exc)},
    )


@app.exception_handler(UnknownActionError)
async def unknown_action_exception_handler(
    _request: Request, exc: UnknownActionError,
) -> JSONResponse:
    """Reject admin-ajax requests for actions nobody handles."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)},
    )


@app.exception_handler(UserNotFoundError)
async def user_not_found_exception_handler(
    _request: Request, exc: UserNotFoundError,
) -> JSONResponse:
    """Answer bookmark operations for a user that no longer exists."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(ajax.router)
app.include_router(admin.router)
app.include_router(content.router)
