from dotenv import load_dotenv

load_dotenv()

import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from followfeed.core.auth import get_current_user
from followfeed.core.config import settings
from followfeed.core.errors import FollowfeedError
from followfeed.core.read_marker import mark_notification_as_read
from followfeed.routes import auth, users, posts, notifications, websocket
from followfeed.utils.logger import setup_logging

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("followfeed.api")

# Custom JSON encoder that preserves Unicode characters (emojis)
class UnicodeJSONResponse(JSONResponse):
    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")


@asynccontextmanager
async def lifespan(app: FastAPI):
    scheduler = None
    if settings.SCHEDULER_IN_PROCESS:
        from followfeed.scheduling.runner import start_background_scheduler
        scheduler = start_background_scheduler()
        app.state.scheduler = scheduler
    yield
    if scheduler is not None:
        scheduler.shutdown(wait=False)


app = FastAPI(
    title="followfeed API",
    description="Follow users and get notified about follows and new posts",
    version="1.0.0",
    openapi_tags=[
        {"name": "Authentication", "description": "User authentication endpoints"},
        {"name": "Users", "description": "Users and the follow relation"},
        {"name": "Posts", "description": "Posts; publishing notifies followers"},
        {"name": "Notifications", "description": "Unread notifications and the rendered menu"},
        {"name": "WebSocket", "description": "Live notification channel"},
    ],
    # Configure default JSON response class to preserve Unicode
    default_response_class=UnicodeJSONResponse,
    lifespan=lifespan,
)

# Add request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all incoming API requests"""
    query_params = str(request.query_params) if request.query_params else ""
    client = request.client.host if request.client else "unknown"
    logger.info("[%s] %s%s from %s", request.method, request.url.path,
                f"?{query_params}" if query_params else "", client)

    response = await call_next(request)

    logger.info("[%s] %s - Status: %s", request.method, request.url.path, response.status_code)
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


def _cors_headers(request: Request) -> dict:
    """Error responses bypass CORSMiddleware, so echo the origin here"""
    origin = request.headers.get("origin")
    if origin in settings.CORS_ORIGINS:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


@app.exception_handler(FollowfeedError)
async def followfeed_exception_handler(request: Request, exc: FollowfeedError):
    """Domain errors carry their own status code and a user-facing message"""
    return UnicodeJSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=_cors_headers(request),
    )

@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions and ensure CORS headers are included"""
    headers = dict(exc.headers or {})
    headers.update(_cors_headers(request))
    return UnicodeJSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with CORS headers"""
    return UnicodeJSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors())},
        headers=_cors_headers(request)
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions and ensure CORS headers are included"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return UnicodeJSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
        headers=_cors_headers(request)
    )


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])

# Pages a notification links to; ?read=<id> on them marks the notification read
page_dependencies = [Depends(get_current_user), Depends(mark_notification_as_read)]
app.include_router(users.router, prefix="/users", tags=["Users"], dependencies=page_dependencies)
app.include_router(posts.router, prefix="/posts", tags=["Posts"], dependencies=page_dependencies)

app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"], dependencies=[Depends(get_current_user)])
app.include_router(websocket.router, prefix="/api", tags=["WebSocket"])

@app.get("/")
async def root():
    return {"message": "Welcome to the followfeed API"}

@app.get("/api/health")
async def health_check():
    return {"status": "healthy"}

# Run uvicorn server when file is executed directly
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
