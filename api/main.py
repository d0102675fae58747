import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from core import db, settings
from core.handlers import register_error_handlers, unhandled_error_handler
from core.logs import setup_logging
from goals import router as goals_router
from intervals import router as intervals_router
from users import router as users_router

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging(settings.log_level(), settings.log_format())
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        if settings.apply_schema_on_startup():
            await db.apply_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Interval Goals API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    try:
        response = await call_next(request)
    except Exception as exc:
        # Answered here so 500s carry the headers too.
        response = await unhandled_error_handler(request, exc)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


register_error_handlers(app)

app.include_router(users_router.router, tags=["users"])
app.include_router(goals_router.router, tags=["goals"])
app.include_router(intervals_router.router, tags=["intervals"])


@app.get("/health")
def health() -> dict:
    return {"status": "OK", "message": "Server is running"}
