import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from homemadefood.core.config import settings
from homemadefood.core.exceptions import AppError
from homemadefood.infrastructure.ai_providers import build_providers
from homemadefood.infrastructure.database import init_db
from homemadefood.infrastructure.recipe_sources import build_recipe_sources
from homemadefood.interfaces import (
    booking_routes,
    catalog_routes,
    meal_suggestion_routes,
    order_routes,
    user_routes,
)
from homemadefood.interfaces.responses import error_body, validation_messages

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ---------------------------------------------------------
    # DATABASE (with retry while the server comes up)
    # ---------------------------------------------------------
    app.state.db_ready = init_db()

    # ---------------------------------------------------------
    # COMPOSITION ROOT
    # ---------------------------------------------------------
    app.state.meal_providers = build_providers(settings)
    app.state.recipe_sources = build_recipe_sources(settings)
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message, exc.error))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    label = {404: "Not Found", 405: "Method Not Allowed"}.get(exc.status_code, "Error")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.detail, label))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=error_body(400, validation_messages(exc.errors()), "Bad Request"))


# Include Routers
app.include_router(order_routes.router)
app.include_router(user_routes.router)
app.include_router(booking_routes.router)
app.include_router(catalog_routes.router)
app.include_router(catalog_routes.admin_router)
app.include_router(meal_suggestion_routes.router)


@app.get("/")
def health_check():
    status = "active" if getattr(app.state, "db_ready", False) else "degraded"
    return {"status": status, "system": settings.PROJECT_NAME}
