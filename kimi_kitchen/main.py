"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kimi_kitchen.config import get_settings
from kimi_kitchen.database import Database
from kimi_kitchen.api import (
    auth,
    ingredients,
    orders,
    production,
    purchases,
    recipes,
    reports,
    stock,
    users,
)

settings = get_settings()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the database at startup and release it at shutdown.

    Tests that set app.state.database beforehand keep their own handle.
    """
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)

    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database()
        app.state.database.connect()
    try:
        yield
    finally:
        if owns_database:
            app.state.database.disconnect()
            app.state.database = None


app = FastAPI(
    title="Kimi Kitchen",
    description="Inventory, recipes, production costing and orders for a home snack kitchen",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS configuration from environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error responses are always {"error": ...}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    issues = [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "issues": jsonable_encoder(issues)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(auth.router, prefix="/api")
app.include_router(ingredients.router, prefix="/api")
app.include_router(purchases.router, prefix="/api")
app.include_router(recipes.router, prefix="/api")
app.include_router(production.router, prefix="/api")
app.include_router(orders.router, prefix="/api")
app.include_router(stock.router, prefix="/api")
app.include_router(reports.router, prefix="/api")
app.include_router(users.router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Kimi Kitchen API", "docs": "/docs"}
