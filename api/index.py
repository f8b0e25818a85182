"""
VentaFácil - Main FastAPI Application

Single entry point for the admin panel and storefront APIs.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Config
from core.context import AppContext
from core.errors import ERROR_INTERNAL, ValidationError
from core.logging import get_logger
from core.routers.admin import router as admin_router
from core.routers.store import router as store_router

logger = get_logger(__name__)

config = Config.from_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    app.state.ctx = await AppContext.create(config)
    logger.info(f"VentaFácil API started ({config.environment})")
    yield
    # Shutdown
    await app.state.ctx.close()


app = FastAPI(
    title="VentaFácil",
    description="Point-of-sale and online storefront API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": ERROR_INTERNAL})


app.include_router(store_router, prefix="/api/store")
app.include_router(admin_router, prefix="/api/admin")


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "ventafacil"}
