"""
typeflip Service - FastAPI Application

Backend for the dual-pane playground and editor previews: translates
TypeScript conditional type aliases to function-like if/else code and back.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from typeflip import __version__
from typeflip.config import settings, log_settings
from typeflip.api.routes import health, translate, preview

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    
    Startup:
    - Log effective configuration
    
    Shutdown:
    - Drop preview sessions and panels
    """
    logger.info("=" * 60)
    logger.info("Starting typeflip service")
    logger.info("=" * 60)
    log_settings()
    
    yield
    
    logger.info("Shutting down...")
    preview.reset_preview_state()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="typeflip",
    description="""
Translate between TypeScript conditional type aliases and function-like if/else code.

## Endpoints

| Endpoint | Purpose |
|----------|---------|
| `/conditionals` | List type aliases containing a conditional type |
| `/to-branches` | Conditional types -> if/else functions |
| `/to-expressions` | if/else functions -> conditional types |
| `/hover` | Branch form of one type alias, as markdown |
| `/preview/sessions` | Dual-pane live translation sessions |
| `/preview/panels` | Editor preview panels |

Batch endpoints accept `mode`: `strict` fails on the first bad declaration (422),
`tolerant` replaces it with an error comment.
""",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/typeflip/docs",
    redoc_url="/api/typeflip/redoc",
    openapi_url="/api/typeflip/openapi.json"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

API_PREFIX = "/api/typeflip"

app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(translate.router, prefix=API_PREFIX, tags=["Translate"])
app.include_router(preview.router, prefix=f"{API_PREFIX}/preview", tags=["Preview"])


@app.get("/health")
async def root_health():
    """Root health check for container/load balancer"""
    return {"status": "UP", "service": settings.SERVICE_NAME}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "typeflip",
        "version": __version__,
        "port": settings.SERVICE_PORT,
        "endpoints": {
            "health": f"{API_PREFIX}/health",
            "conditionals": f"{API_PREFIX}/conditionals",
            "to_branches": f"{API_PREFIX}/to-branches",
            "to_expressions": f"{API_PREFIX}/to-expressions",
            "hover": f"{API_PREFIX}/hover",
            "preview_sessions": f"{API_PREFIX}/preview/sessions",
            "docs": f"{API_PREFIX}/docs"
        }
    }


def run():
    """Serve the API with uvicorn"""
    import uvicorn
    uvicorn.run(
        "typeflip.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
    )


if __name__ == "__main__":
    run()
