from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.middleware import SlowAPIMiddleware

from auth_gateway.api.errors import register_exception_handlers
from auth_gateway.api.routes import router
from auth_gateway.auth.dependencies import create_auth_gateway
from auth_gateway.auth.rate_limiter import limiter
from auth_gateway.config import settings

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One provider client for the whole process, shared by all requests
    app.state.auth_gateway = await create_auth_gateway(settings)
    logger.info(f"{settings.PROJECT_NAME} started with the {settings.IDENTITY_PROVIDER} identity provider")
    yield
    logger.info(f"{settings.PROJECT_NAME} shutting down")


# Create FastAPI application instance
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Signup, login and email verification backed by an external identity provider",
    version="1.0.0",
    lifespan=lifespan
)

# Add rate limiting
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include authentication routes
app.include_router(router, prefix=settings.AUTH_PREFIX, tags=["auth"])

# Basic health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy"}

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Authentication Gateway is running",
        "docs_url": "/docs",
        "openapi_url": "/openapi.json"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
