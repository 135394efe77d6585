import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .auth import router as auth_router
from .config import ALLOWED_ORIGINS, RATE_LIMIT_ENABLED, SECURITY_HEADERS_ENABLED
from .database import Base, engine
from .domain.catalog.router import router as catalog_router
from .domain.coupons.router import router as coupons_router
from .domain.deals.router import router as deals_router
from .domain.orders.router import router as orders_router
from .domain.riders.router import router as riders_router
from .domain.scheduling.router import router as schedules_router
from .domain.shop.router import router as shop_router
from .domain.storefront.router import router as storefront_router
from .security_headers import SecurityHeadersMiddleware
from .shared.errors import PersistenceError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    if RATE_LIMIT_ENABLED:
        try:
            from .rate_limiter import get_redis_client

            get_redis_client()  # Connection test
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed - Login limiting will operate in fail-open mode: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Shop Admin API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert 422 validation errors from HTTPBearer to 401 authentication errors
    when the issue is with the Authorization header
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(f"Authentication failed for {request.url.path}: Missing or invalid Authorization header")
            return JSONResponse(status_code=401, content={"detail": "Not authenticated"})

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"detail": [{k: v for k, v in e.items() if k != "ctx"} for e in exc.errors()]},
    )


@app.exception_handler(PersistenceError)
async def persistence_exception_handler(request: Request, exc: PersistenceError):
    logger.error(f"❌ {request.method} {request.url.path} - {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": f"Could not {exc.operation}. Nothing was changed, please try again."},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"])
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router)
app.include_router(schedules_router)
app.include_router(catalog_router)
app.include_router(deals_router)
app.include_router(coupons_router)
app.include_router(riders_router)
app.include_router(orders_router)
app.include_router(shop_router)
app.include_router(storefront_router)


@app.get("/")
def root():
    return {"message": "Shop Admin API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
