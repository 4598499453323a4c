import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse

import models
from database import engine, get_db
from routers import books
from config import settings
from logging_config import setup_logging
from rate_limiter import limiter
from responses import INTERNAL_ERROR, VALIDATION_ERROR, send_response

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    logger.info("Starting up book-service...")
    if settings.DB_SYNCHRONIZE:
        models.Base.metadata.create_all(bind=engine)
    yield
    # Shutdown logic
    logger.info("Shutting down book-service...")
    engine.dispose()

app = FastAPI(
    title="Book Inventory Service",
    description="CRUD service for books with search and pagination",
    version="1.0.0",
    docs_url="/api-docs",
    openapi_url="/api-docs/openapi.json",
    lifespan=lifespan
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info(
        "%s %s -> %s (%.2f ms) ip=%s",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
        request.client.host if request.client else "unknown",
    )
    return response

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return send_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [error["msg"] for error in exc.errors()]
    return send_response(status.HTTP_422_UNPROCESSABLE_ENTITY, VALIDATION_ERROR, errors)


# slowapi's middleware calls this handler synchronously
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return send_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Too many requests from this IP, please try again later.",
    )


app.add_exception_handler(RateLimitExceeded, rate_limit_handler)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return send_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


# Health check endpoint
@app.get("/health", tags=["System"])
@limiter.exempt
async def health_check(db: Session = Depends(get_db)):
    health_status = {"status": "healthy", "service": "book-service", "components": {}}

    # Check database
    try:
        db.execute(text("SELECT 1"))
        health_status["components"]["database"] = "connected"
    except Exception as e:
        logger.error(f"DB health check failed: {e}")
        health_status["components"]["database"] = "unhealthy"
        health_status["status"] = "degraded"

    if health_status["status"] != "healthy":
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status)
    return health_status

app.include_router(books.router, prefix=settings.API_PREFIX)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
