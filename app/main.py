import os
import logging
from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.core import ServiceError, setup_logging
from app.database import Database, get_database
from app.routes.auth.auth_routes import router as auth_router
from app.routes.auth.user_routes import router as user_router
from app.routes.contest.contest_routes import router as contest_router, user_contests_router
from app.routes.contest.submission_routes import router as submission_router
from app.routes.contest.leaderboard_routes import router as leaderboard_router
from app.routes.payment.payment_routes import router as payment_router
from app.utils.response import error_response, validation_error_response

# Load environment variables
load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)

# Get environment variables
APP_NAME = os.getenv("APP_NAME", "ContestHub")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")
PORT = int(os.getenv("PORT", "5000"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for the application"""
    # Startup
    await Database.connect_db()
    yield
    # Shutdown
    await Database.close_db()


app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description="ContestHub API with Users, Contests, Payments, Submissions and Winners",
    lifespan=lifespan
)

# CORS middleware
# In development, allow all origins for easier testing
DEBUG = os.getenv("DEBUG", "True").lower() == "true"

cors_origins = [
    FRONTEND_URL,
    "http://localhost:5173",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins if not DEBUG else ["*"],
    allow_credentials=not DEBUG,  # Can't use credentials with wildcard origin
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return error_response(message=exc.message, status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(message=str(exc.detail), status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in jsonable_encoder(exc.errors())
    ]
    return validation_error_response(message="Validation error", errors=errors)


@app.exception_handler(PyMongoError)
async def store_error_handler(request: Request, exc: PyMongoError):
    logger.exception(f"Database error on {request.method} {request.url.path}: {exc}")
    return error_response(message="Internal server error", status_code=500)


app.include_router(auth_router)
app.include_router(user_router)
app.include_router(contest_router)
app.include_router(user_contests_router)
app.include_router(leaderboard_router)
app.include_router(payment_router)
app.include_router(submission_router)


@app.get("/")
async def read_root():
    """Root endpoint"""
    return {
        "message": f"{APP_NAME} server is running",
        "version": APP_VERSION,
        "docs": "/docs"
    }


@app.get("/test")
async def test_endpoint():
    """Sanity check"""
    return {"message": f"{APP_NAME} API Test Endpoint is working!"}


@app.get("/health")
async def health_check(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Health check endpoint, including store reachability"""
    try:
        await db.command("ping")
        database = "connected"
    except PyMongoError as e:
        logger.warning(f"Health check ping failed: {e}")
        database = "unreachable"

    return {"status": "healthy", "database": database}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=PORT)
