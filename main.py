from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.database import SessionLocal, get_db, init_db
from app.core.config import settings
from app.core.exceptions import OnboardingError, PreconditionFailedError
from app.core.logging_config import logger
from app.routers import client, milestone, integration, onboarding, webhooks
from app.services.demo_seed import seed_demo_data
from app.services.notifications import build_notifier
from app.services.onboarding import OnboardingService


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Alembic owns the schema in production
    if settings.ENVIRONMENT != "production":
        init_db()

    if settings.SEED_DEMO_DATA:
        db = SessionLocal()
        try:
            seed_demo_data(db)
        finally:
            db.close()

    notifier = build_notifier(settings)
    app.state.onboarding_service = OnboardingService(notifier=notifier)
    logger.info("Onboarding API started")
    yield
    notifier.close()
    logger.info("Onboarding API stopped")


app = FastAPI(
    title="SecureForce Client Onboarding API",
    version="1.0.0",
    redirect_slashes=False,  # Disable automatic redirects to prevent POST data loss
    lifespan=lifespan
)

# Configure CORS for the onboarding web UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PreconditionFailedError)
async def precondition_failed_handler(request: Request, exc: PreconditionFailedError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "transition": exc.transition, "state": exc.state},
    )


@app.exception_handler(OnboardingError)
async def onboarding_error_handler(request: Request, exc: OnboardingError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected invalid request to {request.url.path}: {len(exc.errors())} error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(client.router, prefix="/api/clients", tags=["Clients"])
app.include_router(milestone.router, prefix="/api/clients", tags=["Milestones"])
app.include_router(integration.router, prefix="/api/clients", tags=["Integrations"])
app.include_router(onboarding.router, prefix="/api/clients", tags=["Onboarding"])
app.include_router(webhooks.router, prefix="/api/webhooks", tags=["Webhooks"])


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected"
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )
