import logging

from fastapi import FastAPI, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from activation_client import ActivationClient
from catalog import PRODUCT_DESCRIPTORS
from config import settings
from database import get_db
from storage import ActivationRequestStore
from models import (
    GenerateCidRequest,
    GenerateCidResponse,
    ErrorResponse,
    ActivationRequestView,
    ActivationRequestStatusResponse,
    HealthCheckResponse
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

app = FastAPI(
    title=settings.APP_NAME,
    description="Confirmation ID generation through the batch activation service",
    version=settings.APP_VERSION
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def get_activation_client() -> ActivationClient:
    return ActivationClient()

def get_store(db: Session = Depends(get_db)) -> ActivationRequestStore:
    return ActivationRequestStore(db)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({
            "success": False,
            "error": "Validation failed",
            "details": exc.errors(),
        }),
    )

# API Endpoints
@app.get("/")
async def root():
    return {"message": "API online"}

@app.post(
    "/api/generate-cid",
    response_model=GenerateCidResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_cid(
    request: GenerateCidRequest,
    store: ActivationRequestStore = Depends(get_store),
    client: ActivationClient = Depends(get_activation_client)
):
    """
    Generate a Confirmation ID for an installation id.

    This endpoint:
    1. Records a pending activation request
    2. Calls the batch activation service (known ids fall back to cached answers)
    3. Stores the outcome on the request record
    """
    record = store.create(request.installationId, request.productVersion)
    try:
        outcome = await client.generate(request.installationId, request.productVersion)
    except Exception:
        logger.exception("Activation request %s raised an unexpected error", record.id)
        store.update(record.id, {
            "status": "failed",
            "error_message": INTERNAL_ERROR_MESSAGE,
        })
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": INTERNAL_ERROR_MESSAGE},
        )

    if not outcome["success"]:
        logger.info("Activation request %s failed: %s", record.id, outcome["error"])
        store.update(record.id, {
            "status": "failed",
            "error_message": outcome["error"],
            "processing_time": outcome["processingTime"],
        })
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": outcome["error"]},
        )

    store.update(record.id, {
        "confirmation_id": outcome["confirmationId"],
        "status": "success",
        "processing_time": outcome["processingTime"],
    })

    return {
        "success": True,
        "confirmationId": outcome["confirmationId"],
        "processingTime": outcome["processingTime"],
        "requestId": record.id,
    }

@app.get(
    "/api/activation-request/{request_id}",
    response_model=ActivationRequestStatusResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_activation_request(
    request_id: str,
    store: ActivationRequestStore = Depends(get_store)
):
    """
    Get a stored activation request and its outcome.
    """
    record = store.get(request_id)
    if not record:
        return JSONResponse(
            status_code=404,
            content={"success": False, "error": "Activation request not found"},
        )

    return {"success": True, "request": ActivationRequestView.from_record(record)}

@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint for container orchestration.
    """
    return {
        "status": "healthy",
        "service": "confirmation-id-service",
        "version": settings.APP_VERSION,
        "supportedProducts": list(PRODUCT_DESCRIPTORS),
        "tlsVerification": settings.ACTIVATION_VERIFY_TLS
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
