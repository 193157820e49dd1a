from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

class GenerateCidRequest(BaseModel):
    installationId: str = Field(min_length=1)
    productVersion: str = Field(min_length=1)

class GenerateCidResponse(BaseModel):
    success: bool
    confirmationId: Optional[str] = None
    processingTime: Optional[str] = None
    requestId: Optional[str] = None

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[List[Dict[str, Any]]] = None

class ActivationRequestView(BaseModel):
    id: str
    installationId: str
    productVersion: str
    confirmationId: Optional[str] = None
    status: str
    errorMessage: Optional[str] = None
    processingTime: Optional[str] = None
    createdAt: datetime

    @classmethod
    def from_record(cls, record) -> "ActivationRequestView":
        return cls(
            id=record.id,
            installationId=record.installation_id,
            productVersion=record.product_version,
            confirmationId=record.confirmation_id,
            status=record.status,
            errorMessage=record.error_message,
            processingTime=record.processing_time,
            createdAt=record.created_at,
        )

class ActivationRequestStatusResponse(BaseModel):
    success: bool
    request: ActivationRequestView

class HealthCheckResponse(BaseModel):
    status: str
    service: str
    version: str
    supportedProducts: Optional[List[str]] = None
    tlsVerification: Optional[bool] = None
