"""
Proctoring API - FastAPI endpoints for enrollment and verification

Endpoints:
- POST /api/proctor/enroll - Enroll a face with a full name
- POST /api/proctor/verify - Run every check on one image
- GET /api/proctor/health - Module health
"""

import logging
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..config import settings
from .clients import DynamoIdentityStore, RekognitionProvider
from .config import ProctorConfig
from .enrollment import EnrollmentService
from .exceptions import EnrollmentError, ImageDecodeError
from .models import TestRecord
from .orchestrator import VerificationOrchestrator, decode_image
from .utils.logging import generate_request_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/proctor", tags=["Proctoring"])


# ============== Request/Response Models ==============

class EnrollRequest(BaseModel):
    """Request to enroll a face"""
    model_config = ConfigDict(populate_by_name=True)
    
    image: str = Field(..., description="Base64 encoded image")
    full_name: str = Field(..., alias="fullName", min_length=1, description="Display name of the person")


class EnrollResponse(BaseModel):
    """Identity token assigned to the enrolled face"""
    ExternalImageId: str


class VerifyRequest(BaseModel):
    """Request to verify one image"""
    image: str = Field(..., description="Base64 encoded image")


# ============== Dependencies ==============

@lru_cache(maxsize=1)
def get_config() -> ProctorConfig:
    return ProctorConfig.from_settings(settings)


@lru_cache(maxsize=1)
def get_provider() -> RekognitionProvider:
    return RekognitionProvider(get_config())


@lru_cache(maxsize=1)
def get_store() -> DynamoIdentityStore:
    return DynamoIdentityStore(get_config())


def get_orchestrator(
    config: ProctorConfig = Depends(get_config),
    provider: RekognitionProvider = Depends(get_provider),
    store: DynamoIdentityStore = Depends(get_store)
) -> VerificationOrchestrator:
    return VerificationOrchestrator.from_config(config, provider, store)


def get_enrollment_service(
    config: ProctorConfig = Depends(get_config),
    provider: RekognitionProvider = Depends(get_provider),
    store: DynamoIdentityStore = Depends(get_store)
) -> EnrollmentService:
    return EnrollmentService(config, provider, store)


# ============== API Endpoints ==============

@router.post("/enroll", response_model=EnrollResponse)
async def enroll(
    request: EnrollRequest,
    service: EnrollmentService = Depends(get_enrollment_service)
):
    """
    Enroll a face.
    
    Indexes the face in the collection and stores the profile.
    Any failure is reported as a single 500 error.
    """
    request_id = generate_request_id()
    
    try:
        image_bytes = decode_image(request.image)
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    full_name = request.full_name.strip()
    if not full_name:
        raise HTTPException(status_code=400, detail="fullName must not be blank")
    
    try:
        token = await service.enroll(image_bytes, full_name, request_id=request_id)
    except EnrollmentError as e:
        logger.error(f"Enrollment failed ({e.stage}, orphaned={e.orphaned}): {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
    
    return EnrollResponse(ExternalImageId=token)


@router.post("/verify", response_model=List[TestRecord], response_model_by_alias=True)
async def verify(
    request: VerifyRequest,
    orchestrator: VerificationOrchestrator = Depends(get_orchestrator)
):
    """
    Verify one image.
    
    Always returns the full ordered list of test records; a failing
    check shows up as a failed record rather than an error response.
    """
    try:
        image_bytes = decode_image(request.image)
    except ImageDecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    return await orchestrator.verify(image_bytes, request_id=generate_request_id())


# ============== Health Check ==============

@router.get("/health")
async def health_check(config: ProctorConfig = Depends(get_config)):
    """Health check for proctoring module"""
    return {
        "status": "healthy",
        "module": "proctoring",
        "collection_id": config.collection_id,
        "faces_table": config.faces_table
    }
