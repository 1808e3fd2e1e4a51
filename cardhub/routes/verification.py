"""
Verification Endpoints
Resolve a scanned QR code to its card holder
"""

from fastapi import APIRouter, Depends, Query

from cardhub.dependencies import get_verification_service
from cardhub.schemas.verification import VerifyRequest, VerificationResult
from cardhub.services.qr_verification_service import QRVerificationService

router = APIRouter()


@router.post("", response_model=VerificationResult)
async def verify_qr_code(
    request: VerifyRequest,
    service: QRVerificationService = Depends(get_verification_service),
):
    """
    Verify scanned QR text

    Always answers 200; an unverifiable code comes back with valid=False and
    an error message.
    """
    return await service.verify(request.qr_data)


@router.get("", response_model=VerificationResult)
async def verify_qr_code_query(
    qr: str = Query(default=""),
    service: QRVerificationService = Depends(get_verification_service),
):
    """Same as POST /verify, for scanners that open the code as a link"""
    return await service.verify(qr)
