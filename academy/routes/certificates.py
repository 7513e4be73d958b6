"""Certificate issuance, listing, download and public verification."""
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session as DbSession

from academy.database import get_db
from academy.dependencies.auth import get_current_user
from academy.errors import NotFound
from academy.models import CertificateResponse, CertificateVerification
from academy.models.db.user import User
from academy.services import certificate_service, course_service

router = APIRouter(prefix="/api", tags=["certificates"])


def _pdf_response(pdf: bytes, course_name: str) -> Response:
    filename = certificate_service.certificate_filename(course_name)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/courses/{course_id}/certificate")
def issue_certificate(
    course_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> Response:
    """Record a certificate for the current user and return it as PDF."""
    course = course_service.get_course(db, course_id)
    certificate = certificate_service.issue_certificate(db, current_user, course)
    return _pdf_response(certificate_service.certificate_pdf(certificate), certificate.course_name)


@router.get("/user/certificates", response_model=list[CertificateResponse])
def list_certificates(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> list[CertificateResponse]:
    """Latest certificate per course for the current user."""
    certificates = certificate_service.list_user_certificates(db, current_user)
    return [certificate_service.to_response(cert) for cert in certificates]


@router.get("/certificates/{certificate_id}/download")
def download_certificate(
    certificate_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[DbSession, Depends(get_db)],
) -> Response:
    certificate = certificate_service.get_owned_certificate(db, current_user, certificate_id)
    return _pdf_response(certificate_service.certificate_pdf(certificate), certificate.course_name)


@router.get("/verify-certificate/{certificate_id}", response_model=CertificateVerification)
def verify_certificate(
    certificate_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> CertificateVerification:
    """Public check that a certificate id was really issued."""
    try:
        certificate = certificate_service.get_certificate(db, certificate_id)
    except NotFound:
        return CertificateVerification(valid=False, message="Certificate not found")
    return CertificateVerification(
        valid=True,
        certificate=certificate_service.to_response(certificate),
        message="Certificate is valid",
    )
