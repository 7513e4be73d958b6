"""Certificate Pydantic models."""
from datetime import datetime

from pydantic import BaseModel


class CertificateResponse(BaseModel):
    """Issued certificate."""

    id: str
    userId: int
    courseId: str
    courseName: str
    userName: str
    issuedAt: datetime


class CertificateVerification(BaseModel):
    """Public verification result."""

    valid: bool
    certificate: CertificateResponse | None = None
    message: str | None = None
