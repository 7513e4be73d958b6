"""Certificate issuance, listing and PDF rendering."""
import io
import logging
import re
from datetime import datetime

from PIL import Image, ImageDraw, ImageFont
from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from academy.config import (
    APP_BASE_URL,
    CERTIFICATE_DPI,
    CERTIFICATE_FONT_DIR,
    CERTIFICATE_HEIGHT,
    CERTIFICATE_WIDTH,
)
from academy.errors import Forbidden, NotFound
from academy.models.certificates import CertificateResponse
from academy.models.db import Certificate, Course, User
from academy.services.course_service import can_view_course

logger = logging.getLogger(__name__)

PRIMARY_COLOR = (33, 37, 41)
ACCENT_COLOR = (41, 98, 155)
MUTED_COLOR = (108, 117, 125)


def issue_certificate(db: DbSession, user: User, course: Course) -> Certificate:
    """Record a new certificate; earlier ones for the same course are kept."""
    if not can_view_course(db, user, course):
        raise Forbidden("You are not enrolled in this course")

    certificate = Certificate(
        user_id=user.id,
        course_id=course.id,
        course_name=course.title,
        user_name=user.full_name,
    )
    db.add(certificate)
    db.commit()
    db.refresh(certificate)
    logger.info("Issued certificate %s to user %s for course %s", certificate.id, user.id, course.id)
    return certificate


def latest_per_course(certificates: list[Certificate]) -> list[Certificate]:
    """Keep only the most recently issued certificate of each course."""
    ordered = sorted(
        certificates,
        key=lambda cert: (cert.issued_at, cert.id),
        reverse=True,
    )
    seen: set[str] = set()
    latest = []
    for cert in ordered:
        if cert.course_id in seen:
            continue
        seen.add(cert.course_id)
        latest.append(cert)
    return latest


def list_user_certificates(db: DbSession, user: User) -> list[Certificate]:
    stmt = select(Certificate).where(Certificate.user_id == user.id)
    return latest_per_course(list(db.execute(stmt).scalars()))


def get_certificate(db: DbSession, certificate_id: str) -> Certificate:
    certificate = db.get(Certificate, certificate_id)
    if certificate is None:
        raise NotFound("Certificate not found")
    return certificate


def get_owned_certificate(db: DbSession, user: User, certificate_id: str) -> Certificate:
    certificate = get_certificate(db, certificate_id)
    if certificate.user_id != user.id and not user.is_admin:
        raise Forbidden("This certificate belongs to another user")
    return certificate


def to_response(certificate: Certificate) -> CertificateResponse:
    return CertificateResponse(
        id=certificate.id,
        userId=certificate.user_id,
        courseId=certificate.course_id,
        courseName=certificate.course_name,
        userName=certificate.user_name,
        issuedAt=certificate.issued_at,
    )


def certificate_filename(course_name: str) -> str:
    """``"Intro to Python"`` -> ``"Intro_to_Python_Certificate.pdf"``"""
    stem = re.sub(r"\s+", "_", course_name.strip())
    stem = re.sub(r"[^A-Za-z0-9_.-]", "", stem) or "Course"
    return f"{stem}_Certificate.pdf"


def verification_url(certificate_id: str) -> str:
    return f"{APP_BASE_URL.rstrip('/')}/api/verify-certificate/{certificate_id}"


def _font(name: str, size: int) -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype(str(CERTIFICATE_FONT_DIR / name), size)
    except OSError:
        logger.warning("Font %s not found in %s, using default", name, CERTIFICATE_FONT_DIR)
        return ImageFont.load_default()


def render_certificate_pdf(
    user_name: str,
    course_name: str,
    issued_at: datetime,
    certificate_id: str,
) -> bytes:
    """Draw an A4 landscape certificate and return it as PDF bytes."""
    width, height = CERTIFICATE_WIDTH, CERTIFICATE_HEIGHT
    img = Image.new("RGB", (width, height), color="white")
    draw = ImageDraw.Draw(img)

    draw.rectangle([60, 60, width - 60, height - 60], outline=PRIMARY_COLOR, width=6)
    draw.rectangle([90, 90, width - 90, height - 90], outline=ACCENT_COLOR, width=2)

    title_font = _font("DejaVuSerif-Bold.ttf", 96)
    name_font = _font("DejaVuSerif-Bold.ttf", 72)
    text_font = _font("DejaVuSans.ttf", 40)
    small_font = _font("DejaVuSans.ttf", 26)

    def centered(text: str, font, y: int, fill) -> None:
        left, _, right, _ = draw.textbbox((0, 0), text, font=font)
        draw.text(((width - (right - left)) / 2, y), text, fill=fill, font=font)

    centered("Certificate of Completion", title_font, 230, PRIMARY_COLOR)
    centered("This is to certify that", text_font, 420, MUTED_COLOR)
    centered(user_name, name_font, 500, ACCENT_COLOR)
    centered("has successfully completed the course", text_font, 630, MUTED_COLOR)
    centered(course_name, name_font, 710, PRIMARY_COLOR)
    centered(f"Issued on {issued_at.strftime('%B %d, %Y')}", text_font, 880, MUTED_COLOR)
    centered(f"Certificate ID: {certificate_id}", small_font, 1010, MUTED_COLOR)
    centered(f"Verify at {verification_url(certificate_id)}", small_font, 1050, MUTED_COLOR)

    buf = io.BytesIO()
    img.save(buf, format="PDF", resolution=CERTIFICATE_DPI)
    return buf.getvalue()


def certificate_pdf(certificate: Certificate) -> bytes:
    return render_certificate_pdf(
        certificate.user_name,
        certificate.course_name,
        certificate.issued_at,
        certificate.id,
    )
