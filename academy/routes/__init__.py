"""API route modules."""
from academy.routes import admin, auth, certificates, contents, courses, users

__all__ = ["admin", "auth", "certificates", "contents", "courses", "users"]
