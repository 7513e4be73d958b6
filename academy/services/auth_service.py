"""Password hashing, JWT issuance and DB-tracked sessions."""
import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
from sqlalchemy.orm import Session as DbSession

from academy.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    SECRET_KEY,
    SESSION_EXTEND_MINUTES,
)
from academy.errors import Unauthenticated, ValidationError
from academy.models.db.user import Session, User, UserRole

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def create_access_token(user_id: int, jti: str | None = None) -> tuple[str, str]:
    """Create a JWT access token.

    Returns:
        Tuple of (token, jti)
    """
    jti = jti or str(uuid.uuid4())
    expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": str(user_id), "exp": expire, "jti": jti}
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM), jti


def verify_token(token: str) -> dict | None:
    """Decode a JWT, or return None if it is invalid or expired."""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None


def get_user_by_username(db: DbSession, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_user_by_email(db: DbSession, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: DbSession, user_id: int) -> User | None:
    return db.get(User, user_id)


def create_user(
    db: DbSession,
    username: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
) -> User:
    """Register a new account.

    Raises:
        ValidationError: username or email already taken.
    """
    if get_user_by_username(db, username):
        raise ValidationError("Username already registered", field="username")
    if get_user_by_email(db, email):
        raise ValidationError("Email already registered", field="email")

    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
        role=role.value,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate(db: DbSession, login: str, password: str) -> User:
    """Resolve a username or email plus password to an active user.

    Raises:
        Unauthenticated: unknown user, wrong password or inactive account.
    """
    user = get_user_by_username(db, login) or get_user_by_email(db, login)
    if user is None or not verify_password(password, user.hashed_password):
        raise Unauthenticated("Invalid credentials")
    if not user.is_active:
        raise Unauthenticated("User is inactive")
    return user


def start_session(db: DbSession, user: User) -> str:
    """Issue a token for ``user`` and record its session. Returns the token."""
    token, jti = create_access_token(user.id)
    now = datetime.now(timezone.utc)
    db.add(
        Session(
            user_id=user.id,
            token_jti=jti,
            expires_at=now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
        )
    )
    user.last_login = now
    db.commit()
    return token


def get_active_session(db: DbSession, token_jti: str) -> Session | None:
    now = datetime.now(timezone.utc)
    return (
        db.query(Session)
        .filter(
            Session.token_jti == token_jti,
            Session.is_active == True,  # noqa: E712
            Session.expires_at > now,
        )
        .first()
    )


def extend_session(db: DbSession, session: Session) -> Session:
    """Slide session expiry forward on activity."""
    now = datetime.now(timezone.utc)
    session.last_activity = now
    session.expires_at = now + timedelta(minutes=SESSION_EXTEND_MINUTES)
    db.commit()
    return session


def invalidate_session(db: DbSession, token_jti: str) -> None:
    session = db.query(Session).filter(Session.token_jti == token_jti).first()
    if session:
        session.is_active = False
        db.commit()


def invalidate_all_user_sessions(db: DbSession, user_id: int) -> int:
    """Log a user out everywhere (used when an admin deactivates them)."""
    count = (
        db.query(Session)
        .filter(Session.user_id == user_id, Session.is_active == True)  # noqa: E712
        .update({Session.is_active: False})
    )
    db.commit()
    return count


def resolve_token(db: DbSession, token: str) -> User:
    """Map a bearer token to its active user, extending the session.

    Raises:
        Unauthenticated: token invalid, session gone, or user inactive.
    """
    payload = verify_token(token)
    if payload is None:
        raise Unauthenticated("Invalid or expired token")

    jti = payload.get("jti")
    if jti:
        session = get_active_session(db, jti)
        if session is None:
            raise Unauthenticated("Session expired or invalidated")
        extend_session(db, session)

    user_id = payload.get("sub")
    if user_id is None:
        raise Unauthenticated("Invalid token payload")

    user = get_user_by_id(db, int(user_id))
    if user is None:
        raise Unauthenticated("User not found")
    if not user.is_active:
        raise Unauthenticated("User is inactive")
    return user


def refresh_session(db: DbSession, token: str) -> str:
    """Swap a valid token for a new one, retiring the old session."""
    user = resolve_token(db, token)
    old_jti = verify_token(token).get("jti")
    if old_jti:
        invalidate_session(db, old_jti)
    return start_session(db, user)


def cleanup_expired_sessions(db: DbSession) -> int:
    """Delete sessions past their expiry."""
    now = datetime.now(timezone.utc)
    count = db.query(Session).filter(Session.expires_at < now).delete()
    db.commit()
    return count
