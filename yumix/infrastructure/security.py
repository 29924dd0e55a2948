"""Security helpers for hashing and bearer token handling."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from yumix.config import get_settings

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def build_subject(kind: str, principal_id: int) -> str:
    """Return the ``sub`` claim identifying an admin or user principal."""

    return f"{kind}:{principal_id}"


def parse_subject(subject: str) -> tuple[str, int]:
    """Split a ``kind:id`` subject claim, raising ``ValueError`` when malformed."""

    kind, separator, raw_id = subject.partition(":")
    if not separator or not kind:
        raise ValueError("Malformed token subject")
    try:
        return kind, int(raw_id)
    except ValueError as exc:
        raise ValueError("Malformed token subject") from exc


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


__all__ = [
    "build_subject",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "parse_subject",
    "verify_password",
]
