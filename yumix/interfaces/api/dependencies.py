"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from yumix.domain.entities import Admin, User
from yumix.infrastructure.database import get_db
from yumix.infrastructure.repositories import AdminRepository, UserRepository
from yumix.infrastructure.scheduler import Scheduler
from yumix.infrastructure.security import decode_access_token, parse_subject

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_principal_id(
    credentials: HTTPAuthorizationCredentials | None, expected_kind: str
) -> int:
    """Return the id carried by a bearer token issued to ``expected_kind``."""

    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
        kind, principal_id = parse_subject(str(payload.get("sub") or ""))
    except ValueError as exc:
        raise _unauthorized() from exc

    if kind != expected_kind:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return principal_id


def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Admin:
    """Return the active administrator identified by the bearer token."""

    admin = AdminRepository(db).get(resolve_principal_id(credentials, "admin"))
    if admin is None:
        raise _unauthorized("Admin not found")
    if not admin.is_active():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin account is inactive")
    return admin


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the user identified by the bearer token."""

    user = UserRepository(db).get(resolve_principal_id(credentials, "user"))
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_scheduler(request: Request) -> Scheduler:
    """Return the scheduler created by the application lifespan."""

    return request.app.state.scheduler
