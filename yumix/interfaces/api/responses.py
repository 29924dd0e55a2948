"""Uniform failure bodies for the HTTP surface."""

from __future__ import annotations

from fastapi.responses import JSONResponse

from yumix.config import get_settings


def failure_response(
    status_code: int, message: str, *, error: BaseException | None = None
) -> JSONResponse:
    """Return ``{success: false, message}``.

    The internal ``error`` text is only attached when the application runs with
    ``DEBUG`` enabled.
    """

    body: dict[str, object] = {"success": False, "message": message}
    if error is not None and get_settings().debug:
        body["error"] = str(error)
    return JSONResponse(status_code=status_code, content=body)


__all__ = ["failure_response"]
