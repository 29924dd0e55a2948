"""Tests for the initial administrator seeding script."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

import pytest

from yumix.domain.entities import DEFAULT_ADMIN_PREFERENCES
from yumix.infrastructure.repositories import AdminRepository
from yumix.infrastructure.security import verify_password

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "create_initial_admin.py"


@pytest.fixture()
def script():
    spec = importlib.util.spec_from_file_location("create_initial_admin", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_script_creates_admin_with_hashed_password(
    script, session, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """The admin is stored with a hashed password and default preferences."""

    monkeypatch.setattr(
        sys,
        "argv",
        ["create_initial_admin.py", "--name", "Root", "--email", "root@example.com", "--password", "s3cret!"],
    )

    script.main()

    admin = AdminRepository(session).get_by_email("root@example.com")
    assert admin is not None
    assert admin.name == "Root"
    assert admin.password != "s3cret!"
    assert verify_password("s3cret!", admin.password)
    assert admin.preferences == DEFAULT_ADMIN_PREFERENCES
    assert "Administrator created" in capsys.readouterr().out


def test_script_refuses_duplicate_email(
    script, make_admin, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Running twice for the same email exits with an error."""

    existing = make_admin()
    monkeypatch.setattr(
        sys,
        "argv",
        ["create_initial_admin.py", "--email", existing.email, "--password", "pw"],
    )

    with pytest.raises(SystemExit):
        script.main()
