"""
Tests for first admin creation.
"""
from salon.auth.bootstrap import bootstrap_admin_if_needed
from salon.auth.models import UserRole
from salon.auth.service import get_credential_store
from salon.core.security import verify_password


def test_creates_admin_when_missing(db):
    assert bootstrap_admin_if_needed(db, password="first-password") is True
    admin = get_credential_store(db).get_by_username("admin")
    assert admin.role == UserRole.ADMIN
    assert verify_password("first-password", admin.password_hash)


def test_skips_when_admin_exists(db, admin_user):
    assert bootstrap_admin_if_needed(db, username="second", password="x-password") is False
    assert get_credential_store(db).get_by_username("second") is None


def test_skips_without_password(db):
    assert bootstrap_admin_if_needed(db) is False
    assert not get_credential_store(db).admin_exists()


def test_skips_when_username_taken(db):
    get_credential_store(db).create_user("admin", "operator-pass", UserRole.USER)
    assert bootstrap_admin_if_needed(db, password="first-password") is False
    assert not get_credential_store(db).admin_exists()
