"""
Tests for first super admin creation at startup.
"""
from clinic_accounts.accounts.models import AccountRole
from clinic_accounts.core.bootstrap import bootstrap_super_admin_if_needed, super_admin_exists
from clinic_accounts.core.security import verify_password


def test_bootstrap_creates_super_admin_once(db, directory):
    assert not super_admin_exists(db)

    assert bootstrap_super_admin_if_needed(db, email="Root@Clinic.org", password="rootpass1") is True
    root = directory.find_by_email("root@clinic.org")
    assert root.role == AccountRole.SUPER_ADMIN
    assert verify_password("rootpass1", root.password_hash)

    assert bootstrap_super_admin_if_needed(db, email="second@clinic.org", password="rootpass1") is False
    assert len(directory.find_by_role(AccountRole.SUPER_ADMIN)) == 1


def test_bootstrap_without_credentials_is_skipped(db):
    assert bootstrap_super_admin_if_needed(db) is False
    assert not super_admin_exists(db)


def test_bootstrap_reports_email_conflict(db, make_account):
    make_account(AccountRole.PATIENT, "root@clinic.org")
    assert bootstrap_super_admin_if_needed(db, email="root@clinic.org", password="rootpass1") is False
    assert not super_admin_exists(db)
