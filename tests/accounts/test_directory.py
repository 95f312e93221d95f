"""
Tests for the account directory.
"""
import pytest

from clinic_accounts.accounts.directory import AccountDirectory
from clinic_accounts.accounts.exceptions import (
    AccountNotFoundException,
    EmailAlreadyExistsException,
    InvalidIdentifierException,
)
from clinic_accounts.accounts.models import AccountRole, generate_account_id
from clinic_accounts.core.security import verify_password
from clinic_accounts.exceptions import ValidationException


def test_create_normalises_email_and_hashes_password(directory):
    account = directory.create("  Jane.Doe@Clinic.ORG ", "secret123", AccountRole.PATIENT, {"gender": "F"})

    assert account.id
    assert account.email == "jane.doe@clinic.org"
    assert account.password_hash != "secret123"
    assert verify_password("secret123", account.password_hash)
    assert account.gender == "F"
    assert account.assigned_doctor_id is None


def test_create_ignores_fields_of_other_roles(directory):
    account = directory.create(
        "admin@clinic.org", "secret123", AccountRole.ADMIN,
        {"department": "Billing", "specialization": "Cardiology", "gender": "M"},
    )
    assert account.department == "Billing"
    assert account.specialization is None
    assert account.gender is None


def test_email_is_unique_across_roles_and_casing(directory, make_account):
    make_account(AccountRole.DOCTOR, "a@x.com")

    with pytest.raises(EmailAlreadyExistsException) as exc_info:
        directory.create("A@X.COM", "secret123", AccountRole.PATIENT)
    assert exc_info.value.status_code == 409
    assert len(directory.find_by_role(AccountRole.PATIENT)) == 0


def test_store_constraint_catches_duplicate_missed_by_precheck(directory, make_account, monkeypatch):
    make_account(AccountRole.PATIENT, "race@x.com")
    # Simulate a concurrent writer slipping in between check and insert
    monkeypatch.setattr(directory, "find_by_email", lambda email: None)

    with pytest.raises(EmailAlreadyExistsException):
        directory.create("race@x.com", "secret123", AccountRole.PATIENT)

    # Session is usable after the rollback
    assert len(directory.find_by_role(AccountRole.PATIENT)) == 1


def test_find_by_email_is_case_insensitive(directory, make_account):
    account = make_account(AccountRole.ADMIN, "boss@x.com")
    assert directory.find_by_email("BOSS@x.com").id == account.id
    assert directory.find_by_email("nobody@x.com") is None


def test_get_restricts_by_role(directory, doctor, patient):
    assert directory.get(doctor.id, role=AccountRole.DOCTOR).id == doctor.id
    assert directory.get(patient.id, role=AccountRole.DOCTOR) is None

    with pytest.raises(AccountNotFoundException) as exc_info:
        directory.get_or_404(patient.id, role=AccountRole.DOCTOR)
    assert exc_info.value.detail == "Doctor not found"


def test_malformed_id_is_rejected_before_lookup(directory):
    with pytest.raises(InvalidIdentifierException) as exc_info:
        directory.get("not-a-uuid")
    assert exc_info.value.status_code == 400

    assert directory.get(generate_account_id()) is None


def test_find_by_role_filters(directory, make_account):
    make_account(AccountRole.DOCTOR, "cardio@x.com", first_name="A", last_name="B", specialization="Cardiology")
    make_account(AccountRole.DOCTOR, "neuro@x.com", first_name="C", last_name="D", specialization="Neurology")
    make_account(AccountRole.PATIENT, "p@x.com")

    assert len(directory.find_by_role(AccountRole.DOCTOR)) == 2
    cardiologists = directory.find_by_role(AccountRole.DOCTOR, {"specialization": "Cardiology", "department": None})
    assert [d.email for d in cardiologists] == ["cardio@x.com"]

    with pytest.raises(ValidationException):
        directory.find_by_role(AccountRole.DOCTOR, {"password_hash": "x"})


def test_update_profile_and_password(directory, doctor):
    updated = directory.update(doctor, {"bio": "Board certified", "password": "newpass1"})

    assert updated.bio == "Board certified"
    assert verify_password("newpass1", updated.password_hash)
    assert not verify_password("secret123", updated.password_hash)


def test_update_email_checks_uniqueness_against_others_only(directory, make_account):
    first = make_account(AccountRole.PATIENT, "first@x.com")
    make_account(AccountRole.PATIENT, "second@x.com")

    # Re-submitting one's own email in another casing is fine
    assert directory.update(first, {"email": "FIRST@x.com"}).email == "first@x.com"

    with pytest.raises(EmailAlreadyExistsException):
        directory.update(first, {"email": "Second@X.com"})
    assert directory.get(first.id).email == "first@x.com"


def test_update_never_changes_role(directory, patient):
    updated = directory.update(patient, {"role": AccountRole.SUPER_ADMIN, "first_name": "Patricia"})
    assert updated.role == AccountRole.PATIENT
    assert updated.first_name == "Patricia"


def test_update_without_applicable_fields_is_rejected(directory, patient):
    with pytest.raises(ValidationException) as exc_info:
        directory.update(patient, {"specialization": "Surgery"})
    assert exc_info.value.detail == "No valid update fields provided"


def test_delete_removes_account(db, patient):
    directory = AccountDirectory(db)
    patient_id = patient.id
    directory.delete(patient)
    assert directory.get(patient_id) is None
