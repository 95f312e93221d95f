"""
Patient Service - self-registration and self-service account management.
"""
import logging

from ..accounts.directory import AccountDirectory
from ..accounts.models import Account, AccountRole
from ..accounts.schemas import PatientRegistration, SelfServiceUpdate
from ..auth.dependencies import Principal

# Set up logging
logger = logging.getLogger(__name__)

def register_patient(directory: AccountDirectory, data: PatientRegistration) -> Account:
    """
    Register a new patient user.

    Args:
        directory: Account directory
        data: Registration payload; doctorId optionally pre-links a doctor

    Returns:
        Account: The new patient

    Raises:
        InvalidIdentifierException: Malformed doctorId
        UnknownDoctorException: doctorId is not a doctor (400)
        EmailAlreadyExistsException: If email already exists
    """
    logger.info(f"Patient registration attempt for email: {data.email}")
    profile = data.model_dump(exclude={"email", "password", "doctor_id"})
    if data.doctor_id:
        doctor = directory.assignments.resolve_doctor(data.doctor_id, field_name="doctorId", as_bad_request=True)
        profile["assigned_doctor_id"] = doctor.id
    return directory.create(data.email, data.password, AccountRole.PATIENT, profile)

def update_own_account(directory: AccountDirectory, principal: Principal, data: SelfServiceUpdate) -> Account:
    """
    Update the caller's account.

    The caller's role is never changed; a `role` key in the request body is
    not part of the schema and is dropped before it gets here.
    """
    account = directory.get_or_404(principal.id)
    changes = data.model_dump(exclude_unset=True)
    if "doctor_id" in changes:
        changes["assigned_doctor_id"] = changes.pop("doctor_id")
    return directory.update(account, changes, as_bad_request=True)

def delete_own_account(directory: AccountDirectory, principal: Principal) -> None:
    """
    Delete the caller's account. Doctors go through the assignment guard.
    """
    directory.delete(directory.get_or_404(principal.id))
