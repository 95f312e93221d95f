"""
Admin Service - administrative management of doctors and patients.
"""
from ..accounts.directory import AccountDirectory
from ..accounts.models import Account, AccountRole
from ..accounts.schemas import PatientCreate, PatientDetail

def create_patient(directory: AccountDirectory, data: PatientCreate) -> Account:
    """
    Create a patient on behalf of an administrator.

    The optional assignedDoctorId is checked like any assignment before the
    account is written.

    Raises:
        InvalidIdentifierException: Malformed doctor id
        AccountNotFoundException: Doctor missing or not a DOCTOR
        EmailAlreadyExistsException: Email taken
    """
    profile = data.model_dump(exclude={"email", "password", "assigned_doctor_id"})
    if data.assigned_doctor_id is not None:
        doctor = directory.assignments.resolve_doctor(data.assigned_doctor_id)
        profile["assigned_doctor_id"] = doctor.id
    return directory.create(data.email, data.password, AccountRole.PATIENT, profile)

def get_patient_detail(directory: AccountDirectory, patient_id: str) -> PatientDetail:
    """
    Load a patient with a summary of the assigned doctor embedded.
    """
    patient = directory.get_or_404(patient_id, role=AccountRole.PATIENT)
    return PatientDetail.model_validate(patient)
