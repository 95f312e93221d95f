"""
Doctor Service - operations a doctor performs on their own behalf.
"""
import logging

from ..accounts.directory import AccountDirectory
from ..accounts.models import Account, AccountRole
from ..accounts.schemas import DoctorPatientCreate
from ..auth.dependencies import Principal

# Set up logging
logger = logging.getLogger(__name__)

def register_patient_for_doctor(directory: AccountDirectory, principal: Principal, data: DoctorPatientCreate) -> Account:
    """
    Create a patient assigned to the calling doctor.

    The assignment is not caller-suppliable: the creating doctor's id is
    authenticated already, so the generic existence check is skipped.
    
    Args:
        directory: Account directory
        principal: The authenticated doctor
        data: Patient details
        
    Returns:
        Account: The new patient
    """
    profile = data.model_dump(exclude={"email", "password"})
    profile["assigned_doctor_id"] = principal.id
    patient = directory.create(data.email, data.password, AccountRole.PATIENT, profile)
    logger.info(f"Doctor {principal.id} registered patient {patient.id}")
    return patient

def get_own_doctor_account(directory: AccountDirectory, principal: Principal) -> Account:
    """
    Load the caller's account, which must be a doctor.

    Admins pass the gate on /doctor/me but have no doctor profile, so they get 404.
    """
    return directory.get_or_404(principal.id, role=AccountRole.DOCTOR)
