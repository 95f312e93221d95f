"""
Doctor Router - endpoints for doctors acting on their own account and patients.
"""
from fastapi import APIRouter, Depends, status

from ..accounts.directory import AccountDirectory, get_account_directory
from ..accounts.schemas import DoctorPatientCreate, DoctorProfile, DoctorUpdate, PatientProfile, profile_for
from ..auth.dependencies import Principal, require_doctor, require_doctor_or_admin
from .service import register_patient_for_doctor, get_own_doctor_account

router = APIRouter()

@router.post("/register-patient", response_model=PatientProfile, status_code=status.HTTP_201_CREATED)
def register_patient_route(
    data: DoctorPatientCreate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_doctor),
):
    """
    Register a new patient, automatically assigned to the calling doctor.
    """
    return profile_for(register_patient_for_doctor(directory, principal, data))

@router.get("/me", response_model=DoctorProfile)
def get_my_doctor_profile(
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_doctor_or_admin),
):
    """
    Get the current doctor's profile
    """
    return profile_for(get_own_doctor_account(directory, principal))

@router.put("/me", response_model=DoctorProfile)
def update_my_doctor_profile(
    data: DoctorUpdate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_doctor_or_admin),
):
    """
    Update the current doctor's profile
    """
    doctor = get_own_doctor_account(directory, principal)
    return profile_for(directory.update(doctor, data.model_dump(exclude_unset=True)))

@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_my_doctor_account(
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_doctor_or_admin),
):
    """
    Delete the current doctor's account.

    Refused with 409 while patients are assigned to the doctor.
    """
    directory.delete(get_own_doctor_account(directory, principal))
