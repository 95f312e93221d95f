"""
Admin Router - administrative CRUD over doctor and patient accounts.

Available to ADMIN and SUPER_ADMIN callers.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from ..accounts.directory import AccountDirectory, get_account_directory
from ..accounts.models import AccountRole
from ..accounts.schemas import (
    DoctorCreate,
    DoctorUpdate,
    DoctorProfile,
    PatientCreate,
    PatientUpdate,
    PatientProfile,
    PatientDetail,
    profile_for,
)
from ..auth.dependencies import Principal, require_admin
from ..core.identifiers import parse_account_id
from .service import create_patient, get_patient_detail

router = APIRouter()

# ============================================================================
# DOCTORS
# ============================================================================

@router.post("/doctors", response_model=DoctorProfile, status_code=status.HTTP_201_CREATED)
def create_doctor(
    data: DoctorCreate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    """Create a DOCTOR account."""
    doctor = directory.create(
        data.email,
        data.password,
        AccountRole.DOCTOR,
        data.model_dump(exclude={"email", "password"}),
    )
    return profile_for(doctor)

@router.get("/doctors", response_model=List[DoctorProfile])
def list_doctors(
    specialization: Optional[str] = Query(None, description="Filter by specialization"),
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    doctors = directory.find_by_role(AccountRole.DOCTOR, {"specialization": specialization})
    return [profile_for(doctor) for doctor in doctors]

@router.get("/doctors/{doctor_id}", response_model=DoctorProfile)
def get_doctor(
    doctor_id: str,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    return profile_for(directory.get_or_404(doctor_id, role=AccountRole.DOCTOR))

@router.put("/doctors/{doctor_id}", response_model=DoctorProfile)
def update_doctor(
    doctor_id: str,
    data: DoctorUpdate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    doctor = directory.get_or_404(doctor_id, role=AccountRole.DOCTOR)
    return profile_for(directory.update(doctor, data.model_dump(exclude_unset=True)))

@router.delete("/doctors/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_doctor(
    doctor_id: str,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    """
    Delete a doctor.

    Refused with 409 (and the number of assigned patients) while any patient
    is still assigned.
    """
    directory.delete(directory.get_or_404(doctor_id, role=AccountRole.DOCTOR))

# ============================================================================
# PATIENTS
# ============================================================================

@router.post("/patients", response_model=PatientProfile, status_code=status.HTTP_201_CREATED)
def create_patient_route(
    data: PatientCreate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    return profile_for(create_patient(directory, data))

@router.get("/patients", response_model=List[PatientProfile])
def list_patients(
    assigned_doctor_id: Optional[str] = Query(None, alias="assignedDoctorId", description="Only patients of this doctor"),
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    filters = {}
    if assigned_doctor_id is not None:
        filters["assigned_doctor_id"] = parse_account_id(assigned_doctor_id, "assignedDoctorId")
    return [profile_for(patient) for patient in directory.find_by_role(AccountRole.PATIENT, filters)]

@router.get("/patients/{patient_id}", response_model=PatientDetail)
def get_patient(
    patient_id: str,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    return get_patient_detail(directory, patient_id)

@router.put("/patients/{patient_id}", response_model=PatientProfile)
def update_patient(
    patient_id: str,
    data: PatientUpdate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    """
    Update a patient.

    assignedDoctorId: omitted leaves the assignment alone, null unassigns,
    an id re-assigns (404 if it is not a doctor).
    """
    patient = directory.get_or_404(patient_id, role=AccountRole.PATIENT)
    return profile_for(directory.update(patient, data.model_dump(exclude_unset=True)))

@router.delete("/patients/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_patient(
    patient_id: str,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_admin),
):
    directory.delete(directory.get_or_404(patient_id, role=AccountRole.PATIENT))
