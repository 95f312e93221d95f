"""
Patient Router - patient self-registration and self-service (/me) endpoints.

The /me endpoints accept every authenticated role: any account may read,
update or delete itself.
"""
from fastapi import APIRouter, Depends, status

from ..accounts.directory import AccountDirectory, get_account_directory
from ..accounts.schemas import AccountProfile, PatientRegistration, PatientProfile, SelfServiceUpdate, profile_for
from ..auth.dependencies import Principal, require_any_role
from .service import register_patient, update_own_account, delete_own_account

router = APIRouter()

@router.post("/register", response_model=PatientProfile, status_code=status.HTTP_201_CREATED, summary="Patient Self-Registration")
def register_patient_route(
    data: PatientRegistration,
    directory: AccountDirectory = Depends(get_account_directory),
):
    """
    Register a new patient account, optionally linked to an existing doctor.
    """
    return profile_for(register_patient(directory, data))

@router.get("/me", response_model=AccountProfile)
def get_my_account(
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_any_role),
):
    return profile_for(directory.get_or_404(principal.id))

@router.put("/me", response_model=AccountProfile)
def update_my_account(
    data: SelfServiceUpdate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_any_role),
):
    """
    Update the caller's own account. The role cannot be changed.
    """
    return profile_for(update_own_account(directory, principal, data))

@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_my_account(
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_any_role),
):
    delete_own_account(directory, principal)
