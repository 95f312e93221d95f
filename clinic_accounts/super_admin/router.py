"""
Super Admin Router - management of ADMIN accounts.

Only SUPER_ADMIN callers reach these endpoints.
"""
from typing import List
from fastapi import APIRouter, Depends, status

from ..accounts.directory import AccountDirectory, get_account_directory
from ..accounts.models import AccountRole
from ..accounts.schemas import AdminCreate, AdminUpdate, AdminProfile, profile_for
from ..auth.dependencies import Principal, require_super_admin

router = APIRouter()

@router.post("/admins", response_model=AdminProfile, status_code=status.HTTP_201_CREATED)
def create_admin(
    data: AdminCreate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_super_admin),
):
    """Create an ADMIN account."""
    admin = directory.create(
        data.email,
        data.password,
        AccountRole.ADMIN,
        data.model_dump(exclude={"email", "password"}),
    )
    return profile_for(admin)

@router.get("/admins", response_model=List[AdminProfile])
def list_admins(
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_super_admin),
):
    return [profile_for(admin) for admin in directory.find_by_role(AccountRole.ADMIN)]

@router.get("/admins/{admin_id}", response_model=AdminProfile)
def get_admin(
    admin_id: str,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_super_admin),
):
    return profile_for(directory.get_or_404(admin_id, role=AccountRole.ADMIN))

@router.put("/admins/{admin_id}", response_model=AdminProfile)
def update_admin(
    admin_id: str,
    data: AdminUpdate,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_super_admin),
):
    admin = directory.get_or_404(admin_id, role=AccountRole.ADMIN)
    return profile_for(directory.update(admin, data.model_dump(exclude_unset=True)))

@router.delete("/admins/{admin_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_admin(
    admin_id: str,
    directory: AccountDirectory = Depends(get_account_directory),
    principal: Principal = Depends(require_super_admin),
):
    directory.delete(directory.get_or_404(admin_id, role=AccountRole.ADMIN))
