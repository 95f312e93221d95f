"""
Account Schemas - Pydantic models for account data validation and serialization.

Inbound payloads are per-role schemas that never declare a `role` field, so a
role supplied in a request body is dropped during validation. Outbound data is
a tagged variant: the `role` value selects which profile schema is used, and
no profile carries the password credential.

JSON keys are camelCase; snake_case is accepted on input as well.
"""
from datetime import date, datetime
from typing import Optional, Union
from typing_extensions import Annotated
from pydantic import BaseModel, Discriminator, EmailStr, Field, Tag
from pydantic.alias_generators import to_camel

from .models import AccountRole

class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# ============================================================================
# INBOUND: CREATION
# ============================================================================

class AccountCreateBase(CamelModel):
    """
    Fields common to every account creation payload

    Fields:
    - email: Email address (normalised to lowercase before storage)
    - password: Plain text password (hashed before storage)
    - first_name, last_name, phone, address: Optional profile fields
    """
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

class AdminCreate(AccountCreateBase):
    """Admin account created by a super admin."""
    department: Optional[str] = None
    position: Optional[str] = None

class DoctorCreate(AccountCreateBase):
    """
    Doctor account created by an administrator.

    First and last name are required for doctors.
    """
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    specialization: Optional[str] = None
    qualifications: Optional[str] = None
    bio: Optional[str] = None
    years_of_experience: Optional[int] = Field(None, ge=0)
    profile_photo_url: Optional[str] = None

class PatientFields(AccountCreateBase):
    """Patient profile fields shared by every patient creation path."""
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None

class PatientRegistration(PatientFields):
    """
    Patient self-registration.

    doctor_id optionally pre-links the patient to an existing doctor.
    """
    doctor_id: Optional[str] = None

class PatientCreate(PatientFields):
    """Patient account created by an administrator, optionally assigned to a doctor."""
    assigned_doctor_id: Optional[str] = None

class DoctorPatientCreate(PatientFields):
    """
    Patient account created by a doctor.

    There is no doctor field: the new patient is always assigned to the
    creating doctor.
    """
    pass


# ============================================================================
# INBOUND: UPDATES (all fields optional; unset fields are left unchanged)
# ============================================================================

class AccountUpdateBase(CamelModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

class AdminUpdate(AccountUpdateBase):
    department: Optional[str] = None
    position: Optional[str] = None

class DoctorUpdate(AccountUpdateBase):
    specialization: Optional[str] = None
    qualifications: Optional[str] = None
    bio: Optional[str] = None
    years_of_experience: Optional[int] = Field(None, ge=0)
    profile_photo_url: Optional[str] = None

class PatientUpdate(AccountUpdateBase):
    """
    Administrative patient update.

    assigned_doctor_id: omitted leaves the assignment unchanged, null
    unassigns, an id assigns.
    """
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    assigned_doctor_id: Optional[str] = None

class SelfServiceUpdate(AdminUpdate, DoctorUpdate):
    """
    Update of the caller's own account.

    Accepts the profile fields of every role; only those that belong to the
    caller's role are applied. doctor_id re-assigns a patient's doctor.
    """
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    doctor_id: Optional[str] = None


# ============================================================================
# OUTBOUND: PROFILES
# ============================================================================

class ProfileBase(CamelModel):
    id: str
    email: str
    role: AccountRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class AdminProfile(ProfileBase):
    department: Optional[str] = None
    position: Optional[str] = None

class DoctorProfile(ProfileBase):
    specialization: Optional[str] = None
    qualifications: Optional[str] = None
    bio: Optional[str] = None
    years_of_experience: Optional[int] = None
    profile_photo_url: Optional[str] = None

class PatientProfile(ProfileBase):
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    assigned_doctor_id: Optional[str] = None

class DoctorSummary(CamelModel):
    """Doctor details embedded in a patient's detail view."""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    specialization: Optional[str] = None

class PatientDetail(PatientProfile):
    assigned_doctor: Optional[DoctorSummary] = None


PROFILE_TAGS = {
    AccountRole.SUPER_ADMIN: "admin",
    AccountRole.ADMIN: "admin",
    AccountRole.DOCTOR: "doctor",
    AccountRole.PATIENT: "patient",
}

def _profile_tag(value) -> Optional[str]:
    role = value.get("role") if isinstance(value, dict) else getattr(value, "role", None)
    try:
        return PROFILE_TAGS[AccountRole(role)]
    except ValueError:
        return None

AccountProfile = Annotated[
    Union[
        Annotated[AdminProfile, Tag("admin")],
        Annotated[DoctorProfile, Tag("doctor")],
        Annotated[PatientProfile, Tag("patient")],
    ],
    Discriminator(_profile_tag),
]

PROFILE_SCHEMAS = {
    AccountRole.SUPER_ADMIN: AdminProfile,
    AccountRole.ADMIN: AdminProfile,
    AccountRole.DOCTOR: DoctorProfile,
    AccountRole.PATIENT: PatientProfile,
}

def profile_for(account) -> Union[AdminProfile, DoctorProfile, PatientProfile]:
    """
    Project an account row onto the profile schema of its role.

    Args:
        account: Account ORM instance

    Returns:
        The role-specific profile
    """
    return PROFILE_SCHEMAS[account.role].model_validate(account)
