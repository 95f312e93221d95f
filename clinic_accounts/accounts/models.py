"""
Account Model - Stores every user of the platform in a single table.

The role column selects which profile fields are meaningful; the API exposes
each role through its own profile schema (see schemas.py).
"""
from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Enum, ForeignKey, func
from sqlalchemy.orm import relationship
import enum
import uuid
from ..database import Base

class AccountRole(str, enum.Enum):
    """
    Enumeration for account roles.
    
    Roles:
    - SUPER_ADMIN: Manages ADMIN accounts
    - ADMIN: Manages DOCTOR and PATIENT accounts
    - DOCTOR: Medical practitioner; may register patients assigned to themselves
    - PATIENT: Patient, optionally assigned to one doctor
    """
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    DOCTOR = "DOCTOR"
    PATIENT = "PATIENT"


def generate_account_id() -> str:
    return str(uuid.uuid4())


class Account(Base):
    """
    Account Model - Stores identity, credential and profile data
    
    Fields:
    - id: UUID primary key
    - email: Unique email address, always stored lowercase
    - password_hash: bcrypt hash (never exposed)
    - role: Account role, fixed at creation
    - first_name, last_name, phone, address: Common profile fields
    - date_of_birth, gender: Patient fields
    - assigned_doctor_id: Patient's doctor (FK, deletion of a referenced doctor is restricted)
    - specialization, qualifications, bio, years_of_experience, profile_photo_url: Doctor fields
    - department, position: Admin fields
    - created_at / updated_at: Timestamps
    """
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_account_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(AccountRole, name="accountrole"), nullable=False, default=AccountRole.PATIENT)

    # Common profile fields
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)

    # Patient fields
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    assigned_doctor_id = Column(
        String(36),
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    # Doctor fields
    specialization = Column(String, nullable=True)
    qualifications = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    years_of_experience = Column(Integer, nullable=True)
    profile_photo_url = Column(String, nullable=True)

    # Admin fields
    department = Column(String, nullable=True)
    position = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Many-to-one only: no doctor -> patients collection, so deleting a doctor
    # never rewrites patient rows
    assigned_doctor = relationship("Account", remote_side=[id], uselist=False)

    def __repr__(self):
        """String representation of the Account model"""
        return f"<Account(id={self.id}, email={self.email}, role={self.role})>"
