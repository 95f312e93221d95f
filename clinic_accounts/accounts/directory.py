"""
Account Directory - CRUD over account records.

Responsibilities:
- Email normalisation and global (all roles) case-insensitive uniqueness
- Role-scoped lookups and listings
- Credential hashing on create and password change
- Translation of store failures into the service's error taxonomy

Uniqueness and referential checks made before a write are best-effort only.
The store's unique and foreign-key constraints are authoritative, and their
violations surface as the same Conflict errors as the pre-checks.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .models import Account, AccountRole
from .assignments import AssignmentManager
from .exceptions import (
    AccountNotFoundException,
    DoctorHasPatientsException,
    EmailAlreadyExistsException,
)
from ..core.identifiers import parse_account_id
from ..core.security import hash_password
from ..database import get_db
from ..exceptions import ConflictException, InternalServerException, ValidationException

# Set up logging
logger = logging.getLogger(__name__)

COMMON_PROFILE_FIELDS = ("first_name", "last_name", "phone", "address")

ROLE_PROFILE_FIELDS = {
    AccountRole.SUPER_ADMIN: COMMON_PROFILE_FIELDS + ("department", "position"),
    AccountRole.ADMIN: COMMON_PROFILE_FIELDS + ("department", "position"),
    AccountRole.DOCTOR: COMMON_PROFILE_FIELDS + (
        "specialization", "qualifications", "bio", "years_of_experience", "profile_photo_url"
    ),
    AccountRole.PATIENT: COMMON_PROFILE_FIELDS + ("date_of_birth", "gender"),
}

# Columns usable as exact-match filters in role listings
LISTING_FILTERS = ("assigned_doctor_id", "specialization", "department", "gender")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_unique_violation(error: IntegrityError) -> bool:
    code = getattr(error.orig, "pgcode", None)
    return code == "23505" or "unique" in str(error.orig).lower()


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    code = getattr(error.orig, "pgcode", None)
    return code == "23503" or "foreign key" in str(error.orig).lower()


class AccountDirectory:
    """
    Store gateway for accounts, constructed per request around one Session.

    Args:
        db: Database session
    """

    def __init__(self, db: Session):
        self.db = db
        self.assignments = AssignmentManager(self)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, account_id, role: Optional[AccountRole] = None) -> Optional[Account]:
        """
        Fetch an account by id, optionally restricted to one role.

        Raises:
            InvalidIdentifierException: If account_id is not a well-formed UUID
        """
        account_id = parse_account_id(account_id)
        query = self.db.query(Account).filter(Account.id == account_id)
        if role is not None:
            query = query.filter(Account.role == role)
        return query.first()

    def find_by_id(self, account_id) -> Optional[Account]:
        return self.get(account_id)

    def get_or_404(self, account_id, role: Optional[AccountRole] = None) -> Account:
        """
        Fetch an account or raise a 404 naming the expected role.
        """
        account = self.get(account_id, role=role)
        if account is None:
            label = role.value.replace("_", " ").title() if role else "Account"
            raise AccountNotFoundException(f"{label} not found")
        return account

    def find_by_email(self, email: str) -> Optional[Account]:
        return self.db.query(Account).filter(Account.email == normalize_email(email)).first()

    def find_by_role(self, role: AccountRole, filters: Optional[Dict[str, Any]] = None) -> List[Account]:
        """
        List accounts of one role.

        Args:
            role: Role to list
            filters: Exact-match column filters (see LISTING_FILTERS); None values are ignored

        Returns:
            List of accounts ordered by creation time
        """
        query = self.db.query(Account).filter(Account.role == role)
        for field, value in (filters or {}).items():
            if value is None:
                continue
            if field not in LISTING_FILTERS:
                raise ValidationException(f"Unsupported filter: {field}")
            query = query.filter(getattr(Account, field) == value)
        return query.order_by(Account.created_at, Account.email).all()

    def count_assigned_patients(self, doctor_id: str) -> int:
        return self.db.query(Account).filter(Account.assigned_doctor_id == doctor_id).count()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, account: Account) -> Account:
        """
        Commit pending changes of an account and reload it.

        Raises:
            EmailAlreadyExistsException: Unique email constraint violated
            ConflictException: Other constraint violations
            InternalServerException: Any other store failure
        """
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Constraint violation while saving account {account.id}: {str(e.orig)}")
            if _is_unique_violation(e):
                raise EmailAlreadyExistsException()
            if _is_foreign_key_violation(e):
                raise ConflictException("Referenced account no longer exists")
            raise ConflictException("Account could not be saved")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store error while saving account {account.id}: {str(e)}")
            raise InternalServerException()
        self.db.refresh(account)
        return account

    def _ensure_email_available(self, email: str, exclude_id: Optional[str] = None) -> None:
        existing = self.find_by_email(email)
        if existing is not None and existing.id != exclude_id:
            logger.info(f"Email {email} already registered")
            raise EmailAlreadyExistsException()

    def create(self, email: str, password: str, role: AccountRole, profile: Optional[Dict[str, Any]] = None) -> Account:
        """
        Create an account.

        Args:
            email: Email address, normalised to lowercase
            password: Plain text password, hashed before storage
            role: Account role
            profile: Profile fields; fields not belonging to the role are
                ignored. For patients, `assigned_doctor_id` must already have
                been validated by the caller.

        Returns:
            Account: The created account

        Raises:
            EmailAlreadyExistsException: If the email is taken
        """
        role = AccountRole(role)
        email = normalize_email(email)
        self._ensure_email_available(email)

        profile = profile or {}
        values = {field: profile[field] for field in ROLE_PROFILE_FIELDS[role] if field in profile}
        if role == AccountRole.PATIENT:
            values["assigned_doctor_id"] = profile.get("assigned_doctor_id")

        account = Account(
            email=email,
            password_hash=hash_password(password),
            role=role,
            **values,
        )
        self.db.add(account)
        self.save(account)
        logger.info(f"{role.value} account created: {account.id}")
        return account

    def update(self, account: Account, changes: Dict[str, Any], as_bad_request: bool = False) -> Account:
        """
        Apply a partial update to an account.

        Args:
            account: Account to update
            changes: Fields explicitly supplied by the caller. `email` re-runs
                the uniqueness check, `password` is re-hashed, profile fields
                are applied when they belong to the account's role, and for
                patients `assigned_doctor_id` (None unassigns) goes through
                the assignment rules. `role` is never applied.
            as_bad_request: Report an unknown doctor as 400 (self-service)

        Returns:
            Account: The updated account

        Raises:
            ValidationException: If no applicable field was supplied
        """
        if "role" in changes:
            logger.warning(f"Ignoring attempt to change role of account {account.id}")

        allowed = ROLE_PROFILE_FIELDS[account.role]
        profile_changes = {field: value for field, value in changes.items() if field in allowed}
        email = changes.get("email")
        password = changes.get("password")
        reassign = account.role == AccountRole.PATIENT and "assigned_doctor_id" in changes

        if not (profile_changes or email or password or reassign):
            raise ValidationException("No valid update fields provided")

        # Validate everything before touching the row
        if email:
            email = normalize_email(email)
            if email != account.email:
                self._ensure_email_available(email, exclude_id=account.id)
        doctor = None
        if reassign and changes["assigned_doctor_id"] is not None:
            doctor = self.assignments.resolve_doctor(changes["assigned_doctor_id"], as_bad_request=as_bad_request)
        password_hash = hash_password(password) if password else None

        if email:
            account.email = email
        if password:
            account.password_hash = password_hash
        for field, value in profile_changes.items():
            setattr(account, field, value)
        if reassign:
            self.assignments.set_assignment(account, doctor.id if doctor else None, commit=False)
        account.updated_at = datetime.now(timezone.utc)

        self.save(account)
        logger.info(f"Account {account.id} updated: {sorted(set(changes) - {'password', 'role'})}")
        return account

    def delete(self, account: Account) -> None:
        """
        Delete an account.

        Doctors are checked against the assignment guard first; a foreign-key
        violation raised by the store (a patient assigned concurrently) is
        reported the same way.

        Raises:
            DoctorHasPatientsException: If the account is a doctor with assigned patients
        """
        account_id = account.id
        role = account.role
        if role == AccountRole.DOCTOR:
            self.assignments.guard_delete(account_id)

        try:
            self.db.delete(account)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Store rejected deletion of account {account_id}: {str(e.orig)}")
            if role == AccountRole.DOCTOR and _is_foreign_key_violation(e):
                raise DoctorHasPatientsException(max(self.count_assigned_patients(account_id), 1))
            raise ConflictException("Account is referenced elsewhere and cannot be deleted")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Store error while deleting account {account_id}: {str(e)}")
            raise InternalServerException()
        logger.info(f"{role.value} account deleted: {account_id}")


def get_account_directory(db: Session = Depends(get_db)) -> AccountDirectory:
    """
    Account directory dependency, scoped to the request's session.
    """
    return AccountDirectory(db)
