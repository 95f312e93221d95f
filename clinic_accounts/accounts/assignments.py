"""
Assignment Manager - Maintains the doctor <-> patient relation.

The relation is the nullable `assigned_doctor_id` column on patient rows.
Checks made here are advisory: the foreign key on that column (RESTRICT on
delete) is the authoritative guard when requests race.
"""
import logging
from typing import Optional

from .models import Account, AccountRole
from .exceptions import AccountNotFoundException, DoctorHasPatientsException
from ..core.identifiers import parse_account_id
from ..exceptions import ValidationException

# Set up logging
logger = logging.getLogger(__name__)

class UnknownDoctorException(ValidationException):
    """Exception raised when a self-supplied doctor id does not resolve to a doctor."""
    def __init__(self):
        super().__init__(detail="Invalid doctorId. No doctor found with the provided ID.")


class AssignmentManager:
    """
    Doctor-patient assignment rules.

    Args:
        directory: AccountDirectory providing store access
    """

    def __init__(self, directory):
        self.directory = directory

    def resolve_doctor(self, doctor_id, field_name: str = "assignedDoctorId", as_bad_request: bool = False) -> Account:
        """
        Load the account a patient is about to be assigned to.

        Args:
            doctor_id: Candidate doctor id (validated as a UUID first)
            field_name: Field name reported on a malformed id
            as_bad_request: Report a missing doctor as 400 instead of 404
                (self-registration and self-service paths)

        Returns:
            Account: The doctor

        Raises:
            InvalidIdentifierException: Malformed id
            AccountNotFoundException / UnknownDoctorException: No such doctor,
                or the account is not a DOCTOR
        """
        doctor_id = parse_account_id(doctor_id, field_name)
        doctor = self.directory.get(doctor_id, role=AccountRole.DOCTOR)
        if doctor is None:
            logger.info(f"Assignment rejected: {doctor_id} is not a doctor")
            if as_bad_request:
                raise UnknownDoctorException()
            raise AccountNotFoundException(
                f"Doctor with ID {doctor_id} not found or is not a Doctor."
            )
        return doctor

    def assign(self, patient: Account, doctor_id, commit: bool = True, as_bad_request: bool = False) -> Account:
        """
        Assign a patient to a doctor.

        Assigning the doctor a patient already has is a no-op. On failure
        the patient's assignment is left unchanged.

        Args:
            patient: Patient account
            doctor_id: Doctor account id
            commit: Persist immediately; False stages the change for the caller's commit
            as_bad_request: See resolve_doctor

        Returns:
            Account: The patient
        """
        if patient.role != AccountRole.PATIENT:
            raise ValidationException("Only patients can be assigned to a doctor")

        doctor = self.resolve_doctor(doctor_id, as_bad_request=as_bad_request)
        if patient.assigned_doctor_id == doctor.id:
            return patient

        patient.assigned_doctor_id = doctor.id
        logger.info(f"Patient {patient.id} assigned to doctor {doctor.id}")
        if commit:
            self.directory.save(patient)
        return patient

    def unassign(self, patient: Account, commit: bool = True) -> Account:
        """
        Remove a patient's doctor. Always permitted.
        """
        if patient.assigned_doctor_id is None:
            return patient
        logger.info(f"Patient {patient.id} unassigned from doctor {patient.assigned_doctor_id}")
        patient.assigned_doctor_id = None
        if commit:
            self.directory.save(patient)
        return patient

    def set_assignment(self, patient: Account, doctor_id: Optional[str], commit: bool = True, as_bad_request: bool = False) -> Account:
        """Assign when doctor_id is given, unassign when it is None."""
        if doctor_id is None:
            return self.unassign(patient, commit=commit)
        return self.assign(patient, doctor_id, commit=commit, as_bad_request=as_bad_request)

    def guard_delete(self, doctor_id: str) -> None:
        """
        Block deletion of a doctor that patients still point to.

        Args:
            doctor_id: Doctor account id

        Raises:
            DoctorHasPatientsException: If one or more patients are assigned
        """
        patient_count = self.directory.count_assigned_patients(doctor_id)
        if patient_count > 0:
            logger.warning(f"Deletion of doctor {doctor_id} blocked: {patient_count} patient(s) assigned")
            raise DoctorHasPatientsException(patient_count)
