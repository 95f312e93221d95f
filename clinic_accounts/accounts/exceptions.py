"""
Account-directory and assignment exceptions.
"""
from ..exceptions import ValidationException, NotFoundException, ConflictException

class InvalidIdentifierException(ValidationException):
    """Exception raised when an identifier is not a well-formed UUID."""
    def __init__(self, field_name: str = "id"):
        super().__init__(detail=f"Invalid {field_name} format")

class AccountNotFoundException(NotFoundException):
    """Exception raised when an id does not resolve to an account of the expected role."""
    def __init__(self, detail: str = "Account not found"):
        super().__init__(detail=detail)

class EmailAlreadyExistsException(ConflictException):
    """Exception raised when email already exists."""
    def __init__(self, detail: str = "Email address already in use"):
        super().__init__(detail=detail)

class DoctorHasPatientsException(ConflictException):
    """Exception raised when deleting a doctor that still has assigned patients."""
    def __init__(self, patient_count: int):
        self.patient_count = patient_count
        super().__init__(
            detail=f"Cannot delete doctor. {patient_count} patient(s) are currently assigned.",
            extra={"patientCount": patient_count},
        )
