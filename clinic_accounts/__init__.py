"""
Clinic accounts service.

Multi-role account management for the clinical record platform:
- Token-based session authentication
- Role-scoped account administration (SUPER_ADMIN, ADMIN, DOCTOR, PATIENT)
- Doctor-patient assignment integrity
"""
