"""
Account records, the account directory and the doctor-patient assignment rules.
"""
