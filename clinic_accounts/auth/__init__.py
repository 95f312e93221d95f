"""
Authentication module for the clinic accounts service.

This module provides:
- Login (email + password -> session token)
- The access control gate: authenticate (token -> live account) and
  authorize (role membership) as composable FastAPI dependencies
"""
