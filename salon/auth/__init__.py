"""
Authentication module for the salon backend.

This module provides:
- Username/password login with account lockout
- Bearer token issuing and the gateway that checks it
- Operator account management and first admin bootstrap
"""
