"""
Core — Constants

Audit action names, pagination limits and numeric precision shared by
every app.

@file core/constants.py
"""

from decimal import Decimal

# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_DELETE = 'DELETE'
AUDIT_ACTION_SOFT_DELETE = 'SOFT_DELETE'
AUDIT_ACTION_LOGIN = 'LOGIN'
AUDIT_ACTION_LOGOUT = 'LOGOUT'
AUDIT_ACTION_LOGIN_FAILED = 'LOGIN_FAILED'

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200

# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

# Money and quantities are stored with two decimals.
TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0.00')
