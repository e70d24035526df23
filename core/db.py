"""
Core — Database helpers

Transaction budget for stock movements. PostgreSQL only: other vendors
(SQLite in tests) rely on the driver defaults.

@file core/db.py
"""

from django.conf import settings
from django.db import connection


def apply_transaction_timeouts() -> None:
    """
    Bound the current transaction: wait at most WAREHOUSE_LOCK_TIMEOUT_MS for
    row locks and WAREHOUSE_STATEMENT_TIMEOUT_MS for any statement. Must be
    called inside an atomic block; SET LOCAL ends with the transaction.
    """
    if connection.vendor != 'postgresql':
        return
    lock_ms = int(settings.WAREHOUSE_LOCK_TIMEOUT_MS)
    statement_ms = int(settings.WAREHOUSE_STATEMENT_TIMEOUT_MS)
    with connection.cursor() as cursor:
        cursor.execute(f"SET LOCAL lock_timeout = '{lock_ms}ms'")
        cursor.execute(f"SET LOCAL statement_timeout = '{statement_ms}ms'")
