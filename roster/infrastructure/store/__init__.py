# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Remote enrollment store.

Components:
- EnrollmentStore: Abstract CRUD boundary used by the engine
- PostgrestEnrollmentStore: httpx client for a PostgREST/Supabase endpoint
"""

from roster.infrastructure.store.base import (
    EnrollmentStore,
    StoreError,
    StoreUnavailableError,
)
from roster.infrastructure.store.postgrest import PostgrestEnrollmentStore

__all__ = [
    "EnrollmentStore",
    "StoreError",
    "StoreUnavailableError",
    "PostgrestEnrollmentStore",
]
