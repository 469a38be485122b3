"""Roster.

Customer-record manager for students, courses and the enrollments that
link them, built around an enrollment lifecycle engine.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
