"""Rollcall: student-record service with account registration and bearer-token auth."""

__version__ = "0.1.0"
