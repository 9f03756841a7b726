"""
Timeline Module
===============

Bounded context for a project's implementation schedule: resolves the
start/deadline window and reports elapsed time, remaining time and overdue
state.
"""

__version__ = "1.0.0"
