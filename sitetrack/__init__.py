"""
Sitetrack
=========

Temporal and state core of the installation-company process tracker.

Clean Architecture Layers (per bounded context):
- Application: Services and DTOs
- Domain: Entities and value objects
- Infrastructure: Origin table loading

All engines are synchronous and work on immutable snapshots; the caller
supplies ``now`` and persists whatever snapshot an operation returns.
"""

__version__ = "1.0.0"
