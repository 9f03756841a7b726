"""
Renewal Domain Layer
====================

Entities: CustomerContract, RenewalBucket, RenewalStatus
"""

from sitetrack.renewal.domain.entities import CustomerContract, RenewalBucket, RenewalStatus

__all__ = ["CustomerContract", "RenewalBucket", "RenewalStatus"]
