"""
Renewal Application Layer
=========================
"""

from sitetrack.renewal.application.dto import CustomerContractRecord
from sitetrack.renewal.application.services import RenewalService

__all__ = ["CustomerContractRecord", "RenewalService"]
