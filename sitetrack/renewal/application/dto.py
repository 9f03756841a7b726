"""
Renewal Application DTOs
========================
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from sitetrack.renewal.domain import CustomerContract


class CustomerContractRecord(BaseModel):
    """Persisted customer portfolio row."""
    id: str
    contract: str
    company_name: str
    activation_date: Optional[date] = None
    termination_date: Optional[date] = None
    branch: Optional[str] = None
    units: Optional[int] = Field(None, ge=0)

    def to_domain(self) -> CustomerContract:
        """Convert to domain entity."""
        return CustomerContract(**self.model_dump())

    @classmethod
    def from_domain(cls, contract: CustomerContract) -> "CustomerContractRecord":
        """Create from domain entity."""
        return cls(
            id=contract.id,
            contract=contract.contract,
            company_name=contract.company_name,
            activation_date=contract.activation_date,
            termination_date=contract.termination_date,
            branch=contract.branch,
            units=contract.units,
        )
