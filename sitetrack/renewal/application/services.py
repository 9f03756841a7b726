"""
Renewal Application Services
============================

Buckets customers by time to contract expiry, using the shared window
classifier with calendar-month boundaries.
"""

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from dateutil.relativedelta import relativedelta

from sitetrack.config import RenewalState, Settings, get_settings
from sitetrack.core.exceptions import ValidationError
from sitetrack.renewal.domain import CustomerContract, RenewalBucket, RenewalStatus
from sitetrack.shared.domain.time_windows import bucket_items
from sitetrack.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


class RenewalService:
    """Service for contract end dates and renewal windows."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def effective_end_date(self, contract: CustomerContract) -> Optional[date]:
        """
        Contract end date.

        The explicit termination date wins; otherwise the activation date
        plus the contract term. None when neither is known.
        """
        if contract.termination_date is not None:
            return contract.termination_date
        if contract.activation_date is not None:
            return contract.activation_date + relativedelta(months=self._settings.contract_term_months)
        return None

    def bucket_contracts(
        self,
        contracts: Iterable[CustomerContract],
        now: Union[date, datetime]
    ) -> List[RenewalBucket]:
        """
        Group contracts into exclusive renewal buckets.

        With the default boundaries the buckets are [0, 3), [3, 6) and
        [6, 12) months. Contracts without an end date, already expired or
        ending later than the last boundary are left out.
        """
        today = _as_date(now)
        months = self._settings.renewal_boundaries_months
        grouped = bucket_items(
            today,
            contracts,
            self.effective_end_date,
            [relativedelta(months=m) for m in months],
        )

        lower_bounds = [0] + list(months[:-1])
        return [
            RenewalBucket(lower_months=lower, upper_months=upper, contracts=tuple(items))
            for lower, upper, items in zip(lower_bounds, months, grouped)
        ]

    def renewal_status(
        self,
        contract: CustomerContract,
        now: Union[date, datetime]
    ) -> RenewalStatus:
        """
        Days left and renewal state of one contract.

        EXPIRING within ``renewal_alert_days``, ATTENTION within
        ``renewal_warning_days``, ACTIVE beyond that.
        """
        end_date = self.effective_end_date(contract)
        if end_date is None:
            return RenewalStatus(end_date=None, days_remaining=None, state=RenewalState.NO_DATE)

        days_remaining = (end_date - _as_date(now)).days
        if days_remaining < 0:
            state = RenewalState.EXPIRED
        elif days_remaining <= self._settings.renewal_alert_days:
            state = RenewalState.EXPIRING
        elif days_remaining <= self._settings.renewal_warning_days:
            state = RenewalState.ATTENTION
        else:
            state = RenewalState.ACTIVE

        return RenewalStatus(end_date=end_date, days_remaining=days_remaining, state=state)

    def renew(
        self,
        contract: CustomerContract,
        new_termination_date: Optional[date]
    ) -> CustomerContract:
        """
        Record a renewal by setting a new termination date.

        Raises:
            ValidationError: If the date is missing or not after activation
        """
        if new_termination_date is None:
            raise ValidationError("New termination date is required")

        if contract.activation_date is not None and new_termination_date <= contract.activation_date:
            raise ValidationError(
                "Termination date must be after the activation date",
                {
                    "activation_date": contract.activation_date.isoformat(),
                    "termination_date": new_termination_date.isoformat(),
                }
            )

        logger.info(
            "Contract renewed",
            extra={"customer_id": contract.id, "termination_date": new_termination_date.isoformat()}
        )
        return replace(contract, termination_date=new_termination_date)

    @staticmethod
    def total_units(contracts: Iterable[CustomerContract]) -> int:
        return sum(c.units or 0 for c in contracts)
