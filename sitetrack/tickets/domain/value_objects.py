"""
Ticket Value Objects
====================

Immutable value objects for the ticket domain.

The origin table (origin -> sector, SLA days) is plain lookup data. It is
parsed from YAML into ``OriginTableConfig`` and then frozen into an
``OriginTable`` that is injected into the ticket service.
"""

from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sitetrack.config import VALID_ORIGINS, DeadlineState, TicketOrigin
from sitetrack.core.exceptions import ValidationError
from sitetrack.shared.domain.time_windows import same_calendar_day


class DeadlineCalculator:
    """
    Pure functions for ticket deadline calculations.

    Stateless utility class: every deadline rule in one place.
    """

    @staticmethod
    def calculate_due_at(
        opened_at: datetime,
        sla_days: int,
        default_due_days: int = 30
    ) -> datetime:
        """
        Calculate the due date of a ticket.

        Origins without an SLA (client tickets, sla_days == 0) get the
        default window instead.
        """
        days = sla_days if sla_days > 0 else default_due_days
        return opened_at + timedelta(days=days)

    @staticmethod
    def classify(
        due_at: datetime,
        current_time: datetime,
        due_soon_days: int = 2
    ) -> DeadlineState:
        """
        Classify a deadline relative to ``current_time``.

        Checked in order: overdue, due today (same calendar day as the
        deadline), due soon (within ``due_soon_days``), on track.
        """
        if current_time > due_at:
            return DeadlineState.OVERDUE

        if same_calendar_day(due_at, current_time):
            return DeadlineState.DUE_TODAY

        if due_at - current_time <= timedelta(days=due_soon_days):
            return DeadlineState.DUE_SOON

        return DeadlineState.ON_TRACK


class OriginRule(BaseModel):
    """Sector and SLA assigned to tickets of one origin."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1, description="Display label")
    sector: str = Field(..., min_length=1, description="Sector the ticket starts in")
    sla_days: int = Field(default=0, ge=0, description="SLA in days, 0 for none")


DEFAULT_ORIGIN_RULES: Dict[str, Dict[str, Union[str, int]]] = {
    TicketOrigin.CLIENTE_OBRA.value: {"label": "Obra", "sector": "Cliente", "sla_days": 0},
    TicketOrigin.CLIENTE_AGENDA.value: {"label": "Agenda do Cliente", "sector": "Cliente", "sla_days": 0},
    TicketOrigin.CLIENTE_LIMPEZA_VEGETACAO.value: {"label": "Limpeza de Vegetação", "sector": "Cliente", "sla_days": 0},
    TicketOrigin.CLIENTE_CONTRATACAO_SERVICOS.value: {"label": "Contratação de Serviços", "sector": "Cliente", "sla_days": 0},
    TicketOrigin.DEPT_COMPRAS.value: {"label": "Compras", "sector": "Compras", "sla_days": 10},
    TicketOrigin.DEPT_CADASTRO.value: {"label": "Cadastro", "sector": "Cadastro", "sla_days": 2},
    TicketOrigin.DEPT_ALMOXARIFADO.value: {"label": "Almoxarifado", "sector": "Almoxarifado", "sla_days": 1},
    TicketOrigin.DEPT_FATURAMENTO.value: {"label": "Faturamento", "sector": "Faturamento", "sla_days": 1},
    TicketOrigin.DEPT_CONTAS_RECEBER.value: {"label": "Contas a Receber", "sector": "Contas a Receber", "sla_days": 4},
    TicketOrigin.DEPT_FISCAL.value: {"label": "Fiscal", "sector": "Fiscal", "sla_days": 2},
    TicketOrigin.DEPT_IMPLANTACAO.value: {"label": "Implantação", "sector": "Implantação", "sla_days": 4},
}


class OriginTableConfig(BaseModel):
    """
    Origin table loaded from YAML.

    Missing origins fall back to the built-in defaults; unknown origin
    codes are rejected.
    """
    origins: Dict[str, OriginRule] = Field(
        default_factory=dict,
        validate_default=True,
        description="Rules keyed by origin code"
    )

    @field_validator("origins", mode="before")
    @classmethod
    def fill_defaults(cls, v: Optional[dict]) -> dict:
        """Reject unknown codes and fill in origins the file leaves out."""
        v = dict(v or {})
        unknown = set(v) - set(VALID_ORIGINS)
        if unknown:
            raise ValueError(f"unknown origin codes: {sorted(unknown)}")

        for origin, defaults in DEFAULT_ORIGIN_RULES.items():
            if origin not in v:
                v[origin] = defaults
            elif isinstance(v[origin], dict):
                v[origin] = {**defaults, **v[origin]}
        return v

    def freeze(self) -> "OriginTable":
        """Build the read-only table handed to the ticket service."""
        return OriginTable({TicketOrigin(code): rule for code, rule in self.origins.items()})


class OriginTable(Mapping[TicketOrigin, OriginRule]):
    """Read-only origin -> rule mapping."""

    def __init__(self, rules: Mapping[TicketOrigin, OriginRule]):
        self._rules = MappingProxyType(dict(rules))

    @classmethod
    def default(cls) -> "OriginTable":
        return OriginTableConfig().freeze()

    def __getitem__(self, origin: TicketOrigin) -> OriginRule:
        return self._rules[origin]

    def __iter__(self) -> Iterator[TicketOrigin]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def resolve(self, origin: Union[TicketOrigin, str, None]) -> tuple[TicketOrigin, OriginRule]:
        """
        Look up an origin code.

        Raises:
            ValidationError: If the origin is missing or not in the table
        """
        if origin is None or origin == "":
            raise ValidationError("Ticket origin is required")

        try:
            code = TicketOrigin(origin)
        except ValueError:
            raise ValidationError(
                f"Unknown ticket origin '{origin}'",
                {"origin": str(origin), "valid_origins": VALID_ORIGINS}
            ) from None

        if code not in self._rules:
            raise ValidationError(f"Origin '{code.value}' has no rule in the origin table")

        return code, self._rules[code]
