"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="sitetrack", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Origin Table ==========
    origin_table_path: Path = Field(
        default=Path("origin_table.yaml"),
        description="Path to the origin -> sector/SLA YAML table"
    )
    watch_origin_table: bool = Field(
        default=False,
        description="Reload the origin table when the YAML file changes"
    )

    # ========== Tickets (pendencias) ==========
    default_due_days: int = Field(
        default=30,
        description="Due window for origins without an SLA",
        ge=1
    )
    due_soon_days: int = Field(
        default=2,
        description="Days before the deadline a ticket counts as due soon",
        ge=1
    )
    critical_window_hours: int = Field(
        default=24,
        description="Hours ahead of the deadline a ticket counts as critical",
        ge=1
    )

    # ========== Implementation ==========
    default_delivery_days: int = Field(
        default=90,
        description="Delivery window when a project has no explicit deadline",
        ge=1
    )
    assisted_operation_days: int = Field(
        default=30,
        description="Length of the assisted-operation window after each interaction",
        ge=1
    )

    # ========== Customer Success ==========
    contract_term_months: int = Field(
        default=36,
        description="Contract term counted from the activation date",
        ge=1
    )
    renewal_boundaries_months: List[int] = Field(
        default=[3, 6, 12],
        description="Renewal bucket boundaries in months"
    )
    renewal_alert_days: int = Field(
        default=90,
        description="Days before the end date a contract counts as expiring",
        ge=1
    )
    renewal_warning_days: int = Field(
        default=180,
        description="Days before the end date a contract needs attention",
        ge=1
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("renewal_boundaries_months")
    @classmethod
    def validate_renewal_boundaries(cls, v: List[int]) -> List[int]:
        """Boundaries must be positive and strictly increasing."""
        if not v:
            raise ValueError("renewal_boundaries_months cannot be empty")
        previous = 0
        for months in v:
            if months <= previous:
                raise ValueError("renewal_boundaries_months must be strictly increasing and positive")
            previous = months
        return v

    @field_validator("renewal_warning_days")
    @classmethod
    def validate_renewal_warning_days(cls, v: int, info: ValidationInfo) -> int:
        """Attention window must not be shorter than the expiring window."""
        alert_days = info.data.get("renewal_alert_days")
        if alert_days is not None and v < alert_days:
            raise ValueError("renewal_warning_days must be at least renewal_alert_days")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# ========== Constants ==========

class TicketOrigin(str, Enum):
    """Where a pendencia comes from. CLIENTE_* are client-side, DEPT_* departmental."""
    CLIENTE_OBRA = "CLIENTE_OBRA"
    CLIENTE_AGENDA = "CLIENTE_AGENDA"
    CLIENTE_LIMPEZA_VEGETACAO = "CLIENTE_LIMPEZA_VEGETACAO"
    CLIENTE_CONTRATACAO_SERVICOS = "CLIENTE_CONTRATACAO_SERVICOS"
    DEPT_COMPRAS = "DEPT_COMPRAS"
    DEPT_CADASTRO = "DEPT_CADASTRO"
    DEPT_ALMOXARIFADO = "DEPT_ALMOXARIFADO"
    DEPT_FATURAMENTO = "DEPT_FATURAMENTO"
    DEPT_CONTAS_RECEBER = "DEPT_CONTAS_RECEBER"
    DEPT_FISCAL = "DEPT_FISCAL"
    DEPT_IMPLANTACAO = "DEPT_IMPLANTACAO"

    @property
    def is_client(self) -> bool:
        return self.value.startswith("CLIENTE_")


class TicketStatus(str, Enum):
    """Ticket lifecycle statuses."""
    OPEN = "ABERTO"
    IN_PROGRESS = "EM_ANDAMENTO"
    CLOSED = "CONCLUIDO"
    CANCELLED = "CANCELADO"

    @property
    def is_terminal(self) -> bool:
        return self in (TicketStatus.CLOSED, TicketStatus.CANCELLED)


class DeadlineState(str, Enum):
    """Deadline classification of a non-terminal ticket."""
    ON_TRACK = "on_track"
    DUE_SOON = "due_soon"
    DUE_TODAY = "due_today"
    OVERDUE = "overdue"


class RenewalState(str, Enum):
    """Renewal status of a customer contract."""
    NO_DATE = "no_date"
    EXPIRED = "expired"
    EXPIRING = "expiring"
    ATTENTION = "attention"
    ACTIVE = "active"


# ========== Lists for validation ==========

VALID_ORIGINS = [origin.value for origin in TicketOrigin]
VALID_STATUSES = [status.value for status in TicketStatus]
TERMINAL_STATUSES = [TicketStatus.CLOSED, TicketStatus.CANCELLED]
