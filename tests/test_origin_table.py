"""Tests for origin table loading and the engine bootstrap."""

from __future__ import annotations

import time

import pytest

from sitetrack.config import Settings, TicketOrigin
from sitetrack.core.exceptions import ConfigurationException, ValidationError
from sitetrack.main import create_engines
from sitetrack.tickets.application import StaticOriginTableProvider, TicketOpenRequest, TicketService
from sitetrack.tickets.domain import DEFAULT_ORIGIN_RULES, OriginTable, OriginTableConfig
from sitetrack.tickets.infrastructure import OriginTableManager

from tests.conftest import utc


def test_default_table_covers_every_origin():
    table = OriginTable.default()
    assert set(table) == set(TicketOrigin)
    assert table[TicketOrigin.DEPT_COMPRAS].sla_days == 10
    assert table[TicketOrigin.DEPT_ALMOXARIFADO].sla_days == 1
    assert table[TicketOrigin.CLIENTE_OBRA].sla_days == 0


def test_table_is_read_only():
    table = OriginTable.default()
    with pytest.raises(TypeError):
        table[TicketOrigin.DEPT_COMPRAS] = table[TicketOrigin.DEPT_FISCAL]


def test_resolve_unknown_origin():
    with pytest.raises(ValidationError):
        OriginTable.default().resolve("DEPT_JURIDICO")


class TestOriginTableManager:
    def test_yaml_overrides_merge_with_defaults(self, tmp_path):
        path = tmp_path / "origins.yaml"
        path.write_text("origins:\n  DEPT_COMPRAS:\n    sla_days: 5\n", encoding="utf-8")

        table = OriginTableManager().load(path)

        assert table[TicketOrigin.DEPT_COMPRAS].sla_days == 5
        assert table[TicketOrigin.DEPT_COMPRAS].sector == "Compras"
        assert table[TicketOrigin.DEPT_FISCAL].sla_days == DEFAULT_ORIGIN_RULES["DEPT_FISCAL"]["sla_days"]

    def test_missing_file_uses_defaults(self, tmp_path):
        table = OriginTableManager().load(tmp_path / "absent.yaml")
        assert len(table) == len(TicketOrigin)

    @pytest.mark.parametrize("content", [
        "origins:\n  DEPT_JURIDICO:\n    sector: Jurídico\n",
        "origins:\n  DEPT_COMPRAS:\n    sla_days: -1\n",
        "origins: [unclosed\n",
        "- just\n- a list\n",
    ])
    def test_invalid_file_raises_configuration_error(self, tmp_path, content):
        path = tmp_path / "origins.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ConfigurationException):
            OriginTableManager().load(path)

    def test_reload_replaces_table_without_touching_old_one(self, tmp_path):
        path = tmp_path / "origins.yaml"
        path.write_text("origins:\n  DEPT_COMPRAS:\n    sla_days: 5\n", encoding="utf-8")
        manager = OriginTableManager()
        first = manager.load(path)

        path.write_text("origins:\n  DEPT_COMPRAS:\n    sla_days: 7\n", encoding="utf-8")
        assert manager.reload() is True

        assert manager.table[TicketOrigin.DEPT_COMPRAS].sla_days == 7
        assert first[TicketOrigin.DEPT_COMPRAS].sla_days == 5

    def test_failed_reload_keeps_previous_table(self, tmp_path):
        path = tmp_path / "origins.yaml"
        path.write_text("origins:\n  DEPT_COMPRAS:\n    sla_days: 5\n", encoding="utf-8")
        manager = OriginTableManager()
        manager.load(path)

        path.write_text("origins:\n  NOPE:\n    sla_days: 1\n", encoding="utf-8")
        assert manager.reload() is False
        assert manager.table[TicketOrigin.DEPT_COMPRAS].sla_days == 5

    def test_table_before_load_raises(self):
        with pytest.raises(RuntimeError):
            OriginTableManager().table


def _cadastro_request() -> TicketOpenRequest:
    return TicketOpenRequest(
        origin="DEPT_CADASTRO", service_order="OS-9", contract="CT-9", company_name="Edifício Sol"
    )


def test_create_engines_uses_configured_table(tmp_path):
    path = tmp_path / "origins.yaml"
    path.write_text("origins:\n  DEPT_CADASTRO:\n    sla_days: 3\n", encoding="utf-8")
    settings = Settings(_env_file=None, origin_table_path=path)

    engines = create_engines(settings, configure_logging=False)
    ticket = engines.tickets.open(_cadastro_request(), utc(2024, 5, 1))
    assert ticket.due_at == utc(2024, 5, 4)

    path.write_text("origins:\n  DEPT_CADASTRO:\n    sla_days: 6\n", encoding="utf-8")
    assert engines.origin_tables.reload() is True

    reopened = engines.tickets.open(_cadastro_request(), utc(2024, 5, 1))
    assert reopened.sla_days == 6
    assert reopened.due_at == utc(2024, 5, 7)
    assert ticket.due_at == utc(2024, 5, 4)

    engines.shutdown()


def test_watched_table_reaches_ticket_engine(tmp_path):
    path = tmp_path / "origins.yaml"
    path.write_text("origins:\n  DEPT_CADASTRO:\n    sla_days: 3\n", encoding="utf-8")
    settings = Settings(_env_file=None, origin_table_path=path, watch_origin_table=True)

    engines = create_engines(settings, configure_logging=False)
    try:
        if engines.origin_tables._observer is None:
            pytest.skip("file watching not available")

        assert engines.tickets.open(_cadastro_request(), utc(2024, 5, 1)).sla_days == 3
        path.write_text("origins:\n  DEPT_CADASTRO:\n    sla_days: 6\n", encoding="utf-8")

        deadline = time.monotonic() + 10
        while time.monotonic() < deadline:
            if engines.origin_tables.table[TicketOrigin.DEPT_CADASTRO].sla_days == 6:
                break
            time.sleep(0.05)
        else:
            pytest.fail("origin table was not reloaded")

        assert engines.tickets.open(_cadastro_request(), utc(2024, 5, 1)).sla_days == 6
    finally:
        engines.shutdown()


def test_static_provider_serves_fixed_table():
    table = OriginTableConfig(origins={"DEPT_FISCAL": {"sla_days": 9}}).freeze()
    service = TicketService(StaticOriginTableProvider(table), Settings(_env_file=None))

    request = TicketOpenRequest(
        origin="DEPT_FISCAL", service_order="OS-1", contract="CT-1", company_name="Residencial Aurora"
    )
    assert service.open(request, utc(2024, 5, 1)).due_at == utc(2024, 5, 10)
    assert service.origin_table is table


def test_settings_reject_unordered_renewal_boundaries():
    with pytest.raises(ValueError):
        Settings(_env_file=None, renewal_boundaries_months=[6, 3])
