"""Tests for the diagnostic logger, the host signal and component wiring."""

from fintrack.diagnostics import DiagnosticLogger
from fintrack.flows import CategoryManager, ContractorManager, EmployeeManager
from fintrack.gateway import GatewayError, InMemoryGateway
from fintrack.host import ReadySignal
from fintrack.models import DiagnosticEventBuilder
from fintrack.orchestrator import create_admin_managers, create_app_components


class TestDiagnosticLogger:
    """Severity decides the log level."""

    def test_levels_follow_severity(self, diagnostics, log_sink):
        diagnostics.log(DiagnosticEventBuilder.records_loaded("categories", 3))
        diagnostics.log(DiagnosticEventBuilder.record_created("employees", "e1"))
        diagnostics.log(DiagnosticEventBuilder.submit_rejected("transactions", "busy"))
        diagnostics.log(DiagnosticEventBuilder.load_failed("contractors", "down"))

        assert [level for level, _, _ in log_sink.records] == ["debug", "info", "warning", "error"]
        assert all(event == "diagnostic_event" for _, event, _ in log_sink.records)

    def test_gateway_error_message_is_logged(self, diagnostics, log_sink):
        error = GatewayError("network down", operation="select", collection="categories")
        diagnostics.log_load_failed("categories", error)

        level, logged = log_sink.of_type("load_failed")[0]
        assert level == "error"
        assert logged["error_message"] == "network down"

    def test_default_logger_is_structlog(self):
        # Must not raise without an injected logger
        DiagnosticLogger().log_records_loaded("categories", 0)


class TestReadySignal:
    """The host hears ready() at most once."""

    def test_fires_once(self, diagnostics, log_sink):
        calls = []
        signal = ReadySignal(notify=lambda: calls.append(1), diagnostics=diagnostics)

        assert signal.fire() is True
        assert signal.fire() is False
        assert signal.fire() is False

        assert calls == [1]
        assert signal.fired is True
        assert len(log_sink.of_type("host_ready")) == 1

    def test_without_host_does_nothing(self, diagnostics, log_sink):
        signal = ReadySignal(diagnostics=diagnostics)

        assert signal.fire() is False
        assert signal.fired is False
        assert log_sink.records == []


class TestWiring:
    """Tests for the component factory."""

    def test_without_storage_uses_memory_gateway(self):
        gateway, diagnostics, sheets_client = create_app_components(use_storage=False)

        assert isinstance(gateway, InMemoryGateway)
        assert isinstance(diagnostics, DiagnosticLogger)
        assert sheets_client is None

    def test_admin_managers_by_collection(self, gateway, diagnostics):
        managers = create_admin_managers(gateway, diagnostics)

        assert list(managers) == ["categories", "employees", "contractors"]
        assert isinstance(managers["categories"], CategoryManager)
        assert isinstance(managers["employees"], EmployeeManager)
        assert isinstance(managers["contractors"], ContractorManager)
