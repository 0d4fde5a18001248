"""Shared test fixtures for install-reporter tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from install_reporter.core.models import DeviceConfig, OSInfo, ReportContext
from install_reporter.core.reporter import Reporter
from install_reporter.data.logs import ErrorHistory
from install_reporter.data.settings import SettingsDB


@pytest.fixture
def mock_os_info() -> OSInfo:
    """OSInfo whose fields are named after themselves."""
    return OSInfo(
        distro="distro",
        release="release",
        codename="codename",
        platform="platform",
        kernel="kernel",
        arch="arch",
        build="build",
        servicepack="servicepack",
    )


@pytest.fixture
def os_info_service(mock_os_info) -> MagicMock:
    service = MagicMock()
    service.os_info = AsyncMock(return_value=mock_os_info)
    return service


@pytest.fixture
def empty_context() -> ReportContext:
    """No device, no OS, no overrides."""
    return ReportContext()


@pytest.fixture
def bacon_context() -> ReportContext:
    return ReportContext(
        config=DeviceConfig(codename="bacon", name="Oneplus One"),
        os_name="Ubuntu Touch",
        environment_label="Linux",
        package_label="snap",
    )


@pytest.fixture
def error_history() -> ErrorHistory:
    return ErrorHistory()


@pytest.fixture
def log_store() -> MagicMock:
    store = MagicMock()
    store.get = AsyncMock(return_value="log content")
    return store


@pytest.fixture
def prompt_service() -> MagicMock:
    service = MagicMock()
    service.prompt = AsyncMock(return_value=None)
    return service


@pytest.fixture
def backend() -> MagicMock:
    client = MagicMock()
    client.smart_run = AsyncMock(return_value=None)
    return client


@pytest.fixture
def reporter(
    empty_context,
    log_store,
    error_history,
    prompt_service,
    os_info_service,
    backend,
) -> Reporter:
    """Reporter wired to mocks, with an empty installer context."""
    return Reporter(
        context=empty_context,
        log_store=log_store,
        error_tracker=error_history,
        settings=MagicMock(),
        prompt_service=prompt_service,
        os_info_service=os_info_service,
        backend=backend,
        issue_tracker=MagicMock(),
        anonymous_token="anon-token",
    )


@pytest.fixture
def temp_settings(tmp_path):
    """SettingsDB with a temporary SQLite database."""
    db_path = str(tmp_path / "settings.db")
    store = SettingsDB(db_path=db_path)
    yield store
    store.close()
