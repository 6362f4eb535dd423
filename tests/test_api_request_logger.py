"""Tests for API request logger."""

from unittest.mock import MagicMock, patch

import pytest

from nextwave.adapters.api_request_logger import (
    REDACTED,
    build_request_line,
    log_api_request,
    redact_params,
    should_log_requests,
)


class TestShouldLogRequests:
    """Tests for should_log_requests function."""

    def test_when_env_not_set_then_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given NEXTWAVE_LOG_REQUESTS not set, when checking, then returns False."""
        monkeypatch.delenv("NEXTWAVE_LOG_REQUESTS", raising=False)

        assert should_log_requests() is False

    @pytest.mark.parametrize(("value", "expected"), [("true", True), ("True", True), ("1", False)])
    def test_only_true_enables_logging(
        self, monkeypatch: pytest.MonkeyPatch, value: str, expected: bool
    ) -> None:
        """Given NEXTWAVE_LOG_REQUESTS set, when checking, then only 'true' in any case enables it."""
        monkeypatch.setenv("NEXTWAVE_LOG_REQUESTS", value)

        assert should_log_requests() is expected


class TestBuildRequestLine:
    """Tests for the displayed request line."""

    def test_redacts_credentials(self) -> None:
        """Given an appid parameter, when redacting, then its value is hidden."""
        assert redact_params({"appid": "secret", "lat": 47.3}) == {"appid": REDACTED, "lat": 47.3}

    def test_sorts_params(self) -> None:
        """Given unsorted parameters, when building the line, then they are sorted by name."""
        line = build_request_line("https://x/weather", {"lon": 8.5, "lat": 47.3, "appid": "k"})

        assert line == f"https://x/weather?appid={REDACTED}&lat=47.3&lon=8.5"

    def test_appends_to_existing_query(self) -> None:
        """Given a URL with a query string, when building the line, then params are appended."""
        assert build_request_line("https://x/a?b=1", {"c": 2}) == "https://x/a?b=1&c=2"

    def test_no_params_returns_url(self) -> None:
        """Given no parameters, when building the line, then the URL is unchanged."""
        assert build_request_line("https://x/a") == "https://x/a"


class TestLogApiRequest:
    """Tests for log_api_request function."""

    @patch("nextwave.adapters.api_request_logger.should_log_requests")
    @patch("nextwave.adapters.api_request_logger.logger")
    def test_when_logging_disabled_then_does_not_log(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given logging disabled, when logging request, then nothing is logged."""
        mock_should_log.return_value = False

        log_api_request("weather", "https://x/weather", {"appid": "k"})

        mock_logger.info.assert_not_called()

    @patch("nextwave.adapters.api_request_logger.should_log_requests")
    @patch("nextwave.adapters.api_request_logger.logger")
    def test_when_logging_enabled_then_logs_line_with_timeout(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given logging enabled, when logging request, then API name, URL and timeout are logged."""
        mock_should_log.return_value = True

        log_api_request("transport", "https://x/stationboard", {"id": "8503651"}, 30)

        mock_logger.info.assert_called_once_with(
            "[transport] GET https://x/stationboard?id=8503651 (timeout 30s)"
        )

    @patch("nextwave.adapters.api_request_logger.should_log_requests")
    @patch("nextwave.adapters.api_request_logger.logger")
    def test_when_logging_enabled_then_never_logs_api_key(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given an API key parameter, when logging request, then the key is not in the output."""
        mock_should_log.return_value = True

        log_api_request("weather", "https://x/weather", {"appid": "super-secret"})

        logged = mock_logger.info.call_args[0][0]
        assert "super-secret" not in logged
        assert REDACTED in logged
