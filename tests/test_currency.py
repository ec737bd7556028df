"""Tests for the exchange rate client."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests

from expense_tracker.currency import (
    SUPPORTED_CURRENCIES,
    CurrencyConversionError,
    ExchangeRateClient,
    is_currency_code,
    is_supported_currency,
)


def _client_with_response(
    mock_session_class: MagicMock, **response_kwargs: MagicMock
) -> tuple[ExchangeRateClient, MagicMock]:
    """Build a client whose session returns one canned response."""
    mock_session = MagicMock()
    mock_session_class.return_value = mock_session

    mock_response = MagicMock()
    for name, value in response_kwargs.items():
        setattr(mock_response, name, value)
    mock_session.request.return_value = mock_response

    return ExchangeRateClient(), mock_session


class TestSupportedCurrencies:
    """Tests for the currency list."""

    def test_default_list(self) -> None:
        """Test the offered currencies."""
        assert SUPPORTED_CURRENCIES == ("INR", "USD", "EUR", "GBP", "JPY", "AUD", "CAD")

    def test_is_supported_ignores_case(self) -> None:
        """Test lookups ignore case."""
        assert is_supported_currency("usd") is True
        assert is_supported_currency("XYZ") is False

    def test_currency_code_shape(self) -> None:
        """Test any three-letter code is accepted as a display currency."""
        assert is_currency_code("CHF") is True
        assert is_currency_code("sgd") is True
        assert is_currency_code("US") is False
        assert is_currency_code("12$") is False
        assert is_currency_code("ÄBC") is False


class TestExchangeRateClient:
    """Tests for ExchangeRateClient."""

    def test_init(self) -> None:
        """Test client initialization."""
        client = ExchangeRateClient("secret", timeout=3)

        assert client.api_key == "secret"
        assert client.timeout == 3
        assert client._session.headers["Accept"] == "application/json"

    @patch("expense_tracker.currency.requests.Session")
    def test_convert(self, mock_session_class: MagicMock) -> None:
        """Test a successful conversion."""
        json_mock = MagicMock(return_value={"success": True, "result": 1.2})
        client, session = _client_with_response(mock_session_class, json=json_mock)

        result = client.convert("inr", "usd", Decimal("100"))

        assert result == Decimal("1.2")
        method, url = session.request.call_args.args
        assert method == "GET"
        assert url == "https://api.exchangerate.host/convert"
        assert session.request.call_args.kwargs["params"] == {
            "from": "INR",
            "to": "USD",
            "amount": "100",
        }

    @patch("expense_tracker.currency.requests.Session")
    def test_convert_sends_access_key(self, mock_session_class: MagicMock) -> None:
        """Test the access key is sent when configured."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.request.return_value.json.return_value = {"result": 5}

        ExchangeRateClient("key123").convert("USD", "EUR", Decimal("5"))

        assert mock_session.request.call_args.kwargs["params"]["access_key"] == "key123"

    def test_rejects_non_positive_amount(self) -> None:
        """Test zero and negative amounts are refused before any request."""
        client = ExchangeRateClient()

        with pytest.raises(ValueError, match="valid amount"):
            client.convert("INR", "USD", Decimal("0"))
        with pytest.raises(ValueError):
            client.convert("INR", "USD", Decimal("-1"))

    @patch("expense_tracker.currency.requests.Session")
    def test_missing_result(self, mock_session_class: MagicMock) -> None:
        """Test a reply without a result is a conversion failure."""
        json_mock = MagicMock(return_value={"success": False, "error": {"code": 101}})
        client, _ = _client_with_response(mock_session_class, json=json_mock)

        with pytest.raises(CurrencyConversionError):
            client.convert("INR", "USD", Decimal("10"))

    @patch("expense_tracker.currency.requests.Session")
    def test_non_numeric_result(self, mock_session_class: MagicMock) -> None:
        """Test a non-numeric result is a conversion failure."""
        json_mock = MagicMock(return_value={"result": "n/a"})
        client, _ = _client_with_response(mock_session_class, json=json_mock)

        with pytest.raises(CurrencyConversionError):
            client.convert("INR", "USD", Decimal("10"))

    @patch("expense_tracker.currency.requests.Session")
    def test_http_error(self, mock_session_class: MagicMock) -> None:
        """Test HTTP errors are reported as conversion failures."""
        raise_mock = MagicMock(side_effect=requests.HTTPError("500 Server Error"))
        client, _ = _client_with_response(mock_session_class, raise_for_status=raise_mock)

        with pytest.raises(CurrencyConversionError, match="500"):
            client.convert("INR", "USD", Decimal("10"))

    @patch("expense_tracker.currency.requests.Session")
    def test_connection_error(self, mock_session_class: MagicMock) -> None:
        """Test network failures are reported as conversion failures."""
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session
        mock_session.request.side_effect = requests.ConnectionError("offline")

        with pytest.raises(CurrencyConversionError):
            ExchangeRateClient().convert("INR", "USD", Decimal("10"))

    @patch("expense_tracker.currency.requests.Session")
    def test_invalid_json(self, mock_session_class: MagicMock) -> None:
        """Test a non-JSON body is reported as a conversion failure."""
        json_mock = MagicMock(side_effect=ValueError("No JSON"))
        client, _ = _client_with_response(mock_session_class, json=json_mock)

        with pytest.raises(CurrencyConversionError):
            client.convert("INR", "USD", Decimal("10"))
