"""Exchange rate client for currency conversion."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

import requests

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES = ("INR", "USD", "EUR", "GBP", "JPY", "AUD", "CAD")
DEFAULT_CURRENCY = "INR"


class CurrencyConversionError(Exception):
    """Raised when the exchange rate service cannot convert an amount."""


def is_currency_code(code: str) -> bool:
    """Return True if the text looks like an ISO 4217 code (three letters)."""
    return len(code) == 3 and code.isascii() and code.isalpha()


def is_supported_currency(code: str) -> bool:
    """Return True if the converter can handle the currency."""
    return code.upper() in SUPPORTED_CURRENCIES


class ExchangeRateClient:
    """Client for the exchangerate.host conversion endpoint."""

    BASE_URL = "https://api.exchangerate.host"

    def __init__(self, api_key: str | None = None, timeout: float = 10) -> None:
        """Initialize client with an optional access key."""
        self.api_key = api_key
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def _request(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        """Make a GET request and return the decoded JSON body."""
        if self.api_key:
            params = {**params, "access_key": self.api_key}
        url = f"{self.BASE_URL}/{endpoint}"
        response = self._session.request("GET", url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()  # type: ignore[no-any-return]

    def convert(self, from_currency: str, to_currency: str, amount: Decimal) -> Decimal:
        """
        Convert an amount between currencies.

        Args:
            from_currency: ISO code of the source currency
            to_currency: ISO code of the target currency
            amount: Positive amount to convert

        Returns:
            Converted amount

        Raises:
            ValueError: If amount is not positive
            CurrencyConversionError: If the request fails or the reply has no result
        """
        if amount <= 0:
            raise ValueError("Please enter a valid amount")

        params = {
            "from": from_currency.upper(),
            "to": to_currency.upper(),
            "amount": str(amount),
        }

        try:
            data = self._request("convert", params)
        except requests.RequestException as e:
            raise CurrencyConversionError(f"Conversion failed: {e}") from e
        except ValueError as e:
            raise CurrencyConversionError("Conversion failed: invalid response") from e

        logger.debug("Exchange rate response: %s", data)

        result = data.get("result") if isinstance(data, dict) else None
        if result is None or isinstance(result, bool):
            raise CurrencyConversionError("Conversion failed: no result in response")

        try:
            return Decimal(str(result))
        except InvalidOperation as e:
            raise CurrencyConversionError(f"Conversion failed: bad result {result!r}") from e
