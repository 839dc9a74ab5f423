"""
dashboard/api.py
----------------
Thin `requests` wrapper around the transaction endpoints.
"""

from contextlib import contextmanager
from typing import List, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from config import settings
from schemas import TransactionResponse
from utils.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Transport failure or non-2xx answer from the API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransactionApi:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs):
        url = self.base_url + path
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise ApiError(f"Connection failed: {exc}") from exc

        if not response.ok:
            raise ApiError(_error_message(response), status_code=response.status_code)
        return response

    def health(self) -> bool:
        return self._request("GET", "/health").text == "OK"

    def list_transactions(self) -> List[TransactionResponse]:
        response = self._request("GET", "/transactions")
        with _unexpected_body(response):
            data = response.json()
            return [TransactionResponse.model_validate(t) for t in data["transactions"]]

    def create_transaction(self, payload: dict):
        """POST a transaction; returns ``(message, transaction)``."""
        response = self._request("POST", "/transactions", json=payload)
        with _unexpected_body(response):
            data = response.json()
            return data["message"], TransactionResponse.model_validate(data["transaction"])

    def delete_transaction(self, transaction_id: int) -> str:
        response = self._request("DELETE", f"/transactions/{transaction_id}")
        with _unexpected_body(response):
            return response.json()["message"]


@contextmanager
def _unexpected_body(response):
    """Turn an undecodable or malformed 2xx body into an ApiError."""
    try:
        yield
    except (ValueError, KeyError, TypeError, PydanticValidationError) as exc:
        logger.error("Unexpected response body: %s", exc)
        raise ApiError(f"Unexpected response: {exc}", status_code=response.status_code) from exc


def _error_message(response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or f"HTTP {response.status_code}"
    return f"HTTP {response.status_code}"
