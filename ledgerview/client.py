"""
Ledger API Client Module

REST client for the ledger server that owns the journal. Fetches incomes,
taxes, expenses, repayments and asset breakdowns as typed models.
"""

import httpx
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .logging_config import get_logger, log_action
from .models import (
    AssetBalanceResponse,
    ExpenseResponse,
    IncomeResponse,
    RepaymentResponse,
)

logger = get_logger("ledgerview.client")


class LedgerAPIError(Exception):
    """The ledger API was unreachable or answered with an unusable response"""

    def __init__(self, message: str, status_code: Optional[int] = None, path: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.path = path


class LedgerClient:
    """REST client for the ledger API"""

    def __init__(
        self,
        base_url: str = "http://localhost:7500",
        timeout: float = 10.0,
        api_token: Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_token = api_token
        self._client = httpx.Client(timeout=timeout)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def _get(self, path: str) -> Dict[str, Any]:
        start = time.time()
        try:
            response = self._client.get(f"{self.base_url}{path}", headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"Ledger API request to {path} failed: {e}")
            raise LedgerAPIError(f"Ledger API unreachable: {e}", path=path) from e

        latency_ms = (time.time() - start) * 1000
        log_action(logger, "info", f"GET {path} -> {response.status_code}",
                   action="fetch", resource=path, duration_ms=latency_ms)

        if response.status_code != 200:
            logger.warning(f"Ledger API returned {response.status_code} for {path}: {response.text}")
            raise LedgerAPIError(
                f"Ledger API returned {response.status_code}",
                status_code=response.status_code,
                path=path,
            )

        try:
            return response.json()
        except ValueError as e:
            raise LedgerAPIError(f"Ledger API returned invalid JSON: {e}", path=path) from e

    def _fetch(self, path: str, model):
        data = self._get(path)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected payload from {path}: {e}")
            raise LedgerAPIError(f"Unexpected payload from {path}", path=path) from e

    def get_income(self) -> IncomeResponse:
        """Monthly incomes, taxes and yearly income cards"""
        return self._fetch("/api/income", IncomeResponse)

    def get_expense(self) -> ExpenseResponse:
        return self._fetch("/api/expense", ExpenseResponse)

    def get_repayments(self) -> RepaymentResponse:
        return self._fetch("/api/liabilities/repayment", RepaymentResponse)

    def get_asset_balance(self) -> AssetBalanceResponse:
        """Asset breakdowns keyed by account path"""
        return self._fetch("/api/assets/balance", AssetBalanceResponse)

    def health_check(self) -> bool:
        """Check if the ledger API is reachable"""
        try:
            r = self._client.get(f"{self.base_url}/api/ping", headers=self._headers())
            return r.status_code == 200
        except httpx.HTTPError:
            return False

    def close(self):
        """Close the HTTP client"""
        self._client.close()


class StaticLedgerClient(LedgerClient):
    """Serves canned payloads instead of calling the API (demo mode, tests)"""

    def __init__(self, payloads: Dict[str, Dict[str, Any]], **kwargs):
        super().__init__(**kwargs)
        self.payloads = payloads

    def _get(self, path: str) -> Dict[str, Any]:
        if path not in self.payloads:
            raise LedgerAPIError(f"No payload for {path}", status_code=404, path=path)
        return self.payloads[path]

    def health_check(self) -> bool:
        return True
