"""
Tests for the ledger API client
"""

import pytest
from decimal import Decimal
from unittest.mock import Mock, patch
import httpx

from ledgerview.client import LedgerAPIError, LedgerClient, StaticLedgerClient


def response(status_code=200, payload=None):
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.text = "error" if status_code != 200 else ""
    mock_response.json.return_value = payload
    return mock_response


EXPENSE_PAYLOAD = {
    "expenses": [
        {
            "id": "1",
            "date": "2024-01-03T00:00:00Z",
            "payee": "Grocer",
            "account": "Expenses:Food",
            "commodity": "INR",
            "quantity": "200",
            "amount": "200",
        }
    ]
}


class TestLedgerClient:
    """Test LedgerClient against a mocked transport"""

    def setup_method(self):
        """Set up test fixtures"""
        self.client = LedgerClient(base_url="http://ledger.test/", timeout=2.0)

    def teardown_method(self):
        self.client.close()

    @patch('httpx.Client.get')
    def test_get_expense(self, mock_get):
        """Test successful fetch and parsing"""
        mock_get.return_value = response(payload=EXPENSE_PAYLOAD)

        result = self.client.get_expense()

        assert mock_get.call_args[0][0] == "http://ledger.test/api/expense"
        assert len(result.expenses) == 1
        posting = result.expenses[0]
        assert posting.amount == Decimal('200')
        assert posting.date.isoformat() == "2024-01-03"

    @patch('httpx.Client.get')
    def test_asset_balance(self, mock_get):
        mock_get.return_value = response(payload={
            "asset_breakdowns": {
                "Assets:Bank": {"group": "Assets:Bank", "investment_amount": "10", "xirr": "1.5"},
            }
        })

        result = self.client.get_asset_balance()

        assert mock_get.call_args[0][0] == "http://ledger.test/api/assets/balance"
        assert result.asset_breakdowns["Assets:Bank"].investment_amount == Decimal('10')
        assert result.asset_breakdowns["Assets:Bank"].gain_amount == Decimal('0')

    @patch('httpx.Client.get')
    def test_bearer_token(self, mock_get):
        mock_get.return_value = response(payload={"repayments": []})
        client = LedgerClient(api_token="secret")

        client.get_repayments()

        assert mock_get.call_args[1]["headers"]["Authorization"] == "Bearer secret"
        client.close()

    @patch('httpx.Client.get')
    def test_no_token_no_header(self, mock_get):
        mock_get.return_value = response(payload={"repayments": []})
        self.client.get_repayments()
        assert "Authorization" not in mock_get.call_args[1]["headers"]

    @patch('httpx.Client.get')
    def test_http_error_status(self, mock_get):
        """Test non-200 responses raise LedgerAPIError"""
        mock_get.return_value = response(status_code=500)

        with pytest.raises(LedgerAPIError) as exc_info:
            self.client.get_income()

        assert exc_info.value.status_code == 500
        assert exc_info.value.path == "/api/income"

    @patch('httpx.Client.get')
    def test_connection_error(self, mock_get):
        """Test transport failures raise LedgerAPIError"""
        mock_get.side_effect = httpx.ConnectError("Connection failed")

        with pytest.raises(LedgerAPIError) as exc_info:
            self.client.get_income()

        assert exc_info.value.status_code is None

    @patch('httpx.Client.get')
    def test_invalid_json(self, mock_get):
        mock_response = response()
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = mock_response

        with pytest.raises(LedgerAPIError, match="invalid JSON"):
            self.client.get_expense()

    @patch('httpx.Client.get')
    def test_unexpected_payload(self, mock_get):
        mock_get.return_value = response(payload={"expenses": [{"payee": "no account"}]})

        with pytest.raises(LedgerAPIError, match="Unexpected payload"):
            self.client.get_expense()

    @patch('httpx.Client.get')
    def test_health_check(self, mock_get):
        mock_get.return_value = response()
        assert self.client.health_check() is True
        assert mock_get.call_args[0][0] == "http://ledger.test/api/ping"

        mock_get.side_effect = httpx.ConnectError("down")
        assert self.client.health_check() is False


class TestStaticLedgerClient:
    """Test the canned payload client"""

    def test_serves_payloads(self):
        client = StaticLedgerClient({"/api/expense": EXPENSE_PAYLOAD})
        assert client.get_expense().expenses[0].payee == "Grocer"
        assert client.health_check() is True

    def test_missing_payload(self):
        client = StaticLedgerClient({})
        with pytest.raises(LedgerAPIError) as exc_info:
            client.get_income()
        assert exc_info.value.status_code == 404
