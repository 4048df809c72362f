import asyncio
import json
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError

from campuspoints.core.exception_handlers import handle_base_api_exception
from campuspoints.core.exceptions import InsufficientBalanceError, StorageFailureError


def _fake_request():
    request = MagicMock()
    request.method = "POST"
    request.url = "http://testserver/api/v1/wallet/use"
    request.client.host = "127.0.0.1"
    return request


def test_client_error_is_logged_as_warning_with_code():
    exc = InsufficientBalanceError(details={"user_id": 1, "requested": 15, "balance": 10})

    with patch("campuspoints.core.exception_handlers.logger") as logger:
        response = asyncio.run(handle_base_api_exception(_fake_request(), exc))

    assert response.status_code == 400
    assert json.loads(response.body)["error"]["code"] == "BALANCE_001"
    logger.error.assert_not_called()
    message = logger.warning.call_args[0][0]
    assert "[BALANCE_001]" in message
    assert "'requested': 15" in message


def test_storage_failure_is_logged_with_its_cause():
    exc = StorageFailureError("Storage operation could not complete")
    exc.__cause__ = OperationalError("UPDATE point_accounts", {}, Exception("database is locked"))

    with patch("campuspoints.core.exception_handlers.logger") as logger:
        response = asyncio.run(handle_base_api_exception(_fake_request(), exc))

    assert response.status_code == 503
    logger.warning.assert_not_called()
    message = logger.error.call_args[0][0]
    assert "[STORAGE_001]" in message
    assert "cause: OperationalError" in message
