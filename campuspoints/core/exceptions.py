from fastapi import HTTPException, status
from typing import Optional, Dict, Any

class BaseAPIException(HTTPException):
    """Base exception for API errors"""
    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error": {
                    "code": error_code,
                    "message": message,
                    "details": self.details
                }
            }
        )

    def __str__(self) -> str:  # Ensure str(e) returns the human message
        return self.message

class AuthorizationError(BaseAPIException):
    """Authorization related errors"""
    def __init__(self, message: str = "Access forbidden", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="AUTH_002",
            message=message,
            details=details
        )

class NotFoundError(BaseAPIException):
    """Resource not found errors"""
    def __init__(self, message: str = "Resource not found", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND_001",
            message=message,
            details=details
        )

class ConflictError(BaseAPIException):
    """Resource conflict errors"""
    def __init__(self, message: str = "Resource conflict", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error_code="CONFLICT_001",
            message=message,
            details=details
        )

class InternalServerError(BaseAPIException):
    """Internal server errors"""
    def __init__(self, message: str = "Internal server error", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="INTERNAL_001",
            message=message,
            details=details
        )

class StorageFailureError(BaseAPIException):
    """Storage layer could not complete an atomic operation (safe to retry spend/reward)"""
    def __init__(self, message: str = "Storage unavailable", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="STORAGE_001",
            message=message,
            details=details
        )

# ---------------------------------------------------------------------------
# Points ledger errors
# ---------------------------------------------------------------------------

class AccountNotFoundError(BaseAPIException):
    """User has no points account"""
    def __init__(self, user_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="ACCOUNT_001",
            message="User not found",
            details={"user_id": user_id}
        )

class InvalidAmountError(BaseAPIException):
    """Amount is not a positive integer"""
    def __init__(self, message: str = "Amount must be a positive integer", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="AMOUNT_001",
            message=message,
            details=details
        )

class InsufficientBalanceError(BaseAPIException):
    """Insufficient balance errors"""
    def __init__(self, message: str = "Insufficient balance", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="BALANCE_001",
            message=message,
            details=details
        )

# ---------------------------------------------------------------------------
# Reply reward errors
# ---------------------------------------------------------------------------

class MessageNotFoundError(BaseAPIException):
    """Reward target message does not exist in the given topic"""
    def __init__(self, message_id: int, topic_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="MESSAGE_001",
            message="Message not found",
            details={"message_id": message_id, "topic_id": topic_id}
        )

class RewardNotAllowedError(AuthorizationError):
    """Only the topic's original poster may reward replies"""
    def __init__(self, topic_id: int, user_id: int):
        super().__init__(
            message="Only the topic author can reward replies",
            details={"topic_id": topic_id, "user_id": user_id}
        )

class AlreadyRewardedError(BaseAPIException):
    """Message has already been rewarded by the topic author"""
    def __init__(self, message_id: int):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            error_code="REWARD_001",
            message="Message already rewarded",
            details={"message_id": message_id}
        )
