from .user import User, UserCreate, UserWithPoints
from .points import (
    PointTransactionEntry,
    LedgerTransactionResponse,
    WalletSummaryResponse,
    PointPack,
)
from .chat import RewardMessageRequest, RewardMessageResponse
from .notes import NotePurchaseResponse
