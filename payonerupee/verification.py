"""Payment verification: check the gateway signature, count it, hand out a token.

A request moves strictly forward through :class:`VerificationState`; the first
failure ends it in one of the ``REJECTED_*`` states and raises the matching
error. There is no partial success: a storage failure after a good signature
issues no token.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from payonerupee.auth import TokenIssuer
from payonerupee.counter import CounterStore
from payonerupee.errors import AuthenticationError, StorageError, ValidationError
from payonerupee.signature import verify_signature

logger = logging.getLogger(__name__)


class VerificationState(enum.Enum):
    PENDING = "pending"
    VALIDATED = "validated"
    AUTHENTICATED = "authenticated"
    RECORDED = "recorded"
    ISSUED = "issued"
    REJECTED_MISSING_FIELDS = "rejected-missing-fields"
    REJECTED_BAD_SIGNATURE = "rejected-bad-signature"
    REJECTED_STORAGE_ERROR = "rejected-storage-error"


@dataclass
class VerificationResult:
    token: str
    count: int


class Verification:
    """One pass through the state machine, kept for logging and tests."""

    def __init__(self, order_id: Optional[str]):
        self.order_id = order_id
        self.state = VerificationState.PENDING

    def advance(self, state: VerificationState) -> None:
        logger.debug("verification %s: %s -> %s", self.order_id,
                     self.state.value, state.value)
        self.state = state


class PaymentVerifier:
    def __init__(self, secret: str, store: CounterStore, tokens: TokenIssuer):
        self._secret = secret
        self.store = store
        self.tokens = tokens

    async def verify(
        self,
        order_id: Optional[str],
        payment_id: Optional[str],
        signature: Optional[str],
        verification: Optional[Verification] = None,
    ) -> VerificationResult:
        v = verification or Verification(order_id)

        if not order_id or not payment_id or not signature:
            v.advance(VerificationState.REJECTED_MISSING_FIELDS)
            logger.info("verification rejected: missing fields")
            raise ValidationError()
        v.advance(VerificationState.VALIDATED)

        if not verify_signature(self._secret, order_id, payment_id, signature):
            v.advance(VerificationState.REJECTED_BAD_SIGNATURE)
            logger.warning("verification rejected for order %s: "
                           "invalid signature", order_id)
            raise AuthenticationError()
        v.advance(VerificationState.AUTHENTICATED)

        try:
            count = await self.store.increment_and_get()
        except StorageError:
            v.advance(VerificationState.REJECTED_STORAGE_ERROR)
            raise
        v.advance(VerificationState.RECORDED)

        token = self.tokens.issue()
        v.advance(VerificationState.ISSUED)
        logger.info("verified payment for order %s, count is now %d",
                    order_id, count)
        return VerificationResult(token=token, count=count)
