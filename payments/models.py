"""
Payment Verification Models

This module defines Pydantic models for:
- Expected payment criteria
- Structured verification reasons
- Verification verdicts and the details of what was received
"""

from enum import Enum as PyEnum

from pydantic import BaseModel, ConfigDict


class TokenKind(str, PyEnum):
    TRX = "TRX"
    USDT = "USDT"
    USDC = "USDC"
    OTHER = "OTHER"


NATIVE_TOKEN = TokenKind.TRX


class ReasonCode(str, PyEnum):
    transaction_failed = "transaction_failed"
    malformed_transaction = "malformed_transaction"
    unsupported_contract = "unsupported_contract"
    unsupported_call_signature = "unsupported_call_signature"
    malformed_call_data = "malformed_call_data"
    invalid_address_format = "invalid_address_format"
    recipient_mismatch = "recipient_mismatch"
    amount_mismatch = "amount_mismatch"
    token_mismatch = "token_mismatch"
    contract_mismatch = "contract_mismatch"
    self_payment = "self_payment"
    transaction_id_mismatch = "transaction_id_mismatch"


_MESSAGES = {
    ReasonCode.transaction_failed: "transaction not found or failed",
    ReasonCode.malformed_transaction: "malformed transaction record: {actual}",
    ReasonCode.unsupported_contract: "unsupported transaction type: {actual}",
    ReasonCode.unsupported_call_signature: "unsupported call signature: {actual}",
    ReasonCode.malformed_call_data: "malformed call data: {actual}",
    ReasonCode.invalid_address_format: "invalid address format for {field}: {actual}",
    ReasonCode.recipient_mismatch: "recipient address mismatch. expected: {expected}, got: {actual}",
    ReasonCode.amount_mismatch: "amount mismatch. expected: {expected}, got: {actual}",
    ReasonCode.token_mismatch: "token type mismatch. expected: {expected}, got: {actual}",
    ReasonCode.contract_mismatch: "contract address mismatch. expected: {expected}, got: {actual}",
    ReasonCode.self_payment: "self-payment detected",
    ReasonCode.transaction_id_mismatch: "transaction id mismatch. expected: {expected}, got: {actual}",
}


class ExpectedPayment(BaseModel):
    """What a payment request expects to receive."""

    destination_address: str
    amount: str  # smallest units
    token_kind: TokenKind
    contract_address: str | None = None
    transaction_id: str | None = None

    model_config = ConfigDict(frozen=True)


class Reason(BaseModel):
    """One failed check, with optional context for display or filtering."""

    code: ReasonCode
    field: str | None = None
    expected: str | None = None
    actual: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def message(self) -> str:
        return _MESSAGES[self.code].format(
            field=self.field, expected=self.expected, actual=self.actual
        )


class VerificationDetails(BaseModel):
    """What the transaction actually carried, after address normalization."""

    transaction_id: str
    from_address: str
    to_address: str
    amount: str
    token_kind: TokenKind
    contract_address: str | None = None
    timestamp: int | None = None

    model_config = ConfigDict(frozen=True)


class VerificationVerdict(BaseModel):
    valid: bool
    reasons: list[Reason] = []
    details: VerificationDetails | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def messages(self) -> list[str]:
        return [reason.message for reason in self.reasons]

    @property
    def codes(self) -> list[ReasonCode]:
        return [reason.code for reason in self.reasons]
