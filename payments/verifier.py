"""
Transaction Verifier

This module decides whether a fetched transaction satisfies a payment request.
A verification runs in one pass:
- classify the contract payload (native transfer or token call)
- extract sender, recipient, amount, token kind and contract
- normalize every address to the checksummed text form
- compare against the expected payment, collecting every mismatch

Every path returns a VerificationVerdict. Codec and decoder errors become
reasons; they are never raised to the caller.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, assert_never

import structlog

from core.dependencies import get_settings
from core.logging import BusinessEvents
from core.settings import Settings
from payments.calldata import CallDataDecoder
from payments.errors import (
    MalformedCallData,
    MalformedTransaction,
    UnsupportedCallSignature,
)
from payments.models import (
    NATIVE_TOKEN,
    ExpectedPayment,
    Reason,
    ReasonCode,
    TokenKind,
    VerificationDetails,
    VerificationVerdict,
)
from payments.records import (
    NativeTransfer,
    TokenCall,
    TransactionRecord,
    UnsupportedContract,
    parse_transaction,
)
from payments.tokens import TokenRegistry
from payments.tron_address import AddressCodec

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _Transfer:
    """Fields pulled out of a contract payload, before normalization."""

    from_address: str
    to_address: str
    amount: int
    token_kind: TokenKind
    contract_address: str | None


class TransactionVerifier:
    def __init__(
        self,
        registry: TokenRegistry,
        codec: AddressCodec | None = None,
        decoder: CallDataDecoder | None = None,
    ):
        """
        Initialize TransactionVerifier.

        Args:
            registry: Known token contracts for this network
            codec: Address codec; defaults to the registry's codec
            decoder: Call-data decoder; defaults to a lenient decoder for the codec's prefix
        """
        self.registry = registry
        self.codec = codec or registry.codec
        self.decoder = decoder or CallDataDecoder(address_prefix=self.codec.hex_prefix)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TransactionVerifier":
        registry = TokenRegistry.from_settings(settings)
        decoder = CallDataDecoder(
            address_prefix=registry.codec.hex_prefix,
            strict_padding=settings.STRICT_CALLDATA_PADDING,
        )
        return cls(registry, decoder=decoder)

    def verify(
        self, record: TransactionRecord, expected: ExpectedPayment
    ) -> VerificationVerdict:
        log.info(
            BusinessEvents.VERIFICATION_STARTED,
            transaction_id=record.transaction_id,
            token_kind=expected.token_kind.value,
            expected_amount=expected.amount,
        )

        if not record.success:
            return self._reject(record, Reason(code=ReasonCode.transaction_failed))

        extracted = self._extract(record)
        if isinstance(extracted, Reason):
            return self._reject(record, extracted)

        reasons: list[Reason] = []
        from_address = self._normalize("sender", extracted.from_address, reasons)
        to_address = self._normalize("recipient", extracted.to_address, reasons)
        destination = self._normalize(
            "expected recipient", expected.destination_address, reasons
        )
        amount = str(extracted.amount)

        if to_address.lower() != destination.lower():
            reasons.append(
                Reason(
                    code=ReasonCode.recipient_mismatch,
                    expected=destination,
                    actual=to_address,
                )
            )

        if amount != expected.amount:
            reasons.append(
                Reason(
                    code=ReasonCode.amount_mismatch,
                    expected=expected.amount,
                    actual=amount,
                )
            )

        if extracted.token_kind != expected.token_kind:
            reasons.append(
                Reason(
                    code=ReasonCode.token_mismatch,
                    expected=expected.token_kind.value,
                    actual=extracted.token_kind.value,
                )
            )

        if (
            expected.contract_address
            and extracted.contract_address != expected.contract_address
        ):
            reasons.append(
                Reason(
                    code=ReasonCode.contract_mismatch,
                    expected=expected.contract_address,
                    actual=extracted.contract_address,
                )
            )

        if from_address.lower() == destination.lower():
            reasons.append(Reason(code=ReasonCode.self_payment))

        if (
            expected.transaction_id is not None
            and record.transaction_id != expected.transaction_id
        ):
            reasons.append(
                Reason(
                    code=ReasonCode.transaction_id_mismatch,
                    expected=expected.transaction_id,
                    actual=record.transaction_id,
                )
            )

        details = VerificationDetails(
            transaction_id=record.transaction_id,
            from_address=from_address,
            to_address=to_address,
            amount=amount,
            token_kind=extracted.token_kind,
            contract_address=extracted.contract_address,
            timestamp=record.timestamp,
        )
        verdict = VerificationVerdict(
            valid=not reasons,
            reasons=list(dict.fromkeys(reasons)),
            details=details,
        )

        if verdict.valid:
            log.info(
                BusinessEvents.VERIFICATION_PASSED,
                transaction_id=record.transaction_id,
                from_address=from_address,
                amount=amount,
                token_kind=extracted.token_kind.value,
            )
        else:
            log.warning(
                BusinessEvents.VERIFICATION_FAILED,
                transaction_id=record.transaction_id,
                reasons=[code.value for code in verdict.codes],
            )
        return verdict

    def verify_document(
        self, document: Mapping[str, Any] | None, expected: ExpectedPayment
    ) -> VerificationVerdict:
        """Parse a raw ledger document and verify it."""
        try:
            record = parse_transaction(document)
        except MalformedTransaction as e:
            log.warning(BusinessEvents.EXTRACTION_FAILED, error=str(e))
            return VerificationVerdict(
                valid=False,
                reasons=[
                    Reason(code=ReasonCode.malformed_transaction, actual=str(e))
                ],
            )
        return self.verify(record, expected)

    def _extract(self, record: TransactionRecord) -> _Transfer | Reason:
        contract = record.contract
        match contract:
            case NativeTransfer():
                return _Transfer(
                    from_address=contract.owner_address,
                    to_address=contract.to_address,
                    amount=contract.amount,
                    token_kind=NATIVE_TOKEN,
                    contract_address=None,
                )
            case TokenCall():
                try:
                    decoded = self.decoder.decode_transfer_call(contract.call_data)
                except UnsupportedCallSignature:
                    selector = contract.call_data.lower().removeprefix("0x")[:8]
                    return Reason(
                        code=ReasonCode.unsupported_call_signature,
                        actual=selector or None,
                    )
                except MalformedCallData as e:
                    return Reason(code=ReasonCode.malformed_call_data, actual=str(e))
                return _Transfer(
                    from_address=contract.owner_address,
                    to_address=decoded.to_address_hex,
                    amount=decoded.amount,
                    token_kind=self.registry.token_kind_for(contract.contract_address),
                    contract_address=contract.contract_address,
                )
            case UnsupportedContract():
                return Reason(
                    code=ReasonCode.unsupported_contract,
                    actual=contract.contract_type,
                )
            case _:
                assert_never(contract)

    def _normalize(self, field: str, address: str, reasons: list[Reason]) -> str:
        normalized = self.codec.normalize(address)
        if normalized is None:
            log.warning(BusinessEvents.ADDRESS_REJECTED, field=field, address=address)
            reasons.append(
                Reason(
                    code=ReasonCode.invalid_address_format,
                    field=field,
                    actual=address,
                )
            )
            return address
        return normalized

    def _reject(self, record: TransactionRecord, reason: Reason) -> VerificationVerdict:
        log.warning(
            BusinessEvents.EXTRACTION_FAILED,
            transaction_id=record.transaction_id,
            reason=reason.code.value,
        )
        return VerificationVerdict(valid=False, reasons=[reason])


def get_verifier() -> TransactionVerifier:
    """Verifier configured from the current application settings."""
    return TransactionVerifier.from_settings(get_settings())


def verify(
    record: TransactionRecord,
    expected: ExpectedPayment,
    verifier: TransactionVerifier | None = None,
) -> VerificationVerdict:
    return (verifier or get_verifier()).verify(record, expected)
