"""
Transaction Records

Typed view of a transaction as reported by the ledger-indexing service. The
contract payload is a tagged union; consumers ``match`` on it exhaustively.

``parse_transaction`` validates the raw ``gettransactionbyid`` JSON document
into a ``TransactionRecord``. Fetching that document is the caller's job.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from payments.errors import MalformedTransaction

SUCCESS_RESULT = "SUCCESS"
TRANSFER_CONTRACT = "TransferContract"
TRIGGER_SMART_CONTRACT = "TriggerSmartContract"


@dataclass(frozen=True)
class NativeTransfer:
    owner_address: str
    to_address: str
    amount: int


@dataclass(frozen=True)
class TokenCall:
    owner_address: str
    contract_address: str
    call_data: str


@dataclass(frozen=True)
class UnsupportedContract:
    contract_type: str | None


Contract = NativeTransfer | TokenCall | UnsupportedContract


@dataclass(frozen=True)
class TransactionRecord:
    transaction_id: str
    success: bool
    contract: Contract
    timestamp: int | None = None


# Raw document shapes


class _RawResult(BaseModel):
    contract_ret: str | None = Field(default=None, alias="contractRet")


class _RawParameter(BaseModel):
    value: dict[str, Any] = {}


class _RawContract(BaseModel):
    type: str | None = None
    parameter: _RawParameter = _RawParameter()


class _RawData(BaseModel):
    contract: list[_RawContract] = []
    timestamp: int | None = None


class _RawTransaction(BaseModel):
    transaction_id: str = Field(default="", alias="txID")
    ret: list[_RawResult] = []
    raw_data: _RawData = _RawData()


class _TransferValue(BaseModel):
    owner_address: str
    to_address: str
    amount: int = Field(ge=0, strict=True)


class _TriggerValue(BaseModel):
    owner_address: str
    contract_address: str
    data: str = ""


def _parse_contract(raw: _RawContract) -> Contract:
    value = raw.parameter.value
    if raw.type == TRANSFER_CONTRACT:
        transfer = _TransferValue.model_validate(value)
        return NativeTransfer(
            owner_address=transfer.owner_address,
            to_address=transfer.to_address,
            amount=transfer.amount,
        )
    if raw.type == TRIGGER_SMART_CONTRACT:
        trigger = _TriggerValue.model_validate(value)
        return TokenCall(
            owner_address=trigger.owner_address,
            contract_address=trigger.contract_address,
            call_data=trigger.data,
        )
    return UnsupportedContract(contract_type=raw.type)


def parse_transaction(document: Mapping[str, Any] | None) -> TransactionRecord:
    """
    Build a TransactionRecord from a raw ledger document.

    An empty document (transaction not found) yields an unsuccessful record.
    The result is read before the contract payload, so an unsuccessful
    transaction never fails on an incomplete payload. Only the first contract
    entry is considered.

    Raises:
        MalformedTransaction: the document does not have the expected shape
    """
    if not document:
        return TransactionRecord(
            transaction_id="",
            success=False,
            contract=UnsupportedContract(contract_type=None),
        )

    try:
        raw = _RawTransaction.model_validate(document)
    except ValidationError as e:
        raise MalformedTransaction(str(e)) from e

    contracts = raw.raw_data.contract
    success = bool(raw.ret) and raw.ret[0].contract_ret == SUCCESS_RESULT
    if not success:
        return TransactionRecord(
            transaction_id=raw.transaction_id,
            success=False,
            contract=UnsupportedContract(
                contract_type=contracts[0].type if contracts else None
            ),
            timestamp=raw.raw_data.timestamp,
        )

    try:
        contract = (
            _parse_contract(contracts[0])
            if contracts
            else UnsupportedContract(contract_type=None)
        )
    except ValidationError as e:
        raise MalformedTransaction(str(e)) from e

    return TransactionRecord(
        transaction_id=raw.transaction_id,
        success=True,
        contract=contract,
        timestamp=raw.raw_data.timestamp,
    )
