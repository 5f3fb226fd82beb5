"""Pydantic models for node HTTP API responses.

Scalars the node omits when zero default to zero or an empty string. Nested
objects whose absence signals a failure default to None so callers can tell
"absent" from "present but empty".
"""

from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.helpers.parsers import sun_to_trx


class ResponseCode(StrEnum):
    """Broadcast and call response codes reported by the node."""

    SUCCESS = "SUCCESS"
    SIGERROR = "SIGERROR"
    CONTRACT_VALIDATE_ERROR = "CONTRACT_VALIDATE_ERROR"
    CONTRACT_EXE_ERROR = "CONTRACT_EXE_ERROR"
    BANDWITH_ERROR = "BANDWITH_ERROR"  # sic, node spelling
    DUP_TRANSACTION_ERROR = "DUP_TRANSACTION_ERROR"
    TAPOS_ERROR = "TAPOS_ERROR"
    TOO_BIG_TRANSACTION_ERROR = "TOO_BIG_TRANSACTION_ERROR"
    TRANSACTION_EXPIRATION_ERROR = "TRANSACTION_EXPIRATION_ERROR"
    SERVER_BUSY = "SERVER_BUSY"
    NO_CONNECTION = "NO_CONNECTION"
    NOT_ENOUGH_EFFECTIVE_CONNECTION = "NOT_ENOUGH_EFFECTIVE_CONNECTION"
    BLOCK_UNSOLIDIFIED = "BLOCK_UNSOLIDIFIED"
    OTHER_ERROR = "OTHER_ERROR"


class TransactionResult(StrEnum):
    """Contract execution results found in ``receipt.result``."""

    DEFAULT = "DEFAULT"
    SUCCESS = "SUCCESS"
    REVERT = "REVERT"
    BAD_JUMP_DESTINATION = "BAD_JUMP_DESTINATION"
    OUT_OF_MEMORY = "OUT_OF_MEMORY"
    PRECOMPILED_CONTRACT = "PRECOMPILED_CONTRACT"
    STACK_TOO_SMALL = "STACK_TOO_SMALL"
    STACK_TOO_LARGE = "STACK_TOO_LARGE"
    ILLEGAL_OPERATION = "ILLEGAL_OPERATION"
    STACK_OVERFLOW = "STACK_OVERFLOW"
    OUT_OF_ENERGY = "OUT_OF_ENERGY"
    OUT_OF_TIME = "OUT_OF_TIME"
    JVM_STACK_OVER_FLOW = "JVM_STACK_OVER_FLOW"
    UNKNOWN = "UNKNOWN"
    TRANSFER_FAILED = "TRANSFER_FAILED"
    INVALID_CODE = "INVALID_CODE"


class NodeModel(BaseModel):
    """Base for response models: ignore unknown keys, accept field names or aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TransactionModel(NodeModel):
    """Base for the transaction subtree: unknown keys are kept so a decoded
    transaction serializes back to the shape the node built it in.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ABI


class ABIParam(NodeModel):
    indexed: bool = False
    name: str = ""
    type: str = ""


class ABIEntry(NodeModel):
    name: str = ""
    anonymous: bool = False
    constant: bool = False
    payable: bool = False
    state_mutability: str = Field(default="", alias="stateMutability")
    type: str = ""
    inputs: list[ABIParam] = Field(default_factory=list)
    outputs: list[ABIParam] = Field(default_factory=list)


class JSONABI(NodeModel):
    """Contract ABI in the node's ``{"entrys": [...]}`` shape."""

    entrys: list[ABIEntry] = Field(default_factory=list)

    def get_function_signature(self, name: str) -> str:
        """Build the ``name(type1,type2)`` selector for a named entry.

        Raises:
            KeyError: If no entry has that name
        """
        for entry in self.entrys:
            if entry.name == name:
                types = ",".join(param.type for param in entry.inputs)
                return f"{name}({types})"
        msg = f"entry with name {name} not found in abi"
        raise KeyError(msg)


# Transactions


class NewContract(TransactionModel):
    origin_address: str = ""
    contract_address: str = ""
    abi: JSONABI | None = None
    bytecode: str = ""
    call_value: int = 0
    consume_user_resource_percent: int = 0
    name: str = ""
    origin_energy_limit: int = 0
    code_hash: str = ""


class ParameterValue(TransactionModel):
    owner_address: str = ""
    to_address: str = ""
    data: str = ""
    contract_address: str = ""
    amount: int = 0
    new_contract: NewContract | None = None


class Parameter(TransactionModel):
    value: ParameterValue = Field(default_factory=ParameterValue)
    type_url: str = ""


class Contract(TransactionModel):
    parameter: Parameter = Field(default_factory=Parameter)
    type: str = Field(default="", description="Contract type, e.g. TriggerSmartContract")


class RawData(TransactionModel):
    contract: list[Contract] = Field(default_factory=list)
    ref_block_bytes: str = ""
    ref_block_hash: str = ""
    expiration: int = 0
    fee_limit: int = 0
    timestamp: int = 0


class Return(TransactionModel):
    contract_ret: str = Field(
        default="", alias="contractRet", description="Populated in transaction info results"
    )
    ret: str = Field(default="", description="SUCESS (node spelling) or FAILED")


class Transaction(TransactionModel):
    """Unsigned or signed transaction as built by the node."""

    visible: bool = False
    tx_id: str = Field(default="", alias="txID")
    raw_data: RawData = Field(default_factory=RawData)
    raw_data_hex: str = ""
    signature: list[str] = Field(default_factory=list)
    ret: list[Return] = Field(default_factory=list)

    def add_signature(self, signature_hex: str) -> None:
        # reassign so the field counts as set for exclude_unset dumps
        self.signature = [*self.signature, signature_hex]

    def add_signature_bytes(self, signature: bytes) -> None:
        self.add_signature(signature.hex())

    def to_payload(self) -> dict[str, Any]:
        """JSON body for /broadcasttransaction, keeping only keys the node sent."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude={"ret"})


# Accounts


class Key(NodeModel):
    address: str = ""
    weight: int = 0


class Permission(NodeModel):
    type: str = ""
    id: int = Field(default=0, description="Owner id=0, Witness id=1, Active ids start at 2")
    permission_name: str = ""
    threshold: int = 0
    parent_id: int = 0
    operations: str = ""
    keys: list[Key] = Field(default_factory=list)


class AccountResource(NodeModel):
    delegated_frozen_balance_for_energy: int = 0
    acquired_delegated_frozen_balance_for_energy: int = 0
    delegated_frozen_v2_balance_for_energy: int = Field(
        default=0, alias="delegated_frozenV2_balance_for_energy"
    )
    acquired_delegated_frozen_v2_balance_for_energy: int = Field(
        default=0, alias="acquired_delegated_frozenV2_balance_for_energy"
    )
    energy_window_size: int = 0
    energy_window_optimized: bool = False
    energy_usage: int = 0
    latest_consume_time_for_energy: int = 0


class FrozenV2(NodeModel):
    type: str = Field(default="", description="Resource type; empty means BANDWIDTH")
    amount: int = 0


class UnfrozenV2(NodeModel):
    type: str = ""
    unfreeze_amount: int = 0
    unfreeze_expire_time: int = 0


class Vote(NodeModel):
    vote_address: str = ""
    vote_count: int = 0


class AssetEntry(NodeModel):
    key: str = ""
    value: int = 0


class Account(NodeModel):
    """Account as returned by ``/getaccount``; an unknown account decodes as empty."""

    account_name: str = ""
    address: str = ""
    create_time: int = 0
    balance: int = Field(default=0, description="TRX balance in sun")
    delegated_frozen_balance_for_bandwidth: int = 0
    acquired_delegated_frozen_balance_for_bandwidth: int = 0
    delegated_frozen_v2_balance_for_bandwidth: int = Field(
        default=0, alias="delegated_frozenV2_balance_for_bandwidth"
    )
    acquired_delegated_frozen_v2_balance_for_bandwidth: int = Field(
        default=0, alias="acquired_delegated_frozenV2_balance_for_bandwidth"
    )
    account_resource: AccountResource = Field(default_factory=AccountResource)
    frozen_v2: list[FrozenV2] = Field(default_factory=list, alias="frozenV2")
    unfrozen_v2: list[UnfrozenV2] = Field(default_factory=list, alias="unfrozenV2")
    net_usage: int = 0
    free_net_usage: int = 0
    net_window_size: int = 0
    net_window_optimized: bool = False
    votes: list[Vote] = Field(default_factory=list)
    latest_opration_time: int = 0
    latest_consume_time: int = 0
    latest_consume_free_time: int = 0
    is_witness: bool = False
    allowance: int = 0
    latest_withdraw_time: int = 0
    owner_permission: Permission | None = None
    witness_permission: Permission | None = None
    active_permission: list[Permission] = Field(default_factory=list)
    asset_v2: list[AssetEntry] = Field(default_factory=list, alias="assetV2")
    free_asset_net_usage_v2: list[AssetEntry] = Field(
        default_factory=list, alias="free_asset_net_usageV2"
    )
    asset_issued_name: str = ""
    asset_issued_id: str = Field(default="", alias="asset_issued_ID")

    @property
    def exists(self) -> bool:
        return bool(self.address)

    @property
    def balance_trx(self) -> Decimal:
        return sun_to_trx(self.balance) or Decimal(0)


# Blocks


class BlockHeaderRaw(NodeModel):
    timestamp: int = 0
    tx_trie_root: str = Field(default="", alias="txTrieRoot")
    parent_hash: str = Field(default="", alias="parentHash")
    number: int = 0
    witness_id: int = 0
    witness_address: str = ""
    version: int = 0
    account_state_root: str = Field(default="", alias="accountStateRoot")


class BlockHeader(NodeModel):
    raw_data: BlockHeaderRaw | None = None
    witness_signature: str = ""


class Block(NodeModel):
    block_id: str = Field(default="", alias="blockID")
    transactions: list[Transaction] = Field(default_factory=list)
    block_header: BlockHeader | None = None

    @property
    def number(self) -> int:
        if self.block_header is None or self.block_header.raw_data is None:
            return 0
        return self.block_header.raw_data.number


# Contract calls


class CallResult(NodeModel):
    """Outcome marker embedded in trigger and estimate responses."""

    result: bool = False
    code: str = ""
    message: str = Field(default="", description="Often hex encoded UTF-8")

    @property
    def text(self) -> str:
        """``message`` decoded from hex when it is hex, else as-is."""
        try:
            return bytes.fromhex(self.message).decode("utf-8")
        except ValueError:
            return self.message


class TriggerConstantContractResponse(NodeModel):
    result: CallResult = Field(default_factory=CallResult)
    energy_used: int = Field(default=0, description="Including penalty energy")
    energy_penalty: int = 0
    constant_result: list[str] = Field(default_factory=list)
    transaction: Transaction | None = None


class TriggerSmartContractResponse(NodeModel):
    result: CallResult = Field(default_factory=CallResult)
    transaction: Transaction | None = None


class EnergyEstimate(NodeModel):
    result: CallResult = Field(default_factory=CallResult)
    energy_required: int = 0


class EnergyPrices(NodeModel):
    prices: str = Field(
        default="", description="Comma separated timestamp_ms:price_sun history"
    )


class ContractInfo(NodeModel):
    """Deployed contract metadata from ``/getcontract``."""

    origin_address: str = ""
    contract_address: str = ""
    abi: JSONABI | None = None
    bytecode: str = ""
    call_value: int = 0
    consume_user_resource_percent: int = 0
    name: str = ""
    origin_energy_limit: int = 0
    code_hash: str = ""


class DeployContractResponse(Transaction):
    contract_address: str = ""


class BroadcastResponse(NodeModel):
    result: bool = False
    code: str = ""
    tx_id: str = Field(default="", alias="txid")
    message: str = ""


# Transaction info


class ResourceReceipt(NodeModel):
    energy_usage: int = 0
    energy_fee: int = 0
    origin_energy_usage: int = 0
    energy_usage_total: int = 0
    net_usage: int = 0
    net_fee: int = 0
    result: str = ""
    energy_penalty_total: int = 0


class Log(NodeModel):
    address: str = ""
    topics: list[str] = Field(default_factory=list)
    data: str = ""


class CallValueInfo(NodeModel):
    call_value: int = Field(default=0, alias="callValue")
    token_id: str = Field(default="", alias="tokenId")


class InternalTransaction(NodeModel):
    hash: str = ""
    caller_address: str = ""
    transfer_to_address: str = Field(default="", alias="transferTo_address")
    call_value_info: list[CallValueInfo] = Field(default_factory=list, alias="callValueInfo")
    note: str = ""
    rejected: bool = False
    extra: str = ""


class TransactionInfo(NodeModel):
    """Execution info for a confirmed transaction."""

    id: str = ""
    fee: int = Field(default=0, description="Total sun burned by the transaction")
    block_number: int = Field(default=0, alias="blockNumber")
    block_timestamp: int = Field(default=0, alias="blockTimeStamp")
    contract_result: list[str] = Field(default_factory=list, alias="contractResult")
    contract_address: str = ""
    receipt: ResourceReceipt = Field(default_factory=ResourceReceipt)
    log: list[Log] = Field(default_factory=list)
    result: str = Field(default="", description="FAILED on failure, absent on success")
    res_message: str = Field(default="", alias="resMessage")
    withdraw_amount: int = 0
    unfreeze_amount: int = 0
    internal_transactions: list[InternalTransaction] = Field(default_factory=list)
    withdraw_expire_amount: int = 0
    cancel_unfreeze_v2_amount: dict[str, int] = Field(
        default_factory=dict, alias="cancel_unfreezeV2_amount"
    )

    @property
    def failed(self) -> bool:
        return self.result == "FAILED"


__all__ = [
    "ABIEntry",
    "ABIParam",
    "JSONABI",
    "Account",
    "AccountResource",
    "AssetEntry",
    "Block",
    "BlockHeader",
    "BlockHeaderRaw",
    "BroadcastResponse",
    "CallResult",
    "CallValueInfo",
    "Contract",
    "ContractInfo",
    "DeployContractResponse",
    "EnergyEstimate",
    "EnergyPrices",
    "FrozenV2",
    "InternalTransaction",
    "Key",
    "Log",
    "NewContract",
    "NodeModel",
    "Parameter",
    "ParameterValue",
    "Permission",
    "RawData",
    "ResourceReceipt",
    "ResponseCode",
    "Return",
    "Transaction",
    "TransactionInfo",
    "TransactionResult",
    "TriggerConstantContractResponse",
    "TriggerSmartContractResponse",
    "UnfrozenV2",
    "Vote",
]
