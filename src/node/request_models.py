"""Pydantic models for node HTTP API request bodies.

Request bodies are frozen and built fresh for every call. Fields left as None
are dropped from the serialized body.
"""

from pydantic import BaseModel, ConfigDict, Field


class NodeRequest(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(frozen=True)


class GetAccountRequest(NodeRequest):
    address: str = Field(..., description="Account address")
    visible: bool = Field(default=True, description="Address is base58check encoded")


class GetBlockByNumRequest(NodeRequest):
    num: int = Field(..., ge=0, le=2**31 - 1, description="Block height, int32 on the node")


class GetTransactionInfoByIdRequest(NodeRequest):
    value: str = Field(..., description="Transaction hash, i.e. transaction id")


class ConstantContractRequest(NodeRequest):
    """Body shared by /triggerconstantcontract and /estimateenergy."""

    owner_address: str = Field(..., description="Caller address")
    contract_address: str = Field(..., description="Smart contract address")
    function_selector: str = Field(..., min_length=1, description="e.g. balanceOf(address)")
    parameter: str = Field(default="", description="Hex of the ABI encoded arguments")
    data: str = ""
    call_value: int = Field(default=0, description="TRX sent with the call, in sun")
    call_token_value: int = 0
    token_id: int = 0
    visible: bool = True


class TriggerConstantContractRequest(ConstantContractRequest):
    pass


class EstimateEnergyRequest(ConstantContractRequest):
    pass


class TriggerSmartContractRequest(ConstantContractRequest):
    fee_limit: int = Field(default=0, description="Maximum TRX burned, in sun")
    permission_id: int = 0


class CreateTransactionRequest(NodeRequest):
    owner_address: str
    to_address: str
    amount: int = Field(..., gt=0, description="Amount in sun")
    visible: bool = True


class GetContractRequest(NodeRequest):
    value: str = Field(..., description="Contract address")
    visible: bool = True


class DeployContractRequest(NodeRequest):
    owner_address: str
    abi: str | None = None
    bytecode: str | None = None
    parameter: str | None = None
    name: str | None = None
    call_value: int | None = None
    fee_limit: int | None = None
    consume_user_resource_percent: int | None = None
    origin_energy_limit: int | None = None
    visible: bool = True


__all__ = [
    "ConstantContractRequest",
    "CreateTransactionRequest",
    "DeployContractRequest",
    "EstimateEnergyRequest",
    "GetAccountRequest",
    "GetBlockByNumRequest",
    "GetContractRequest",
    "GetTransactionInfoByIdRequest",
    "NodeRequest",
    "TriggerConstantContractRequest",
    "TriggerSmartContractRequest",
]
