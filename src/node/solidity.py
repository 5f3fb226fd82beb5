"""Typed endpoints served by both solidity and full nodes."""

from typing import Any, Self

import httpx

from src.helpers.config import get_http_timeout, get_soliditynode_url
from src.helpers.logging import get_logger
from src.node.client import NodeClient
from src.node.errors import (
    ContractCallError,
    MissingBlockHeaderError,
    ParameterEncodingError,
    TransactionNotFoundError,
)
from src.node.models import (
    Account,
    Block,
    EnergyEstimate,
    TransactionInfo,
    TriggerConstantContractResponse,
)
from src.node.request_models import (
    EstimateEnergyRequest,
    GetAccountRequest,
    GetBlockByNumRequest,
    GetTransactionInfoByIdRequest,
    TriggerConstantContractRequest,
)
from src.tron.abi import AbiEncodingError, get_padded_param
from src.tron.address import Address, to_wire


logger = get_logger(__name__)


class SolidityNodeClient(NodeClient):
    """Account, block, constant-call and transaction-info endpoints.

    Point ``base_url`` at ``.../walletsolidity`` for confirmed state or at
    ``.../wallet`` for the full node's latest state.

    Example:
        ```python
        async with SolidityNodeClient("https://api.shasta.trongrid.io/walletsolidity") as node:
            block = await node.get_now_block()
            print(block.number)
        ```
    """

    @classmethod
    def from_env(
        cls, url: str | None = None, http_client: httpx.AsyncClient | None = None
    ) -> Self:
        """Build a client from TRON_SOLIDITYNODE_URL and TRON_HTTP_TIMEOUT.

        Raises:
            ValueError: If no URL is given and TRON_SOLIDITYNODE_URL is unset
        """
        return cls(get_soliditynode_url(url), http_client, timeout=get_http_timeout())

    async def get_account(
        self, address: Address | str, *, timeout: float | None = None
    ) -> Account:
        """Look up an account. An unactivated account decodes as an empty Account."""
        path = "/getaccount"
        body = self.build_body(path, GetAccountRequest, address=to_wire(address))
        return await self.post(path, body, Account, timeout=timeout)

    async def get_now_block(self, *, timeout: float | None = None) -> Block:
        """Return the latest block.

        Raises:
            MissingBlockHeaderError: If the node answered without a block header
        """
        path = "/getnowblock"
        block = await self.get(path, Block, timeout=timeout)
        return self._require_block_header(block, "GET", path)

    async def get_block_by_num(self, num: int, *, timeout: float | None = None) -> Block:
        """Return the block at height ``num``.

        The node answers 200 with an empty object for heights it does not
        have, which surfaces here as MissingBlockHeaderError.
        """
        path = "/getblockbynum"
        body = self.build_body(path, GetBlockByNumRequest, num=num)
        block = await self.post(path, body, Block, timeout=timeout)
        return self._require_block_header(block, "POST", path)

    async def trigger_constant_contract(
        self,
        owner_address: Address | str,
        contract_address: Address | str,
        function_selector: str,
        params: list[Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> TriggerConstantContractResponse:
        """Simulate a contract call without committing it to chain state.

        Args:
            owner_address: Caller address
            contract_address: Contract to call
            function_selector: Signature such as ``balanceOf(address)``
            params: Flat ``[type, value, ...]`` argument list
            timeout: Per-call timeout override in seconds

        Returns:
            TriggerConstantContractResponse: Return data in ``constant_result``
            plus the energy the call would use

        Raises:
            ParameterEncodingError: If ``params`` cannot be ABI encoded
            ContractCallError: If the node reports ``result.result == false``
        """
        path = "/triggerconstantcontract"
        body = self.build_body(
            path,
            TriggerConstantContractRequest,
            owner_address=to_wire(owner_address),
            contract_address=to_wire(contract_address),
            function_selector=function_selector,
            parameter=self._encode_params(path, params),
        )
        response = await self.post(path, body, TriggerConstantContractResponse, timeout=timeout)
        self._require_call_success(response, path)
        return response

    async def estimate_energy(
        self,
        owner_address: Address | str,
        contract_address: Address | str,
        function_selector: str,
        params: list[Any] | None = None,
        call_value: int = 0,
        *,
        timeout: float | None = None,
    ) -> EnergyEstimate:
        """Estimate the energy a contract call requires.

        Raises:
            ParameterEncodingError: If ``params`` cannot be ABI encoded
            ContractCallError: If the node reports ``result.result == false``
        """
        path = "/estimateenergy"
        body = self.build_body(
            path,
            EstimateEnergyRequest,
            owner_address=to_wire(owner_address),
            contract_address=to_wire(contract_address),
            function_selector=function_selector,
            parameter=self._encode_params(path, params),
            call_value=call_value,
        )
        response = await self.post(path, body, EnergyEstimate, timeout=timeout)
        self._require_call_success(response, path)
        return response

    async def get_transaction_info_by_id(
        self, tx_id: str, *, timeout: float | None = None
    ) -> TransactionInfo:
        """Return execution info for a transaction.

        Raises:
            TransactionNotFoundError: If the node has no such transaction
        """
        path = "/gettransactioninfobyid"
        body = self.build_body(path, GetTransactionInfoByIdRequest, value=tx_id)
        info = await self.post(path, body, TransactionInfo, timeout=timeout)

        # unknown ids come back as 200 with an empty object
        if not info.id:
            raise TransactionNotFoundError(
                tx_id, method="POST", endpoint=self.base_url + path
            )
        return info

    def _encode_params(self, path: str, params: list[Any] | None) -> str:
        try:
            return get_padded_param(params or []).hex()
        except AbiEncodingError as e:
            raise ParameterEncodingError(
                str(e), method="POST", endpoint=self.base_url + path
            ) from e

    def _require_block_header(self, block: Block, method: str, path: str) -> Block:
        if block.block_header is None:
            raise MissingBlockHeaderError(method=method, endpoint=self.base_url + path)
        return block

    def _require_call_success(
        self, response: TriggerConstantContractResponse | EnergyEstimate, path: str
    ) -> None:
        outcome = response.result
        if outcome.result:
            return

        logger.debug(
            "Contract call rejected by node: code=%s message=%s", outcome.code, outcome.text
        )
        raise ContractCallError(
            outcome.code,
            outcome.message,
            response=response,
            method="POST",
            endpoint=self.base_url + path,
        )


__all__ = ["SolidityNodeClient"]
