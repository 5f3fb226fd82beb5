"""Typed endpoints only served by full nodes."""

from typing import Any, Self

import httpx

from src.helpers.config import get_fullnode_url, get_http_timeout
from src.helpers.parsers import parse_latest_energy_price
from src.node.errors import (
    BroadcastError,
    MissingContractABIError,
    ParameterEncodingError,
    TransactionCreationError,
)
from src.node.models import (
    BroadcastResponse,
    ContractInfo,
    DeployContractResponse,
    EnergyPrices,
    Transaction,
    TriggerSmartContractResponse,
)
from src.node.request_models import (
    CreateTransactionRequest,
    DeployContractRequest,
    GetContractRequest,
    TriggerSmartContractRequest,
)
from src.node.solidity import SolidityNodeClient
from src.tron.abi import AbiEncodingError, encode_constructor_args
from src.tron.address import Address, to_wire


class FullNodeClient(SolidityNodeClient):
    """Full-node client: everything a solidity node serves plus transaction building.

    Transactions returned here are unsigned; signing happens outside this
    client and the result goes back through ``broadcast_transaction``.
    """

    @classmethod
    def from_env(
        cls, url: str | None = None, http_client: httpx.AsyncClient | None = None
    ) -> Self:
        """Build a client from TRON_FULLNODE_URL and TRON_HTTP_TIMEOUT.

        Raises:
            ValueError: If no URL is given and TRON_FULLNODE_URL is unset
        """
        return cls(get_fullnode_url(url), http_client, timeout=get_http_timeout())

    async def get_energy_prices(self, *, timeout: float | None = None) -> EnergyPrices:
        """Return the energy unit price history."""
        return await self.get("/getenergyprices", EnergyPrices, timeout=timeout)

    async def get_energy_unit_price(self, *, timeout: float | None = None) -> int:
        """Return the current energy unit price in sun.

        Falls back to DEFAULT_ENERGY_UNIT_PRICE when the node's price list
        cannot be parsed.
        """
        prices = await self.get_energy_prices(timeout=timeout)
        return parse_latest_energy_price(prices.prices)

    async def transfer(
        self,
        owner_address: Address | str,
        to_address: Address | str,
        amount: int,
        *,
        timeout: float | None = None,
    ) -> Transaction:
        """Build an unsigned TRX transfer of ``amount`` sun.

        Raises:
            TransactionCreationError: If the node returned no transaction id
        """
        path = "/createtransaction"
        body = self.build_body(
            path,
            CreateTransactionRequest,
            owner_address=to_wire(owner_address),
            to_address=to_wire(to_address),
            amount=amount,
        )
        tx = await self.post(path, body, Transaction, timeout=timeout)
        if not tx.tx_id:
            raise TransactionCreationError(method="POST", endpoint=self.base_url + path)
        return tx

    async def get_contract(
        self, contract_address: Address | str, *, timeout: float | None = None
    ) -> ContractInfo:
        """Return deployed contract metadata.

        Raises:
            MissingContractABIError: If the node returned no ABI, which is also
                how it answers for addresses that are not contracts
        """
        path = "/getcontract"
        body = self.build_body(path, GetContractRequest, value=to_wire(contract_address))
        info = await self.post(path, body, ContractInfo, timeout=timeout)
        if info.abi is None:
            raise MissingContractABIError(
                to_wire(contract_address), method="POST", endpoint=self.base_url + path
            )
        return info

    async def deploy_contract(
        self,
        owner_address: Address | str,
        contract_name: str,
        abi_json: str,
        bytecode: str,
        origin_energy_limit: int,
        consume_user_resource_percent: int,
        fee_limit: int,
        params: list[Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> DeployContractResponse:
        """Build an unsigned contract deployment.

        ``params`` are the constructor arguments, encoded against the
        constructor entry of ``abi_json``.
        """
        path = "/deploycontract"
        try:
            parameter = encode_constructor_args(abi_json, params).hex()
        except AbiEncodingError as e:
            raise ParameterEncodingError(
                str(e), method="POST", endpoint=self.base_url + path
            ) from e

        body = self.build_body(
            path,
            DeployContractRequest,
            owner_address=to_wire(owner_address),
            abi=abi_json,
            bytecode=bytecode.removeprefix("0x"),
            parameter=parameter or None,
            name=contract_name,
            fee_limit=fee_limit or None,
            consume_user_resource_percent=consume_user_resource_percent or None,
            origin_energy_limit=origin_energy_limit or None,
        )
        return await self.post(path, body, DeployContractResponse, timeout=timeout)

    async def trigger_smart_contract(
        self,
        owner_address: Address | str,
        contract_address: Address | str,
        function_selector: str,
        params: list[Any] | None = None,
        fee_limit: int = 0,
        call_value: int = 0,
        *,
        timeout: float | None = None,
    ) -> TriggerSmartContractResponse:
        """Build an unsigned state-changing contract call."""
        path = "/triggersmartcontract"
        body = self.build_body(
            path,
            TriggerSmartContractRequest,
            owner_address=to_wire(owner_address),
            contract_address=to_wire(contract_address),
            function_selector=function_selector,
            parameter=self._encode_params(path, params),
            fee_limit=fee_limit,
            call_value=call_value,
        )
        return await self.post(path, body, TriggerSmartContractResponse, timeout=timeout)

    async def broadcast_transaction(
        self, tx: Transaction, *, timeout: float | None = None
    ) -> BroadcastResponse:
        """Submit a signed transaction.

        Raises:
            ValueError: If the transaction has no id or no signature
            BroadcastError: If the node rejects the transaction
        """
        if not tx.tx_id:
            msg = "empty transaction ID in request"
            raise ValueError(msg)
        if not tx.signature:
            msg = "no signatures"
            raise ValueError(msg)

        path = "/broadcasttransaction"
        response = await self.post(path, tx.to_payload(), BroadcastResponse, timeout=timeout)
        if not response.result:
            raise BroadcastError(
                response.code,
                response.message,
                response=response,
                method="POST",
                endpoint=self.base_url + path,
            )
        return response


__all__ = ["FullNodeClient"]
