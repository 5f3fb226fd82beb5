"""Tests for node response models."""

import pytest

from src.node.models import (
    JSONABI,
    Account,
    Block,
    CallResult,
    ResponseCode,
    Transaction,
    TransactionInfo,
    TriggerConstantContractResponse,
)


class TestJSONABI:
    """Tests for JSONABI."""

    def test_get_function_signature(self) -> None:
        """Test selectors are built from input types in order."""
        abi = JSONABI.model_validate(
            {
                "entrys": [
                    {
                        "name": "transfer",
                        "type": "Function",
                        "inputs": [
                            {"name": "to", "type": "address"},
                            {"name": "value", "type": "uint256"},
                        ],
                        "stateMutability": "Nonpayable",
                    }
                ]
            }
        )

        assert abi.get_function_signature("transfer") == "transfer(address,uint256)"
        assert abi.entrys[0].state_mutability == "Nonpayable"

    def test_get_function_signature_without_inputs(self) -> None:
        """Test an entry without inputs yields empty parentheses."""
        abi = JSONABI.model_validate({"entrys": [{"name": "totalSupply"}]})

        assert abi.get_function_signature("totalSupply") == "totalSupply()"

    def test_get_unknown_function_signature(self) -> None:
        """Test a missing entry raises KeyError."""
        with pytest.raises(KeyError, match="entry with name foo not found in abi"):
            JSONABI().get_function_signature("foo")


class TestCallResult:
    """Tests for CallResult."""

    def test_text_decodes_hex_message(self) -> None:
        """Test hex encoded messages are decoded."""
        result = CallResult(message="536d61727420636f6e7472616374206973206e6f742065786973742e")

        assert result.text == "Smart contract is not exist."

    def test_text_passes_plain_message_through(self) -> None:
        """Test messages that are not hex are returned unchanged."""
        result = CallResult(message="Smart contract is not exist.")

        assert result.text == "Smart contract is not exist."

    def test_missing_result_is_failure(self) -> None:
        """Test an absent result marker never reads as success."""
        response = TriggerConstantContractResponse.model_validate({})

        assert response.result.result is False
        assert response.transaction is None

    def test_response_code_values(self) -> None:
        """Test response codes compare equal to the node's strings."""
        assert ResponseCode.CONTRACT_VALIDATE_ERROR == "CONTRACT_VALIDATE_ERROR"
        assert CallResult(code="SIGERROR").code == ResponseCode.SIGERROR


class TestBlock:
    """Tests for Block."""

    def test_absent_header_is_distinguishable(self) -> None:
        """Test an absent header decodes as None rather than an empty header."""
        assert Block.model_validate({}).block_header is None
        assert Block.model_validate({"block_header": {}}).block_header is not None

    def test_number_defaults_to_zero(self) -> None:
        """Test number is 0 when the header carries no raw data."""
        assert Block.model_validate({"block_header": {}}).number == 0


class TestAccount:
    """Tests for Account."""

    def test_unknown_keys_are_ignored(self) -> None:
        """Test fields the model does not know about do not break decoding."""
        account = Account.model_validate(
            {"address": "TVSTZkvVosqh4YHLwHmmNuqeyn967aE2iv", "brand_new_field": 1}
        )

        assert account.exists

    def test_aliases_and_field_names(self) -> None:
        """Test aliased fields accept both the node key and the Python name."""
        by_alias = Account.model_validate({"frozenV2": [{"type": "ENERGY", "amount": 5}]})
        by_name = Account(frozen_v2=[{"type": "ENERGY", "amount": 5}])

        assert by_alias.frozen_v2 == by_name.frozen_v2
        assert by_alias.frozen_v2[0].amount == 5


class TestTransactionInfo:
    """Tests for TransactionInfo."""

    def test_failed(self) -> None:
        """Test failed reflects the FAILED result marker."""
        info = TransactionInfo.model_validate(
            {
                "id": "abc",
                "result": "FAILED",
                "resMessage": "REVERT opcode executed",
                "receipt": {"result": "REVERT"},
            }
        )

        assert info.failed
        assert info.res_message == "REVERT opcode executed"
        assert info.receipt.result == "REVERT"

    def test_internal_transactions(self) -> None:
        """Test internal transactions keep their camelCase keys."""
        info = TransactionInfo.model_validate(
            {
                "id": "abc",
                "internal_transactions": [
                    {
                        "hash": "01",
                        "caller_address": "41aa",
                        "transferTo_address": "41bb",
                        "callValueInfo": [{"callValue": 7}],
                    }
                ],
            }
        )

        internal = info.internal_transactions[0]
        assert internal.transfer_to_address == "41bb"
        assert internal.call_value_info[0].call_value == 7


class TestTransaction:
    """Tests for Transaction."""

    def test_to_payload_preserves_unknown_keys(self) -> None:
        """Test keys the model does not declare survive a decode/encode cycle."""
        data = {
            "txID": "01",
            "raw_data": {"contract": [], "data": "6d656d6f", "expiration": 1},
            "raw_data_hex": "0a",
            "future_field": {"nested": True},
        }
        tx = Transaction.model_validate(data)

        assert tx.to_payload() == data

    def test_to_payload_omits_ret_and_absent_keys(self) -> None:
        """Test the node's ret marker and unset fields are not sent back."""
        tx = Transaction.model_validate({"txID": "01", "ret": [{"contractRet": "SUCCESS"}]})
        tx.add_signature("ff")

        assert tx.to_payload() == {"txID": "01", "signature": ["ff"]}

    def test_add_signature_bytes(self) -> None:
        """Test raw signatures are appended as hex."""
        tx = Transaction(tx_id="01")
        tx.add_signature_bytes(b"\x01\x02")
        tx.add_signature("0304")

        assert tx.signature == ["0102", "0304"]
