from typing import Any, Dict, List, NamedTuple

import orjson
from eth_abi.exceptions import DecodingError
from eth_utils import encode_hex, function_abi_to_4byte_selector
from web3 import Web3

from abi.governance_action_abi import GOVERNANCE_ACTION_ABI
from abi.proposal_factory_abi import PROPOSAL_FACTORY_ABI
from utils.formatter_utils import to_bytes_data, to_hex_data
from utils.logger_utils import get_logger

logger = get_logger("Web3 Utils")

# Keep all ABIs in one dict so they can be processed together
ALL_ABIS = {
    "GOVERNANCE_ACTION": GOVERNANCE_ACTION_ABI,
    "PROPOSAL_FACTORY": PROPOSAL_FACTORY_ABI,
}

# Offline instance: only used for ABI work, never for RPC calls
w3 = Web3()


class DecodedCall(NamedTuple):
    function: str                 # function name, or "raw" for JSON fallback payloads
    arguments: Dict[str, Any]


def build_selector_table(abi: List[dict]) -> Dict[str, str]:
    """
    Maps each function's 4-byte selector (0x-hex) to its name.
    """
    return {
        encode_hex(function_abi_to_4byte_selector(entry)): entry["name"]
        for entry in abi
        if entry.get("type") == "function"
    }


SELECTOR_TABLES = {name: build_selector_table(abi) for name, abi in ALL_ABIS.items()}


def _json_safe(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return to_hex_data(bytes(value))
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def decode_call_data(data: bytes | str) -> DecodedCall:
    """
    Decodes governance action or registry call data back to its function and
    arguments. Payloads produced by the raw JSON fallback decode as "raw".

    Raises:
        ValueError: If the data matches no known function and is not JSON.
    """
    payload = to_bytes_data(data)
    selector = encode_hex(payload[:4])

    for name, abi in ALL_ABIS.items():
        if selector not in SELECTOR_TABLES[name]:
            continue
        contract = w3.eth.contract(abi=abi)
        try:
            function, arguments = contract.decode_function_input(payload)
        except DecodingError as e:
            raise ValueError(f"Malformed arguments for selector {selector}: {e}") from e
        logger.debug(f"Decoded {function.fn_name} using {name} ABI")
        return DecodedCall(function=function.fn_name, arguments={k: _json_safe(v) for k, v in arguments.items()})

    try:
        raw = orjson.loads(payload)
    except orjson.JSONDecodeError:
        raise ValueError(f"Unknown function selector {selector}") from None
    return DecodedCall(function="raw", arguments=raw if isinstance(raw, dict) else {"value": raw})
