import warnings
from typing import Any, Callable, Dict, Mapping, Sequence

import orjson
from eth_abi import encode
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_utils import keccak

from constants.constants import ACTION_GRANT_ROLE, TOKEN_DECIMALS
from constants.contract_function_selectors import (
    GRANT_ROLE_SIGNATURE,
    REVOKE_ROLE_SIGNATURE,
    SET_PARAMETER_SIGNATURE,
    TRANSFER_SIGNATURE,
    UPGRADE_TO_SIGNATURE,
    selector_for,
)
from governance.enums.action_kind import ActionKind
from governance.exceptions import EncodingError, EncodingFallback
from governance.models.encoded_action import EncodedAction
from governance.models.validated_parameters import ValidatedParameters
from governance.service.field_validator import FieldValidator, field_validator
from governance.templates.template_catalog import TemplateCatalog, catalog
from utils.formatter_utils import to_fixed_point, to_hex_data
from utils.logger_utils import get_logger
from utils.validation_utils import fits_uint256

logger = get_logger("Action Encoder")


def encode_function_call(signature: str, arg_types: Sequence[str], args: Sequence[Any]) -> bytes:
    """
    ABI-encodes a call: 4-byte selector of `signature` followed by the
    32-byte aligned argument words.
    """
    try:
        return selector_for(signature) + encode(list(arg_types), list(args))
    except AbiEncodingError as e:
        raise EncodingError(f"Cannot encode {signature}: {e}") from e


def role_id(role_name: str) -> bytes:
    """Role identifier as used by AccessControl: keccak256 of the UTF-8 role name."""
    return keccak(text=role_name)


_INT64_LIMIT = 2**63


def _json_ready(value: Any) -> Any:
    """Converts a raw parameter value into something orjson can serialize losslessly."""
    if isinstance(value, Mapping):
        return {str(key): _json_ready(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_ready(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return to_hex_data(bytes(value))
    if isinstance(value, bool) or value is None or isinstance(value, (str, float)):
        return value
    if isinstance(value, int):
        return value if abs(value) < _INT64_LIMIT else str(value)
    return str(value)


class ActionEncoder:
    """
    Turns validated template parameters into canonical call data.

    Encoding is a pure function of (template id, parameters). Each ActionKind
    has exactly one encoding arm; any other template id goes to the raw JSON
    fallback, which emits an EncodingFallback warning instead of failing.
    """

    def __init__(self, template_catalog: TemplateCatalog = catalog, validator: FieldValidator = field_validator):
        self._catalog = template_catalog
        self._validator = validator
        self._arms: Dict[ActionKind, Callable[[ValidatedParameters], bytes]] = {
            ActionKind.TREASURY_TRANSFER: self._encode_treasury_transfer,
            ActionKind.PARAMETER_CHANGE: self._encode_parameter_change,
            ActionKind.CONTRACT_UPGRADE: self._encode_contract_upgrade,
            ActionKind.ROLE_MANAGEMENT: self._encode_role_management,
        }
        missing = set(ActionKind) - set(self._arms)
        if missing:
            raise RuntimeError(f"No encoding arm for action kinds: {sorted(k.value for k in missing)}")

    def encode(self, template_id: str, parameters: ValidatedParameters | Mapping[str, Any]) -> EncodedAction:
        """
        Raw mappings for a known template are validated first, so a
        ValidationError may be raised here as well.
        """
        kind = ActionKind.from_template_id(template_id)
        if kind is None:
            return self._encode_fallback(template_id, parameters)

        validated = self._ensure_validated(kind, parameters)
        data = self._arms[kind](validated)
        return EncodedAction(template_id=kind.value, data=data)

    def _ensure_validated(
        self, kind: ActionKind, parameters: ValidatedParameters | Mapping[str, Any]
    ) -> ValidatedParameters:
        if isinstance(parameters, ValidatedParameters):
            if parameters.template_id != kind.value:
                raise EncodingError(
                    f"Parameters were validated for '{parameters.template_id}', not '{kind.value}'"
                )
            return parameters
        template = self._catalog.template_by_id(kind.value)
        return self._validator.validate(template, parameters)

    @staticmethod
    def _encode_treasury_transfer(params: ValidatedParameters) -> bytes:
        try:
            if not fits_uint256(params["amount"], TOKEN_DECIMALS):
                raise EncodingError(f"Amount {params['amount']} does not fit in uint256")
            amount = to_fixed_point(params["amount"], TOKEN_DECIMALS)
        except ValueError as e:
            raise EncodingError(str(e)) from e
        return encode_function_call(TRANSFER_SIGNATURE, ["address", "uint256"], [params["recipient"], amount])

    @staticmethod
    def _encode_parameter_change(params: ValidatedParameters) -> bytes:
        try:
            value = int(params["value"])
        except ValueError as e:
            raise EncodingError(f"Parameter value is not an integer: {e}") from e
        return encode_function_call(SET_PARAMETER_SIGNATURE, ["string", "uint256"], [params["parameter"], value])

    @staticmethod
    def _encode_contract_upgrade(params: ValidatedParameters) -> bytes:
        return encode_function_call(UPGRADE_TO_SIGNATURE, ["address"], [params["implementation"]])

    @staticmethod
    def _encode_role_management(params: ValidatedParameters) -> bytes:
        signature = GRANT_ROLE_SIGNATURE if params["action"] == ACTION_GRANT_ROLE else REVOKE_ROLE_SIGNATURE
        return encode_function_call(signature, ["bytes32", "address"], [role_id(params["role"]), params["user"]])

    @staticmethod
    def _encode_fallback(template_id: str, parameters: ValidatedParameters | Mapping[str, Any]) -> EncodedAction:
        values = parameters.values if isinstance(parameters, ValidatedParameters) else parameters
        # Sorted keys keep the bytes independent of the caller's insertion order
        data = orjson.dumps(_json_ready(values), option=orjson.OPT_SORT_KEYS)

        message = f"Unknown template '{template_id}': parameters encoded as raw JSON text, not ABI call data"
        logger.warning(message)
        warnings.warn(message, EncodingFallback, stacklevel=3)
        return EncodedAction(template_id=template_id, data=data, is_fallback=True)


# Singleton instance
action_encoder = ActionEncoder()
