from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Tuple

from constants.constants import TOKEN_DECIMALS, UINT256_MAX_DIGITS
from governance.enums.field_kind import FieldKind
from governance.exceptions import ValidationError
from governance.models.action_template import ActionTemplate, FieldSpec
from governance.models.validated_parameters import FieldError, ValidatedParameters
from utils.formatter_utils import to_decimal_or_none, to_normalized_address
from utils.logger_utils import get_logger
from utils.validation_utils import (
    fits_token_decimals,
    fits_uint256,
    is_blank,
    is_valid_address,
    matches_pattern,
    parse_boolean,
    parse_positive_amount,
)

logger = get_logger("Field Validator")

MISSING_REQUIRED_FIELD = "missing required field"
INVALID_ADDRESS_FORMAT = "invalid address format"
AMOUNT_NOT_POSITIVE = "amount must be a positive number"
AMOUNT_TOO_PRECISE = f"amount has more than {TOKEN_DECIMALS} decimal places"
AMOUNT_TOO_LARGE = "amount is too large"
NOT_A_NUMBER = "value must be a number"
NOT_A_BOOLEAN = "value must be true or false"
PATTERN_MISMATCH = "value does not match required pattern"

# A check returns (normalized value, None) or (None, error message)
CheckResult = Tuple[Any, str | None]


class FieldValidator:
    """
    Checks a caller's parameter set against a template's field schema.

    Validation is total: every field of the template is checked and all
    failures are reported together in a single ValidationError, in template
    order. Keys the template does not declare are ignored.
    """

    def __init__(self):
        self._checks: Dict[FieldKind, Callable[[FieldSpec, Any], CheckResult]] = {
            FieldKind.ADDRESS: self._check_address,
            FieldKind.AMOUNT: self._check_amount,
            FieldKind.STRING: self._check_string,
            FieldKind.NUMBER: self._check_number,
            FieldKind.BOOLEAN: self._check_boolean,
            FieldKind.SELECT: self._check_select,
        }
        missing = set(FieldKind) - set(self._checks)
        if missing:
            raise RuntimeError(f"No validation rule for field kinds: {sorted(k.value for k in missing)}")

    def collect_errors(self, template: ActionTemplate, parameters: Mapping[str, Any]) -> List[FieldError]:
        return self._run(template, parameters)[1]

    def validate(self, template: ActionTemplate, parameters: Mapping[str, Any]) -> ValidatedParameters:
        """
        Raises:
            ValidationError: carrying every FieldError found.
        """
        values, errors = self._run(template, parameters)
        if errors:
            logger.debug(f"Template {template.id}: {len(errors)} field error(s)")
            raise ValidationError(template.id, errors)
        return ValidatedParameters(template_id=template.id, values=values)

    def _run(self, template: ActionTemplate, parameters: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[FieldError]]:
        values: Dict[str, Any] = {}
        errors: List[FieldError] = []

        for spec in template.fields:
            raw = parameters.get(spec.id)
            if is_blank(raw):
                if spec.required:
                    errors.append(FieldError(field_id=spec.id, message=MISSING_REQUIRED_FIELD))
                continue

            value, message = self._checks[spec.kind](spec, raw)
            if message is not None:
                errors.append(FieldError(field_id=spec.id, message=message))
            else:
                values[spec.id] = value

        return values, errors

    @staticmethod
    def _check_address(spec: FieldSpec, raw: Any) -> CheckResult:
        text = str(raw).strip()
        if not is_valid_address(text):
            return None, INVALID_ADDRESS_FORMAT
        return to_normalized_address(text), None

    @staticmethod
    def _check_amount(spec: FieldSpec, raw: Any) -> CheckResult:
        amount = parse_positive_amount(raw)
        if amount is None:
            return None, AMOUNT_NOT_POSITIVE
        if not fits_token_decimals(amount):
            return None, AMOUNT_TOO_PRECISE
        if not fits_uint256(amount):
            return None, AMOUNT_TOO_LARGE
        return amount, None

    @classmethod
    def _check_string(cls, spec: FieldSpec, raw: Any) -> CheckResult:
        text = str(raw)
        if spec.pattern is not None and not matches_pattern(text, spec.pattern):
            return None, PATTERN_MISMATCH
        # Bounds make a string field numeric, e.g. a uint256 typed as digits
        if spec.minimum is not None or spec.maximum is not None:
            number = to_decimal_or_none(text)
            if number is None:
                return None, NOT_A_NUMBER
            message = cls._bounds_error(spec, number)
            if message is not None:
                return None, message
        return text, None

    @classmethod
    def _check_number(cls, spec: FieldSpec, raw: Any) -> CheckResult:
        number = to_decimal_or_none(raw)
        if number is None:
            return None, NOT_A_NUMBER
        message = cls._bounds_error(spec, number)
        if message is not None:
            return None, message
        # Only expand integral values of uint256 size; larger ones stay Decimal
        if number.adjusted() < UINT256_MAX_DIGITS and number == number.to_integral_value():
            return int(number), None
        return number, None

    @staticmethod
    def _bounds_error(spec: FieldSpec, number: Decimal) -> str | None:
        if spec.minimum is not None and number < spec.minimum:
            return f"value must be at least {spec.minimum:g}"
        if spec.maximum is not None and number > spec.maximum:
            return f"value must be at most {spec.maximum:g}"
        return None

    @staticmethod
    def _check_boolean(spec: FieldSpec, raw: Any) -> CheckResult:
        flag = parse_boolean(raw)
        if flag is None:
            return None, NOT_A_BOOLEAN
        return flag, None

    @staticmethod
    def _check_select(spec: FieldSpec, raw: Any) -> CheckResult:
        choice = str(raw).strip()
        options = spec.options or ()
        if choice not in options:
            return None, f"value must be one of: {', '.join(options)}"
        return choice, None


# Singleton instance
field_validator = FieldValidator()
