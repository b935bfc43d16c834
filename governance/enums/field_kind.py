from enum import Enum


class FieldKind(str, Enum):
    ADDRESS = "address"
    AMOUNT = "amount"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"           # single choice from FieldSpec.options
