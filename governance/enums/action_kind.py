from enum import Enum


class ActionKind(str, Enum):
    """Closed set of action templates the encoder knows how to encode."""

    TREASURY_TRANSFER = "treasury-transfer"
    PARAMETER_CHANGE = "parameter-change"
    CONTRACT_UPGRADE = "contract-upgrade"
    ROLE_MANAGEMENT = "role-management"

    @classmethod
    def from_template_id(cls, template_id: str) -> "ActionKind | None":
        try:
            return cls(template_id)
        except ValueError:
            return None
