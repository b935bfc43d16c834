from typing import Dict, Tuple

from constants.constants import HEX_DATA_PATTERN, ROLE_MANAGEMENT_ACTIONS, ROLE_NAMES, UINT256_MAX, UINT_PATTERN
from governance.enums.action_kind import ActionKind
from governance.enums.field_kind import FieldKind
from governance.enums.template_category import TemplateCategory
from governance.exceptions import TemplateNotFound
from governance.models.action_template import ActionTemplate, FieldSpec

# The field ids below are what ActionEncoder reads; keep them in sync.
ACTION_TEMPLATES: Tuple[ActionTemplate, ...] = (
    ActionTemplate(
        id=ActionKind.TREASURY_TRANSFER.value,
        name="Treasury Transfer",
        description="Transfer tokens from DAO treasury to a recipient",
        category=TemplateCategory.TREASURY,
        fields=(
            FieldSpec(id="recipient", name="Recipient Address", kind=FieldKind.ADDRESS, placeholder="0x..."),
            FieldSpec(id="token", name="Token Contract", kind=FieldKind.ADDRESS, placeholder="0x... (USDC, DAI, etc.)"),
            FieldSpec(id="amount", name="Amount", kind=FieldKind.AMOUNT, placeholder="1000.00"),
        ),
    ),
    ActionTemplate(
        id=ActionKind.PARAMETER_CHANGE.value,
        name="Parameter Update",
        description="Update protocol parameters like fees, rates, or limits",
        category=TemplateCategory.GOVERNANCE,
        fields=(
            FieldSpec(id="target", name="Target Contract", kind=FieldKind.ADDRESS, placeholder="0x..."),
            FieldSpec(id="parameter", name="Parameter Name", kind=FieldKind.STRING, placeholder="interest_rate"),
            FieldSpec(
                id="value",
                name="New Value",
                kind=FieldKind.STRING,
                placeholder="500 (for 5%)",
                pattern=UINT_PATTERN,
                maximum=UINT256_MAX,
            ),
        ),
    ),
    ActionTemplate(
        id=ActionKind.CONTRACT_UPGRADE.value,
        name="Contract Upgrade",
        description="Upgrade a proxy contract to a new implementation",
        category=TemplateCategory.TECHNICAL,
        fields=(
            FieldSpec(id="proxy", name="Proxy Contract", kind=FieldKind.ADDRESS, placeholder="0x..."),
            FieldSpec(id="implementation", name="New Implementation", kind=FieldKind.ADDRESS, placeholder="0x..."),
            FieldSpec(
                id="initData",
                name="Initialization Data",
                kind=FieldKind.STRING,
                required=False,
                placeholder="0x... (optional)",
                pattern=HEX_DATA_PATTERN,
            ),
        ),
    ),
    ActionTemplate(
        id=ActionKind.ROLE_MANAGEMENT.value,
        name="Role Management",
        description="Grant or revoke admin roles and permissions",
        category=TemplateCategory.ROLES,
        fields=(
            FieldSpec(id="target", name="Target Contract", kind=FieldKind.ADDRESS, placeholder="0x..."),
            FieldSpec(id="user", name="User Address", kind=FieldKind.ADDRESS, placeholder="0x..."),
            FieldSpec(id="action", name="Action", kind=FieldKind.SELECT, options=ROLE_MANAGEMENT_ACTIONS),
            FieldSpec(id="role", name="Role", kind=FieldKind.SELECT, options=ROLE_NAMES),
        ),
    ),
)


class TemplateCatalog:
    """Static, ordered registry of the proposal action templates."""

    def __init__(self, templates: Tuple[ActionTemplate, ...] = ACTION_TEMPLATES):
        self._templates = tuple(templates)
        self._by_id = {template.id: template for template in self._templates}
        if len(self._by_id) != len(self._templates):
            raise ValueError("Template ids must be unique")

    def templates(self) -> Tuple[ActionTemplate, ...]:
        return self._templates

    def template_by_id(self, template_id: str) -> ActionTemplate:
        template = self._by_id.get(template_id)
        if template is None:
            raise TemplateNotFound(template_id)
        return template

    def contains(self, template_id: str) -> bool:
        return template_id in self._by_id

    def templates_by_category(self) -> Dict[TemplateCategory, Tuple[ActionTemplate, ...]]:
        """Groups templates by category, keeping catalog order inside and across groups."""
        grouped: Dict[TemplateCategory, list] = {}
        for template in self._templates:
            grouped.setdefault(template.category, []).append(template)
        return {category: tuple(items) for category, items in grouped.items()}


# Singleton instance
catalog = TemplateCatalog()
