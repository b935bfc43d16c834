from enum import Enum


class TemplateCategory(str, Enum):
    TREASURY = "treasury"
    GOVERNANCE = "governance"
    TECHNICAL = "technical"
    ROLES = "roles"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    TemplateCategory.TREASURY: "Treasury",
    TemplateCategory.GOVERNANCE: "Governance",
    TemplateCategory.TECHNICAL: "Technical",
    TemplateCategory.ROLES: "Access Control",
}
