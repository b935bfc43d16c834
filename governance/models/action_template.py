from decimal import Decimal
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from governance.enums.field_kind import FieldKind
from governance.enums.template_category import TemplateCategory


class FieldSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: FieldKind
    required: bool = True
    placeholder: str | None = None

    # Constraints
    options: Tuple[str, ...] | None = None     # FieldKind.SELECT only
    minimum: Decimal | None = None             # numeric bounds, NUMBER or numeric STRING fields
    maximum: Decimal | None = None
    pattern: str | None = None                 # full-match regex on the text value


class ActionTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    category: TemplateCategory
    fields: Tuple[FieldSpec, ...] = Field(default_factory=tuple)

    def field(self, field_id: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.id == field_id:
                return spec
        return None

    @property
    def field_ids(self) -> Tuple[str, ...]:
        return tuple(spec.id for spec in self.fields)
