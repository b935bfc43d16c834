from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    field_id: str
    message: str

    def __str__(self) -> str:
        return f"{self.field_id}: {self.message}"


class ValidatedParameters(BaseModel):
    """
    Parameters that passed FieldValidator for one template.
    Only the template's own fields appear in `values`, already normalized:
    checksum addresses, Decimal amounts, int/Decimal numbers and bool flags.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    template_id: str
    values: Dict[str, Any] = Field(default_factory=dict)

    def __getitem__(self, field_id: str) -> Any:
        return self.values[field_id]

    def get(self, field_id: str, default: Any = None) -> Any:
        return self.values.get(field_id, default)
