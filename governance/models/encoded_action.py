from pydantic import BaseModel, ConfigDict

from utils.formatter_utils import to_hex_data


class EncodedAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    template_id: str
    data: bytes
    # True when the template was unknown and the parameters were encoded as JSON text
    is_fallback: bool = False

    @property
    def selector(self) -> bytes | None:
        if self.is_fallback or len(self.data) < 4:
            return None
        return self.data[:4]

    def hex(self) -> str:
        return to_hex_data(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)
