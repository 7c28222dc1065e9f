from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field


class RegistryEntry(BaseModel):
    id: str
    name: str
    address: str = ""
    port: int = 0
    tags: Tuple[str, ...] = Field(default_factory=tuple)

    def render(self) -> str:
        return f"{self.name}/{self.id[:12]} -> {self.address or '<no address>'}:{self.port}"

    @classmethod
    def from_consul(cls, payload: Dict[str, Any]) -> "RegistryEntry":
        return cls(
            id=payload.get("ID", ""),
            name=payload.get("Service", ""),
            address=payload.get("Address") or "",
            port=payload.get("Port") or 0,
            tags=tuple(payload.get("Tags") or ()),
        )

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }
