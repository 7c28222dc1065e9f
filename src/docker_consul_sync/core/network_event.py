from typing import Any, Dict, Optional

from docker_consul_sync.utils.errors import StreamError

CONNECT = "connect"
DISCONNECT = "disconnect"
ERROR = "error"


class NetworkEvent:
    def __init__(
        self,
        action: str,
        container_id: Optional[str] = None,
        error: Optional[StreamError] = None,
        attrs: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.action: str = action
        self.container_id: Optional[str] = container_id or None
        self.error: Optional[StreamError] = error
        self.attrs: Dict[str, Any] = attrs or {}

    @classmethod
    def from_docker(cls, action: str, event: Dict[str, Any]) -> "NetworkEvent":
        actor = event.get("Actor") or {}
        attributes = actor.get("Attributes") or {}
        return cls(action=action, container_id=attributes.get("container"), attrs=event)

    def __repr__(self) -> str:
        return f"NetworkEvent(action={self.action!r}, container_id={self.container_id!r})"
