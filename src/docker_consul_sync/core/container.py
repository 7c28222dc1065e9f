from typing import Any, Dict, List

from pydantic import BaseModel, Field


class Container(BaseModel):
    """Read-only view of one container as reported by the container-list API."""

    id: str
    labels: Dict[str, str] = Field(default_factory=dict)
    ports: List[int] = Field(default_factory=list)
    network_mode: str = ""
    networks: Dict[str, str] = Field(default_factory=dict)

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    @classmethod
    def from_attrs(cls, attrs: Dict[str, Any]) -> "Container":
        """
        Build a Container from a Docker container-list summary:

        {
            "Id": "...",
            "Labels": {"consul.service": "web"},
            "Ports": [{"PrivatePort": 80, "Type": "tcp"}],
            "HostConfig": {"NetworkMode": "default"},
            "NetworkSettings": {"Networks": {"bridge": {"IPAddress": "172.17.0.2"}}}
        }
        """
        ports = [
            int(p["PrivatePort"])
            for p in attrs.get("Ports") or []
            if p.get("PrivatePort") is not None
        ]

        networks: Dict[str, str] = {}
        network_settings = attrs.get("NetworkSettings") or {}
        for name, network in (network_settings.get("Networks") or {}).items():
            network = network or {}
            networks[name] = network.get("IPAddress") or network.get("GlobalIPv6Address") or ""

        return cls(
            id=attrs.get("Id") or attrs.get("ID") or "",
            labels=attrs.get("Labels") or {},
            ports=ports,
            network_mode=(attrs.get("HostConfig") or {}).get("NetworkMode") or "",
            networks=networks,
        )
