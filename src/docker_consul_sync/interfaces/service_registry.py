from typing import Dict, Protocol

from docker_consul_sync.core.registry_entry import RegistryEntry


class ServiceRegistry(Protocol):
    def list_services(self) -> Dict[str, RegistryEntry]:
        """Current entries keyed by entry id."""
        ...

    def register(self, entry: RegistryEntry) -> None:
        """Create or replace the entry with `entry.id`."""
        ...

    def deregister(self, entry_id: str) -> None:
        ...
