from docker_consul_sync.core.registry_entry import RegistryEntry
from docker_consul_sync.interfaces.service_registry import ServiceRegistry
from docker_consul_sync.logger import logger
from docker_consul_sync.utils.errors import DeregistrationError, RegistrationError


class Registrar:
    """Single register/deregister calls against the registry, without retries."""

    def __init__(self, registry: ServiceRegistry):
        self.registry = registry

    def register(self, entry: RegistryEntry) -> None:
        logger.info(f"[registrar] Registering service {entry.render()}")
        try:
            self.registry.register(entry)
        except Exception as e:
            raise RegistrationError(
                "failed to register service",
                fields={"id": entry.id, "name": entry.name},
                cause=e,
            ) from e

    def deregister(self, entry_id: str) -> None:
        logger.info(f"[registrar] Deregistering service {entry_id}")
        try:
            self.registry.deregister(entry_id)
        except Exception as e:
            raise DeregistrationError(
                "failed to deregister service",
                fields={"id": entry_id},
                cause=e,
            ) from e
