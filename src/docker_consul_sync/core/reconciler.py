from typing import Dict, List, Optional

from docker_consul_sync.core.container import Container
from docker_consul_sync.core.entry_translator import container_to_entry, service_label
from docker_consul_sync.core.registrar import Registrar
from docker_consul_sync.core.registry_entry import RegistryEntry
from docker_consul_sync.interfaces.container_runtime import ContainerRuntime
from docker_consul_sync.interfaces.service_registry import ServiceRegistry
from docker_consul_sync.logger import logger
from docker_consul_sync.utils.errors import RegistryQueryError, RuntimeQueryError, SyncError


class Reconciler:
    def __init__(
        self,
        runtime: ContainerRuntime,
        registry: ServiceRegistry,
        registrar: Optional[Registrar] = None,
        label_prefix: str = "consul",
    ):
        self.runtime = runtime
        self.registry = registry
        self.registrar = registrar or Registrar(registry)
        self.label_prefix = label_prefix

    def check_registrations(self) -> List[SyncError]:
        """
        Run one full reconciliation pass.

        Labeled containers without an entry get registered, entries without a
        labeled container get deregistered. Failures are collected and returned
        so one bad container never blocks the rest of the pass.
        """
        logger.debug("[reconciler] Checking service registrations")
        label = service_label(self.label_prefix)

        try:
            containers = self.runtime.list_containers({"label": label})
        except Exception as e:
            return [RuntimeQueryError("failed to list containers", fields={"label": label}, cause=e)]

        try:
            services: Dict[str, RegistryEntry] = dict(self.registry.list_services())
        except Exception as e:
            return [RegistryQueryError("failed to list registry services", cause=e)]

        errors: List[SyncError] = []

        for container in containers:
            logger.debug(f"[reconciler] Checking container {container.id}")
            if container.id not in services:
                try:
                    self._register_container(container)
                except SyncError as e:
                    errors.append(e)
            # Failed registrations are left for the next pass
            services.pop(container.id, None)

        for entry_id in services:
            logger.info(f"[reconciler] Removing orphaned service {services[entry_id].render()}")
            try:
                self.registrar.deregister(entry_id)
            except SyncError as e:
                errors.append(e)

        return errors

    def register(self, container_id: str) -> None:
        """Register a single container if it is still running and labeled."""
        label = service_label(self.label_prefix)
        try:
            containers = self.runtime.list_containers({"id": container_id, "label": label})
        except Exception as e:
            raise RuntimeQueryError(
                "failed to list docker container",
                fields={"container": container_id},
                cause=e,
            ) from e

        if not containers:
            logger.debug(f"[reconciler] Container {container_id} is gone or not labeled, skipping")
            return

        self._register_container(containers[0])

    def deregister(self, container_id: str) -> None:
        self.registrar.deregister(container_id)

    def _register_container(self, container: Container) -> None:
        logger.debug(f"[reconciler] Registering container {container.id}")
        entry = container_to_entry(container, self.label_prefix)
        self.registrar.register(entry)
