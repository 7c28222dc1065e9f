from typing import Any, Dict, Iterator, List, Optional

import docker

from docker_consul_sync.core.container import Container
from docker_consul_sync.interfaces.container_runtime import ContainerRuntime
from docker_consul_sync.logger import logger
from docker_consul_sync.utils.errors import ConfigurationError
from docker_consul_sync.utils.timing import retry


class DockerRuntime(ContainerRuntime):
    def __init__(self, base_url: str, client: Optional[docker.DockerClient] = None):
        self.base_url = base_url
        try:
            self.client = client or docker.DockerClient(base_url=base_url)
        except Exception as e:
            raise ConfigurationError("failed to connect to docker", fields={"socket": base_url}, cause=e) from e

    def ping(self, retries: int = 3) -> None:
        logger.debug(f"[docker_runtime] Checking docker at {self.base_url}")

        @retry(retries=retries, delay=0.5, backoff=True)
        def _ping() -> None:
            self.client.ping()

        try:
            _ping()
        except Exception as e:
            raise ConfigurationError("failed to connect to docker", fields={"socket": self.base_url}, cause=e) from e

    def list_containers(self, filters: Dict[str, Any]) -> List[Container]:
        # sparse keeps the list-summary shape (Ports, HostConfig.NetworkMode) without an inspect per container
        containers = self.client.containers.list(filters=filters, sparse=True)
        return [Container.from_attrs(c.attrs) for c in containers]

    def events(self, filters: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
        return self.client.events(decode=True, filters=filters)  # type: ignore[no-untyped-call]
