from typing import Any, Dict, Iterator, List, Protocol

from docker_consul_sync.core.container import Container


class ContainerRuntime(Protocol):
    def list_containers(self, filters: Dict[str, Any]) -> List[Container]:
        """
        Return running containers matching the given runtime filters.

        Example:
        runtime.list_containers({"label": "consul.service", "id": "4f2a..."})
        """
        ...

    def events(self, filters: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
        """
        Blocking stream of decoded runtime events matching the filters.

        Raises on transport failure; returns when the stream is closed.
        """
        ...
