from typing import Dict, Optional, Tuple
from urllib.parse import urlparse

import consul

from docker_consul_sync.core.registry_entry import RegistryEntry
from docker_consul_sync.interfaces.service_registry import ServiceRegistry
from docker_consul_sync.logger import logger
from docker_consul_sync.utils.errors import ConfigurationError
from docker_consul_sync.utils.timing import retry

DEFAULT_PORT = 8500


def parse_endpoint(endpoint: str) -> Tuple[str, str, int]:
    """
    Split an agent endpoint into (scheme, host, port).

    "http://consul.local:8500" -> ("http", "consul.local", 8500)
    "consul.local"             -> ("http", "consul.local", 8500)
    "[::1]:8501"               -> ("http", "[::1]", 8501)

    The agent API lives at the root, so a path or query is rejected.
    """
    address = endpoint
    if "://" not in address:
        address = f"http://{address}"
    parsed = urlparse(address)
    if not parsed.hostname:
        raise ConfigurationError("invalid consul agent endpoint", fields={"address": endpoint})
    if parsed.path not in ("", "/") or parsed.query or parsed.fragment:
        raise ConfigurationError(
            "consul agent endpoint must not carry a path",
            fields={"address": endpoint, "path": parsed.path},
        )
    try:
        port = parsed.port or DEFAULT_PORT
    except ValueError as e:
        raise ConfigurationError("invalid consul agent endpoint", fields={"address": endpoint}, cause=e) from e

    host = parsed.hostname
    # py-consul joins host and port as-is, so IPv6 literals need their brackets back
    if ":" in host:
        host = f"[{host}]"
    return parsed.scheme or "http", host, port


class ConsulRegistry(ServiceRegistry):
    def __init__(self, endpoint: str, token: Optional[str] = None):
        self.endpoint = endpoint
        scheme, host, port = parse_endpoint(endpoint)
        try:
            self.client = consul.Consul(host=host, port=port, scheme=scheme, token=token)
        except Exception as e:
            raise ConfigurationError("failed to connect to consul", fields={"address": endpoint}, cause=e) from e

    def ping(self, retries: int = 3) -> None:
        logger.debug(f"[consul_registry] Checking consul agent at {self.endpoint}")

        @retry(retries=retries, delay=0.5, backoff=True)
        def _ping() -> None:
            self.client.agent.self()

        try:
            _ping()
        except Exception as e:
            raise ConfigurationError("failed to connect to consul", fields={"address": self.endpoint}, cause=e) from e

    def list_services(self) -> Dict[str, RegistryEntry]:
        services = self.client.agent.services()
        return {
            service_id: RegistryEntry.from_consul({"ID": service_id, **payload})
            for service_id, payload in services.items()
        }

    def register(self, entry: RegistryEntry) -> None:
        self.client.agent.service.register(
            entry.name,
            service_id=entry.id,
            address=entry.address,
            port=entry.port,
            tags=list(entry.tags),
        )

    def deregister(self, entry_id: str) -> None:
        self.client.agent.service.deregister(entry_id)
