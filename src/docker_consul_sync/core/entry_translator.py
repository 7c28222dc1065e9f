import re

from docker_consul_sync.core.container import Container
from docker_consul_sync.core.registry_entry import RegistryEntry
from docker_consul_sync.logger import logger
from docker_consul_sync.utils.errors import InvalidPortError, NoExposedPortError

DEFAULT_NETWORK_ALIAS = "default"
DEFAULT_NETWORK = "bridge"

_PORT_PATTERN = re.compile(r"[+-]?[0-9]+")


def service_label(prefix: str = "consul") -> str:
    return f"{prefix}.service"


def _resolve_network(container: Container, prefix: str) -> str:
    network = container.labels.get(f"{prefix}.network", container.network_mode)
    # Docker reports the default bridge as "default" in HostConfig.NetworkMode
    if network == DEFAULT_NETWORK_ALIAS:
        return DEFAULT_NETWORK
    return network


def _resolve_port(container: Container, name: str, prefix: str) -> int:
    raw = container.labels.get(f"{prefix}.port")
    if raw is None:
        if not container.ports:
            raise NoExposedPortError(
                "no exposed port",
                fields={"container": container.id, "service": name},
            )
        return container.ports[0]

    if not _PORT_PATTERN.fullmatch(raw):
        raise InvalidPortError(
            f"{raw} is not a valid port",
            fields={"container": container.id, "service": name, "port": raw},
        )
    return int(raw, 10)


def container_to_entry(container: Container, prefix: str = "consul") -> RegistryEntry:
    """
    Translate one labeled container into the registry entry describing it.

    Labels read (with the default prefix):
    - consul.service: service name, required upstream
    - consul.network: network to take the address from, defaults to the network mode
    - consul.port: port to advertise, defaults to the first exposed private port

    Every label is also carried over as a `label=value` tag.
    """
    logger.debug(f"[entry_translator] Converting container {container.id} to service")

    tags = tuple(sorted(f"{label}={value}" for label, value in container.labels.items()))
    name = container.labels[service_label(prefix)]

    network = _resolve_network(container, prefix)
    address = container.networks.get(network, "")
    if not address:
        logger.warning(
            f"[entry_translator] Container {container.id} has no address on network '{network}', "
            f"registering {name} without one"
        )

    port = _resolve_port(container, name, prefix)

    return RegistryEntry(
        id=container.id,
        name=name,
        address=address,
        port=port,
        tags=tags,
    )
