from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from docker_consul_sync.core.container import Container
from docker_consul_sync.core.registry_entry import RegistryEntry


class FakeRuntime:
    """In-memory container runtime honouring the `label` and `id` filters."""

    def __init__(self, containers: list[Container] | None = None) -> None:
        self.containers: list[Container] = list(containers or [])
        self.list_calls: list[dict[str, Any]] = []
        self.list_error: Exception | None = None
        self.streams: dict[str, list[Any]] = {}

    def list_containers(self, filters: dict[str, Any]) -> list[Container]:
        self.list_calls.append(dict(filters))
        if self.list_error is not None:
            raise self.list_error
        out = []
        for c in self.containers:
            label = filters.get("label")
            if label is not None and label not in c.labels:
                continue
            cid = filters.get("id")
            if cid is not None and c.id != cid:
                continue
            out.append(c)
        return out

    def events(self, filters: dict[str, Any]) -> Iterator[dict[str, Any]]:
        # Each call pops the next scripted stream: a list of events, or an exception to raise
        queued = self.streams.get(filters["event"], [])
        stream = queued.pop(0) if queued else []
        if isinstance(stream, Exception):
            raise stream
        return iter(stream)


class FakeRegistry:
    def __init__(self, entries: list[RegistryEntry] | None = None) -> None:
        self.services: dict[str, RegistryEntry] = {e.id: e for e in entries or []}
        self.registered: list[RegistryEntry] = []
        self.deregistered: list[str] = []
        self.list_error: Exception | None = None
        self.fail_register: set[str] = set()
        self.fail_deregister: set[str] = set()

    def list_services(self) -> dict[str, RegistryEntry]:
        if self.list_error is not None:
            raise self.list_error
        return dict(self.services)

    def register(self, entry: RegistryEntry) -> None:
        if entry.id in self.fail_register:
            raise RuntimeError(f"agent refused {entry.id}")
        self.registered.append(entry)
        self.services[entry.id] = entry

    def deregister(self, entry_id: str) -> None:
        if entry_id in self.fail_deregister:
            raise RuntimeError(f"agent refused {entry_id}")
        self.deregistered.append(entry_id)
        self.services.pop(entry_id, None)


def container(
    id: str,
    labels: dict[str, str] | None = None,
    ports: list[int] | None = None,
    network_mode: str = "bridge",
    networks: dict[str, str] | None = None,
) -> Container:
    return Container(
        id=id,
        labels=labels or {},
        ports=ports or [],
        network_mode=network_mode,
        networks=networks if networks is not None else {"bridge": "172.17.0.2"},
    )


@pytest.fixture
def make_container() -> Callable[..., Container]:
    return container


@pytest.fixture
def runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def registry() -> FakeRegistry:
    return FakeRegistry()
