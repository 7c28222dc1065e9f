from __future__ import annotations

from docker_consul_sync.core.docker_watcher import DockerWatcher
from docker_consul_sync.core.network_event import CONNECT, DISCONNECT, ERROR, NetworkEvent
from docker_consul_sync.utils.errors import ErrorKind, StreamError


def _docker_event(action: str, container_id: str) -> dict:
    return {
        "Type": "network",
        "Action": action,
        "Actor": {"ID": "net1", "Attributes": {"container": container_id, "name": "bridge", "type": "bridge"}},
    }


def test_events_are_decoded_and_closed_stream_reported(runtime) -> None:
    runtime.streams = {CONNECT: [[_docker_event("connect", "C")]]}
    watcher = DockerWatcher(runtime, reconnect_delay=0)
    seen: list[NetworkEvent] = []

    def callback(event: NetworkEvent) -> None:
        seen.append(event)
        if event.action == ERROR:
            watcher.stop()

    watcher._watch_events(CONNECT, callback)

    assert [e.action for e in seen] == [CONNECT, ERROR]
    assert seen[0].container_id == "C"
    assert isinstance(seen[1].error, StreamError)
    assert seen[1].error.kind is ErrorKind.STREAM
    assert seen[1].error.fields == {"event": CONNECT}


def test_broken_stream_is_reported_and_resubscribed(runtime) -> None:
    runtime.streams = {
        DISCONNECT: [ConnectionError("socket closed"), [_docker_event("disconnect", "D")]],
    }
    watcher = DockerWatcher(runtime, reconnect_delay=0)
    seen: list[NetworkEvent] = []

    def callback(event: NetworkEvent) -> None:
        seen.append(event)
        if len([e for e in seen if e.action == ERROR]) == 2:
            watcher.stop()

    watcher._watch_events(DISCONNECT, callback)

    assert [e.action for e in seen] == [ERROR, DISCONNECT, ERROR]
    assert isinstance(seen[0].error.__cause__, ConnectionError)
    assert "socket closed" in str(seen[0].error)
    assert seen[1].container_id == "D"


def test_subscribe_starts_one_daemon_thread_per_action(runtime) -> None:
    watcher = DockerWatcher(runtime, reconnect_delay=0)

    watcher.subscribe(lambda event: watcher.stop())
    for thread in watcher.threads:
        thread.join(timeout=2)

    assert sorted(t.name for t in watcher.threads) == ["docker-watcher-connect", "docker-watcher-disconnect"]
    assert all(t.daemon for t in watcher.threads)
    assert not any(t.is_alive() for t in watcher.threads)


def test_event_without_container_attribute() -> None:
    event = NetworkEvent.from_docker(CONNECT, {"Type": "network", "Actor": {"ID": "net1"}})
    assert event.container_id is None
