import threading
import time
from typing import Callable, List, Optional

from docker_consul_sync.core.network_event import CONNECT, DISCONNECT, ERROR, NetworkEvent
from docker_consul_sync.interfaces.container_runtime import ContainerRuntime
from docker_consul_sync.logger import logger
from docker_consul_sync.utils.errors import StreamError


class DockerWatcher:
    """
    Follows Docker network connect/disconnect events.

    Each subscription is drained by its own daemon thread, which only decodes
    events and hands them to the callback. A broken or closed stream is
    reported as a StreamError and resubscribed after `reconnect_delay`.
    """

    actions = (CONNECT, DISCONNECT)

    def __init__(self, runtime: ContainerRuntime, reconnect_delay: float = 5.0) -> None:
        logger.debug("[docker_watcher] Initializing Docker watcher")
        self.runtime = runtime
        self.reconnect_delay = reconnect_delay
        self.running = True
        self.threads: List[threading.Thread] = []

    def subscribe(self, callback: Callable[[NetworkEvent], None]) -> None:
        for action in self.actions:
            logger.info(f"[docker_watcher] Starting network {action} subscription thread")
            thread = threading.Thread(
                target=self._watch_events,
                args=(action, callback),
                name=f"docker-watcher-{action}",
                daemon=True,
            )
            thread.start()
            self.threads.append(thread)

    def _watch_events(self, action: str, callback: Callable[[NetworkEvent], None]) -> None:
        filters = {"type": "network", "event": action}
        while self.running:
            error: Optional[StreamError] = None
            try:
                for event in self.runtime.events(filters):
                    if not self.running:
                        logger.info(f"[docker_watcher] Stopping network {action} watch loop")
                        return
                    logger.debug(f"[docker_watcher] Received network {action} event: {event}")
                    callback(NetworkEvent.from_docker(action, event))
                error = StreamError(f"network {action} event stream closed", fields={"event": action})
            except Exception as e:
                error = StreamError(
                    f"failed to handle network {action} event",
                    fields={"event": action},
                    cause=e,
                )

            if not self.running:
                return
            callback(NetworkEvent(action=ERROR, error=error))
            if not self.running:
                return
            logger.debug(f"[docker_watcher] Resubscribing to network {action} events in {self.reconnect_delay}s")
            time.sleep(self.reconnect_delay)

    def stop(self) -> None:
        logger.info("[docker_watcher] Stopping Docker watcher")
        self.running = False
