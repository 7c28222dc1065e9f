import time
from queue import Empty, Queue
from typing import List

from docker_consul_sync.core.docker_watcher import DockerWatcher
from docker_consul_sync.core.error_reporter import report_error, report_errors
from docker_consul_sync.core.network_event import CONNECT, DISCONNECT, ERROR, NetworkEvent
from docker_consul_sync.core.reconciler import Reconciler
from docker_consul_sync.logger import logger
from docker_consul_sync.utils.errors import SyncError


class SyncEngine:
    """
    Single-threaded control loop.

    Network events arrive on one queue and are handled one at a time, with a
    full reconciliation pass every `sync_interval` seconds. Every registry
    call happens on the thread running `run()`.
    """

    def __init__(self, reconciler: Reconciler, watcher: DockerWatcher, sync_interval: float = 30.0):
        self.reconciler = reconciler
        self.watcher = watcher
        self.sync_interval = sync_interval
        self.events: "Queue[NetworkEvent]" = Queue()
        self.running = False

    def run_once(self) -> List[SyncError]:
        errors = self.reconciler.check_registrations()
        report_errors(errors)
        return errors

    def handle_event(self, event: NetworkEvent) -> None:
        if event.action == ERROR:
            if event.error is not None:
                report_error(event.error)
            return

        if not event.container_id:
            logger.warning(f"[sync_engine] Ignoring network {event.action} event without a container: {event.attrs}")
            return

        try:
            if event.action == CONNECT:
                logger.debug(f"[sync_engine] Connect event for container {event.container_id}")
                self.reconciler.register(event.container_id)
            elif event.action == DISCONNECT:
                logger.debug(f"[sync_engine] Disconnect event for container {event.container_id}")
                self.reconciler.deregister(event.container_id)
            else:
                logger.debug(f"[sync_engine] Ignoring unhandled event: {event.action}")
        except SyncError as e:
            report_error(e)

    def run(self) -> None:
        logger.info("[sync_engine] Starting docker-consul-sync with live event monitoring")
        self.running = True
        self.watcher.subscribe(self.events.put)

        self._sync()
        next_tick = time.monotonic() + self.sync_interval

        while self.running:
            now = time.monotonic()
            if now >= next_tick:
                self._sync()
                next_tick = time.monotonic() + self.sync_interval
                continue

            try:
                event = self.events.get(timeout=next_tick - now)
            except Empty:
                continue

            try:
                self.handle_event(event)
            except Exception as e:
                logger.exception(f"[sync_engine] Error processing event {event}: {e}")

    def _sync(self) -> None:
        try:
            self.run_once()
        except Exception as e:
            logger.exception(f"[sync_engine] Sync error: {e}")

    def stop(self) -> None:
        self.running = False
        self.watcher.stop()
        logger.info("[sync_engine] Graceful shutdown initiated.")
