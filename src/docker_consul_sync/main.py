import signal
import sys
from typing import Any, Optional

import typer

from docker_consul_sync.backends.consul_registry import ConsulRegistry
from docker_consul_sync.backends.docker_runtime import DockerRuntime
from docker_consul_sync.config import Settings, load_settings
from docker_consul_sync.core.docker_watcher import DockerWatcher
from docker_consul_sync.core.error_reporter import report_error
from docker_consul_sync.core.reconciler import Reconciler
from docker_consul_sync.core.sync_engine import SyncEngine
from docker_consul_sync.logger import setup_logger
from docker_consul_sync.utils.errors import ConfigurationError

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    help="Register labeled Docker containers as Consul services.",
)


def build_engine(settings: Settings) -> SyncEngine:
    """Construct and check both clients; raises ConfigurationError on failure."""
    runtime = DockerRuntime(settings.docker_socket)
    runtime.ping(retries=settings.startup_retries)

    registry = ConsulRegistry(settings.consul_agent_endpoint, token=settings.consul_token)
    registry.ping(retries=settings.startup_retries)

    reconciler = Reconciler(runtime, registry, label_prefix=settings.label_prefix)
    watcher = DockerWatcher(runtime, reconnect_delay=settings.reconnect_delay)
    return SyncEngine(reconciler, watcher, sync_interval=settings.sync_interval)


@app.command()
def main(
    consul_agent_endpoint: Optional[str] = typer.Option(
        None, "--consul-agent-endpoint", "-e", help="Local consul agent endpoint."
    ),
    docker_socket: Optional[str] = typer.Option(None, "--docker-socket", help="Docker endpoint location."),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="debug, info, warn, error."),
    run_once: Optional[bool] = typer.Option(
        None, "--run-once/--no-run-once", help="Exit after the initial service registration."
    ),
    sync_interval: Optional[float] = typer.Option(
        None, "--sync-interval", help="Seconds between full reconciliation passes."
    ),
) -> None:
    try:
        settings = load_settings(
            consul_agent_endpoint=consul_agent_endpoint,
            docker_socket=docker_socket,
            log_level=log_level,
            run_once=run_once,
            sync_interval=sync_interval,
        )
    except ValueError as e:
        typer.echo(f"failed to parse cli options: {e}", err=True)
        raise typer.Exit(code=2) from None

    logger = setup_logger(settings.log_level)
    logger.debug(f"[main] Effective settings: {settings.model_dump(exclude={'consul_token'})}")

    try:
        engine = build_engine(settings)
    except ConfigurationError as e:
        report_error(e)
        logger.critical("[main] Failed to construct clients, exiting")
        raise typer.Exit(code=1) from None

    if settings.run_once:
        engine.run_once()
        return

    def shutdown_handler(signum: int, frame: Any) -> None:
        logger.info("[main] Shutting down...")
        engine.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)

    engine.run()


if __name__ == "__main__":
    app()
