import logging
from typing import Any, Dict, Iterable, Optional

from docker_consul_sync.logger import logger
from docker_consul_sync.utils.errors import ErrorKind


def _render_fields(fields: Dict[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in sorted(fields.items()))


def report_error(err: BaseException, log: Optional[logging.Logger] = None) -> None:
    """
    Log one error with its structured context.

    Errors carrying an ErrorKind are logged as `[kind] message (key=value ...)`
    and expose their kind and fields through `extra` for handlers that want
    them. Anything else is logged with its text only.
    """
    log = log or logger
    kind = getattr(err, "kind", None)
    if not isinstance(kind, ErrorKind):
        log.error(f"[error_reporter] {err}")
        return

    fields: Dict[str, Any] = getattr(err, "fields", None) or {}
    context = f" ({_render_fields(fields)})" if fields else ""
    log.error(
        f"[{kind.value}] {err}{context}",
        extra={"error_kind": kind.value, "error_fields": dict(fields)},
    )


def report_errors(errors: Iterable[BaseException], log: Optional[logging.Logger] = None) -> None:
    for err in errors:
        report_error(err, log)
