"""
Structlog 日志配置模块

The client never configures logging on import. Applications call
:func:`configure_logging` once; by default only the client's own loggers
(``kbapi``, ``kibana``, ``core``) get a handler, so the host application's
root logger is left alone.
"""
import json
import logging
import sys
from typing import Any, Iterable, List, Optional

import structlog
from structlog.contextvars import merge_contextvars
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, add_log_level
from structlog.stdlib import ProcessorFormatter, add_logger_name

from core.config import KibanaSettings, get_settings

CLIENT_LOGGERS = ("kbapi", "kibana", "core")

_SECRET_KEYS = frozenset({"authorization", "api_key", "apikey", "password", "token"})
_MASK = "[redacted]"


def redact_secrets(logger: Any, method_name: str, event_dict: dict) -> dict:
    """凭据字段（包括嵌套的 headers）一律打码。"""
    for key, value in list(event_dict.items()):
        if key.lower() in _SECRET_KEYS:
            event_dict[key] = _MASK
        elif isinstance(value, dict):
            event_dict[key] = {
                k: _MASK if str(k).lower() in _SECRET_KEYS else v for k, v in value.items()
            }
    return event_dict


def get_renderer(log_json: bool) -> Any:
    """JSON when ``log_json`` is set, colored console output on a tty otherwise."""
    if not log_json:
        return ConsoleRenderer(colors=sys.stderr.isatty())

    # structlog 调用 serializer 时会带上 default 等关键字参数
    def _json_dumps(obj: Any, **kwargs: Any) -> str:
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(obj, **kwargs)

    return JSONRenderer(serializer=_json_dumps)


def _processors() -> List[Any]:
    return [
        merge_contextvars,
        add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso", utc=True),
        redact_secrets,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(
    settings: Optional[KibanaSettings] = None,
    *,
    logger_names: Iterable[str] = CLIENT_LOGGERS,
    root: bool = False,
) -> None:
    """Route structlog and stdlib records through one formatter.

    With ``root=True`` the handler goes on the root logger instead, which also
    renders third-party records (httpx, tenacity) the same way.
    """
    settings = settings or get_settings()
    pre_chain = _processors()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[ProcessorFormatter.remove_processors_meta, get_renderer(settings.log_json)],
        )
    )
    level = logging.getLevelName(settings.log_level.upper())

    targets = [logging.getLogger()] if root else [logging.getLogger(name) for name in logger_names]
    for target in targets:
        target.handlers.clear()
        target.addHandler(handler)
        target.setLevel(level)
        if not root:
            target.propagate = False


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """获取 structlog logger 实例。"""
    return structlog.get_logger(name)
