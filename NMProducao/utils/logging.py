"""
Configuração de logging da aplicação (stdlib logging).

Uso:
    from utils.logging import setup_logging
    setup_logging(level="INFO", format_type="json")

    logger = logging.getLogger(__name__)
    logger.info("produção registrada", extra={"producaoid": 1})
"""

import json
import logging
import sys
from datetime import datetime, timezone

_STD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Uma linha JSON por registro, com os campos de `extra`."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _STD_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def setup_logging(level: str = "INFO", format_type: str = "text") -> None:
    """
    Configura o logger raiz uma única vez.

    Args:
        level: DEBUG, INFO, WARNING, ERROR
        format_type: 'json' para linhas estruturadas; qualquer outro valor usa texto
    """
    handler = logging.StreamHandler(sys.stdout)
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level.upper())
