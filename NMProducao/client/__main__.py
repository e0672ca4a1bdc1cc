# client/__main__.py
"""
Conecta numa API de produção e sincroniza tudo uma vez.

Uso:
    python -m client --host localhost --port 3001
"""
import argparse
import json
import sys

from client.api_client import ApiClient
from client.config import DEFAULT_TIMEOUT_S, ClientConfig
from client.failsafe import install_failure_net
from client.sync import SyncState, connect
from client.ui import LoggingUi
from utils.logging import setup_logging


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Sincroniza dados da API de produção.")
    ap.add_argument("--host", default="localhost")
    ap.add_argument("--port", default="3001")
    ap.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S, help="segundos por chamada")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args(argv)

    setup_logging(args.log_level)
    ui = LoggingUi()
    uninstall = install_failure_net(ui)
    try:
        client = ApiClient(ClientConfig.from_host(args.host, args.port, args.timeout))
        state = SyncState()
        report = connect(client, ui, state=state)
    finally:
        uninstall()

    print(json.dumps(
        {
            "connected": report.connected,
            "message": report.message,
            "succeeded": report.succeeded,
            "failed": report.failed,
            "dashboard": ui.texts,
        },
        ensure_ascii=False,
        indent=2,
    ))
    return 0 if report.connected else 1


if __name__ == "__main__":
    sys.exit(main())
