# client/failsafe.py
"""
Rede de segurança global: erro não tratado em qualquer thread é registrado
e força o indicador de carregamento a sumir, para a interface nunca ficar
travada.
"""
import logging
import sys
import threading
from typing import Callable

from client.ui import UiHooks

logger = logging.getLogger(__name__)


def install_failure_net(ui: UiHooks) -> Callable[[], None]:
    """Instala os hooks; retorna uma função que restaura os anteriores."""
    previous_excepthook = sys.excepthook
    previous_thread_hook = threading.excepthook

    def _force_hide() -> None:
        try:
            ui.show_loading(False)
        except Exception:
            logger.exception("falha ao esconder carregamento")

    def _excepthook(exc_type, exc, tb):
        logger.error("Erro não tratado: %s", exc, exc_info=(exc_type, exc, tb))
        _force_hide()
        previous_excepthook(exc_type, exc, tb)

    def _thread_hook(args):
        logger.error(
            "Erro não tratado na thread %s: %s",
            getattr(args.thread, "name", "?"), args.exc_value,
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )
        _force_hide()
        previous_thread_hook(args)

    sys.excepthook = _excepthook
    threading.excepthook = _thread_hook

    def uninstall() -> None:
        sys.excepthook = previous_excepthook
        threading.excepthook = previous_thread_hook

    return uninstall
