# client/api_client.py
"""
Ponto único de saída HTTP do cliente.

Toda chamada tem prazo máximo (padrão 8 s) cobrindo conexão, espera e
leitura do corpo; estourou, a conexão é fechada e a chamada falha com
ApiError em vez de ficar pendurada. Quem chama só vê dados já
decodificados ou ApiError.
"""
import json
import logging
import threading
import time
from concurrent.futures import Future, TimeoutError as FutureTimeout
from typing import Any, Mapping, Optional, Tuple

import requests

from client.config import ClientConfig

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 16 * 1024


class ApiError(Exception):
    """Erro normalizado: mensagem do servidor quando houver, senão derivada do status."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class ApiTimeout(ApiError):
    pass


class ApiClient:
    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def _timeout_error(self, label: str) -> ApiTimeout:
        return ApiTimeout(f"Tempo esgotado ({self.config.timeout:g}s): {label}")

    def _read_body(self, resp: requests.Response, deadline: float, label: str) -> bytes:
        chunks = []
        for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
            if time.monotonic() > deadline:
                resp.close()
                raise self._timeout_error(label)
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _decode(body: bytes) -> Any:
        # Corpo vazio ou não-JSON não é erro por si só
        if not body:
            return None
        try:
            return json.loads(body)
        except ValueError:
            return None

    def _send(self, method: str, url: str, kwargs: dict, deadline: float, label: str, inflight: dict) -> Tuple[requests.Response, bytes]:
        resp = self.session.request(method, url, **kwargs)
        inflight["resp"] = resp
        try:
            return resp, self._read_body(resp, deadline, label)
        finally:
            resp.close()

    def _send_until(self, deadline: float, label: str, *args) -> Tuple[requests.Response, bytes]:
        """
        Roda a chamada numa thread e espera no máximo até `deadline`.

        O timeout do requests vale por etapa (conectar, cada leitura), então
        um servidor que manda os cabeçalhos aos poucos passaria do prazo;
        aqui o prazo é do conjunto. Estourou: a resposta (se já existe) é
        fechada e a thread, daemon, morre sozinha quando o socket cair.
        """
        inflight: dict = {}
        done: Future = Future()

        def run():
            try:
                done.set_result(self._send(*args, deadline, label, inflight))
            except BaseException as exc:
                done.set_exception(exc)

        threading.Thread(target=run, name=f"fetch {label}", daemon=True).start()
        try:
            return done.result(timeout=max(0.0, deadline - time.monotonic()))
        except FutureTimeout:
            resp = inflight.get("resp")
            if resp is not None:
                resp.close()
            raise self._timeout_error(label) from None

    def fetch(
        self,
        path: str,
        method: str = "GET",
        json_body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        if not self.config.base_url:
            raise ApiError("Defina a conexão primeiro.")

        url = self.config.url_for(path)
        label = f"{method} {path}"
        timeout = self.config.timeout
        deadline = time.monotonic() + timeout
        kwargs = {
            "json": json_body,
            "params": params,
            "headers": {"Content-Type": "application/json", "Accept": "application/json", **(headers or {})},
            "timeout": timeout,
            "stream": True,
        }

        try:
            resp, body = self._send_until(deadline, label, method, url, kwargs)
        except requests.Timeout as exc:
            raise self._timeout_error(label) from exc
        except requests.RequestException as exc:
            raise ApiError(f"Falha de rede em {label}: {exc}") from exc

        data = self._decode(body)
        if not resp.ok:
            msg = None
            if isinstance(data, dict):
                msg = data.get("error") or data.get("message")
            raise ApiError(str(msg) if msg else f"Erro HTTP {resp.status_code}", status=resp.status_code)

        logger.debug("%s -> %s", label, resp.status_code)
        return data
