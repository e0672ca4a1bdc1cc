# client/config.py
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_TIMEOUT_S = 8.0


class ClientConfig(BaseModel):
    """
    Configuração explícita do cliente, passada a cada ApiClient.
    Sem base_url nenhuma chamada sai (ver ApiClient.fetch).
    """
    base_url: Optional[str] = None
    timeout: float = Field(DEFAULT_TIMEOUT_S, gt=0)

    @classmethod
    def from_host(cls, host: str = "localhost", port: str | int = "3001", timeout: float = DEFAULT_TIMEOUT_S) -> "ClientConfig":
        return cls(base_url=f"http://{host}:{port}", timeout=timeout)

    def url_for(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"
