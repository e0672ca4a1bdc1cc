# config/settings.py
"""
Configuração centralizada da aplicação usando Pydantic Settings.
As variáveis são carregadas do ambiente ou do arquivo .env.

A hospedagem às vezes troca os nomes das variáveis, então cada campo aceita
uma lista de nomes alternativos: vale o primeiro que estiver presente.
"""

from typing import List

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings


DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "https://claude.ai",
    # Domínios do frontend publicado
    "https://seu-frontend.netlify.app",
    "https://seu-frontend.vercel.app",
]


class Settings(BaseSettings):
    """Configuração da aplicação"""

    # Banco de dados
    DATABASE_URL: str = Field(
        validation_alias=AliasChoices(
            "DATABASE_URL",
            "URL_DO_BANCO_DE_DADOS",
            "URL_PUBLICO_DO_BANCO_DE_DADOS",
            "URL_PÚBLICO_DO_BANCO_DE_DADOS",
        )
    )
    PG_POOL_MAX: int = 10

    # Servidor
    PORT: int = Field(default=3000, validation_alias=AliasChoices("PORT", "PORTA"))
    APP_NAME: str = "nm-comp-api"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="production", validation_alias=AliasChoices("NODE_ENV", "ENVIRONMENT"))

    # CORS (lista separada por vírgula)
    CORS_ORIGINS: str = Field(default="", validation_alias=AliasChoices("CORS_ORIGINS", "CORS_ORIGENS"))

    # Limite de requisições por minuto por IP
    RATE_LIMIT_MAX: int = 200

    # Logging
    LOG_FORMAT: str = "tiny"  # tiny | combined | json
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
        # Variável vazia conta como ausente: o próximo nome alternativo vale
        env_ignore_empty = True

    @model_validator(mode="before")
    @classmethod
    def drop_whitespace_values(cls, data):
        # Só espaços também conta como ausente
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if not (isinstance(v, str) and not v.strip())}
        return data

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        v = v.strip()
        if len(v) >= 2 and v[0] == v[-1] and v[0] in "\"'":
            v = v[1:-1]
        if v.startswith("postgres://"):
            v = "postgresql://" + v[len("postgres://"):]
        return v

    @property
    def cors_origins(self) -> List[str]:
        """Origens configuradas via ambiente (sem as padrão)."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def allowed_origins(self) -> List[str]:
        return DEFAULT_ALLOWED_ORIGINS + [o for o in self.cors_origins if o not in DEFAULT_ALLOWED_ORIGINS]

    @property
    def database_requires_ssl(self) -> bool:
        url = self.DATABASE_URL.lower()
        if not url.startswith("postgresql"):
            return False
        return "localhost" not in url and "127.0.0.1" not in url


settings = Settings()
