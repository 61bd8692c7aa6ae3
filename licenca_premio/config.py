# licenca_premio/config.py
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # --- Identificação ---
    APP_NAME: str = "Licença Prêmio - Motor de Saldos"

    # --- Regras da licença prêmio ---
    # Cada quinquênio (5 anos de serviço) concede 90 dias de licença.
    DIAS_POR_QUINQUENIO: int = 90
    ANOS_POR_QUINQUENIO: int = 5

    # --- Cronograma (blocos de exibição) ---
    DIAS_POR_BLOCO: int = 30

    # Planilhas exportam células de data vazias como 30/12/1899
    ANO_SENTINELA: int = 1899

    # --- Logs ---
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()


# Instância global
settings = get_settings()
