# licenca_premio/logging_config.py

import sys
from pathlib import Path
from loguru import logger

from .config import settings

# Remove o handler padrão para evitar duplicação de logs no console.
logger.remove()

# Handler de console, colorido, no nível definido em LOG_LEVEL.
logger.add(
    sys.stderr,
    level=settings.LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    colorize=True
)

# Arquivo de log: novo arquivo a cada 10 MB, mantidos por 30 dias, tudo a partir de DEBUG.
if settings.LOG_TO_FILE:
    logger.add(
        str(Path(settings.LOG_DIR) / "licenca_premio_{time}.log"),
        rotation="10 MB",
        retention="30 days",
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
    )

# Exporta o logger configurado para ser usado em outros módulos.
log = logger
