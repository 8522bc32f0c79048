import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from errors import ArgumentError

logger = logging.getLogger(__name__)

ENV_PREFIX = 'RANDOM_WRITER_'


@dataclass(frozen=True)
class Settings:
    encoding: str = 'utf-8'
    encoding_errors: str = 'replace'
    seed: Optional[int] = None
    log_level: str = 'WARNING'


def _parse_seed(raw):
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ArgumentError(f"{ENV_PREFIX}SEED должен быть целым числом, получено {raw!r}")


def parse_log_level(raw):
    level = (raw or 'WARNING').strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ArgumentError(f"Неизвестный уровень логирования: {raw!r}")
    return level


def load_settings(env_file=None):
    """
    Загрузка настроек из окружения и файла .env

    Args:
        env_file: путь к .env файлу (по умолчанию ищется .env в текущей директории)

    Returns:
        Settings: настройки запуска
    """
    # Уже заданные переменные окружения не перезаписываются
    load_dotenv(env_file)

    settings = Settings(
        encoding=os.getenv(f'{ENV_PREFIX}ENCODING', 'utf-8'),
        encoding_errors=os.getenv(f'{ENV_PREFIX}ENCODING_ERRORS', 'replace'),
        seed=_parse_seed(os.getenv(f'{ENV_PREFIX}SEED')),
        log_level=parse_log_level(os.getenv(f'{ENV_PREFIX}LOG_LEVEL')),
    )
    logger.debug(f"Настройки: {settings}")
    return settings
