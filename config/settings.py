"""
실행 환경 설정

.env 파일 또는 환경 변수에서 런타임 설정을 읽어옵니다.
게임 밸런스 상수는 도메인별 config 모듈에 있고, 여기에는 배포 환경마다
달라질 수 있는 값만 둡니다.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from config.survival import SURVIVAL
from exceptions import InvalidConfigError

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """런타임 설정"""

    log_level: str = "INFO"
    """로그 레벨"""

    rng_seed: Optional[int] = None
    """난수 시드 (None이면 시스템 엔트로피 사용)"""

    player_max_ticks: int = SURVIVAL.PLAYER_MAX_TICKS
    player_max_health: int = SURVIVAL.PLAYER_MAX_HEALTH
    player_max_saturation: int = SURVIVAL.PLAYER_MAX_SATURATION


def _read_int(key: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigError(key, raw) from None


def _read_positive_int(key: str, default: int) -> int:
    value = _read_int(key, default)
    if value <= 0:
        raise InvalidConfigError(key, str(value))
    return value


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    환경 변수에서 설정 로드

    Args:
        dotenv_path: .env 파일 경로 (None이면 현재 디렉토리부터 탐색)

    Returns:
        Settings: 로드된 설정

    Raises:
        InvalidConfigError: 값의 형식이 잘못된 경우
    """
    load_dotenv(dotenv_path)

    log_level = os.getenv("ITERRA_LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise InvalidConfigError("ITERRA_LOG_LEVEL", log_level)

    return Settings(
        log_level=log_level,
        rng_seed=_read_int("ITERRA_RNG_SEED", None),
        player_max_ticks=_read_positive_int("ITERRA_PLAYER_MAX_TICKS", SURVIVAL.PLAYER_MAX_TICKS),
        player_max_health=_read_positive_int("ITERRA_PLAYER_MAX_HEALTH", SURVIVAL.PLAYER_MAX_HEALTH),
        player_max_saturation=_read_positive_int(
            "ITERRA_PLAYER_MAX_SATURATION", SURVIVAL.PLAYER_MAX_SATURATION
        ),
    )


def configure_logging(level: str = "INFO") -> None:
    """기본 로깅 설정"""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )
