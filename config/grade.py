"""제작 아이템 품질 등급 설정"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ItemQuality(IntEnum):
    """아이템 품질 (제작 시 1회 결정, 이후 불변)"""
    POOR = 1
    NORMAL = 2
    GOOD = 3
    EXCELLENT = 4
    MASTERWORK = 5


@dataclass(frozen=True)
class QualityInfo:
    """품질별 설정"""
    quality: ItemQuality
    name: str
    stat_multiplier: float
    """아이템 전투 수치 배율"""

    chance_at_zero: float
    """숙련도 0일 때 확률 (%)"""

    chance_at_max: float
    """숙련도 무한대 극한에서의 확률 (%)"""


# 품질별 설정 테이블
QUALITY_TABLE: dict[int, QualityInfo] = {
    ItemQuality.POOR: QualityInfo(ItemQuality.POOR, "poor", 0.8, 60.0, 0.0),
    ItemQuality.NORMAL: QualityInfo(ItemQuality.NORMAL, "normal", 1.0, 35.0, 15.0),
    ItemQuality.GOOD: QualityInfo(ItemQuality.GOOD, "good", 1.15, 4.0, 50.0),
    ItemQuality.EXCELLENT: QualityInfo(ItemQuality.EXCELLENT, "excellent", 1.3, 0.9, 28.0),
    ItemQuality.MASTERWORK: QualityInfo(ItemQuality.MASTERWORK, "masterwork", 1.5, 0.1, 7.0),
}

QUALITY_ROLL_SCALE: float = 100.0
"""품질 판정 주사위 범위 [0, 100)"""


def get_quality_info(quality: int) -> Optional[QualityInfo]:
    """품질 ID로 품질 정보 조회"""
    return QUALITY_TABLE.get(quality)


def get_quality_multiplier(quality: Optional[int]) -> float:
    """
    품질 배율 조회

    품질이 없는 아이템(채집물, 비제작 장비)은 보통 품질로 취급합니다.
    """
    if quality is None:
        return 1.0
    info = QUALITY_TABLE.get(quality)
    return info.stat_multiplier if info else 1.0
