"""
GradeService

제작 품질 판정과 품질 배율 적용을 담당합니다.
"""
import logging
import math

from config import SKILL
from config.grade import ItemQuality, QUALITY_ROLL_SCALE, get_quality_multiplier
from service.random_source import RandomSource

logger = logging.getLogger(__name__)


class GradeService:
    """아이템 품질 비즈니스 로직"""

    @staticmethod
    def get_quality_thresholds(skill_level: int) -> list[tuple[ItemQuality, float]]:
        """
        숙련도 기반 누적 품질 임계값

        t = level / (level + 100) 으로 보간하여,
        t=0 에서 60/35/4/0.9/0.1 %, t→1 에서 0/15/50/28/7 % 분포가 되도록 합니다.
        걸작(masterwork)은 마지막 임계값 이상 전체입니다.

        Args:
            skill_level: 제작 숙련도 레벨

        Returns:
            (품질, 누적 임계값) 리스트 (걸작 제외)
        """
        t = skill_level / (skill_level + SKILL.YIELD_CURVE_K)
        poor = 60 * (1 - t)
        normal = poor + 35 - 20 * t
        good = normal + 4 + 46 * t
        excellent = good + 0.9 + 27.1 * t
        return [
            (ItemQuality.POOR, poor),
            (ItemQuality.NORMAL, normal),
            (ItemQuality.GOOD, good),
            (ItemQuality.EXCELLENT, excellent),
        ]

    @staticmethod
    def roll_quality(skill_level: int, rng: RandomSource) -> ItemQuality:
        """
        품질 판정 (난수 1회 소비)

        Args:
            skill_level: 제작 숙련도 레벨
            rng: 난수 공급원

        Returns:
            판정된 품질
        """
        roll = rng.random() * QUALITY_ROLL_SCALE
        for quality, threshold in GradeService.get_quality_thresholds(skill_level):
            if roll < threshold:
                return quality
        return ItemQuality.MASTERWORK

    @staticmethod
    def apply_quality(value: int, quality) -> int:
        """품질 배율 적용 (내림)"""
        return math.floor(value * get_quality_multiplier(quality))
