"""
LevelService

캐릭터 경험치/레벨업과 사용량 기반 능력치 자동 배분을 담당합니다.
"""
import logging
import math
from typing import TYPE_CHECKING, Optional

from config import STATS
from models.stats import LevelInfo, LevelUpResult, STAT_TYPES, StatType, Stats, StatUsage
from service.random_source import RandomSource

if TYPE_CHECKING:
    from models.actor import Actor
    from models.repos.content_registry import ContentRegistry

logger = logging.getLogger(__name__)


class LevelService:
    """캐릭터 레벨 비즈니스 로직"""

    @staticmethod
    def calculate_xp_for_level(level: int) -> int:
        """해당 레벨 도달에 필요한 경험치 = floor(100 x level^1.5)"""
        return math.floor(STATS.LEVEL_BASE_XP * math.pow(level, STATS.LEVEL_XP_EXPONENT))

    @staticmethod
    def create_level_info(level: int = 1, stats: Optional[Stats] = None) -> LevelInfo:
        return LevelInfo(
            level=level,
            xp=0,
            xp_to_next_level=LevelService.calculate_xp_for_level(level + 1),
            free_stat_points=0,
            stats=stats.copy() if stats else Stats(),
            stat_usage=StatUsage(),
        )

    @staticmethod
    def add_xp(level_info: LevelInfo, amount: int, rng: RandomSource) -> LevelUpResult:
        """
        경험치 추가 (LevelInfo 단위)

        임계값 이상인 동안 반복 레벨업하며, 레벨마다 자유 포인트 지급과
        자동 배분을 각각 수행합니다.

        Args:
            level_info: 대상 레벨 정보
            amount: 획득 경험치
            rng: 자동 배분용 난수 공급원

        Returns:
            LevelUpResult: 레벨업 결과
        """
        level_info.xp += amount
        result = LevelUpResult()

        while level_info.xp >= level_info.xp_to_next_level:
            level_info.xp -= level_info.xp_to_next_level
            level_info.level += 1
            level_info.xp_to_next_level = LevelService.calculate_xp_for_level(level_info.level + 1)
            level_info.free_stat_points += STATS.FREE_STATS_PER_LEVEL
            result.levels_gained += 1
            result.auto_stats.extend(
                LevelService.auto_assign_stats(level_info, STATS.AUTO_STATS_PER_LEVEL, rng)
            )

        if result.levels_gained > 0:
            result.new_level = level_info.level
            logger.info(
                f"Level up: {level_info.level - result.levels_gained} -> {level_info.level} "
                f"(auto: {[s.value for s in result.auto_stats]})"
            )
        return result

    @staticmethod
    def auto_assign_stats(level_info: LevelInfo, count: int, rng: RandomSource) -> list[StatType]:
        """
        사용량 기반 능력치 자동 배분

        포인트마다 30% 확률로(또는 사용량 기록이 없으면 항상) 무작위 능력치를 고르고,
        그 외에는 사용량 가중치로 고릅니다. 배분 후 사용량은 0으로 초기화됩니다.

        Args:
            level_info: 대상 레벨 정보
            count: 배분할 포인트 수
            rng: 난수 공급원

        Returns:
            배분된 능력치 목록
        """
        usage = level_info.stat_usage
        total_usage = usage.total()
        assigned: list[StatType] = []

        for _ in range(count):
            if total_usage == 0 or rng.random() < STATS.AUTO_ASSIGN_RANDOM_CHANCE:
                stat = STAT_TYPES[math.floor(rng.random() * len(STAT_TYPES))]
            else:
                roll = rng.random() * total_usage
                stat = StatType.VITALITY
                for candidate in STAT_TYPES:
                    roll -= usage.get(candidate)
                    if roll <= 0:
                        stat = candidate
                        break

            level_info.stats.increase(stat)
            assigned.append(stat)

        usage.reset()
        return assigned

    @staticmethod
    def grant_experience(
        actor: "Actor",
        amount: int,
        rng: RandomSource,
        registry: Optional["ContentRegistry"] = None,
    ) -> LevelUpResult:
        """
        액터에게 경험치 지급

        레벨이 올랐다면 파생 수치를 재계산합니다.
        """
        from service.actor_service import ActorService

        result = LevelService.add_xp(actor.level_info, amount, rng)
        if result.levels_gained > 0:
            ActorService.recalculate_stats(actor, registry)
        return result
