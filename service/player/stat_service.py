"""
StatService

자유 능력치 포인트 배분과 능력치 사용량 기록을 담당합니다.
"""
import logging
from typing import Optional

from models.actor import Actor
from models.repos.content_registry import ContentRegistry
from models.results import FailureReason, OperationResult
from models.stats import StatType

logger = logging.getLogger(__name__)


class StatService:
    """능력치 관련 서비스"""

    @staticmethod
    def allocate_stat_point(
        actor: Actor,
        stat: StatType,
        registry: Optional[ContentRegistry] = None,
    ) -> OperationResult:
        """
        자유 포인트 1점 배분

        Args:
            actor: 대상 액터
            stat: 올릴 능력치
            registry: 재계산 시 장비 조회용 레지스트리

        Returns:
            OperationResult: 포인트가 없으면 실패 (변경 없음)
        """
        from service.actor_service import ActorService

        level_info = actor.level_info
        if level_info.free_stat_points <= 0:
            return OperationResult.fail(FailureReason.NO_FREE_STAT_POINTS)

        level_info.free_stat_points -= 1
        level_info.stats.increase(stat)
        ActorService.recalculate_stats(actor, registry)

        logger.debug(f"{actor.id} allocated {stat.value} -> {level_info.stats.get(stat)}")
        return OperationResult.ok()

    @staticmethod
    def track_usage(actor: Actor, stat: StatType, amount: float = 1.0) -> None:
        """행동에 사용된 능력치 기록 (자동 배분 가중치)"""
        actor.level_info.stat_usage.add(stat, amount)
