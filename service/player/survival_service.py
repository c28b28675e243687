"""
SurvivalService

턴마다 적용되는 생존 처리를 담당합니다.
허기 감소 → 과식 회복 → 굶주림 피해 → 기절 순서로 적용합니다.
"""
import logging
from dataclasses import dataclass

from config import SURVIVAL
from models.actor import Actor
from service.actor_service import ActorService
from service.player.stat_conversion import get_hunger_resistance
from service.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class UpkeepResult:
    """턴 종료 생존 처리 결과"""
    hunger_drained: int = 0
    healed: int = 0
    starvation_damage: int = 0
    died: bool = False


@dataclass
class PassOutResult:
    """기절 결과"""
    damage: int = 0
    ticks_gained: int = 0
    died: bool = False


class SurvivalService:
    """생존 비즈니스 로직"""

    @staticmethod
    def get_hunger_chance(actor: Actor) -> float:
        """허기 감소 확률 = 0.1 x (1 - 허기 저항)"""
        resistance = get_hunger_resistance(actor.level_info.stats)
        return SURVIVAL.HUNGER_DECAY_CHANCE * (1 - resistance)

    @staticmethod
    def process_hunger(actor: Actor, rng: RandomSource) -> int:
        """허기 감소 (난수 1회 소비). 실제 감소량 반환"""
        if rng.random() < SurvivalService.get_hunger_chance(actor):
            return ActorService.drain_saturation(actor, SURVIVAL.HUNGER_DECAY_AMOUNT)
        return 0

    @staticmethod
    def process_regen(actor: Actor) -> int:
        """포만감이 80% 이상이고 체력이 부족하면 체력 2 회복, 포만감 1 소모"""
        if not ActorService.is_overfull(actor) or actor.health >= actor.max_health:
            return 0
        healed = ActorService.heal(actor, SURVIVAL.REGEN_AMOUNT)
        ActorService.drain_saturation(actor, SURVIVAL.REGEN_SATURATION_COST)
        return healed

    @staticmethod
    def process_starvation(actor: Actor) -> int:
        if not ActorService.is_starving(actor):
            return 0
        damage = ActorService.deal_damage(actor, SURVIVAL.STARVATION_DAMAGE)
        logger.debug(f"{actor.id} is starving (-{damage} HP, {actor.health}/{actor.max_health})")
        return damage

    @staticmethod
    def process_upkeep(actor: Actor, rng: RandomSource) -> UpkeepResult:
        """
        턴 종료 생존 처리

        Args:
            actor: 플레이어
            rng: 난수 공급원

        Returns:
            UpkeepResult: 처리 결과
        """
        result = UpkeepResult()
        result.hunger_drained = SurvivalService.process_hunger(actor, rng)
        result.healed = SurvivalService.process_regen(actor)
        result.starvation_damage = SurvivalService.process_starvation(actor)
        result.died = not actor.is_alive
        return result

    # =========================================================================
    # 기절
    # =========================================================================

    @staticmethod
    def should_pass_out(actor: Actor) -> bool:
        """가장 싼 행동(휴식)조차 할 수 없으면 기절"""
        return actor.is_alive and actor.ticks < SURVIVAL.PASS_OUT_TICK_THRESHOLD

    @staticmethod
    def pass_out(actor: Actor) -> PassOutResult:
        """기절: 체력 10 감소, 틱 500 회복"""
        damage = ActorService.deal_damage(actor, SURVIVAL.PASS_OUT_HEALTH_COST)
        gained = ActorService.add_ticks(actor, SURVIVAL.PASS_OUT_TICK_GAIN)
        logger.info(f"{actor.id} passed out (-{damage} HP, +{gained} ticks)")
        return PassOutResult(damage=damage, ticks_gained=gained, died=not actor.is_alive)
