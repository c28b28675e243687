"""
ActorService

액터 생성과 기본 자원(틱, 체력, 포만감) 조작, 파생 수치 재계산을 담당합니다.
능력치 배분, 레벨업, 장비 변경 후에는 반드시 recalculate_stats를 호출해야 합니다.
"""
import logging
from typing import Optional

from config import COMBAT, SURVIVAL
from models.actor import Actor
from models.repos.content_registry import ContentRegistry
from models.stats import Stats
from service.item.equipment_service import EquipmentService
from service.player.level_service import LevelService
from service.player.stat_conversion import convert_stats
from service.skill.skill_service import SkillService

logger = logging.getLogger(__name__)


class ActorService:
    """액터 기본 조작"""

    @staticmethod
    def create_actor(
        actor_id: str,
        name: str,
        max_ticks: int = SURVIVAL.PLAYER_MAX_TICKS,
        max_health: int = SURVIVAL.PLAYER_MAX_HEALTH,
        max_saturation: int = SURVIVAL.PLAYER_MAX_SATURATION,
        speed: int = SURVIVAL.PLAYER_SPEED,
        damage: int = SURVIVAL.PLAYER_DAMAGE,
        carry_capacity: float = SURVIVAL.PLAYER_CARRY_CAPACITY,
        level: int = 1,
        stats: Optional[Stats] = None,
        inventory: Optional[dict[str, int]] = None,
        natural_armor: int = 0,
        template_id: Optional[str] = None,
    ) -> Actor:
        """
        액터 생성

        자원은 최대치로 시작하며, 능력치 보너스가 반영된 상태로 반환됩니다.

        Args:
            actor_id: 액터 ID
            name: 이름
            max_ticks: 최대 틱
            max_health: 기본 최대 체력 (능력치 보너스 제외)
            max_saturation: 기본 최대 포만감
            speed: 기본 속도
            damage: 기본 피해
            carry_capacity: 기본 운반 한도
            level: 시작 레벨
            stats: 시작 능력치
            inventory: 시작 소지품
            natural_armor: 고유 방어력
            template_id: 적 템플릿 ID

        Returns:
            생성된 액터
        """
        actor = Actor(
            id=actor_id,
            name=name,
            ticks=max_ticks,
            max_ticks=max_ticks,
            base_max_health=max_health,
            max_health=max_health,
            health=max_health,
            base_max_saturation=max_saturation,
            max_saturation=max_saturation,
            saturation=max_saturation,
            base_carry_capacity=carry_capacity,
            carry_capacity=carry_capacity,
            base_speed=speed,
            speed=speed,
            damage=damage,
            natural_armor=natural_armor,
            inventory={k: v for k, v in (inventory or {}).items() if v > 0},
            level_info=LevelService.create_level_info(level, stats),
            skills=SkillService.create_skills(),
            template_id=template_id,
        )
        ActorService.recalculate_stats(actor)
        # 생성 시에는 보너스까지 포함한 최대치로 시작
        actor.health = actor.max_health
        actor.saturation = actor.max_saturation
        return actor

    @staticmethod
    def create_enemy_actor(
        actor_id: str,
        name: str,
        max_health: int,
        damage: int,
        speed: int,
        level: int = 1,
        stats: Optional[Stats] = None,
        natural_armor: int = 0,
        inventory: Optional[dict[str, int]] = None,
        template_id: Optional[str] = None,
    ) -> Actor:
        """
        적 액터 생성

        적은 틱 0에서 시작하여 매 적 턴마다 속도에 비례해 틱을 모읍니다.
        """
        actor = ActorService.create_actor(
            actor_id,
            name,
            max_ticks=COMBAT.ENEMY_MAX_TICKS,
            max_health=max_health,
            speed=speed,
            damage=damage,
            level=level,
            stats=stats,
            inventory=inventory,
            natural_armor=natural_armor,
            template_id=template_id,
        )
        actor.ticks = 0
        return actor

    # =========================================================================
    # 틱
    # =========================================================================

    @staticmethod
    def can_afford(actor: Actor, amount: int) -> bool:
        return actor.ticks >= amount

    @staticmethod
    def spend_ticks(actor: Actor, amount: int) -> bool:
        """틱 소비 (부족하면 아무것도 바꾸지 않고 False)"""
        if actor.ticks < amount:
            return False
        actor.ticks -= amount
        return True

    @staticmethod
    def add_ticks(actor: Actor, amount: int) -> int:
        """틱 충전 (최대치로 제한). 실제 충전량 반환"""
        before = actor.ticks
        actor.ticks = min(actor.ticks + amount, actor.max_ticks)
        return actor.ticks - before

    # =========================================================================
    # 체력 / 포만감
    # =========================================================================

    @staticmethod
    def deal_damage(actor: Actor, amount: int) -> int:
        """피해 적용 (0 미만으로 내려가지 않음). 실제 감소량 반환"""
        before = actor.health
        actor.health = max(0, actor.health - amount)
        return before - actor.health

    @staticmethod
    def heal(actor: Actor, amount: int) -> int:
        before = actor.health
        actor.health = min(actor.max_health, actor.health + amount)
        return actor.health - before

    @staticmethod
    def drain_saturation(actor: Actor, amount: int) -> int:
        before = actor.saturation
        actor.saturation = max(0, actor.saturation - amount)
        return before - actor.saturation

    @staticmethod
    def gain_saturation(actor: Actor, amount: int) -> int:
        before = actor.saturation
        actor.saturation = min(actor.max_saturation, actor.saturation + amount)
        return actor.saturation - before

    @staticmethod
    def is_starving(actor: Actor) -> bool:
        return actor.saturation <= 0

    @staticmethod
    def is_overfull(actor: Actor) -> bool:
        return actor.saturation >= actor.max_saturation * SURVIVAL.OVERFULL_RATIO

    # =========================================================================
    # 재계산
    # =========================================================================

    @staticmethod
    def recalculate_stats(actor: Actor, registry: Optional[ContentRegistry] = None) -> None:
        """
        파생 수치 재계산

        현재 능력치와 장비로부터 모든 캐시 보너스를 다시 계산합니다.
        최대 체력이 늘어난 만큼 현재 체력도 늘어나며, 모든 자원은 새 최대치로 제한됩니다.

        Args:
            actor: 대상 액터
            registry: 장비 정의 조회용 레지스트리 (없으면 장비 기여 0)
        """
        derived = convert_stats(actor.level_info.stats)
        actor.derived = derived
        actor.equipment_bonus = EquipmentService.calculate_bonus(actor, registry)

        old_max_health = actor.max_health
        actor.max_health = actor.base_max_health + derived.max_health_bonus
        if actor.max_health > old_max_health:
            actor.health += actor.max_health - old_max_health
        actor.health = min(actor.health, actor.max_health)

        actor.max_saturation = actor.base_max_saturation + derived.max_saturation_bonus
        actor.saturation = min(actor.saturation, actor.max_saturation)

        actor.speed = actor.base_speed + derived.speed_bonus
        actor.carry_capacity = actor.base_carry_capacity + derived.carry_capacity_bonus
