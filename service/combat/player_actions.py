"""
플레이어 전투 행동

근접 공격, 돌 던지기, 화살 사격, 도주, 추격, 대기를 처리합니다.
각 행동은 능력치 사용량을 기록하고 무기 숙련도 경험치를 지급하며,
조우 상태 기계가 소비할 구조화된 결과를 반환합니다. 틱 소비는 호출자(턴 처리기)가 담당합니다.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import COMBAT, ENCOUNTER, SKILL
from models.actor import Actor
from models.encounter import Encounter, ProjectileOutcome, ProjectileType
from models.repos.content_registry import ContentRegistry
from models.results import FailureReason
from models.skill import SkillGainResult, SkillType
from models.stats import StatType
from service.actor_service import ActorService
from service.combat.damage_calculator import AttackResult, DamageCalculator
from service.inventory_service import InventoryService
from service.item.equipment_service import EquipmentService
from service.player.stat_service import StatService
from service.random_source import RandomSource
from service.skill.skill_service import SkillService

logger = logging.getLogger(__name__)


class PlayerActionKind(str, Enum):
    """플레이어 전투 행동 종류"""
    ATTACK = "attack"
    THROW_ROCK = "throw_rock"
    SHOOT_ARROW = "shoot_arrow"
    FLEE = "flee"
    CHASE = "chase"
    IDLE = "idle"

    @property
    def tick_cost(self) -> int:
        return _TICK_COSTS[self]

    @property
    def tick_gain(self) -> int:
        return COMBAT.IDLE_TICK_GAIN if self is PlayerActionKind.IDLE else 0

    @property
    def is_offensive(self) -> bool:
        """공격성 증가 대상 행동"""
        return self in _OFFENSIVE


_TICK_COSTS = {
    PlayerActionKind.ATTACK: COMBAT.ATTACK_TICK_COST,
    PlayerActionKind.THROW_ROCK: COMBAT.THROW_ROCK_TICK_COST,
    PlayerActionKind.SHOOT_ARROW: COMBAT.SHOOT_ARROW_TICK_COST,
    PlayerActionKind.FLEE: COMBAT.FLEE_TICK_COST,
    PlayerActionKind.CHASE: COMBAT.CHASE_TICK_COST,
    PlayerActionKind.IDLE: COMBAT.IDLE_TICK_COST,
}

_OFFENSIVE = frozenset({
    PlayerActionKind.ATTACK,
    PlayerActionKind.THROW_ROCK,
    PlayerActionKind.SHOOT_ARROW,
    PlayerActionKind.CHASE,
})


@dataclass
class PlayerActionResult:
    """플레이어 전투 행동 결과"""

    kind: PlayerActionKind
    success: bool
    reason: Optional[FailureReason] = None
    attack: Optional[AttackResult] = None
    damage_dealt: int = 0
    fled: bool = False
    """도주 성공 여부 (적의 추격 판정으로 이어짐)"""

    caught: bool = False
    """추격 성공 여부"""

    encounter_ended: bool = False
    projectile: Optional[ProjectileType] = None
    projectile_outcome: Optional[ProjectileOutcome] = None
    skill_gain: Optional[SkillGainResult] = None

    @classmethod
    def fail(cls, kind: PlayerActionKind, reason: FailureReason) -> "PlayerActionResult":
        return cls(kind=kind, success=False, reason=reason)


def _projectile_outcome(result: AttackResult) -> ProjectileOutcome:
    if result.blocked:
        return ProjectileOutcome.BLOCKED
    if result.hit:
        return ProjectileOutcome.HIT
    if result.dodged:
        return ProjectileOutcome.DODGED
    return ProjectileOutcome.MISSED


def speed_ratio(numerator: Actor, denominator: Actor) -> float:
    """유효 속도 비율 (분모 속도가 0이면 1로 취급)"""
    if denominator.speed <= 0:
        return 1.0
    return numerator.speed / denominator.speed


class PlayerActions:
    """플레이어 전투 행동 실행기"""

    def __init__(self, registry: ContentRegistry, rng: RandomSource):
        self.registry = registry
        self.rng = rng

    # =========================================================================
    # 공통
    # =========================================================================

    def _roll_weapon_damage(self, actor: Actor) -> int:
        """무기 피해 굴림 (무기가 없으면 액터 기본 피해)"""
        bonus = actor.equipment_bonus
        if bonus is None or bonus.weapon_damage_max <= 0:
            return actor.damage
        low, high = bonus.weapon_damage_min, bonus.weapon_damage_max
        return low + math.floor(self.rng.random() * (high - low + 1))

    def _finish_attack(
        self,
        kind: PlayerActionKind,
        player: Actor,
        encounter: Encounter,
        result: AttackResult,
        skill: SkillType,
        turn: int,
        projectile: Optional[ProjectileType] = None,
    ) -> PlayerActionResult:
        enemy = encounter.enemy
        xp = SKILL.XP_COMBAT_HIT if result.landed else SKILL.XP_COMBAT_MISS
        skill_gain = SkillService.add_skill_xp(player.skills, skill, xp, turn)

        dealt = 0
        if result.landed:
            dealt = ActorService.deal_damage(enemy, result.damage)
            if result.critical:
                StatService.track_usage(player, StatType.LUCK, COMBAT.CRIT_LUCK_USAGE)

        logger.debug(
            f"{player.id} {kind.value} -> {enemy.id}: {result.tag} "
            f"({dealt} dmg, {enemy.health}/{enemy.max_health})"
        )
        return PlayerActionResult(
            kind=kind,
            success=True,
            attack=result,
            damage_dealt=dealt,
            encounter_ended=not enemy.is_alive,
            projectile=projectile,
            projectile_outcome=_projectile_outcome(result) if projectile else None,
            skill_gain=skill_gain,
        )

    # =========================================================================
    # 공격 행동
    # =========================================================================

    def attack(self, player: Actor, encounter: Encounter, turn: int) -> PlayerActionResult:
        """근접 공격 (장착 무기 또는 맨손)"""
        enemy = encounter.enemy
        StatService.track_usage(player, StatType.STRENGTH, COMBAT.MELEE_STRENGTH_USAGE)
        StatService.track_usage(player, StatType.PRECISION, COMBAT.MELEE_PRECISION_USAGE)

        weapon = EquipmentService.get_main_weapon(player, self.registry)
        skill = SkillService.get_weapon_skill(weapon)
        base_damage = self._roll_weapon_damage(player)
        accuracy = player.equipment_bonus.accuracy if player.equipment_bonus else 0

        options = DamageCalculator.build_options(
            player, enemy, ranged=False, weapon_accuracy=accuracy, attack_skill=skill
        )
        result = DamageCalculator.resolve_attack(player, enemy, base_damage, self.rng, options)
        return self._finish_attack(PlayerActionKind.ATTACK, player, encounter, result, skill, turn)

    def throw_rock(self, player: Actor, encounter: Encounter, turn: int) -> PlayerActionResult:
        """
        돌 던지기

        돌 1개를 소모합니다. 기본 피해 5~10에 원거리 능력치 보너스가 더해지고,
        적이 도주 중이면 장비 원거리 보너스의 절반이 추가됩니다.
        """
        kind = PlayerActionKind.THROW_ROCK
        if not InventoryService.remove_item(player, ProjectileType.ROCK.value, 1, self.registry):
            return PlayerActionResult.fail(kind, FailureReason.NO_AMMO)

        enemy = encounter.enemy
        StatService.track_usage(player, StatType.PRECISION, COMBAT.THROW_PRECISION_USAGE)
        StatService.track_usage(player, StatType.AGILITY, COMBAT.THROW_AGILITY_USAGE)

        spread = COMBAT.ROCK_DAMAGE_MAX - COMBAT.ROCK_DAMAGE_MIN + 1
        base_damage = COMBAT.ROCK_DAMAGE_MIN + math.floor(self.rng.random() * spread)
        if encounter.enemy_fleeing and player.equipment_bonus:
            base_damage += player.equipment_bonus.ranged_bonus // 2

        options = DamageCalculator.build_options(
            player, enemy, ranged=True, weapon_accuracy=COMBAT.ROCK_ACCURACY,
            attack_skill=SkillType.THROWING,
        )
        result = DamageCalculator.resolve_attack(player, enemy, base_damage, self.rng, options)
        return self._finish_attack(
            kind, player, encounter, result, SkillType.THROWING, turn, projectile=ProjectileType.ROCK
        )

    def shoot_arrow(self, player: Actor, encounter: Encounter, turn: int) -> PlayerActionResult:
        """
        화살 사격

        활(궁술 숙련도 무기)을 장착하고 화살이 있어야 합니다.
        도주 중인 적에게는 장비 원거리 보너스 전체가 추가됩니다.
        """
        kind = PlayerActionKind.SHOOT_ARROW
        weapon = EquipmentService.get_main_weapon(player, self.registry)
        if weapon is None or weapon.skill is not SkillType.ARCHERY:
            return PlayerActionResult.fail(kind, FailureReason.NO_BOW)
        if not InventoryService.remove_item(player, ProjectileType.ARROW.value, 1, self.registry):
            return PlayerActionResult.fail(kind, FailureReason.NO_AMMO)

        enemy = encounter.enemy
        StatService.track_usage(player, StatType.PRECISION, COMBAT.SHOOT_PRECISION_USAGE)
        StatService.track_usage(player, StatType.AGILITY, COMBAT.SHOOT_AGILITY_USAGE)

        base_damage = self._roll_weapon_damage(player)
        bonus = player.equipment_bonus
        if encounter.enemy_fleeing:
            base_damage += bonus.ranged_bonus

        options = DamageCalculator.build_options(
            player, enemy, ranged=True, weapon_accuracy=bonus.accuracy,
            attack_skill=SkillType.ARCHERY,
        )
        result = DamageCalculator.resolve_attack(player, enemy, base_damage, self.rng, options)
        return self._finish_attack(
            kind, player, encounter, result, SkillType.ARCHERY, turn, projectile=ProjectileType.ARROW
        )

    # =========================================================================
    # 이동 행동
    # =========================================================================

    def flee(self, player: Actor, encounter: Encounter, turn: int) -> PlayerActionResult:
        """도주 시도: 확률 = min(0.9, 0.4 x 플레이어 속도 / 적 속도)"""
        StatService.track_usage(player, StatType.AGILITY, COMBAT.FLEE_AGILITY_USAGE)
        chance = min(
            ENCOUNTER.FLEE_MAX_CHANCE,
            ENCOUNTER.FLEE_BASE_CHANCE * speed_ratio(player, encounter.enemy),
        )
        fled = self.rng.random() < chance
        logger.debug(f"{player.id} flee attempt ({chance:.2f}): {'success' if fled else 'fail'}")
        return PlayerActionResult(kind=PlayerActionKind.FLEE, success=True, fled=fled)

    def chase(self, player: Actor, encounter: Encounter, turn: int) -> PlayerActionResult:
        """
        도주 중인 적 추격

        확률 = min(0.85, 0.5 x 플레이어 속도 / 적 속도).
        성공하면 적의 도주 상태를 해제하고, 실패하면 적이 달아나 조우가 끝납니다.
        """
        kind = PlayerActionKind.CHASE
        if not encounter.enemy_fleeing:
            return PlayerActionResult.fail(kind, FailureReason.ENEMY_NOT_FLEEING)

        chance = min(
            ENCOUNTER.CHASE_MAX_CHANCE,
            ENCOUNTER.CHASE_BASE_CHANCE * speed_ratio(player, encounter.enemy),
        )
        if self.rng.random() < chance:
            encounter.enemy_fleeing = False
            return PlayerActionResult(kind=kind, success=True, caught=True)
        return PlayerActionResult(kind=kind, success=True, encounter_ended=True)

    def idle(self, player: Actor, encounter: Encounter, turn: int) -> PlayerActionResult:
        """대기 (틱 회복은 턴 처리기가 적용)"""
        return PlayerActionResult(kind=PlayerActionKind.IDLE, success=True)

    def validate(self, kind: PlayerActionKind, player: Actor, encounter: Encounter) -> Optional[FailureReason]:
        """틱을 쓰기 전에 확인하는 행동 가능 조건 (문제 없으면 None)"""
        if kind is PlayerActionKind.THROW_ROCK:
            if InventoryService.get_item_count(player, ProjectileType.ROCK.value) <= 0:
                return FailureReason.NO_AMMO
        elif kind is PlayerActionKind.SHOOT_ARROW:
            weapon = EquipmentService.get_main_weapon(player, self.registry)
            if weapon is None or weapon.skill is not SkillType.ARCHERY:
                return FailureReason.NO_BOW
            if InventoryService.get_item_count(player, ProjectileType.ARROW.value) <= 0:
                return FailureReason.NO_AMMO
        elif kind is PlayerActionKind.CHASE and not encounter.enemy_fleeing:
            return FailureReason.ENEMY_NOT_FLEEING
        return None

    def execute(
        self, kind: PlayerActionKind, player: Actor, encounter: Encounter, turn: int
    ) -> PlayerActionResult:
        handlers = {
            PlayerActionKind.ATTACK: self.attack,
            PlayerActionKind.THROW_ROCK: self.throw_rock,
            PlayerActionKind.SHOOT_ARROW: self.shoot_arrow,
            PlayerActionKind.FLEE: self.flee,
            PlayerActionKind.CHASE: self.chase,
            PlayerActionKind.IDLE: self.idle,
        }
        return handlers[kind](player, encounter, turn)
