"""
인카운터 서비스

전투 조우의 상태 기계를 담당합니다.
- 적의 행동 결정 (공격 / 관망 / 도주 / 추격)
- 적 턴 진행 (속도 비례 틱 누적, 200틱마다 1회 행동)
- 플레이어 행동에 따른 공격성 변화와 종료 판정
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import COMBAT, ENCOUNTER, SKILL
from exceptions import EncounterAlreadyEndedError
from models.actor import Actor
from models.content import EnemyTemplate
from models.encounter import Encounter, EncounterOutcome
from models.skill import SkillType
from service.actor_service import ActorService
from service.combat.damage_calculator import AttackResult, DamageCalculator
from service.combat.player_actions import PlayerActionKind, PlayerActionResult, speed_ratio
from service.random_source import RandomSource
from service.skill.skill_service import SkillService

logger = logging.getLogger(__name__)


class EnemyActionType(str, Enum):
    """적 행동 종류"""
    ATTACK = "attack"
    WATCH = "watch"
    """비공격적인 적의 관망 (공격하지 않음)"""

    START_FLEE = "start_flee"
    ESCAPED = "escaped"
    FLEE_FAILED = "flee_failed"
    """도주 실패 후 같은 턴에 반격"""

    CHASE_CAUGHT = "chase_caught"
    CHASE_FAILED = "chase_failed"
    LET_GO = "let_go"


@dataclass
class EnemyAction:
    """적 행동 결과"""
    type: EnemyActionType
    attack: Optional[AttackResult] = None
    damage: int = 0
    encounter_ended: bool = False


class EncounterService:
    """조우 상태 기계"""

    def __init__(self, rng: RandomSource):
        self.rng = rng

    # =========================================================================
    # 생성 / 종료
    # =========================================================================

    @staticmethod
    def create_encounter(enemy: Actor, template: Optional[EnemyTemplate] = None) -> Encounter:
        """
        조우 생성

        Args:
            enemy: 적 액터
            template: 적 템플릿 (없으면 기본 공격성/도주 임계값 사용)

        Returns:
            새 조우
        """
        aggressiveness = ENCOUNTER.DEFAULT_AGGRESSIVENESS
        flee_threshold = ENCOUNTER.DEFAULT_FLEE_THRESHOLD
        base_xp = 0
        if template is not None:
            if template.aggressiveness is not None:
                aggressiveness = template.aggressiveness
            flee_threshold = template.flee_threshold
            base_xp = template.base_xp

        logger.info(f"Encounter started: {enemy.name} (lv {enemy.level}, aggr {aggressiveness:.2f})")
        return Encounter(
            enemy=enemy,
            aggressiveness=aggressiveness,
            flee_threshold=flee_threshold,
            base_xp=base_xp,
        )

    @staticmethod
    def end_encounter(encounter: Encounter, result: EncounterOutcome) -> None:
        if encounter.ended:
            raise EncounterAlreadyEndedError(encounter.result.value)
        encounter.finish(result)
        logger.info(f"Encounter ended: {encounter.enemy.name} -> {result.value}")

    # =========================================================================
    # 적 턴
    # =========================================================================

    def process_enemy_turn(self, encounter: Encounter, player: Actor, turn: int = 0) -> Optional[EnemyAction]:
        """
        적 턴 처리

        속도 x 2 만큼 틱을 얻고, 200틱이 모였을 때만 행동합니다.

        Returns:
            적 행동 (행동하지 않았으면 None)
        """
        if encounter.ended:
            raise EncounterAlreadyEndedError(encounter.result.value)

        enemy = encounter.enemy
        ActorService.add_ticks(enemy, enemy.speed * COMBAT.ENEMY_TICK_GAIN_MULTIPLIER)
        if not ActorService.spend_ticks(enemy, COMBAT.ENEMY_ACTION_COST):
            return None

        encounter.turns += 1
        action = self.get_enemy_action(encounter, player, turn)
        self._apply_enemy_outcome(encounter, player, action)
        return action

    def get_enemy_action(self, encounter: Encounter, player: Actor, turn: int = 0) -> EnemyAction:
        """
        적 행동 결정 및 실행

        1. 플레이어가 도주 중이면 추격 결정
        2. 적이 도주 중이면 탈출 시도
        3. 비공격적(공격성 < 0.2)이면 관망
        4. 체력이 도주 임계값 이하이면 도주 판정
        5. 그 외 공격
        """
        if encounter.player_fleeing:
            return self._chase_decision(encounter, player)

        if encounter.enemy_fleeing:
            return self._flee_attempt(encounter, player, turn)

        if encounter.aggressiveness < ENCOUNTER.PASSIVE_THRESHOLD:
            return EnemyAction(type=EnemyActionType.WATCH)

        if encounter.enemy.health_fraction <= encounter.flee_threshold:
            flee_chance = self.calculate_flee_chance(encounter.aggressiveness, player.health_fraction)
            if self.rng.random() < flee_chance:
                encounter.enemy_fleeing = True
                logger.debug(f"{encounter.enemy.name} starts fleeing ({flee_chance:.2f})")
                return EnemyAction(type=EnemyActionType.START_FLEE)

        return self._attack(encounter, player, EnemyActionType.ATTACK, turn)

    @staticmethod
    def calculate_flee_chance(aggressiveness: float, player_health_fraction: float) -> float:
        """적 도주 확률 = (1 - 공격성) x (1 - 플레이어 체력 비율 x 0.5)"""
        return (1 - aggressiveness) * (1 - player_health_fraction * ENCOUNTER.FLEE_PLAYER_HEALTH_WEIGHT)

    def roll_enemy_damage(self, enemy: Actor) -> int:
        """
        적 기본 피해 굴림 (±30%)

        능력치 보너스는 공격 판정에서 더해지므로 여기서는 더하지 않습니다.
        """
        base = enemy.damage
        variance = math.floor(base * COMBAT.ENEMY_DAMAGE_VARIANCE)
        low = max(1, base - variance)
        high = base + variance
        return low + math.floor(self.rng.random() * (high - low + 1))

    def _attack(
        self, encounter: Encounter, player: Actor, action_type: EnemyActionType, turn: int
    ) -> EnemyAction:
        enemy = encounter.enemy
        base_damage = self.roll_enemy_damage(enemy)
        accuracy = enemy.equipment_bonus.accuracy if enemy.equipment_bonus else 0
        options = DamageCalculator.build_options(
            enemy, player, ranged=False, weapon_accuracy=accuracy, attack_skill=SkillType.UNARMED
        )
        result = DamageCalculator.resolve_attack(enemy, player, base_damage, self.rng, options)

        dealt = 0
        if result.landed:
            dealt = ActorService.deal_damage(player, result.damage)
        if result.blocked:
            SkillService.add_skill_xp(player.skills, SkillType.SHIELD, SKILL.XP_COMBAT_BLOCK, turn)

        logger.debug(
            f"{enemy.name} attacks {player.id}: {result.tag} ({dealt} dmg, {player.health}/{player.max_health})"
        )
        return EnemyAction(
            type=action_type,
            attack=result,
            damage=dealt,
            encounter_ended=not player.is_alive,
        )

    def _flee_attempt(self, encounter: Encounter, player: Actor, turn: int) -> EnemyAction:
        """도주 중인 적의 탈출 시도 (실패 시 도주 해제 후 같은 턴에 공격)"""
        chance = min(
            ENCOUNTER.FLEE_MAX_CHANCE,
            ENCOUNTER.FLEE_BASE_CHANCE * speed_ratio(encounter.enemy, player),
        )
        if self.rng.random() < chance:
            return EnemyAction(type=EnemyActionType.ESCAPED, encounter_ended=True)

        encounter.enemy_fleeing = False
        return self._attack(encounter, player, EnemyActionType.FLEE_FAILED, turn)

    def _chase_decision(self, encounter: Encounter, player: Actor) -> EnemyAction:
        """도주 중인 플레이어에 대한 추격 결정"""
        aggressiveness = encounter.aggressiveness
        if aggressiveness < ENCOUNTER.PASSIVE_THRESHOLD:
            return EnemyAction(type=EnemyActionType.LET_GO, encounter_ended=True)

        chase_chance = aggressiveness + (1 - player.health_fraction) * ENCOUNTER.CHASE_PLAYER_HEALTH_WEIGHT
        if self.rng.random() < chase_chance:
            catch_chance = min(
                ENCOUNTER.CHASE_MAX_CHANCE,
                ENCOUNTER.CHASE_BASE_CHANCE * speed_ratio(encounter.enemy, player),
            )
            if self.rng.random() < catch_chance:
                encounter.player_fleeing = False
                return EnemyAction(type=EnemyActionType.CHASE_CAUGHT)
            return EnemyAction(type=EnemyActionType.CHASE_FAILED, encounter_ended=True)

        return EnemyAction(type=EnemyActionType.LET_GO, encounter_ended=True)

    def _apply_enemy_outcome(self, encounter: Encounter, player: Actor, action: EnemyAction) -> None:
        if not action.encounter_ended:
            return
        if not player.is_alive:
            self.end_encounter(encounter, EncounterOutcome.DEFEAT)
        elif action.type is EnemyActionType.ESCAPED:
            self.end_encounter(encounter, EncounterOutcome.ENEMY_ESCAPED)
        else:
            self.end_encounter(encounter, EncounterOutcome.PLAYER_ESCAPED)

    # =========================================================================
    # 플레이어 행동 반영
    # =========================================================================

    @staticmethod
    def adjust_aggressiveness(encounter: Encounter, kind: PlayerActionKind) -> None:
        """공격하면 +0.3 (최대 1), 대기하면 -0.1 (최소 0)"""
        if kind.is_offensive:
            encounter.aggressiveness = min(1.0, encounter.aggressiveness + ENCOUNTER.AGGRESSION_ON_ATTACK)
        elif kind is PlayerActionKind.IDLE:
            encounter.aggressiveness = max(0.0, encounter.aggressiveness - ENCOUNTER.AGGRESSION_ON_IDLE)

    def handle_player_action(self, encounter: Encounter, player: Actor, result: PlayerActionResult) -> None:
        """
        플레이어 행동 결과를 조우에 반영

        종료 판정 우선순위:
        1. 적 사망 → 승리, 플레이어 사망 → 패배 (도주 플래그와 무관)
        2. 적이 도주 중인데 추격하지 않았으면 → 적 탈출
        3. 행동이 조우를 끝냈으면 도주 플래그에 따라 플레이어/적 탈출
        """
        if encounter.ended:
            raise EncounterAlreadyEndedError(encounter.result.value)
        if not result.success:
            return

        if result.fled:
            encounter.player_fleeing = True

        self.adjust_aggressiveness(encounter, result.kind)

        if result.projectile is not None and result.projectile_outcome is not None:
            encounter.projectiles.record(result.projectile, result.projectile_outcome)

        if not encounter.enemy.is_alive:
            self.end_encounter(encounter, EncounterOutcome.VICTORY)
        elif not player.is_alive:
            self.end_encounter(encounter, EncounterOutcome.DEFEAT)
        elif encounter.enemy_fleeing and result.kind is not PlayerActionKind.CHASE:
            self.end_encounter(encounter, EncounterOutcome.ENEMY_ESCAPED)
        elif result.encounter_ended:
            if encounter.player_fleeing:
                self.end_encounter(encounter, EncounterOutcome.PLAYER_ESCAPED)
            elif encounter.enemy_fleeing:
                self.end_encounter(encounter, EncounterOutcome.ENEMY_ESCAPED)
