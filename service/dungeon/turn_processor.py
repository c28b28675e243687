"""
턴 처리 프로세서 (Turn Processor)

플레이어 행동 하나를 한 턴으로 진행합니다.
틱 소비 → 행동 실행 → 조우 반영 → (종료 정산 또는 적 턴) → 생존 처리 → 기절 순서입니다.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from config import EXPLORATION, SURVIVAL
from exceptions import CombatNotInProgressError, GameOverError, InvalidStateError
from models.content import EnemyTemplate
from models.encounter import Corpse, Encounter, EncounterOutcome
from models.exploration import WanderOutcome
from models.repos.content_registry import ContentRegistry
from models.results import FailureReason
from models.skill import SkillGainResult, SkillType
from models.stats import LevelUpResult
from service.actor_service import ActorService
from service.combat.player_actions import PlayerActionKind, PlayerActionResult, PlayerActions
from service.dungeon import drop_handler, reward_calculator
from service.dungeon.drop_handler import HarvestResult
from service.dungeon.encounter_service import EnemyAction, EnemyActionType, EncounterService
from service.dungeon.enemy_factory import EnemyFactory
from service.dungeon.exploration_service import CampfireAction, ExplorationService, GatherResult, WanderResult
from service.dungeon.reward_calculator import ProjectileRecovery
from service.event.event_bus import EventBus, GameEvent, GameEventType
from service.inventory_service import EatResult, InventoryService
from service.item.crafting_service import CraftingService, CraftResult
from service.player.level_service import LevelService
from service.player.survival_service import PassOutResult, SurvivalService, UpkeepResult
from service.random_source import RandomSource
from service.session import GameSession

logger = logging.getLogger(__name__)


@dataclass
class EncounterSummary:
    """조우 종료 정산 결과"""
    result: EncounterOutcome
    xp_gained: int = 0
    level_up: Optional[LevelUpResult] = None
    loot: dict[str, int] = field(default_factory=dict)
    recovered: Optional[ProjectileRecovery] = None
    corpse: Optional[Corpse] = None


@dataclass
class TurnResult:
    """턴 진행 결과"""
    success: bool
    reason: Optional[FailureReason] = None
    turn: int = 0
    player_action: Optional[PlayerActionResult] = None
    enemy_actions: list[EnemyAction] = field(default_factory=list)
    encounter_summary: Optional[EncounterSummary] = None
    craft: Optional[CraftResult] = None
    harvest: Optional[HarvestResult] = None
    eat: Optional[EatResult] = None
    wander: Optional[WanderResult] = None
    gather: Optional[GatherResult] = None
    ambush: Optional[Encounter] = None
    """탐험 행동 뒤 시작된 무작위 조우"""

    upkeep: Optional[UpkeepResult] = None
    pass_out: Optional[PassOutResult] = None
    game_over: bool = False

    @classmethod
    def fail(cls, session: GameSession, reason: FailureReason) -> "TurnResult":
        return cls(success=False, reason=reason, turn=session.turn, game_over=session.game_over)


class TurnProcessor:
    """턴 실행 로직 처리"""

    def __init__(self, registry: ContentRegistry, rng: RandomSource, event_bus: Optional[EventBus] = None):
        self.registry = registry
        self.rng = rng
        self.event_bus = event_bus or EventBus()
        self.actions = PlayerActions(registry, rng)
        self.encounters = EncounterService(rng)
        self.enemies = EnemyFactory(rng)
        self.exploration = ExplorationService(registry, rng)

    def _publish(self, session: GameSession, event_type: GameEventType, **data: Any) -> None:
        self.event_bus.publish(GameEvent(
            type=event_type,
            actor_id=session.player.id,
            data=data,
            turn=session.turn,
        ))

    def _publish_skill_gain(self, session: GameSession, gain: Optional[SkillGainResult]) -> None:
        if gain is not None and gain.levels_gained > 0:
            self._publish(session, GameEventType.SKILL_LEVEL_UP, skill=gain.skill.value, level=gain.new_level)

    @staticmethod
    def _ensure_alive(session: GameSession) -> None:
        if session.game_over:
            raise GameOverError()

    def _ensure_out_of_combat(self, session: GameSession) -> Optional[TurnResult]:
        if session.in_combat:
            return TurnResult.fail(session, FailureReason.IN_ENCOUNTER)
        return None

    # =========================================================================
    # 조우
    # =========================================================================

    def start_encounter(self, session: GameSession, template: EnemyTemplate, level: Optional[int] = None):
        """
        조우 시작

        Args:
            session: 게임 세션
            template: 적 템플릿
            level: 적 레벨 (None이면 플레이어 레벨 기반 굴림)

        Returns:
            새 조우
        """
        self._ensure_alive(session)
        if session.in_combat:
            raise InvalidStateError("이미 전투 중입니다")

        enemy = self.enemies.create_enemy(template, session.player.level, level)
        session.encounter = self.encounters.create_encounter(enemy, template)
        self._publish(
            session, GameEventType.ENCOUNTER_STARTED,
            enemy_id=enemy.id, enemy_name=enemy.name, enemy_level=enemy.level,
        )
        return session.encounter

    def perform_combat_action(self, session: GameSession, kind: PlayerActionKind) -> TurnResult:
        """
        전투 행동 한 턴 진행

        사전 조건(탄약, 활, 추격 대상)이나 틱이 부족하면 아무것도 바꾸지 않고 실패를 반환합니다.

        Args:
            session: 게임 세션
            kind: 플레이어 행동 종류

        Returns:
            TurnResult: 턴 결과
        """
        self._ensure_alive(session)
        if not session.in_combat:
            raise CombatNotInProgressError()

        player = session.player
        encounter = session.encounter

        reason = self.actions.validate(kind, player, encounter)
        if reason is not None:
            return TurnResult.fail(session, reason)
        if not ActorService.spend_ticks(player, kind.tick_cost):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        action = self.actions.execute(kind, player, encounter, session.turn)
        if kind.tick_gain:
            ActorService.add_ticks(player, kind.tick_gain)
        session.turn += 1

        turn_result = TurnResult(success=True, player_action=action)
        self.encounters.handle_player_action(encounter, player, action)
        if action.attack is not None:
            self._publish(
                session, GameEventType.ATTACK_RESOLVED,
                outcome=action.attack.tag, damage=action.damage_dealt,
            )
        self._publish_skill_gain(session, action.skill_gain)

        if encounter.ended:
            turn_result.encounter_summary = self.finalize_encounter(session)
        else:
            self._run_enemy_turn(session, turn_result)

        self._end_turn(session, turn_result)
        return turn_result

    def _run_enemy_turn(self, session: GameSession, turn_result: TurnResult) -> None:
        """
        적 턴 진행

        적이 틱이 모자라 행동하지 못하면 아무 일도 일어나지 않습니다.
        플레이어가 도주 중이어도 조우는 열린 채로 남고, 느린 적은 틱을 모은 뒤 추격 여부를 결정합니다.
        """
        encounter = session.encounter
        player = session.player
        enemy_action = self.encounters.process_enemy_turn(encounter, player, session.turn)
        if enemy_action is not None:
            turn_result.enemy_actions.append(enemy_action)
            if enemy_action.type is EnemyActionType.START_FLEE:
                self._publish(session, GameEventType.ENEMY_FLED, enemy_id=encounter.enemy.id)

        if encounter.ended:
            turn_result.encounter_summary = self.finalize_encounter(session)

    def finalize_encounter(self, session: GameSession) -> EncounterSummary:
        """
        종료된 조우 정산

        승리: 경험치(레벨업 시 재계산) → 전리품/사체 → 투사체 회수
        적 탈출: 투사체 회수
        패배: 게임 오버
        """
        encounter = session.encounter
        player = session.player
        enemy = encounter.enemy
        summary = EncounterSummary(result=encounter.result)

        if encounter.result is EncounterOutcome.VICTORY:
            xp = reward_calculator.calculate_xp_reward(enemy.level, player.level, encounter.base_xp)
            summary.xp_gained = xp
            summary.level_up = LevelService.grant_experience(player, xp, self.rng, self.registry)
            self._publish(session, GameEventType.EXP_OBTAINED, amount=xp)
            if summary.level_up.levels_gained > 0:
                self._publish(
                    session, GameEventType.LEVEL_UP,
                    level=summary.level_up.new_level,
                    auto_stats=[stat.value for stat in summary.level_up.auto_stats],
                    free_stat_points=player.level_info.free_stat_points,
                )

            template = self.registry.get_enemy(enemy.template_id)
            summary.loot = drop_handler.roll_loot(enemy, template, player, self.rng)
            session.pending_loot = dict(summary.loot)
            if summary.loot:
                self._publish(session, GameEventType.LOOT_OBTAINED, items=dict(summary.loot))
            if template is not None and template.harvests and not template.uses_inventory:
                session.corpse = Corpse(template_id=template.id, enemy_name=enemy.name)
                summary.corpse = session.corpse

            summary.recovered = self._recover_projectiles(session)
        elif encounter.result is EncounterOutcome.ENEMY_ESCAPED:
            summary.recovered = self._recover_projectiles(session)
        elif encounter.result is EncounterOutcome.DEFEAT:
            self._trigger_game_over(session)

        self._publish(session, GameEventType.ENCOUNTER_ENDED, result=encounter.result.value, enemy_id=enemy.id)
        session.encounter = None
        return summary

    def _recover_projectiles(self, session: GameSession) -> ProjectileRecovery:
        recovered = reward_calculator.calculate_projectile_recovery(session.encounter, self.rng)
        if recovered.arrows or recovered.rocks:
            InventoryService.add_items(session.player, recovered.as_items())
            self._publish(
                session, GameEventType.PROJECTILES_RECOVERED,
                arrows=recovered.arrows, rocks=recovered.rocks,
            )
        return recovered

    # =========================================================================
    # 비전투 행동
    # =========================================================================

    def perform_craft(self, session: GameSession, recipe_id: str) -> TurnResult:
        """제작 한 턴 진행 (검증 실패나 틱 부족이면 변경 없음)"""
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        player = session.player
        recipe = self.registry.get_recipe(recipe_id)
        reason = CraftingService.check_craftable(player, recipe, session.structures)
        if reason is not None:
            return TurnResult.fail(session, reason)
        if not ActorService.spend_ticks(player, recipe.tick_cost):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        craft = CraftingService.attempt_craft(
            player, recipe_id, session.structures, self.registry, self.rng, session.turn
        )
        session.turn += 1
        if craft.failed_roll:
            self._publish(session, GameEventType.CRAFT_FAILED, recipe_id=recipe_id)
        else:
            self._publish(
                session, GameEventType.ITEM_CRAFTED,
                recipe_id=recipe_id,
                outputs=craft.outputs,
                qualities={item_id: quality.name for item_id, quality in craft.qualities.items()},
            )
        self._publish_skill_gain(session, craft.skill_gain)

        turn_result = TurnResult(success=True, craft=craft)
        self._end_turn(session, turn_result)
        return turn_result

    def perform_harvest(self, session: GameSession, skill: SkillType) -> TurnResult:
        """사체 도축/가죽 벗기기 한 턴 진행"""
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        player = session.player
        corpse = session.corpse
        template = self.registry.get_enemy(corpse.template_id) if corpse is not None else None
        if not drop_handler.can_harvest(corpse, template, skill):
            return TurnResult.fail(session, FailureReason.NOTHING_TO_HARVEST)

        harvest_yield = drop_handler.get_harvest(template, skill)
        if not ActorService.spend_ticks(player, harvest_yield.tick_cost):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        harvest = drop_handler.harvest_corpse(player, corpse, template, skill, self.rng, session.turn)
        if all(entry.skill in corpse.harvested for entry in template.harvests):
            session.corpse = None
        session.turn += 1
        self._publish(
            session, GameEventType.CORPSE_HARVESTED,
            skill=skill.value, outputs=harvest.outputs, failed=harvest.failed_roll,
        )
        self._publish_skill_gain(session, harvest.skill_gain)

        turn_result = TurnResult(success=True, harvest=harvest)
        self._end_turn(session, turn_result)
        return turn_result

    def perform_eat(self, session: GameSession, item_id: str) -> TurnResult:
        """음식 섭취 한 턴 진행"""
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        player = session.player
        item = self.registry.get_item(item_id)
        if item is None:
            return TurnResult.fail(session, FailureReason.UNKNOWN_ITEM)
        if not item.is_edible:
            return TurnResult.fail(session, FailureReason.NOT_EDIBLE)
        if InventoryService.get_item_count(player, item_id) <= 0:
            return TurnResult.fail(session, FailureReason.NOT_OWNED)
        if not ActorService.spend_ticks(player, SURVIVAL.EAT_TICK_COST):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        eat = InventoryService.eat(player, item_id, self.registry)
        session.turn += 1
        turn_result = TurnResult(success=True, eat=eat)
        self._end_turn(session, turn_result)
        return turn_result

    def perform_rest(self, session: GameSession) -> TurnResult:
        """휴식 한 턴 진행 (100틱 소모, 200틱 회복)"""
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        player = session.player
        if not ActorService.spend_ticks(player, SURVIVAL.REST_TICK_COST):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)
        ActorService.add_ticks(player, SURVIVAL.REST_TICK_GAIN)
        session.turn += 1

        turn_result = TurnResult(success=True)
        self._end_turn(session, turn_result)
        return turn_result

    def take_loot(self, session: GameSession, item_id: str, amount: int = 1) -> int:
        """
        남은 전리품 가져가기 (턴 소모 없음)

        Returns:
            실제로 가져간 수량
        """
        available = session.pending_loot.get(item_id, 0)
        taken = min(amount, available)
        if taken <= 0:
            return 0
        InventoryService.add_item(session.player, item_id, taken)
        if available - taken > 0:
            session.pending_loot[item_id] = available - taken
        else:
            del session.pending_loot[item_id]
        return taken

    # =========================================================================
    # 탐험
    # =========================================================================

    def perform_wander(self, session: GameSession) -> TurnResult:
        """
        배회 한 턴 진행

        아무것도 발견하지 못하면 25%, 무언가 발견하면 3% 확률로 무작위 조우가 시작됩니다.
        """
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        reason = self.exploration.check_wander(session)
        if reason is not None:
            return TurnResult.fail(session, reason)
        if not ActorService.spend_ticks(session.player, EXPLORATION.WANDER_TICK_COST):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        wander = self.exploration.wander(session)
        session.turn += 1
        if wander.outcome is WanderOutcome.EXIT_FOUND:
            self._publish(session, GameEventType.EXIT_FOUND, location_id=session.exploration.location_id)
        elif wander.outcome is WanderOutcome.LOCATION_FOUND:
            self._publish(session, GameEventType.LOCATION_DISCOVERED, location_id=wander.location_id)
        elif wander.outcome is WanderOutcome.RESOURCE_FOUND:
            self._publish(session, GameEventType.RESOURCE_DISCOVERED, node_id=wander.node_id)

        turn_result = TurnResult(success=True, wander=wander)
        if wander.found_anything:
            self._roll_ambush(session, turn_result, EXPLORATION.ACTION_ENCOUNTER_CHANCE)
        else:
            self._roll_ambush(session, turn_result, EXPLORATION.WANDER_ENCOUNTER_CHANCE)
        self._end_turn(session, turn_result)
        return turn_result

    def perform_gather(self, session: GameSession, node_id: str) -> TurnResult:
        """시야에 있는 자원 노드에서 채집 한 턴 진행"""
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        reason = self.exploration.check_gather(session, node_id)
        if reason is not None:
            return TurnResult.fail(session, reason)
        node = self.registry.get_resource_node(node_id)
        if not ActorService.spend_ticks(session.player, node.gather_tick_cost):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        gather = self.exploration.gather(session.player, session, node_id)
        session.turn += 1
        self._publish(session, GameEventType.RESOURCE_GATHERED, node_id=node_id, outputs=dict(gather.outputs))
        if gather.depleted:
            self._publish(session, GameEventType.RESOURCE_DEPLETED, node_id=node_id)

        turn_result = TurnResult(success=True, gather=gather)
        self._roll_ambush(session, turn_result, EXPLORATION.ACTION_ENCOUNTER_CHANCE)
        self._end_turn(session, turn_result)
        return turn_result

    def perform_enter_location(self, session: GameSession, location_id: str) -> TurnResult:
        """발견한 입구로 장소에 들어가는 한 턴 진행"""
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        reason = self.exploration.check_enter(session, location_id)
        if reason is not None:
            return TurnResult.fail(session, reason)
        if not ActorService.spend_ticks(session.player, EXPLORATION.ENTER_LOCATION_TICK_COST):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        self.exploration.enter_location(session, location_id)
        session.turn += 1
        self._publish(session, GameEventType.LOCATION_ENTERED, location_id=location_id)

        turn_result = TurnResult(success=True)
        self._roll_ambush(session, turn_result, EXPLORATION.ACTION_ENCOUNTER_CHANCE)
        self._end_turn(session, turn_result)
        return turn_result

    def perform_leave_location(self, session: GameSession) -> TurnResult:
        """찾은 출구로 현재 장소를 떠나는 한 턴 진행"""
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        reason = self.exploration.check_leave(session)
        if reason is not None:
            return TurnResult.fail(session, reason)
        if not ActorService.spend_ticks(session.player, EXPLORATION.LEAVE_LOCATION_TICK_COST):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        left = self.exploration.leave_location(session)
        session.turn += 1
        self._publish(
            session, GameEventType.LOCATION_EXITED,
            location_id=left, returned_to=session.exploration.location_id,
        )

        turn_result = TurnResult(success=True)
        self._roll_ambush(session, turn_result, EXPLORATION.ACTION_ENCOUNTER_CHANCE)
        self._end_turn(session, turn_result)
        return turn_result

    def perform_campfire(self, session: GameSession, action: CampfireAction) -> TurnResult:
        """모닥불 설치/회수/끄기 한 턴 진행"""
        self._ensure_alive(session)
        blocked = self._ensure_out_of_combat(session)
        if blocked is not None:
            return blocked

        reason = self.exploration.check_campfire(session, action)
        if reason is not None:
            return TurnResult.fail(session, reason)
        if not ActorService.spend_ticks(session.player, action.tick_cost):
            return TurnResult.fail(session, FailureReason.INSUFFICIENT_TICKS)

        self.exploration.apply_campfire(session, action)
        session.turn += 1

        turn_result = TurnResult(success=True)
        self._end_turn(session, turn_result)
        return turn_result

    def _roll_ambush(self, session: GameSession, turn_result: TurnResult, chance: float) -> None:
        template = self.exploration.roll_random_encounter(session, chance)
        if template is not None:
            turn_result.ambush = self.start_encounter(session, template)

    # =========================================================================
    # 턴 종료 처리
    # =========================================================================

    def _end_turn(self, session: GameSession, turn_result: TurnResult) -> None:
        """생존 처리와 기절 (게임 오버면 생략)"""
        player = session.player
        if not session.game_over:
            turn_result.upkeep = SurvivalService.process_upkeep(player, self.rng)
            if turn_result.upkeep.starvation_damage:
                self._publish(session, GameEventType.STARVING, damage=turn_result.upkeep.starvation_damage)
            if turn_result.upkeep.died:
                self._handle_death(session, turn_result)

        if not session.game_over and SurvivalService.should_pass_out(player):
            turn_result.pass_out = SurvivalService.pass_out(player)
            session.turn += 1
            self._publish(
                session, GameEventType.PASSED_OUT,
                damage=turn_result.pass_out.damage, ticks=turn_result.pass_out.ticks_gained,
            )
            if turn_result.pass_out.died:
                self._handle_death(session, turn_result)
            elif session.in_combat:
                # 기절한 동안 적이 한 번 더 행동
                self._run_enemy_turn(session, turn_result)

        turn_result.turn = session.turn
        turn_result.game_over = session.game_over

    def _handle_death(self, session: GameSession, turn_result: TurnResult) -> None:
        if session.in_combat:
            self.encounters.end_encounter(session.encounter, EncounterOutcome.DEFEAT)
            turn_result.encounter_summary = self.finalize_encounter(session)
        else:
            self._trigger_game_over(session)

    def _trigger_game_over(self, session: GameSession) -> None:
        if session.game_over:
            return
        session.game_over = True
        logger.info(f"Game over: {session.player.id} (turn {session.turn})")
        self._publish(session, GameEventType.PLAYER_DIED)
