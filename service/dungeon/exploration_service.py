"""
탐험 서비스

배회로 장소 입구/출구/자원 노드를 발견하고, 발견한 노드에서 채집하며,
장소 사이를 이동하는 규칙을 처리합니다. 모닥불이 켜져 있으면 자리를 뜰 수 없습니다.
틱 소비와 이벤트 발행은 호출자(턴 처리기)가 담당합니다.
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from config import EXPLORATION
from models.actor import Actor
from models.content import EnemyTemplate, LocationDef, ResourceNodeDef
from models.exploration import ExplorationState, NodeSighting, WanderOutcome
from models.repos.content_registry import ContentRegistry
from models.results import FailureReason
from service.dungeon.enemy_factory import roll_amount
from service.inventory_service import InventoryService
from service.random_source import RandomSource
from service.session import GameSession

logger = logging.getLogger(__name__)


class CampfireAction(str, Enum):
    """모닥불 관리 행동"""
    PLACE = "place"
    PACK = "pack"
    SMOTHER = "smother"

    @property
    def tick_cost(self) -> int:
        return _CAMPFIRE_TICK_COSTS[self]


_CAMPFIRE_TICK_COSTS = {
    CampfireAction.PLACE: EXPLORATION.PLACE_CAMPFIRE_TICK_COST,
    CampfireAction.PACK: EXPLORATION.PACK_CAMPFIRE_TICK_COST,
    CampfireAction.SMOTHER: EXPLORATION.SMOTHER_CAMPFIRE_TICK_COST,
}


@dataclass
class WanderResult:
    """배회 결과"""
    outcome: WanderOutcome
    location_id: Optional[str] = None
    """발견한 장소 ID (LOCATION_FOUND)"""

    node_id: Optional[str] = None
    """발견한 자원 노드 ID (RESOURCE_FOUND)"""

    lost_nodes: list[str] = field(default_factory=list)
    lost_locations: list[str] = field(default_factory=list)
    """입구가 모두 멀어져 잊어버린 장소"""

    @property
    def found_anything(self) -> bool:
        return self.outcome is not WanderOutcome.NOTHING


@dataclass
class GatherResult:
    """채집 결과"""
    node_id: str
    outputs: dict[str, int] = field(default_factory=dict)
    depleted: bool = False


class ExplorationService:
    """탐험 규칙 처리"""

    def __init__(self, registry: ContentRegistry, rng: RandomSource):
        self.registry = registry
        self.rng = rng

    @staticmethod
    def campfire_lit(session: GameSession) -> bool:
        return EXPLORATION.CAMPFIRE_ID in session.structures

    def current_location(self, state: ExplorationState) -> Optional[LocationDef]:
        if state.location_id is None:
            return None
        return self.registry.get_location(state.location_id)

    # =========================================================================
    # 배회
    # =========================================================================

    def check_wander(self, session: GameSession) -> Optional[FailureReason]:
        if self.campfire_lit(session):
            return FailureReason.CAMPFIRE_LIT
        return None

    def wander(self, session: GameSession) -> WanderResult:
        """
        배회 1회 진행

        1. 장소 안에서 출구를 아직 못 찾았으면 출구 판정
        2. 하위 장소(야외면 최상위 장소)마다 발견 판정, 처음 성공한 장소의 입구 추가
        3. 자원 노드 발견 판정 (후보 노드 확률 누적, 1회 굴림)
        이후 시야의 노드와 입구가 한 칸씩 멀어지며 일부는 사라집니다.
        """
        state = session.exploration
        result = self._discover(state)
        result.lost_nodes = self._drift_nodes(state)
        result.lost_locations = self._drift_entrances(state)
        logger.debug(
            f"{session.player.id} wandered: {result.outcome.value} "
            f"(location={state.location_id}, nodes={len(state.nodes)})"
        )
        return result

    def _discover(self, state: ExplorationState) -> WanderResult:
        location = self.current_location(state)
        if location is not None and not state.found_exit:
            if self.rng.random() < location.exit_discovery_chance:
                state.found_exit = True
                return WanderResult(outcome=WanderOutcome.EXIT_FOUND)

        for child in self.registry.get_child_locations(state.location_id):
            if self.rng.random() < child.discovery_chance:
                state.entrances.setdefault(child.id, []).append(0)
                return WanderResult(outcome=WanderOutcome.LOCATION_FOUND, location_id=child.id)

        node = self._roll_resource_discovery(location)
        if node is not None:
            state.nodes.append(NodeSighting(node_id=node.id))
            return WanderResult(outcome=WanderOutcome.RESOURCE_FOUND, node_id=node.id)

        return WanderResult(outcome=WanderOutcome.NOTHING)

    def _resource_candidates(self, location: Optional[LocationDef]) -> list[ResourceNodeDef]:
        if location is None:
            return list(self.registry.resource_nodes.values())
        return [self.registry.get_resource_node(node_id) for node_id in location.resource_ids]

    def _roll_resource_discovery(self, location: Optional[LocationDef]) -> Optional[ResourceNodeDef]:
        candidates = self._resource_candidates(location)
        if not candidates:
            return None

        roll = self.rng.random()
        cumulative = 0.0
        for node in candidates:
            cumulative += node.discovery_chance
            if roll < cumulative:
                return node
        return None

    def _drift_nodes(self, state: ExplorationState) -> list[str]:
        """노드별 멀어짐 판정: 기본 확률 x (1 + 거리 x 0.1), 최대 0.5"""
        lost: list[str] = []
        kept: list[NodeSighting] = []
        for sighting in state.nodes:
            node = self.registry.get_resource_node(sighting.node_id)
            if node is not None and node.drop_off_chance > 0:
                chance = min(
                    EXPLORATION.NODE_DROP_OFF_MAX_CHANCE,
                    node.drop_off_chance * (1 + sighting.distance * EXPLORATION.NODE_DROP_OFF_DISTANCE_FACTOR),
                )
                if self.rng.random() < chance:
                    lost.append(sighting.node_id)
                    continue
            sighting.distance += 1
            kept.append(sighting)
        state.nodes = kept
        return lost

    def _drift_entrances(self, state: ExplorationState) -> list[str]:
        """현재 위치에서 닿는 입구별 멀어짐 판정: 0.08 x (1 + 거리 x 0.15), 최대 0.4"""
        forgotten: list[str] = []
        for location_id in list(state.entrances):
            location = self.registry.get_location(location_id)
            if location is None or location.parent_id != state.location_id:
                continue

            remaining: list[int] = []
            for distance in state.entrances[location_id]:
                chance = min(
                    EXPLORATION.ENTRANCE_DROP_OFF_MAX_CHANCE,
                    EXPLORATION.ENTRANCE_DROP_OFF_CHANCE
                    * (1 + distance * EXPLORATION.ENTRANCE_DROP_OFF_DISTANCE_FACTOR),
                )
                if self.rng.random() >= chance:
                    remaining.append(distance + 1)

            if remaining:
                state.entrances[location_id] = remaining
            else:
                del state.entrances[location_id]
                forgotten.append(location_id)
        return forgotten

    # =========================================================================
    # 채집
    # =========================================================================

    def check_gather(self, session: GameSession, node_id: str) -> Optional[FailureReason]:
        if self.registry.get_resource_node(node_id) is None:
            return FailureReason.NOTHING_TO_GATHER
        if session.exploration.closest_node(node_id) is None:
            return FailureReason.NOTHING_TO_GATHER
        return None

    def gather(self, player: Actor, session: GameSession, node_id: str) -> GatherResult:
        """
        가장 가까운 노드에서 채집

        산출물마다 (확률이 1 미만이면 확률 판정 후) 수량을 굴리고,
        마지막으로 고갈 판정에 성공하면 그 노드가 시야에서 사라집니다.
        """
        node = self.registry.get_resource_node(node_id)
        result = GatherResult(node_id=node_id)

        for item_id, entry in node.yields.items():
            if entry.chance < 1.0 and self.rng.random() >= entry.chance:
                continue
            amount = roll_amount(entry, self.rng)
            if amount > 0:
                result.outputs[item_id] = amount
        InventoryService.add_items(player, result.outputs)

        if node.depletion_chance > 0 and self.rng.random() < node.depletion_chance:
            session.exploration.nodes.remove(session.exploration.closest_node(node_id))
            result.depleted = True

        logger.debug(f"{player.id} gathered {node_id}: {result.outputs} (depleted={result.depleted})")
        return result

    # =========================================================================
    # 장소 이동
    # =========================================================================

    def check_enter(self, session: GameSession, location_id: str) -> Optional[FailureReason]:
        location = self.registry.get_location(location_id)
        if location is None:
            return FailureReason.UNKNOWN_LOCATION
        if self.campfire_lit(session):
            return FailureReason.CAMPFIRE_LIT

        state = session.exploration
        if not state.entrances.get(location_id) or location.parent_id != state.location_id:
            return FailureReason.LOCATION_UNREACHABLE
        return None

    @staticmethod
    def enter_location(session: GameSession, location_id: str) -> None:
        """가장 가까운 입구를 사용해 진입 (입구 소모, 시야의 노드 초기화)"""
        state = session.exploration
        entrances = sorted(state.entrances[location_id])
        entrances.pop(0)
        if entrances:
            state.entrances[location_id] = entrances
        else:
            del state.entrances[location_id]

        if state.location_id is not None:
            state.location_stack.append(state.location_id)
        state.location_id = location_id
        state.found_exit = False
        state.nodes = []
        logger.info(f"{session.player.id} entered {location_id}")

    def check_leave(self, session: GameSession) -> Optional[FailureReason]:
        if self.campfire_lit(session):
            return FailureReason.CAMPFIRE_LIT
        state = session.exploration
        if state.in_wilderness:
            return FailureReason.NOT_IN_LOCATION
        if not state.found_exit:
            return FailureReason.NO_EXIT_FOUND
        return None

    @staticmethod
    def leave_location(session: GameSession) -> str:
        """
        찾은 출구로 이전 위치로 돌아감

        Returns:
            떠난 장소 ID
        """
        state = session.exploration
        left = state.location_id
        state.location_id = state.location_stack.pop() if state.location_stack else None
        state.found_exit = False
        state.nodes = []
        logger.info(f"{session.player.id} left {left} -> {state.location_id or 'wilderness'}")
        return left

    # =========================================================================
    # 무작위 조우
    # =========================================================================

    def roll_random_encounter(self, session: GameSession, chance: float) -> Optional[EnemyTemplate]:
        """
        탐험 행동 후 무작위 조우 판정

        안전한 장소에서는 굴리지 않습니다.
        성공하면 현재 장소의 출현 적(야외면 전체 적) 중 하나를 균등하게 고릅니다.
        """
        location = self.current_location(session.exploration)
        if location is not None and location.is_safe:
            return None
        if self.rng.random() >= chance:
            return None

        if location is not None:
            candidates = [self.registry.get_enemy(enemy_id) for enemy_id in location.enemy_ids]
        else:
            candidates = list(self.registry.enemies.values())
        if not candidates:
            return None

        index = min(len(candidates) - 1, math.floor(self.rng.random() * len(candidates)))
        return candidates[index]

    # =========================================================================
    # 모닥불
    # =========================================================================

    def check_campfire(self, session: GameSession, action: CampfireAction) -> Optional[FailureReason]:
        lit = self.campfire_lit(session)
        if action is CampfireAction.PLACE:
            if lit:
                return FailureReason.ALREADY_BUILT
            if InventoryService.get_item_count(session.player, EXPLORATION.CAMPFIRE_ID) <= 0:
                return FailureReason.NOT_OWNED
        elif not lit:
            return FailureReason.MISSING_STRUCTURE
        return None

    def apply_campfire(self, session: GameSession, action: CampfireAction) -> None:
        """설치: 아이템 → 구조물, 회수: 구조물 → 아이템, 끄기: 구조물 제거"""
        if action is CampfireAction.PLACE:
            InventoryService.remove_item(session.player, EXPLORATION.CAMPFIRE_ID, 1, self.registry)
            session.structures.add(EXPLORATION.CAMPFIRE_ID)
        else:
            session.structures.discard(EXPLORATION.CAMPFIRE_ID)
            if action is CampfireAction.PACK:
                InventoryService.add_item(session.player, EXPLORATION.CAMPFIRE_ID)
        logger.debug(f"{session.player.id} campfire {action.value}")
