"""
탐험 모델 정의

현재 위치, 시야에 있는 자원 노드, 발견한 장소 입구를 표현합니다.
거리는 발견 후 배회한 횟수이며, 멀수록 시야에서 사라지기 쉽습니다.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class WanderOutcome(str, Enum):
    """배회 결과 (판정 순서: 출구 → 장소 → 자원)"""
    EXIT_FOUND = "exit_found"
    LOCATION_FOUND = "location_found"
    RESOURCE_FOUND = "resource_found"
    NOTHING = "nothing"


@dataclass
class NodeSighting:
    """시야에 있는 자원 노드 하나"""
    node_id: str
    distance: int = 0


@dataclass
class ExplorationState:
    """
    세션별 탐험 상태

    location_id가 None이면 야외입니다.
    장소에 들어가면 이전 위치를 스택에 쌓고, 출구를 찾아야 빠져나올 수 있습니다.
    """

    location_id: Optional[str] = None
    location_stack: list[str] = field(default_factory=list)
    found_exit: bool = False
    nodes: list[NodeSighting] = field(default_factory=list)
    entrances: dict[str, list[int]] = field(default_factory=dict)
    """발견한 장소 ID -> 입구별 거리"""

    @property
    def in_wilderness(self) -> bool:
        return self.location_id is None

    def visible_nodes(self, node_id: str) -> list[NodeSighting]:
        return [sighting for sighting in self.nodes if sighting.node_id == node_id]

    def closest_node(self, node_id: str) -> Optional[NodeSighting]:
        sightings = self.visible_nodes(node_id)
        if not sightings:
            return None
        return min(sightings, key=lambda sighting: sighting.distance)
