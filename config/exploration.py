"""탐험(배회/채집/장소 이동/모닥불) 관련 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ExplorationConfig:
    """탐험 설정"""

    # 행동 틱 비용
    WANDER_TICK_COST: int = 300
    ENTER_LOCATION_TICK_COST: int = 150
    LEAVE_LOCATION_TICK_COST: int = 100
    PLACE_CAMPFIRE_TICK_COST: int = 50
    PACK_CAMPFIRE_TICK_COST: int = 50
    SMOTHER_CAMPFIRE_TICK_COST: int = 25

    # 무작위 조우
    WANDER_ENCOUNTER_CHANCE: float = 0.25
    """아무것도 발견하지 못한 배회 후 조우 확률"""

    ACTION_ENCOUNTER_CHANCE: float = 0.03
    """그 외 탐험 행동(발견한 배회, 채집, 장소 이동) 후 조우 확률"""

    # 배회 시 멀어짐 (거리 1당 배율 증가)
    NODE_DROP_OFF_DISTANCE_FACTOR: float = 0.1
    NODE_DROP_OFF_MAX_CHANCE: float = 0.5

    ENTRANCE_DROP_OFF_CHANCE: float = 0.08
    ENTRANCE_DROP_OFF_DISTANCE_FACTOR: float = 0.15
    ENTRANCE_DROP_OFF_MAX_CHANCE: float = 0.4

    CAMPFIRE_ID: str = "campfire"
    """모닥불 구조물 ID이자 들고 다닐 때의 아이템 ID"""


EXPLORATION = ExplorationConfig()
