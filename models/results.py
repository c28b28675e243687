"""
공통 결과 타입

정상 진행 중의 실패는 예외가 아니라 실패 사유 코드가 담긴 결과 객체로 반환합니다.
호출자는 이 결과를 보고 메시지를 구성합니다.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    """실패 사유 코드"""

    # 행동 경제
    INSUFFICIENT_TICKS = "insufficient_ticks"
    GAME_OVER = "game_over"

    # 성장
    NO_FREE_STAT_POINTS = "no_free_stat_points"

    # 소지품/장비
    UNKNOWN_ITEM = "unknown_item"
    NOT_OWNED = "not_owned"
    NOT_EQUIPPABLE = "not_equippable"
    NOT_EQUIPPED = "not_equipped"
    NOT_EDIBLE = "not_edible"

    # 제작/채집
    UNKNOWN_RECIPE = "unknown_recipe"
    MISSING_STRUCTURE = "missing_structure"
    ALREADY_BUILT = "already_built"
    INSUFFICIENT_MATERIALS = "insufficient_materials"
    NOTHING_TO_HARVEST = "nothing_to_harvest"

    # 전투
    NOT_IN_ENCOUNTER = "not_in_encounter"
    IN_ENCOUNTER = "in_encounter"
    NO_AMMO = "no_ammo"
    NO_BOW = "no_bow"
    ENEMY_NOT_FLEEING = "enemy_not_fleeing"

    # 탐험
    CAMPFIRE_LIT = "campfire_lit"
    NOTHING_TO_GATHER = "nothing_to_gather"
    UNKNOWN_LOCATION = "unknown_location"
    LOCATION_UNREACHABLE = "location_unreachable"
    NOT_IN_LOCATION = "not_in_location"
    NO_EXIT_FOUND = "no_exit_found"


@dataclass
class OperationResult:
    """단순 성공/실패 결과"""
    success: bool
    reason: Optional[FailureReason] = None

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(success=True)

    @classmethod
    def fail(cls, reason: FailureReason) -> "OperationResult":
        return cls(success=False, reason=reason)
