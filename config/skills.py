"""숙련도(스킬) 관련 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SkillConfig:
    """숙련도 성장 및 효과 곡선 설정"""

    # 숙련도 레벨 곡선 (캐릭터 레벨 곡선과 별개)
    BASE_XP: int = 50
    """숙련도 레벨업 기준 경험치"""

    XP_EXPONENT: float = 1.3
    """숙련도 레벨업 경험치 지수"""

    # 체감 곡선
    DIMINISHING_DIVISOR: int = 50
    """실패 확률 감소 곡선: base / (1 + level / DIVISOR)"""

    YIELD_CURVE_K: int = 100
    """수확량/품질 보간 곡선: level / (level + K)"""

    CRAFTING_FAILURE_BASE: float = 0.25
    """제작 기본 실패 확률"""

    HARVEST_FAILURE_BASE: float = 0.30
    """채집(도축/가죽 벗기기) 기본 실패 확률"""

    # 전투 보너스
    ATTACK_RATING_PER_LEVEL: int = 1
    """무기 숙련도 레벨당 명중 등급 보너스"""

    DAMAGE_PER_LEVEL: float = 0.01
    """무기 숙련도 레벨당 피해 배율 보너스"""

    BLOCK_RATING_PER_LEVEL: int = 1
    """방패 숙련도 레벨당 방어 등급 보너스"""

    # 경험치 보상
    XP_COMBAT_HIT: int = 10
    XP_COMBAT_MISS: int = 3
    XP_COMBAT_BLOCK: int = 8
    XP_CRAFT_SUCCESS: int = 15
    XP_CRAFT_FAILURE: int = 5
    XP_HARVEST_SUCCESS: int = 12
    XP_HARVEST_FAILURE: int = 4


SKILL = SkillConfig()
