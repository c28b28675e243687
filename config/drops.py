"""전리품 및 적 생성 관련 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class DropConfig:
    """드롭 설정"""

    LEVEL_BONUS_PER_LEVEL: float = 0.1
    """적 레벨 1당 전리품 수량 보너스 (레벨 1 초과분)"""

    # 적 레벨 스케일링
    ENEMY_LEVEL_SCALING: float = 0.4
    """플레이어 레벨 1당 적 레벨 증가량"""

    ENEMY_LEVEL_VARIANCE: int = 1
    """적 레벨 무작위 편차 (±)"""

    # 경험치 보상
    XP_HIGHER_LEVEL_BONUS: float = 0.1
    """상위 레벨 적 처치 시 레벨 차당 보너스"""

    XP_LOWER_LEVEL_PENALTY: float = 0.15
    """하위 레벨 적 처치 시 레벨 차당 패널티"""

    XP_MIN_MODIFIER: float = 0.1
    """경험치 배율 하한"""


DROP = DropConfig()
