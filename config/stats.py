"""능력치 및 캐릭터 레벨 관련 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class StatConfig:
    """능력치 → 파생 수치 변환 계수"""

    # 캐릭터 레벨 곡선
    LEVEL_BASE_XP: int = 100
    """레벨업 기준 경험치"""

    LEVEL_XP_EXPONENT: float = 1.5
    """레벨업 경험치 지수"""

    AUTO_STATS_PER_LEVEL: int = 3
    """레벨업 시 사용량 기반 자동 배분 포인트"""

    FREE_STATS_PER_LEVEL: int = 2
    """레벨업 시 자유 배분 포인트"""

    AUTO_ASSIGN_RANDOM_CHANCE: float = 0.3
    """자동 배분 시 사용량을 무시하고 무작위 능력치를 고를 확률"""

    # 명중 등급 (Attack Rating)
    AR_PRECISION: int = 5
    AR_AGILITY: int = 3
    AR_LEVEL: int = 2
    AR_BASE: int = 10

    # 회피 등급 (Dodge Rating)
    DR_AGILITY: int = 5
    DR_LUCK: int = 2
    DR_LEVEL: int = 2
    DR_BASE: int = 10

    # 방어 등급 (Block Rating)
    BR_STRENGTH: int = 3
    BR_AGILITY: int = 2
    BR_LEVEL: int = 2

    BLOCK_REDUCTION_STRENGTH: int = 2
    """방어 시 힘 1당 피해 감소량"""

    # 피해 보너스
    DAMAGE_SYNERGY_AGILITY: float = 0.05
    """근접/원거리 보너스의 민첩 시너지 계수"""

    # 치명타
    CRIT_CHANCE_LUCK: float = 0.015
    CRIT_CHANCE_PRECISION: float = 0.005
    CRIT_CHANCE_CAP: float = 0.30
    """치명타 확률 상한"""

    CRIT_MULTIPLIER_BASE: float = 1.5
    CRIT_MULTIPLIER_LUCK: float = 0.02

    # 생존/경제
    LOOT_BONUS_LUCK: float = 0.05
    """행운 1당 전리품 보너스"""

    HUNGER_RESISTANCE_ENDURANCE: float = 0.01
    HUNGER_RESISTANCE_CAP: float = 0.50
    """허기 저항 상한"""

    MAX_HEALTH_VITALITY: int = 5
    MAX_HEALTH_ENDURANCE: int = 2
    SPEED_AGILITY: int = 2
    MAX_SATURATION_ENDURANCE: int = 1
    MAGIC_CAPACITY_ARCANE: int = 10
    CARRY_CAPACITY_STRENGTH: int = 5


STATS = StatConfig()
