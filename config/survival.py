"""생존(허기/회복/기절) 관련 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SurvivalConfig:
    """생존 설정"""

    HUNGER_DECAY_CHANCE: float = 0.1
    """턴마다 포만감이 1 감소할 확률"""

    HUNGER_DECAY_AMOUNT: int = 1

    OVERFULL_RATIO: float = 0.8
    """이 비율 이상 포만감일 때 체력 회복"""

    REGEN_AMOUNT: int = 2
    REGEN_SATURATION_COST: int = 1

    STARVATION_DAMAGE: int = 5
    """포만감 0일 때 턴당 피해"""

    # 기절
    PASS_OUT_TICK_THRESHOLD: int = 100
    """이 틱 미만이면 어떤 행동도 할 수 없어 기절"""

    PASS_OUT_TICK_GAIN: int = 500
    PASS_OUT_HEALTH_COST: int = 10

    # 비전투 행동
    EAT_TICK_COST: int = 50
    REST_TICK_COST: int = 100
    REST_TICK_GAIN: int = 200
    """휴식: 100틱 소모 후 200틱 획득 (기절 임계값과 동일한 최소 비용)"""

    # 플레이어 기본 자원
    PLAYER_MAX_TICKS: int = 1000
    PLAYER_MAX_HEALTH: int = 100
    PLAYER_MAX_SATURATION: int = 100
    PLAYER_SPEED: int = 100
    PLAYER_DAMAGE: int = 10
    PLAYER_CARRY_CAPACITY: int = 30


SURVIVAL = SurvivalConfig()
