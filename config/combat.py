"""전투 관련 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class CombatConfig:
    """전투 설정"""

    # 판정
    DODGE_BAND: float = 0.15
    """명중 판정 실패 시 '회피'로 분류되는 구간 폭"""

    BLOCK_ATTACKER_AR_FACTOR: float = 0.7
    """방어 확률 계산 시 공격자 명중 등급 계수"""

    MIN_DAMAGE: int = 1
    """방어/방어구 적용 후 최소 피해"""

    # 적 턴 진행
    ENEMY_ACTION_COST: int = 200
    """적이 한 번 행동하는 데 필요한 틱"""

    ENEMY_TICK_GAIN_MULTIPLIER: int = 2
    """적 턴마다 충전되는 틱 = 속도 x 배율"""

    ENEMY_MAX_TICKS: int = 5000
    """적 최대 틱"""

    ENEMY_DAMAGE_VARIANCE: float = 0.3
    """적 기본 피해 변동폭 (±30%)"""

    # 플레이어 전투 행동 비용 (틱)
    ATTACK_TICK_COST: int = 200
    THROW_ROCK_TICK_COST: int = 150
    SHOOT_ARROW_TICK_COST: int = 180
    FLEE_TICK_COST: int = 150
    CHASE_TICK_COST: int = 250
    IDLE_TICK_COST: int = 100
    IDLE_TICK_GAIN: int = 200

    # 투척/사격
    ROCK_DAMAGE_MIN: int = 5
    ROCK_DAMAGE_MAX: int = 10
    ROCK_ACCURACY: int = 5
    """돌 던지기 명중 보정"""

    # 행동별 능력치 사용량
    MELEE_STRENGTH_USAGE: float = 1.0
    MELEE_PRECISION_USAGE: float = 0.5
    CRIT_LUCK_USAGE: float = 1.0
    THROW_PRECISION_USAGE: float = 1.0
    THROW_AGILITY_USAGE: float = 0.3
    SHOOT_PRECISION_USAGE: float = 1.5
    SHOOT_AGILITY_USAGE: float = 0.5
    FLEE_AGILITY_USAGE: float = 1.0


COMBAT = CombatConfig()
