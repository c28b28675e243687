"""인카운터(조우) 관련 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class EncounterConfig:
    """인카운터 설정"""

    # 공격성
    DEFAULT_AGGRESSIVENESS: float = 0.5
    """템플릿에 공격성이 없을 때 기본값"""

    PASSIVE_THRESHOLD: float = 0.2
    """이 값 미만의 공격성은 비공격적(관망)으로 취급"""

    AGGRESSION_ON_ATTACK: float = 0.3
    """플레이어가 공격할 때 공격성 증가량"""

    AGGRESSION_ON_IDLE: float = 0.1
    """플레이어가 대기할 때 공격성 감소량"""

    DEFAULT_FLEE_THRESHOLD: float = 0.3
    """적 도주 고려 체력 비율 기본값"""

    FLEE_PLAYER_HEALTH_WEIGHT: float = 0.5
    """적 도주 확률 계산 시 플레이어 체력 비율 가중치"""

    # 도주/추격
    FLEE_BASE_CHANCE: float = 0.4
    FLEE_MAX_CHANCE: float = 0.9
    CHASE_BASE_CHANCE: float = 0.5
    CHASE_MAX_CHANCE: float = 0.85
    CHASE_PLAYER_HEALTH_WEIGHT: float = 0.3
    """추격 결정 시 (1 - 플레이어 체력 비율) 가중치"""

    # 투사체 회수
    ROCK_RECOVERY: float = 0.95
    ARROW_RECOVERY: float = 0.60
    ESCAPED_ARROW_FACTOR: float = 0.25
    """적이 도주했을 때 화살 회수율 배율"""

    RECOVERY_HIT: float = 1.0
    RECOVERY_DODGED: float = 0.7
    RECOVERY_BLOCKED: float = 0.9
    RECOVERY_MISSED: float = 0.6


ENCOUNTER = EncounterConfig()
