"""
조우(전투) 모델 정의

전투 시작 시 생성되고 종료 시 폐기되는 상태 객체입니다.
매 턴 참조로 전달되며, 공격성 변화와 적의 틱 누적이 턴 사이에 유지됩니다.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from models.actor import Actor


class EncounterState(str, Enum):
    """조우 상태"""
    ENGAGED = "engaged"
    ENEMY_FLEEING = "enemy_fleeing"
    PLAYER_FLEEING = "player_fleeing"
    ENDED = "ended"


class EncounterOutcome(str, Enum):
    """조우 종료 결과"""
    VICTORY = "victory"
    DEFEAT = "defeat"
    PLAYER_ESCAPED = "player_escaped"
    ENEMY_ESCAPED = "enemy_escaped"


class ProjectileType(str, Enum):
    """투사체 종류 (값은 소지품 아이템 ID)"""
    ARROW = "arrow"
    ROCK = "rocks"


class ProjectileOutcome(str, Enum):
    """투사체 판정 결과 (회수 판정 순서와 동일)"""
    HIT = "hit"
    DODGED = "dodged"
    BLOCKED = "blocked"
    MISSED = "missed"


@dataclass
class ProjectileTally:
    """조우 중 발사한 투사체 집계 (종류 x 결과)"""

    counts: dict[ProjectileType, dict[ProjectileOutcome, int]] = field(
        default_factory=lambda: {
            projectile: {outcome: 0 for outcome in ProjectileOutcome}
            for projectile in ProjectileType
        }
    )

    def record(self, projectile: ProjectileType, outcome: ProjectileOutcome) -> None:
        self.counts[projectile][outcome] += 1

    def get(self, projectile: ProjectileType, outcome: ProjectileOutcome) -> int:
        return self.counts[projectile][outcome]

    def total(self, projectile: ProjectileType) -> int:
        return sum(self.counts[projectile].values())


@dataclass
class Encounter:
    """진행 중인 조우"""

    enemy: Actor
    aggressiveness: float = 0.5
    """현재 공격성 [0, 1] (템플릿 기본값에서 플레이어 행동에 따라 변화)"""

    flee_threshold: float = 0.3
    base_xp: int = 10

    player_fleeing: bool = False
    enemy_fleeing: bool = False
    ended: bool = False
    result: Optional[EncounterOutcome] = None
    projectiles: ProjectileTally = field(default_factory=ProjectileTally)
    turns: int = 0
    """적이 처리한 턴 수"""

    @property
    def state(self) -> EncounterState:
        """두 도주 플래그와 종료 여부에서 파생되는 상태"""
        if self.ended:
            return EncounterState.ENDED
        if self.player_fleeing:
            return EncounterState.PLAYER_FLEEING
        if self.enemy_fleeing:
            return EncounterState.ENEMY_FLEEING
        return EncounterState.ENGAGED

    def finish(self, result: EncounterOutcome) -> None:
        self.ended = True
        self.result = result


@dataclass
class Corpse:
    """승리 후 남은 사체 (채집 기회는 숙련도 종류별 1회)"""

    template_id: str
    enemy_name: str
    harvested: set = field(default_factory=set)
    """이미 채집한 숙련도 종류"""
