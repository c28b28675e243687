"""
능력치 모델 정의

7대 능력치, 능력치 사용량, 캐릭터 레벨 정보를 관리합니다.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional


class StatType(str, Enum):
    """7대 능력치 (선언 순서가 곧 가중 배분 순서)"""
    VITALITY = "vitality"
    STRENGTH = "strength"
    AGILITY = "agility"
    PRECISION = "precision"
    ENDURANCE = "endurance"
    ARCANE = "arcane"
    LUCK = "luck"


STAT_TYPES: tuple[StatType, ...] = tuple(StatType)


@dataclass
class Stats:
    """
    능력치 벡터

    모든 값은 0 이상의 정수이며, 캐릭터 생애 동안 감소하지 않습니다.
    """
    vitality: int = 0
    strength: int = 0
    agility: int = 0
    precision: int = 0
    endurance: int = 0
    arcane: int = 0
    luck: int = 0

    def get(self, stat: StatType) -> int:
        return getattr(self, stat.value)

    def increase(self, stat: StatType, amount: int = 1) -> None:
        setattr(self, stat.value, self.get(stat) + amount)

    def copy(self) -> "Stats":
        return Stats(**{f.name: getattr(self, f.name) for f in fields(self)})


@dataclass
class StatUsage:
    """
    능력치 사용량

    행동이 능력치를 사용할 때마다 증가하며(소수 허용),
    자동 배분의 가중치로만 사용됩니다.
    """
    vitality: float = 0.0
    strength: float = 0.0
    agility: float = 0.0
    precision: float = 0.0
    endurance: float = 0.0
    arcane: float = 0.0
    luck: float = 0.0

    def get(self, stat: StatType) -> float:
        return getattr(self, stat.value)

    def add(self, stat: StatType, amount: float = 1.0) -> None:
        setattr(self, stat.value, self.get(stat) + amount)

    def total(self) -> float:
        return sum(self.get(stat) for stat in STAT_TYPES)

    def reset(self) -> None:
        for stat in STAT_TYPES:
            setattr(self, stat.value, 0.0)


@dataclass
class LevelInfo:
    """캐릭터 레벨 정보"""

    level: int = 1
    xp: int = 0
    xp_to_next_level: int = 0
    """다음 레벨까지 필요한 경험치 (레벨에서 파생)"""

    free_stat_points: int = 0
    stats: Stats = field(default_factory=Stats)
    stat_usage: StatUsage = field(default_factory=StatUsage)


@dataclass
class LevelUpResult:
    """경험치 획득 결과"""

    levels_gained: int = 0
    auto_stats: list[StatType] = field(default_factory=list)
    """자동 배분된 능력치 목록 (배분 순서대로)"""

    new_level: Optional[int] = None
