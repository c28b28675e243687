"""
숙련도 모델 정의

무기 계열, 방패, 제작, 채집 숙련도를 관리합니다.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class SkillType(str, Enum):
    """숙련도 종류"""
    UNARMED = "unarmed"
    KNIFE = "knife"
    SPEAR = "spear"
    ARCHERY = "archery"
    THROWING = "throwing"
    SHIELD = "shield"
    CRAFTING = "crafting"
    BUTCHERING = "butchering"
    SKINNING = "skinning"


@dataclass
class Skill:
    """단일 숙련도"""

    level: int = 0
    xp: int = 0
    xp_to_next_level: int = 0
    last_gained_at: Optional[int] = None
    """마지막으로 경험치를 얻은 턴 (None = 획득한 적 없음)"""


@dataclass
class SkillGainResult:
    """숙련도 경험치 획득 결과"""

    skill: SkillType
    levels_gained: int = 0
    new_level: int = 0


@dataclass
class Skills:
    """숙련도 모음 (SkillType별 하나씩)"""

    entries: dict[SkillType, Skill] = field(default_factory=dict)

    def get(self, skill_type: SkillType) -> Skill:
        return self.entries[skill_type]

    def level_of(self, skill_type: SkillType) -> int:
        skill = self.entries.get(skill_type)
        return skill.level if skill else 0
