"""
SkillService

숙련도 경험치/레벨 곡선과 숙련도 효과 곡선(실패 확률, 수확량, 전투 보너스)을 담당합니다.
캐릭터 레벨 곡선(100 x L^1.5)과는 별개인 50 x L^1.3 곡선을 사용합니다.
"""
import logging
import math
from typing import Optional

from config import SKILL
from models.item import ItemDef
from models.skill import Skill, SkillGainResult, Skills, SkillType

logger = logging.getLogger(__name__)


class SkillService:
    """숙련도 비즈니스 로직"""

    # =========================================================================
    # 성장 곡선
    # =========================================================================

    @staticmethod
    def calculate_xp_for_level(level: int) -> int:
        """해당 레벨 도달에 필요한 경험치 = floor(50 x level^1.3)"""
        return math.floor(SKILL.BASE_XP * math.pow(level, SKILL.XP_EXPONENT))

    @staticmethod
    def create_skill(level: int = 0) -> Skill:
        return Skill(
            level=level,
            xp=0,
            xp_to_next_level=SkillService.calculate_xp_for_level(level + 1),
            last_gained_at=None,
        )

    @staticmethod
    def create_skills() -> Skills:
        """모든 숙련도를 레벨 0으로 생성"""
        return Skills(entries={skill_type: SkillService.create_skill() for skill_type in SkillType})

    @staticmethod
    def add_skill_xp(skills: Skills, skill_type: SkillType, amount: int, turn: int) -> SkillGainResult:
        """
        숙련도 경험치 추가

        경험치가 임계값 이상인 동안 반복해서 레벨업하므로,
        한 번에 큰 경험치를 주는 것과 여러 번 나누어 주는 것의 최종 결과가 같습니다.

        Args:
            skills: 대상 숙련도 모음
            skill_type: 숙련도 종류
            amount: 획득 경험치
            turn: 현재 턴 번호

        Returns:
            SkillGainResult: 레벨업 결과
        """
        skill = skills.get(skill_type)
        skill.xp += amount
        skill.last_gained_at = turn
        levels_gained = 0

        while skill.xp >= skill.xp_to_next_level:
            skill.xp -= skill.xp_to_next_level
            skill.level += 1
            skill.xp_to_next_level = SkillService.calculate_xp_for_level(skill.level + 1)
            levels_gained += 1

        if levels_gained > 0:
            logger.debug(f"Skill {skill_type.value} leveled up to {skill.level} (+{levels_gained})")

        return SkillGainResult(skill=skill_type, levels_gained=levels_gained, new_level=skill.level)

    # =========================================================================
    # 효과 곡선 (체감)
    # =========================================================================

    @staticmethod
    def get_crafting_failure_chance(level: int) -> float:
        """제작 실패 확률 = 0.25 / (1 + level / 50)"""
        return SKILL.CRAFTING_FAILURE_BASE / (1 + level / SKILL.DIMINISHING_DIVISOR)

    @staticmethod
    def get_harvest_failure_chance(level: int) -> float:
        """채집 실패 확률 = 0.30 / (1 + level / 50)"""
        return SKILL.HARVEST_FAILURE_BASE / (1 + level / SKILL.DIMINISHING_DIVISOR)

    @staticmethod
    def get_yield_bonus(level: int) -> float:
        """채집 수확량 보너스 = level / (level + 100)"""
        return level / (level + SKILL.YIELD_CURVE_K)

    # =========================================================================
    # 전투 보너스
    # =========================================================================

    @staticmethod
    def get_attack_rating_bonus(level: int) -> int:
        return level * SKILL.ATTACK_RATING_PER_LEVEL

    @staticmethod
    def get_damage_multiplier(level: int) -> float:
        return 1 + level * SKILL.DAMAGE_PER_LEVEL

    @staticmethod
    def get_block_rating_bonus(level: int) -> int:
        return level * SKILL.BLOCK_RATING_PER_LEVEL

    @staticmethod
    def get_weapon_skill(weapon: Optional[ItemDef]) -> SkillType:
        """무기에 대응하는 숙련도 (무기가 없거나 지정이 없으면 맨손)"""
        if weapon is None or weapon.skill is None:
            return SkillType.UNARMED
        return weapon.skill
