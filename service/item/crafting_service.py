"""
CraftingService

레시피 제작을 담당합니다.
- 제작 가능 여부 검증 (레시피, 구조물, 재료)
- 숙련도 기반 실패 판정 (실패해도 재료는 소모)
- 품질 판정, 구조물 설치, 숙련도 경험치
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from config import SKILL
from config.grade import ItemQuality
from models.actor import Actor
from models.content import RecipeDef
from models.repos.content_registry import ContentRegistry
from models.results import FailureReason
from models.skill import SkillGainResult, SkillType
from service.inventory_service import InventoryService
from service.item.grade_service import GradeService
from service.random_source import RandomSource
from service.skill.skill_service import SkillService

logger = logging.getLogger(__name__)

CAMPFIRE = "campfire"


@dataclass
class CraftResult:
    """제작 결과"""
    success: bool
    reason: Optional[FailureReason] = None
    recipe: Optional[RecipeDef] = None
    failed_roll: bool = False
    """재료를 소모했지만 실패 판정"""

    outputs: dict[str, int] = field(default_factory=dict)
    qualities: dict[str, ItemQuality] = field(default_factory=dict)
    unlocked: Optional[str] = None
    skill_gain: Optional[SkillGainResult] = None


class CraftingService:
    """제작 비즈니스 로직"""

    @staticmethod
    def check_craftable(
        actor: Actor,
        recipe: Optional[RecipeDef],
        structures: set[str],
    ) -> Optional[FailureReason]:
        """
        제작 가능 여부 확인

        Returns:
            실패 사유 (제작 가능하면 None)
        """
        if recipe is None:
            return FailureReason.UNKNOWN_RECIPE
        if recipe.requires_campfire and CAMPFIRE not in structures:
            return FailureReason.MISSING_STRUCTURE
        if recipe.unlocks is not None and recipe.unlocks in structures:
            return FailureReason.ALREADY_BUILT
        if not InventoryService.has_items(actor, recipe.inputs):
            return FailureReason.INSUFFICIENT_MATERIALS
        return None

    @staticmethod
    def attempt_craft(
        actor: Actor,
        recipe_id: str,
        structures: set[str],
        registry: ContentRegistry,
        rng: RandomSource,
        turn: int = 0,
    ) -> CraftResult:
        """
        제작 시도

        검증에 실패하면 아무것도 바꾸지 않습니다.
        검증을 통과하면 재료를 먼저 소모하고, 숙련도 판정 레시피는 실패 확률을 굴립니다.
        실패 시 산출물 없이 감소된 경험치를 얻습니다.

        Args:
            actor: 제작자
            recipe_id: 레시피 ID
            structures: 설치된 구조물 ID 집합 (설치 시 갱신됨)
            registry: 콘텐츠 레지스트리
            rng: 난수 공급원
            turn: 현재 턴

        Returns:
            CraftResult: 제작 결과
        """
        recipe = registry.get_recipe(recipe_id)
        reason = CraftingService.check_craftable(actor, recipe, structures)
        if reason is not None:
            return CraftResult(success=False, reason=reason, recipe=recipe)

        InventoryService.remove_items(actor, recipe.inputs, registry)
        level = actor.skills.level_of(SkillType.CRAFTING)

        if recipe.skill_check and rng.random() < SkillService.get_crafting_failure_chance(level):
            gain = SkillService.add_skill_xp(actor.skills, SkillType.CRAFTING, SKILL.XP_CRAFT_FAILURE, turn)
            logger.debug(f"{actor.id} failed crafting {recipe.id}")
            return CraftResult(success=True, recipe=recipe, failed_roll=True, skill_gain=gain)

        qualities: dict[str, ItemQuality] = {}
        for item_id, count in recipe.outputs.items():
            item = registry.get_item(item_id)
            quality = None
            if item is not None and item.quality_eligible:
                quality = GradeService.roll_quality(level, rng)
                qualities[item_id] = quality
            InventoryService.add_item(actor, item_id, count, quality)

        if recipe.unlocks is not None:
            structures.add(recipe.unlocks)

        gain = SkillService.add_skill_xp(actor.skills, SkillType.CRAFTING, SKILL.XP_CRAFT_SUCCESS, turn)
        logger.debug(f"{actor.id} crafted {recipe.id}: {dict(recipe.outputs)} {qualities}")
        return CraftResult(
            success=True,
            recipe=recipe,
            outputs=dict(recipe.outputs),
            qualities=qualities,
            unlocked=recipe.unlocks,
            skill_gain=gain,
        )
