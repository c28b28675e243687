"""
드롭 핸들러 - 전리품 / 사체 채집

전투 승리 후 전리품 굴림과 사체 도축/가죽 벗기기를 처리합니다.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from config import DROP, SKILL
from models.actor import Actor
from models.content import EnemyTemplate, HarvestYield
from models.encounter import Corpse
from models.results import FailureReason
from models.skill import SkillGainResult, SkillType
from service.dungeon.enemy_factory import roll_amount
from service.inventory_service import InventoryService
from service.player.stat_conversion import get_loot_bonus
from service.random_source import RandomSource
from service.skill.skill_service import SkillService

logger = logging.getLogger(__name__)


@dataclass
class HarvestResult:
    """사체 채집 결과"""
    success: bool
    reason: Optional[FailureReason] = None
    failed_roll: bool = False
    """채집은 진행했지만 실패 판정 (산출물 없음, 경험치 감소)"""

    outputs: dict[str, int] = field(default_factory=dict)
    skill_gain: Optional[SkillGainResult] = None


# =============================================================================
# 전리품
# =============================================================================


def get_loot_multiplier(player: Actor, enemy_level: int) -> float:
    """수량 배율 = 1 + 행운 보너스 + 0.1 x (적 레벨 - 1)"""
    level_bonus = DROP.LEVEL_BONUS_PER_LEVEL * max(0, enemy_level - 1)
    return 1 + get_loot_bonus(player.level_info.stats) + level_bonus


def roll_loot(
    enemy: Actor,
    template: Optional[EnemyTemplate],
    player: Actor,
    rng: RandomSource,
) -> dict[str, int]:
    """
    전리품 굴림

    소지품을 가진 적(uses_inventory)은 소지품을 그대로 떨구고,
    그 외에는 전리품 테이블 항목마다 확률 판정 후 수량을 굴려 행운/레벨 배율을 적용합니다.
    알 수 없는 템플릿은 전리품 없음으로 처리합니다.

    Args:
        enemy: 처치한 적
        template: 적 템플릿
        player: 플레이어 (행운 보너스)
        rng: 난수 공급원

    Returns:
        아이템 ID → 수량
    """
    if template is None:
        return {}
    if template.uses_inventory:
        return dict(enemy.inventory)

    multiplier = get_loot_multiplier(player, enemy.level)
    loot: dict[str, int] = {}
    for item_id, entry in template.loot.items():
        if rng.random() < entry.chance:
            amount = math.floor(roll_amount(entry, rng) * multiplier)
            if amount > 0:
                loot[item_id] = amount
    return loot


# =============================================================================
# 사체 채집
# =============================================================================


def get_harvest(template: Optional[EnemyTemplate], skill: SkillType) -> Optional[HarvestYield]:
    if template is None:
        return None
    for harvest in template.harvests:
        if harvest.skill is skill:
            return harvest
    return None


def can_harvest(corpse: Optional[Corpse], template: Optional[EnemyTemplate], skill: SkillType) -> bool:
    if corpse is None or skill in corpse.harvested:
        return False
    return get_harvest(template, skill) is not None


def harvest_corpse(
    player: Actor,
    corpse: Optional[Corpse],
    template: Optional[EnemyTemplate],
    skill: SkillType,
    rng: RandomSource,
    turn: int,
) -> HarvestResult:
    """
    사체 채집 (도축/가죽 벗기기)

    채집 기회는 판정 성공/실패와 관계없이 소모됩니다.
    실패하면 산출물 없이 감소된 경험치만 얻고, 성공하면 숙련도 수확량 보너스가 적용됩니다.

    Args:
        player: 플레이어
        corpse: 대상 사체
        template: 사체의 적 템플릿
        skill: 채집 숙련도 (도축 또는 가죽 벗기기)
        rng: 난수 공급원
        turn: 현재 턴

    Returns:
        HarvestResult: 채집 결과
    """
    harvest = get_harvest(template, skill)
    if corpse is None or harvest is None or skill in corpse.harvested:
        return HarvestResult(success=False, reason=FailureReason.NOTHING_TO_HARVEST)

    corpse.harvested.add(skill)
    level = player.skills.level_of(skill)

    if rng.random() < SkillService.get_harvest_failure_chance(level):
        gain = SkillService.add_skill_xp(player.skills, skill, SKILL.XP_HARVEST_FAILURE, turn)
        logger.debug(f"{player.id} failed to harvest {corpse.enemy_name} ({skill.value})")
        return HarvestResult(success=True, failed_roll=True, skill_gain=gain)

    yield_bonus = SkillService.get_yield_bonus(level)
    outputs = {
        item_id: math.floor(base * (1 + yield_bonus))
        for item_id, base in harvest.outputs.items()
    }
    InventoryService.add_items(player, outputs)
    gain = SkillService.add_skill_xp(player.skills, skill, SKILL.XP_HARVEST_SUCCESS, turn)
    logger.debug(f"{player.id} harvested {corpse.enemy_name} ({skill.value}): {outputs}")
    return HarvestResult(success=True, outputs=outputs, skill_gain=gain)
