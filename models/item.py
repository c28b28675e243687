"""
아이템 모델 정의

아이템 정의(정적 콘텐츠)와 제작된 아이템 인스턴스를 표현합니다.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.grade import ItemQuality
from models.skill import SkillType


class EquipSlot(str, Enum):
    """장착 부위"""
    HEAD = "head"
    CHEST = "chest"
    LEGS = "legs"
    FEET = "feet"
    MAIN_HAND = "main_hand"
    OFF_HAND = "off_hand"


HAND_SLOTS: tuple[EquipSlot, ...] = (EquipSlot.MAIN_HAND, EquipSlot.OFF_HAND)


@dataclass(frozen=True)
class ItemDef:
    """
    아이템 정의

    호출자가 콘텐츠 레지스트리를 통해 주입하는 불변 데이터입니다.
    전투 수치는 모두 기본값 0이며, 품질 배율은 장착 시점에 적용됩니다.
    """
    id: str
    name: str
    weight: float = 0.0
    slot: Optional[EquipSlot] = None
    two_handed: bool = False

    # 무기
    damage_min: int = 0
    damage_max: int = 0
    accuracy: int = 0
    ranged_bonus: int = 0
    """도주 중인 적에게 주는 추가 피해"""

    skill: Optional[SkillType] = None
    """이 무기를 사용할 때 성장하는 숙련도"""

    # 방어구/방패
    armor: int = 0
    dodge_penalty: int = 0
    block_bonus: int = 0
    shield_armor: int = 0

    # 기타
    quality_eligible: bool = False
    """제작 시 품질 판정 대상 여부"""

    saturation_gain: Optional[int] = None
    """섭취 시 포만감 회복량 (None = 먹을 수 없음)"""

    tags: tuple[str, ...] = ()

    @property
    def is_weapon(self) -> bool:
        return self.damage_max > 0

    @property
    def is_edible(self) -> bool:
        return self.saturation_gain is not None and "food" in self.tags


@dataclass(frozen=True)
class ItemInstance:
    """장착된 아이템 인스턴스 (제작 품질 포함)"""
    item_id: str
    quality: Optional[ItemQuality] = None
