"""
테스트용 Item 픽스처 데이터
"""
from typing import Any

from models.item import EquipSlot
from models.skill import SkillType

# 무기 아이템
WEAPON_ITEMS: list[dict[str, Any]] = [
    {
        "id": "stone_knife",
        "name": "돌칼",
        "weight": 1.0,
        "slot": EquipSlot.MAIN_HAND,
        "damage_min": 4,
        "damage_max": 6,
        "accuracy": 2,
        "skill": SkillType.KNIFE,
        "quality_eligible": True,
    },
    {
        "id": "spear",
        "name": "창",
        "weight": 3.0,
        "slot": EquipSlot.MAIN_HAND,
        "two_handed": True,
        "damage_min": 8,
        "damage_max": 12,
        "accuracy": 4,
        "skill": SkillType.SPEAR,
        "quality_eligible": True,
    },
    {
        "id": "bow",
        "name": "활",
        "weight": 2.0,
        "slot": EquipSlot.MAIN_HAND,
        "two_handed": True,
        "damage_min": 6,
        "damage_max": 10,
        "accuracy": 5,
        "ranged_bonus": 4,
        "skill": SkillType.ARCHERY,
        "quality_eligible": True,
    },
]

# 방어구 / 방패
ARMOR_ITEMS: list[dict[str, Any]] = [
    {
        "id": "leather_helm",
        "name": "가죽 투구",
        "weight": 1.0,
        "slot": EquipSlot.HEAD,
        "armor": 2,
        "quality_eligible": True,
    },
    {
        "id": "leather_chest",
        "name": "가죽 갑옷",
        "weight": 4.0,
        "slot": EquipSlot.CHEST,
        "armor": 4,
        "dodge_penalty": 3,
        "quality_eligible": True,
    },
    {
        "id": "wooden_shield",
        "name": "나무 방패",
        "weight": 3.0,
        "slot": EquipSlot.OFF_HAND,
        "block_bonus": 10,
        "shield_armor": 2,
        "quality_eligible": True,
    },
]

# 재료 / 음식 / 탄약
MATERIAL_ITEMS: list[dict[str, Any]] = [
    {"id": "sticks", "name": "나뭇가지", "weight": 0.5},
    {"id": "fiber", "name": "섬유", "weight": 0.1},
    {"id": "rocks", "name": "돌", "weight": 1.0},
    {"id": "arrow", "name": "화살", "weight": 0.1},
    {"id": "leather", "name": "가죽", "weight": 1.0},
    {"id": "raw_leather", "name": "생가죽", "weight": 1.5},
    {"id": "campfire_kit", "name": "모닥불 재료", "weight": 0.0},
    {"id": "campfire", "name": "모닥불", "weight": 2.0},
    {
        "id": "berries",
        "name": "산딸기",
        "weight": 0.1,
        "saturation_gain": 5,
        "tags": ("food",),
    },
    {
        "id": "raw_meat",
        "name": "생고기",
        "weight": 0.5,
        "saturation_gain": 8,
        "tags": ("food", "raw"),
    },
    {
        "id": "cooked_meat",
        "name": "구운 고기",
        "weight": 0.5,
        "saturation_gain": 20,
        "tags": ("food",),
    },
]

ALL_ITEMS: list[dict[str, Any]] = WEAPON_ITEMS + ARMOR_ITEMS + MATERIAL_ITEMS
