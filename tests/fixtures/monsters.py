"""
테스트용 적 템플릿 픽스처 데이터
"""
from typing import Any

from models.content import HarvestYield, LootEntry
from models.skill import SkillType

# 기본 테스트 적
DEFAULT_MONSTER_DATA: dict[str, Any] = {
    "id": "test_slime",
    "name": "테스트 슬라임",
    "max_health": 30,
    "damage": 5,
    "speed": 100,
    "base_xp": 10,
}

# 사체를 남기는 동물
ANIMAL_MONSTERS: list[dict[str, Any]] = [
    {
        "id": "rabbit",
        "name": "토끼",
        "max_health": 10,
        "damage": 1,
        "speed": 150,
        "flee_threshold": 0.5,
        "aggressiveness": 0.1,
        "base_xp": 5,
        "harvests": (
            HarvestYield(skill=SkillType.BUTCHERING, outputs={"raw_meat": 2}, tick_cost=150),
            HarvestYield(skill=SkillType.SKINNING, outputs={"raw_leather": 1}, tick_cost=150),
        ),
    },
    {
        "id": "wolf",
        "name": "늑대",
        "max_health": 40,
        "damage": 8,
        "speed": 120,
        "aggressiveness": 0.8,
        "base_xp": 20,
        "base_stats": {"agility": 3, "strength": 2},
        "stat_growth": {"agility": 0.5, "strength": 1.0},
        "armor": 1,
        "loot": {"raw_meat": LootEntry(min=1, max=3, chance=0.5)},
        "harvests": (
            HarvestYield(skill=SkillType.BUTCHERING, outputs={"raw_meat": 4}),
        ),
    },
]

# 소지품을 떨구는 적
HUMANOID_MONSTERS: list[dict[str, Any]] = [
    {
        "id": "bandit",
        "name": "산적",
        "max_health": 50,
        "damage": 10,
        "speed": 100,
        "base_level": 2,
        "base_xp": 30,
        "uses_inventory": True,
        "inventory_table": {
            "arrow": LootEntry(min=2, max=6, chance=0.8),
            "berries": LootEntry(min=1, max=2, chance=0.3),
        },
    },
]

ALL_MONSTERS: list[dict[str, Any]] = [DEFAULT_MONSTER_DATA] + ANIMAL_MONSTERS + HUMANOID_MONSTERS
