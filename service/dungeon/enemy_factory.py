"""
적 생성기

적 템플릿과 플레이어 레벨로부터 적 액터를 생성합니다.
"""
import logging
import math
from itertools import count
from typing import Optional

from config import DROP
from models.actor import Actor
from models.content import EnemyTemplate, LootEntry
from models.stats import STAT_TYPES, Stats
from service.actor_service import ActorService
from service.random_source import RandomSource

logger = logging.getLogger(__name__)

_enemy_serial = count(1)


def roll_amount(entry: LootEntry, rng: RandomSource) -> int:
    """min ~ max 균등 수량 굴림"""
    return entry.min + math.floor(rng.random() * (entry.max - entry.min + 1))


class EnemyFactory:
    """적 액터 생성"""

    def __init__(self, rng: RandomSource):
        self.rng = rng

    def roll_enemy_level(self, base_level: int, player_level: int) -> int:
        """
        적 레벨 = max(1, 기본 레벨 + floor((플레이어 레벨 - 1) x 0.4) + {-1, 0, +1})
        """
        offset = math.floor((player_level - 1) * DROP.ENEMY_LEVEL_SCALING)
        spread = DROP.ENEMY_LEVEL_VARIANCE * 2 + 1
        variance = math.floor(self.rng.random() * spread) - DROP.ENEMY_LEVEL_VARIANCE
        return max(1, base_level + offset + variance)

    @staticmethod
    def scale_stats(template: EnemyTemplate, level: int) -> Stats:
        """템플릿 기본 능력치 + 레벨당 성장량 x (레벨 - 1) (내림)"""
        stats = Stats()
        for stat in STAT_TYPES:
            base = template.base_stats.get(stat.value, 0)
            growth = template.stat_growth.get(stat.value, 0.0)
            stats.increase(stat, base + math.floor(growth * (level - 1)))
        return stats

    def roll_inventory(self, template: EnemyTemplate) -> dict[str, int]:
        """소지품 테이블 굴림 (항목마다 확률 1회, 성공 시 수량 1회)"""
        inventory: dict[str, int] = {}
        for item_id, entry in template.inventory_table.items():
            if self.rng.random() < entry.chance:
                amount = roll_amount(entry, self.rng)
                if amount > 0:
                    inventory[item_id] = amount
        return inventory

    def create_enemy(
        self,
        template: EnemyTemplate,
        player_level: int = 1,
        level: Optional[int] = None,
    ) -> Actor:
        """
        적 생성

        Args:
            template: 적 템플릿
            player_level: 플레이어 레벨 (적 레벨 스케일링용)
            level: 지정 레벨 (None이면 굴림)

        Returns:
            생성된 적 액터
        """
        if level is None:
            level = self.roll_enemy_level(template.base_level, player_level)
        inventory = self.roll_inventory(template) if template.uses_inventory else {}

        enemy = ActorService.create_enemy_actor(
            f"{template.id}-{next(_enemy_serial)}",
            template.name,
            max_health=template.max_health,
            damage=template.damage,
            speed=template.speed,
            level=level,
            stats=self.scale_stats(template, level),
            natural_armor=template.armor,
            inventory=inventory,
            template_id=template.id,
        )
        logger.debug(f"Enemy created: {enemy.id} lv {level} (hp {enemy.max_health})")
        return enemy
