"""
액터 모델 정의

플레이어와 적이 공유하는 가변 엔티티입니다.
모든 자원(틱, 체력, 포만감, 소지품, 장비, 능력치, 숙련도)은 액터가 값으로 소유하며,
두 액터가 같은 컨테이너를 공유하지 않습니다.
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from config.grade import ItemQuality
from models.item import EquipSlot, ItemInstance
from models.skill import Skills
from models.stats import LevelInfo

if TYPE_CHECKING:
    from service.item.equipment_service import EquipmentBonus
    from service.player.stat_conversion import DerivedStats


@dataclass
class Actor:
    """플레이어 또는 적"""

    id: str
    name: str

    # 행동 경제
    ticks: int = 0
    max_ticks: int = 0

    # 신체 자원 (max_* 는 기본값 + 능력치 보너스로 재계산됨)
    health: int = 0
    max_health: int = 0
    base_max_health: int = 0

    saturation: int = 0
    max_saturation: int = 0
    base_max_saturation: int = 0

    carry_capacity: float = 0.0
    base_carry_capacity: float = 0.0

    # 전투 기본값
    speed: int = 0
    base_speed: int = 0
    damage: int = 0
    natural_armor: int = 0
    """장비와 무관한 고유 방어력 (적 템플릿)"""

    inventory: dict[str, int] = field(default_factory=dict)
    equipment: dict[EquipSlot, str] = field(default_factory=dict)
    equipment_instances: dict[EquipSlot, ItemInstance] = field(default_factory=dict)
    crafted_qualities: dict[str, list[ItemQuality]] = field(default_factory=dict)
    """제작품이 섞인 아이템의 개체별 품질 (item_id -> 품질 목록, 길이 = 보유 수량)"""

    level_info: LevelInfo = field(default_factory=LevelInfo)
    skills: Skills = field(default_factory=Skills)

    template_id: Optional[str] = None
    """적 템플릿 ID (플레이어는 None)"""

    # 재계산 캐시
    derived: Optional["DerivedStats"] = None
    equipment_bonus: Optional["EquipmentBonus"] = None

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def level(self) -> int:
        return self.level_info.level

    @property
    def health_fraction(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return self.health / self.max_health

    def get_name(self) -> str:
        return self.name
