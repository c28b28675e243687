"""
정적 콘텐츠 정의

적 템플릿, 레시피, 자원 노드, 장소 정의를 표현합니다.
모든 정의는 불변이며 ContentRegistry를 통해 엔진에 주입됩니다.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from models.skill import SkillType


def _frozen(mapping: Optional[Mapping] = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class LootEntry:
    """전리품 테이블 항목"""
    min: int
    max: int
    chance: float


@dataclass(frozen=True)
class HarvestYield:
    """사체 채집(도축/가죽 벗기기) 산출물"""
    skill: SkillType
    outputs: Mapping[str, int] = field(default_factory=_frozen)
    tick_cost: int = 200


@dataclass(frozen=True)
class EnemyTemplate:
    """적 템플릿"""
    id: str
    name: str
    max_health: int
    damage: int
    speed: int
    base_level: int = 1
    flee_threshold: float = 0.3
    """도주를 고려하기 시작하는 체력 비율"""

    aggressiveness: Optional[float] = None
    """기본 공격성 (None이면 설정 기본값)"""

    base_xp: int = 10
    base_stats: Mapping[str, int] = field(default_factory=_frozen)
    stat_growth: Mapping[str, float] = field(default_factory=_frozen)
    """레벨당 능력치 성장량"""

    armor: int = 0
    loot: Mapping[str, LootEntry] = field(default_factory=_frozen)
    uses_inventory: bool = False
    """True면 전리품 테이블 대신 소지품을 떨굼"""

    inventory_table: Mapping[str, LootEntry] = field(default_factory=_frozen)
    """소지품 생성 테이블 (uses_inventory일 때만 사용)"""

    harvests: tuple[HarvestYield, ...] = ()


@dataclass(frozen=True)
class RecipeDef:
    """제작 레시피"""
    id: str
    name: str
    inputs: Mapping[str, int] = field(default_factory=_frozen)
    outputs: Mapping[str, int] = field(default_factory=_frozen)
    tick_cost: int = 100
    requires_campfire: bool = False
    skill_check: bool = False
    """True면 숙련도 기반 실패/품질 판정 수행"""

    unlocks: Optional[str] = None
    """제작 시 설치되는 구조물 ID (예: campfire)"""


@dataclass(frozen=True)
class ResourceNodeDef:
    """자원 노드 정의 (배회 중 발견, 채집하면 일정 확률로 고갈)"""
    id: str
    name: str
    discovery_chance: float = 0.0
    """배회 1회당 발견 확률 (후보 노드끼리 누적 판정)"""

    depletion_chance: float = 0.0
    """채집 1회 후 고갈 확률"""

    drop_off_chance: float = 0.0
    """배회 1회당 시야에서 멀어질 기본 확률 (0이면 판정 없음)"""

    gather_tick_cost: int = 100
    yields: Mapping[str, LootEntry] = field(default_factory=_frozen)
    """채집 산출물 (chance가 1 미만이면 확률 판정 후 수량 판정)"""


@dataclass(frozen=True)
class LocationDef:
    """장소 정의 (parent_id로 중첩, 최상위 장소는 야외에서 발견)"""
    id: str
    name: str
    parent_id: Optional[str] = None
    discovery_chance: float = 0.0
    exit_discovery_chance: float = 0.0
    """장소 안에서 배회 1회당 출구 발견 확률"""

    is_safe: bool = False
    """True면 무작위 조우 없음"""

    enemy_ids: tuple[str, ...] = ()
    resource_ids: tuple[str, ...] = ()
