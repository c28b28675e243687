"""
콘텐츠 레지스트리

아이템/레시피/적/자원 노드/장소 정의를 불변 조회 테이블로 보관합니다.
전역 캐시 대신 엔진 생성 시 주입되며, 테스트에서는 가짜 콘텐츠를 넣어 사용합니다.
알 수 없는 ID 조회는 예외 대신 None을 반환합니다.
"""
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, TypeVar

from exceptions import DuplicateContentError, InvalidContentError
from models.content import EnemyTemplate, LocationDef, RecipeDef, ResourceNodeDef
from models.item import ItemDef

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _index(definitions: Iterable[T]) -> Mapping[str, T]:
    table: dict[str, T] = {}
    for definition in definitions:
        if definition.id in table:
            raise DuplicateContentError(definition.id)
        table[definition.id] = definition
    return MappingProxyType(table)


class ContentRegistry:
    """불변 콘텐츠 조회 테이블"""

    def __init__(
        self,
        items: Iterable[ItemDef] = (),
        recipes: Iterable[RecipeDef] = (),
        enemies: Iterable[EnemyTemplate] = (),
        resource_nodes: Iterable[ResourceNodeDef] = (),
        locations: Iterable[LocationDef] = (),
    ):
        self._items = _index(items)
        self._recipes = _index(recipes)
        self._enemies = _index(enemies)
        self._resource_nodes = _index(resource_nodes)
        self._locations = _index(locations)
        self._validate()
        logger.info(
            f"ContentRegistry loaded: items={len(self._items)}, recipes={len(self._recipes)}, "
            f"enemies={len(self._enemies)}, nodes={len(self._resource_nodes)}, "
            f"locations={len(self._locations)}"
        )

    def _validate(self) -> None:
        for item in self._items.values():
            if item.damage_min > item.damage_max:
                raise InvalidContentError(item.id, "damage_min > damage_max")
            if item.weight < 0:
                raise InvalidContentError(item.id, "음수 무게")

        for enemy in self._enemies.values():
            if enemy.max_health <= 0 or enemy.speed <= 0:
                raise InvalidContentError(enemy.id, "체력과 속도는 양수여야 함")
            for item_id, entry in {**enemy.loot, **enemy.inventory_table}.items():
                if entry.min > entry.max or entry.min < 0:
                    raise InvalidContentError(enemy.id, f"잘못된 수량 범위: {item_id}")

        for recipe in self._recipes.values():
            if any(count <= 0 for count in recipe.inputs.values()):
                raise InvalidContentError(recipe.id, "재료 수량은 양수여야 함")

        for node in self._resource_nodes.values():
            chances = (node.discovery_chance, node.depletion_chance, node.drop_off_chance)
            if any(not 0.0 <= chance <= 1.0 for chance in chances):
                raise InvalidContentError(node.id, "확률은 0~1 사이여야 함")
            for item_id, entry in node.yields.items():
                if entry.min > entry.max or entry.min < 0:
                    raise InvalidContentError(node.id, f"잘못된 수량 범위: {item_id}")

        for location in self._locations.values():
            if location.parent_id is not None and location.parent_id not in self._locations:
                raise InvalidContentError(location.id, f"알 수 없는 상위 장소: {location.parent_id}")
            unknown = [enemy_id for enemy_id in location.enemy_ids if enemy_id not in self._enemies]
            unknown += [node_id for node_id in location.resource_ids if node_id not in self._resource_nodes]
            if unknown:
                raise InvalidContentError(location.id, f"알 수 없는 참조: {', '.join(unknown)}")

    # =========================================================================
    # 조회
    # =========================================================================

    def get_item(self, item_id: Optional[str]) -> Optional[ItemDef]:
        if item_id is None:
            return None
        return self._items.get(item_id)

    def get_recipe(self, recipe_id: str) -> Optional[RecipeDef]:
        return self._recipes.get(recipe_id)

    def get_enemy(self, template_id: Optional[str]) -> Optional[EnemyTemplate]:
        if template_id is None:
            return None
        return self._enemies.get(template_id)

    def get_resource_node(self, node_id: str) -> Optional[ResourceNodeDef]:
        return self._resource_nodes.get(node_id)

    def get_location(self, location_id: str) -> Optional[LocationDef]:
        return self._locations.get(location_id)

    @property
    def items(self) -> Mapping[str, ItemDef]:
        return self._items

    @property
    def recipes(self) -> Mapping[str, RecipeDef]:
        return self._recipes

    @property
    def enemies(self) -> Mapping[str, EnemyTemplate]:
        return self._enemies

    @property
    def resource_nodes(self) -> Mapping[str, ResourceNodeDef]:
        return self._resource_nodes

    @property
    def locations(self) -> Mapping[str, LocationDef]:
        return self._locations

    def get_child_locations(self, location_id: Optional[str]) -> list[LocationDef]:
        """해당 장소에서 발견할 수 있는 하위 장소 (None이면 야외의 최상위 장소)"""
        return [location for location in self._locations.values() if location.parent_id == location_id]

    def item_weight(self, item_id: str) -> float:
        """아이템 무게 (알 수 없는 아이템은 0)"""
        item = self._items.get(item_id)
        return item.weight if item else 0.0
