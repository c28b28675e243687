"""
ContentRegistry 유닛 테스트

중복 ID/잘못된 정의 검증과 조회 동작을 테스트합니다.
"""
import pytest

from exceptions import DuplicateContentError, InvalidContentError
from models.content import EnemyTemplate, LocationDef, LootEntry, RecipeDef, ResourceNodeDef
from models.item import ItemDef
from models.repos.content_registry import ContentRegistry


class TestValidation:
    """콘텐츠 검증 테스트"""

    def test_duplicate_id(self):
        with pytest.raises(DuplicateContentError):
            ContentRegistry(items=[ItemDef(id="rocks", name="돌"), ItemDef(id="rocks", name="돌2")])

    def test_invalid_damage_range(self):
        with pytest.raises(InvalidContentError) as exc_info:
            ContentRegistry(items=[ItemDef(id="club", name="몽둥이", damage_min=5, damage_max=2)])
        assert exc_info.value.content_id == "club"

    def test_negative_weight(self):
        with pytest.raises(InvalidContentError):
            ContentRegistry(items=[ItemDef(id="feather", name="깃털", weight=-1.0)])

    @pytest.mark.parametrize("max_health,speed", [(0, 100), (10, 0)])
    def test_enemy_requires_positive_health_and_speed(self, max_health, speed):
        with pytest.raises(InvalidContentError):
            ContentRegistry(enemies=[
                EnemyTemplate(id="ghost", name="유령", max_health=max_health, damage=1, speed=speed)
            ])

    def test_bad_loot_range(self):
        template = EnemyTemplate(
            id="boar", name="멧돼지", max_health=20, damage=4, speed=90,
            loot={"raw_meat": LootEntry(min=3, max=1, chance=0.5)},
        )
        with pytest.raises(InvalidContentError):
            ContentRegistry(enemies=[template])

    def test_recipe_input_must_be_positive(self):
        with pytest.raises(InvalidContentError):
            ContentRegistry(recipes=[RecipeDef(id="nothing", name="무", inputs={"rocks": 0})])

    def test_location_parent_must_exist(self):
        with pytest.raises(InvalidContentError) as exc_info:
            ContentRegistry(locations=[LocationDef(id="crypt", name="지하 묘지", parent_id="ruins")])
        assert exc_info.value.content_id == "crypt"

    def test_location_references_must_exist(self):
        with pytest.raises(InvalidContentError):
            ContentRegistry(locations=[LocationDef(id="forest", name="숲", enemy_ids=("dragon",))])

    def test_node_chance_out_of_range(self):
        with pytest.raises(InvalidContentError):
            ContentRegistry(resource_nodes=[ResourceNodeDef(id="bush", name="덤불", depletion_chance=1.5)])


class TestLookup:
    """조회 테스트"""

    def test_known_ids(self, registry):
        assert registry.get_item("stone_knife").name == "돌칼"
        assert registry.get_recipe("campfire").unlocks == "campfire"
        assert registry.get_enemy("wolf").base_xp == 20

    def test_unknown_ids_return_none(self, registry):
        assert registry.get_item("ghost") is None
        assert registry.get_item(None) is None
        assert registry.get_recipe("ghost") is None
        assert registry.get_enemy("ghost") is None
        assert registry.get_enemy(None) is None
        assert registry.get_resource_node("ghost") is None
        assert registry.get_location("ghost") is None

    def test_nodes_and_locations(self):
        registry = ContentRegistry(
            resource_nodes=[
                ResourceNodeDef(id="berry_bush", name="산딸기 덤불", yields={"berries": LootEntry(min=2, max=4, chance=1.0)})
            ],
            locations=[
                LocationDef(id="forest", name="숲", resource_ids=("berry_bush",)),
                LocationDef(id="clearing", name="공터", parent_id="forest"),
            ],
        )
        assert registry.get_resource_node("berry_bush").yields["berries"].max == 4
        assert registry.get_location("forest").resource_ids == ("berry_bush",)
        assert [location.id for location in registry.get_child_locations(None)] == ["forest"]
        assert [location.id for location in registry.get_child_locations("forest")] == ["clearing"]

    def test_item_weight(self, registry):
        assert registry.item_weight("rocks") == 1.0
        assert registry.item_weight("ghost") == 0.0

    def test_tables_are_read_only(self, registry):
        with pytest.raises(TypeError):
            registry.items["ghost"] = ItemDef(id="ghost", name="유령")
        assert "ghost" not in registry.items
        assert len(registry.enemies) == 4
        assert "stone_knife" in registry.recipes
