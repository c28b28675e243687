"""
InventoryService 유닛 테스트
"""
from config.grade import ItemQuality
from models.item import EquipSlot
from models.results import FailureReason
from service.inventory_service import InventoryService
from service.item.equipment_service import EquipmentService


class TestAddRemove:
    """아이템 추가/제거 테스트"""

    def test_add_stacks(self, test_player):
        InventoryService.add_item(test_player, "sticks", 2)
        InventoryService.add_item(test_player, "sticks", 3)
        assert test_player.inventory["sticks"] == 5

    def test_add_non_positive_ignored(self, test_player):
        InventoryService.add_item(test_player, "sticks", 0)
        assert "sticks" not in test_player.inventory

    def test_remove_to_zero_deletes_entry(self, actor_factory):
        actor = actor_factory(inventory={"rocks": 2})
        assert InventoryService.remove_item(actor, "rocks", 2) is True
        assert "rocks" not in actor.inventory

    def test_remove_insufficient_changes_nothing(self, actor_factory):
        actor = actor_factory(inventory={"rocks": 1})
        assert InventoryService.remove_item(actor, "rocks", 2) is False
        assert actor.inventory == {"rocks": 1}

    def test_remove_items_is_all_or_nothing(self, actor_factory):
        actor = actor_factory(inventory={"sticks": 5, "rocks": 1})
        assert InventoryService.remove_items(actor, {"sticks": 5, "rocks": 3}) is False
        assert actor.inventory == {"sticks": 5, "rocks": 1}

    def test_lowest_quality_consumed_first(self, test_player):
        InventoryService.add_item(test_player, "stone_knife", 1, ItemQuality.EXCELLENT)
        InventoryService.add_item(test_player, "stone_knife", 1, ItemQuality.POOR)
        InventoryService.add_item(test_player, "stone_knife", 1, ItemQuality.GOOD)

        InventoryService.remove_item(test_player, "stone_knife", 1)

        assert sorted(test_player.crafted_qualities["stone_knife"]) == [ItemQuality.GOOD, ItemQuality.EXCELLENT]

    def test_uncrafted_units_count_as_normal(self, test_player):
        """전리품 2개 + POOR 제작품 1개: 하나 소모하면 POOR가 먼저 빠짐"""
        InventoryService.add_item(test_player, "stone_knife", 2)
        InventoryService.add_item(test_player, "stone_knife", 1, ItemQuality.POOR)

        assert test_player.crafted_qualities["stone_knife"] == [ItemQuality.NORMAL] * 2 + [ItemQuality.POOR]

        InventoryService.remove_item(test_player, "stone_knife", 1)

        assert test_player.inventory["stone_knife"] == 2
        assert test_player.crafted_qualities["stone_knife"] == [ItemQuality.NORMAL, ItemQuality.NORMAL]

    def test_quality_list_tracks_stack_count(self, test_player):
        InventoryService.add_item(test_player, "stone_knife", 1, ItemQuality.GOOD)
        InventoryService.add_item(test_player, "stone_knife", 3)
        assert len(test_player.crafted_qualities["stone_knife"]) == 4

        InventoryService.remove_item(test_player, "stone_knife", 4)

        assert "stone_knife" not in test_player.inventory
        assert "stone_knife" not in test_player.crafted_qualities

    def test_equip_uses_best_remaining_quality(self, test_player, registry):
        InventoryService.add_item(test_player, "stone_knife", 1)
        InventoryService.add_item(test_player, "stone_knife", 1, ItemQuality.POOR)
        InventoryService.remove_item(test_player, "stone_knife", 1)

        EquipmentService.equip(test_player, "stone_knife", registry)

        assert test_player.equipment_instances[EquipSlot.MAIN_HAND].quality is ItemQuality.NORMAL

    def test_removing_last_equipped_copy_unequips(self, actor_factory, registry):
        actor = actor_factory(inventory={"stone_knife": 1})
        EquipmentService.equip(actor, "stone_knife", registry)

        InventoryService.remove_item(actor, "stone_knife", 1, registry)

        assert EquipSlot.MAIN_HAND not in actor.equipment
        assert actor.equipment_bonus.weapon_damage_max == 0


class TestCarryWeight:
    """운반 무게 테스트"""

    def test_weight_sum(self, actor_factory, registry):
        actor = actor_factory(inventory={"rocks": 4, "sticks": 2, "mystery": 10})
        assert InventoryService.get_carry_weight(actor, registry) == 5.0

    def test_overburdened(self, actor_factory, registry):
        actor = actor_factory(inventory={"rocks": 31})
        assert InventoryService.is_overburdened(actor, registry) is True

        InventoryService.remove_item(actor, "rocks", 1)
        assert InventoryService.is_overburdened(actor, registry) is False


class TestEat:
    """음식 섭취 테스트"""

    def test_eat_food(self, actor_factory, registry):
        actor = actor_factory(inventory={"cooked_meat": 1})
        actor.saturation = 50

        result = InventoryService.eat(actor, "cooked_meat", registry)

        assert result.success is True
        assert result.saturation_gained == 20
        assert actor.saturation == 70
        assert "cooked_meat" not in actor.inventory

    def test_eat_clamped_to_max(self, actor_factory, registry):
        actor = actor_factory(inventory={"cooked_meat": 1})
        actor.saturation = 95
        assert InventoryService.eat(actor, "cooked_meat", registry).saturation_gained == 5

    def test_eat_non_food(self, actor_factory, registry):
        actor = actor_factory(inventory={"rocks": 1})
        result = InventoryService.eat(actor, "rocks", registry)
        assert result.reason is FailureReason.NOT_EDIBLE
        assert actor.inventory == {"rocks": 1}

    def test_eat_unknown_or_missing(self, test_player, registry):
        assert InventoryService.eat(test_player, "ghost", registry).reason is FailureReason.UNKNOWN_ITEM
        assert InventoryService.eat(test_player, "berries", registry).reason is FailureReason.NOT_OWNED
