"""
EquipmentService

장비 장착/해제와 장비 보너스 집계를 담당합니다.
양손 아이템은 주무기/보조무기 슬롯을 동시에 차지하며, 어느 쪽을 해제해도 두 슬롯이 함께 비워집니다.
"""
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from models.item import EquipSlot, HAND_SLOTS, ItemDef, ItemInstance
from models.results import FailureReason
from service.item.grade_service import GradeService

if TYPE_CHECKING:
    from models.actor import Actor
    from models.repos.content_registry import ContentRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquipmentBonus:
    """장착 장비의 합산 보너스 (품질 배율 적용 후)"""
    weapon_damage_min: int = 0
    weapon_damage_max: int = 0
    accuracy: int = 0
    ranged_bonus: int = 0
    armor: int = 0
    dodge_penalty: int = 0
    block_bonus: int = 0
    shield_armor: int = 0


@dataclass
class EquipResult:
    """장착/해제 결과"""
    success: bool
    reason: Optional[FailureReason] = None
    slots: list[EquipSlot] = field(default_factory=list)
    """이번 호출로 채워진 슬롯"""

    unequipped: list[str] = field(default_factory=list)
    """이번 호출로 해제된 아이템 ID"""


class EquipmentService:
    """장비 비즈니스 로직"""

    @staticmethod
    def get_equipped_def(
        actor: "Actor", slot: EquipSlot, registry: Optional["ContentRegistry"]
    ) -> Optional[ItemDef]:
        if registry is None:
            return None
        return registry.get_item(actor.equipment.get(slot))

    @staticmethod
    def _is_two_handed_pair(actor: "Actor", registry: Optional["ContentRegistry"]) -> bool:
        main_id = actor.equipment.get(EquipSlot.MAIN_HAND)
        if main_id is None or actor.equipment.get(EquipSlot.OFF_HAND) != main_id:
            return False
        item = registry.get_item(main_id) if registry else None
        return item is not None and item.two_handed

    @staticmethod
    def calculate_bonus(actor: "Actor", registry: Optional["ContentRegistry"]) -> EquipmentBonus:
        """
        장비 보너스 집계

        알 수 없는 아이템은 기여 0으로 처리하며, 양손 아이템은 한 번만 계산합니다.
        """
        if registry is None or not actor.equipment:
            return EquipmentBonus()

        totals = {
            "weapon_damage_min": 0, "weapon_damage_max": 0, "accuracy": 0, "ranged_bonus": 0,
            "armor": 0, "dodge_penalty": 0, "block_bonus": 0, "shield_armor": 0,
        }
        seen_two_handed = False
        for slot, item_id in actor.equipment.items():
            item = registry.get_item(item_id)
            if item is None:
                continue
            if item.two_handed:
                if seen_two_handed:
                    continue
                seen_two_handed = True

            instance = actor.equipment_instances.get(slot)
            quality = instance.quality if instance else None

            if slot == EquipSlot.MAIN_HAND:
                totals["weapon_damage_min"] += GradeService.apply_quality(item.damage_min, quality)
                totals["weapon_damage_max"] += GradeService.apply_quality(item.damage_max, quality)
                totals["ranged_bonus"] += item.ranged_bonus
            totals["accuracy"] += GradeService.apply_quality(item.accuracy, quality)
            totals["armor"] += GradeService.apply_quality(item.armor, quality)
            totals["dodge_penalty"] += item.dodge_penalty
            totals["block_bonus"] += GradeService.apply_quality(item.block_bonus, quality)
            totals["shield_armor"] += GradeService.apply_quality(item.shield_armor, quality)

        return EquipmentBonus(**totals)

    @staticmethod
    def get_main_weapon(actor: "Actor", registry: Optional["ContentRegistry"]) -> Optional[ItemDef]:
        """주무기 정의 (무기가 아니거나 없으면 None)"""
        item = EquipmentService.get_equipped_def(actor, EquipSlot.MAIN_HAND, registry)
        if item is None or not item.is_weapon:
            return None
        return item

    @staticmethod
    def _clear_slot(actor: "Actor", slot: EquipSlot) -> Optional[str]:
        actor.equipment_instances.pop(slot, None)
        return actor.equipment.pop(slot, None)

    @staticmethod
    def _release(actor: "Actor", slot: EquipSlot, registry: "ContentRegistry") -> list[str]:
        """슬롯 해제 (양손 아이템이면 두 손 모두)"""
        if slot not in actor.equipment:
            return []
        if slot in HAND_SLOTS and EquipmentService._is_two_handed_pair(actor, registry):
            item_id = actor.equipment[EquipSlot.MAIN_HAND]
            for hand in HAND_SLOTS:
                EquipmentService._clear_slot(actor, hand)
            return [item_id]
        item_id = EquipmentService._clear_slot(actor, slot)
        return [item_id] if item_id else []

    @staticmethod
    def equip(actor: "Actor", item_id: str, registry: "ContentRegistry") -> EquipResult:
        """
        아이템 장착

        Args:
            actor: 대상 액터
            item_id: 장착할 아이템 ID
            registry: 콘텐츠 레지스트리

        Returns:
            EquipResult: 장착 결과 (실패 시 변경 없음)
        """
        from service.actor_service import ActorService

        item = registry.get_item(item_id)
        if item is None:
            return EquipResult(success=False, reason=FailureReason.UNKNOWN_ITEM)
        if item.slot is None:
            return EquipResult(success=False, reason=FailureReason.NOT_EQUIPPABLE)
        if actor.inventory.get(item_id, 0) <= 0:
            return EquipResult(success=False, reason=FailureReason.NOT_OWNED)

        qualities = actor.crafted_qualities.get(item_id)
        instance = ItemInstance(item_id=item_id, quality=max(qualities) if qualities else None)

        unequipped: list[str] = []
        if item.two_handed:
            slots = list(HAND_SLOTS)
            for hand in HAND_SLOTS:
                unequipped.extend(EquipmentService._release(actor, hand, registry))
        else:
            slots = [item.slot]
            unequipped.extend(EquipmentService._release(actor, item.slot, registry))

        for slot in slots:
            actor.equipment[slot] = item_id
            actor.equipment_instances[slot] = instance

        ActorService.recalculate_stats(actor, registry)
        logger.debug(f"{actor.id} equipped {item_id} -> {[s.value for s in slots]}")
        return EquipResult(success=True, slots=slots, unequipped=unequipped)

    @staticmethod
    def unequip(actor: "Actor", slot: EquipSlot, registry: "ContentRegistry") -> EquipResult:
        """슬롯 해제 (양손 아이템이면 두 슬롯 모두 비움)"""
        from service.actor_service import ActorService

        unequipped = EquipmentService._release(actor, slot, registry)
        if not unequipped:
            return EquipResult(success=False, reason=FailureReason.NOT_EQUIPPED)

        ActorService.recalculate_stats(actor, registry)
        return EquipResult(success=True, unequipped=unequipped)

    @staticmethod
    def unequip_item(actor: "Actor", item_id: str, registry: "ContentRegistry") -> list[str]:
        """해당 아이템이 장착된 모든 슬롯 해제 (재계산 포함)"""
        from service.actor_service import ActorService

        unequipped: list[str] = []
        for slot in [s for s, equipped in actor.equipment.items() if equipped == item_id]:
            unequipped.extend(EquipmentService._release(actor, slot, registry))
        if unequipped:
            ActorService.recalculate_stats(actor, registry)
        return unequipped
