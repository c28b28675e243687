"""
InventoryService

소지품 추가/제거, 운반 무게, 음식 섭취를 담당합니다.
수량은 음수가 되지 않으며, 0이 되면 항목 자체를 제거합니다.
"""
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from config.grade import ItemQuality
from models.actor import Actor
from models.repos.content_registry import ContentRegistry
from models.results import FailureReason
from service.actor_service import ActorService
from service.item.equipment_service import EquipmentService

logger = logging.getLogger(__name__)


@dataclass
class EatResult:
    """섭취 결과"""
    success: bool
    reason: Optional[FailureReason] = None
    saturation_gained: int = 0


class InventoryService:
    """소지품 비즈니스 로직"""

    @staticmethod
    def get_item_count(actor: Actor, item_id: str) -> int:
        return actor.inventory.get(item_id, 0)

    @staticmethod
    def has_items(actor: Actor, requirements: Mapping[str, int]) -> bool:
        return all(actor.inventory.get(item_id, 0) >= count for item_id, count in requirements.items())

    @staticmethod
    def add_item(
        actor: Actor,
        item_id: str,
        count: int = 1,
        quality: Optional[ItemQuality] = None,
    ) -> None:
        """
        아이템 추가

        품질을 기록 중인 아이템은 개체 수와 품질 목록 길이가 항상 같습니다.
        품질 없이 들어온 개체(전리품, 채집물)는 NORMAL로 기록합니다.

        Args:
            actor: 대상 액터
            item_id: 아이템 ID
            count: 수량 (0 이하면 무시)
            quality: 제작 품질 (제작품일 때만)
        """
        if count <= 0:
            return
        previous = actor.inventory.get(item_id, 0)
        actor.inventory[item_id] = previous + count

        qualities = actor.crafted_qualities.get(item_id)
        if quality is None and qualities is None:
            return
        if qualities is None:
            qualities = actor.crafted_qualities[item_id] = [ItemQuality.NORMAL] * previous
        qualities.extend([quality if quality is not None else ItemQuality.NORMAL] * count)

    @staticmethod
    def add_items(actor: Actor, items: Mapping[str, int]) -> None:
        for item_id, count in items.items():
            InventoryService.add_item(actor, item_id, count)

    @staticmethod
    def remove_item(
        actor: Actor,
        item_id: str,
        count: int = 1,
        registry: Optional[ContentRegistry] = None,
    ) -> bool:
        """
        아이템 제거

        보유량이 부족하면 아무것도 바꾸지 않고 False를 반환합니다.
        장착 중인 아이템의 마지막 개체를 제거하면 장착도 해제됩니다.
        """
        current = actor.inventory.get(item_id, 0)
        if count <= 0 or current < count:
            return False

        remaining = current - count
        if remaining == 0:
            del actor.inventory[item_id]
        else:
            actor.inventory[item_id] = remaining

        qualities = actor.crafted_qualities.get(item_id)
        if qualities:
            if len(qualities) < current:
                qualities.extend([ItemQuality.NORMAL] * (current - len(qualities)))
            # 낮은 품질부터 소모
            qualities.sort(reverse=True)
            del qualities[remaining:]
            if not qualities:
                del actor.crafted_qualities[item_id]

        if remaining == 0 and item_id in actor.equipment.values() and registry is not None:
            EquipmentService.unequip_item(actor, item_id, registry)
        return True

    @staticmethod
    def remove_items(
        actor: Actor,
        items: Mapping[str, int],
        registry: Optional[ContentRegistry] = None,
    ) -> bool:
        """여러 아이템 일괄 제거 (하나라도 부족하면 변경 없음)"""
        if not InventoryService.has_items(actor, items):
            return False
        for item_id, count in items.items():
            InventoryService.remove_item(actor, item_id, count, registry)
        return True

    @staticmethod
    def get_carry_weight(actor: Actor, registry: ContentRegistry) -> float:
        """운반 무게 = 아이템 무게 x 수량 합 (알 수 없는 아이템은 0)"""
        return sum(registry.item_weight(item_id) * count for item_id, count in actor.inventory.items())

    @staticmethod
    def is_overburdened(actor: Actor, registry: ContentRegistry) -> bool:
        return InventoryService.get_carry_weight(actor, registry) > actor.carry_capacity

    @staticmethod
    def eat(actor: Actor, item_id: str, registry: ContentRegistry) -> EatResult:
        """
        음식 섭취

        Args:
            actor: 대상 액터
            item_id: 먹을 아이템 ID
            registry: 콘텐츠 레지스트리

        Returns:
            EatResult: 섭취 결과
        """
        item = registry.get_item(item_id)
        if item is None:
            return EatResult(success=False, reason=FailureReason.UNKNOWN_ITEM)
        if not item.is_edible:
            return EatResult(success=False, reason=FailureReason.NOT_EDIBLE)
        if not InventoryService.remove_item(actor, item_id, 1, registry):
            return EatResult(success=False, reason=FailureReason.NOT_OWNED)

        gained = ActorService.gain_saturation(actor, item.saturation_gain)
        logger.debug(f"{actor.id} ate {item_id} (+{gained} saturation)")
        return EatResult(success=True, saturation_gained=gained)
