"""
이벤트 버스 (Event Bus)

옵저버 패턴을 사용하여 게임 내 이벤트를 발행하고 구독합니다.
엔진은 이벤트를 발행하기만 하고, 화면 표시나 기록은 구독자(호출 애플리케이션)가 처리합니다.
시뮬레이션은 턴 단위 동기 진행이므로 콜백도 동기로 호출됩니다.
"""

import logging
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Any

logger = logging.getLogger(__name__)


class GameEventType(Enum):
    """게임 이벤트 타입"""

    # 전투 이벤트
    ENCOUNTER_STARTED = "encounter_started"     # 조우 시작
    ENCOUNTER_ENDED = "encounter_ended"         # 조우 종료
    ATTACK_RESOLVED = "attack_resolved"         # 공격 판정
    ENEMY_FLED = "enemy_fled"                   # 적 도주 시작

    # 아이템 이벤트
    LOOT_OBTAINED = "loot_obtained"             # 전리품 획득
    PROJECTILES_RECOVERED = "projectiles_recovered"  # 투사체 회수
    ITEM_CRAFTED = "item_crafted"               # 제작 성공
    CRAFT_FAILED = "craft_failed"               # 제작 실패
    CORPSE_HARVESTED = "corpse_harvested"       # 사체 채집

    # 성장 이벤트
    LEVEL_UP = "level_up"                       # 레벨업
    EXP_OBTAINED = "exp_obtained"               # 경험치 획득
    SKILL_LEVEL_UP = "skill_level_up"           # 숙련도 레벨업

    # 생존 이벤트
    PASSED_OUT = "passed_out"                   # 기절
    STARVING = "starving"                       # 굶주림
    PLAYER_DIED = "player_died"                 # 사망

    # 탐험 이벤트
    LOCATION_DISCOVERED = "location_discovered"   # 장소 입구 발견
    LOCATION_ENTERED = "location_entered"         # 장소 진입
    LOCATION_EXITED = "location_exited"           # 장소 이탈
    EXIT_FOUND = "exit_found"                     # 출구 발견
    RESOURCE_DISCOVERED = "resource_discovered"   # 자원 노드 발견
    RESOURCE_GATHERED = "resource_gathered"       # 채집
    RESOURCE_DEPLETED = "resource_depleted"       # 자원 노드 고갈


@dataclass
class GameEvent:
    """게임 이벤트"""

    type: GameEventType
    actor_id: str
    data: Dict[str, Any]
    turn: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def __repr__(self) -> str:
        return f"GameEvent(type={self.type.value}, actor_id={self.actor_id}, turn={self.turn}, data={self.data})"


EventCallback = Callable[[GameEvent], None]


class EventBus:
    """
    이벤트 버스

    게임 인스턴스마다 하나씩 생성하여 엔진에 주입합니다.
    발행자(Publisher)는 이벤트를 발행하고, 구독자(Subscriber)는 이벤트를 수신합니다.

    Example:
        >>> event_bus = EventBus()
        >>>
        >>> def on_level_up(event: GameEvent):
        ...     print(f"Level up: {event.data['level']}")
        >>>
        >>> event_bus.subscribe(GameEventType.LEVEL_UP, on_level_up)
        >>> event_bus.publish(GameEvent(
        ...     type=GameEventType.LEVEL_UP,
        ...     actor_id="player",
        ...     data={"level": 2}
        ... ))
        Level up: 2
    """

    def __init__(self):
        self._subscribers: Dict[GameEventType, List[EventCallback]] = {}

    def subscribe(self, event_type: GameEventType, callback: EventCallback) -> None:
        """
        이벤트 구독

        Args:
            event_type: 구독할 이벤트 타입
            callback: 이벤트 발생 시 호출할 콜백 함수
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []

        if callback not in self._subscribers[event_type]:
            self._subscribers[event_type].append(callback)
            logger.debug(f"Subscribed to {event_type.value}: {getattr(callback, '__name__', callback)}")

    def unsubscribe(self, event_type: GameEventType, callback: EventCallback) -> None:
        """
        구독 취소

        Args:
            event_type: 구독 취소할 이벤트 타입
            callback: 구독 취소할 콜백 함수
        """
        callbacks = self._subscribers.get(event_type)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)
            logger.debug(f"Unsubscribed from {event_type.value}: {getattr(callback, '__name__', callback)}")

    def publish(self, event: GameEvent) -> None:
        """
        이벤트 발행

        각 구독자의 콜백이 순차적으로 호출되며, 에러가 발생해도 다른 구독자에게 영향을 주지 않습니다.

        Args:
            event: 발행할 이벤트
        """
        callbacks = self._subscribers.get(event.type)
        if not callbacks:
            return

        logger.debug(f"Publishing event: {event}")

        for callback in list(callbacks):
            try:
                callback(event)
            except Exception as e:
                logger.error(
                    f"Error in event callback {getattr(callback, '__name__', callback)} "
                    f"for {event.type.value}: {e}",
                    exc_info=True
                )

    def get_subscriber_count(self, event_type: GameEventType) -> int:
        return len(self._subscribers.get(event_type, []))

    def clear_all_subscribers(self) -> None:
        """모든 구독자 제거"""
        self._subscribers.clear()
