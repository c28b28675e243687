"""
게임 엔진

호출 애플리케이션이 사용하는 진입점입니다.
설정, 난수 공급원, 콘텐츠 레지스트리, 이벤트 버스를 묶어 세션과 턴 처리기를 제공합니다.
진행 중인 세션은 엔진마다 따로 관리되며, 새 게임을 시작하거나 게임 오버가 되면 정리됩니다.
"""
import logging
from typing import Optional

from config import SURVIVAL
from config.settings import Settings, configure_logging, load_settings
from models.content import EnemyTemplate
from models.encounter import Encounter
from models.item import EquipSlot
from models.repos.content_registry import ContentRegistry
from models.results import OperationResult
from models.skill import SkillType
from models.stats import StatType
from service.actor_service import ActorService
from service.combat.player_actions import PlayerActionKind
from service.dungeon.exploration_service import CampfireAction
from service.dungeon.turn_processor import TurnProcessor, TurnResult
from service.event.event_bus import EventBus, GameEvent, GameEventType
from service.item.equipment_service import EquipmentService, EquipResult
from service.player.stat_service import StatService
from service.random_source import RandomSource, create_random_source
from service.session import GameSession

logger = logging.getLogger(__name__)


class GameEngine:
    """시뮬레이션 엔진 파사드"""

    def __init__(
        self,
        registry: ContentRegistry,
        settings: Optional[Settings] = None,
        rng: Optional[RandomSource] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.settings = settings or Settings()
        self.registry = registry
        self.rng = rng if rng is not None else create_random_source(self.settings.rng_seed)
        self.event_bus = event_bus or EventBus()
        self.turns = TurnProcessor(registry, self.rng, self.event_bus)
        self.sessions: dict[str, GameSession] = {}
        self.event_bus.subscribe(GameEventType.PLAYER_DIED, self._on_player_died)

    @classmethod
    def from_env(cls, registry: ContentRegistry, dotenv_path: Optional[str] = None) -> "GameEngine":
        """.env/환경 변수 설정으로 엔진 생성 (로깅 설정 포함)"""
        settings = load_settings(dotenv_path)
        configure_logging(settings.log_level)
        logger.info(f"Engine settings loaded (seed={settings.rng_seed})")
        return cls(registry, settings=settings)

    # =========================================================================
    # 세션
    # =========================================================================

    def new_game(self, player_id: str, name: str) -> GameSession:
        """
        새 게임 시작

        같은 플레이어의 이전 세션은 종료됩니다.

        Args:
            player_id: 플레이어 ID
            name: 플레이어 이름

        Returns:
            새 게임 세션
        """
        self.end_session(player_id)
        player = ActorService.create_actor(
            player_id,
            name,
            max_ticks=self.settings.player_max_ticks,
            max_health=self.settings.player_max_health,
            max_saturation=self.settings.player_max_saturation,
            speed=SURVIVAL.PLAYER_SPEED,
            damage=SURVIVAL.PLAYER_DAMAGE,
            carry_capacity=SURVIVAL.PLAYER_CARRY_CAPACITY,
        )
        logger.info(f"Creating session for {player_id}")
        session = GameSession(player)
        self.sessions[player_id] = session
        return session

    def get_session(self, player_id: str) -> Optional[GameSession]:
        return self.sessions.get(player_id)

    def end_session(self, player_id: str) -> None:
        if player_id in self.sessions:
            logger.info(f"End session for {player_id}")
            del self.sessions[player_id]

    def _on_player_died(self, event: GameEvent) -> None:
        session = self.sessions.get(event.actor_id)
        if session is not None and session.game_over:
            self.end_session(event.actor_id)

    # =========================================================================
    # 턴 행동
    # =========================================================================

    def start_encounter(self, session: GameSession, enemy_id: str, level: Optional[int] = None) -> Optional[Encounter]:
        """적 ID로 조우 시작 (알 수 없는 적이면 None)"""
        template: Optional[EnemyTemplate] = self.registry.get_enemy(enemy_id)
        if template is None:
            logger.warning(f"Unknown enemy template: {enemy_id}")
            return None
        return self.turns.start_encounter(session, template, level)

    def combat(self, session: GameSession, kind: PlayerActionKind) -> TurnResult:
        return self.turns.perform_combat_action(session, kind)

    def craft(self, session: GameSession, recipe_id: str) -> TurnResult:
        return self.turns.perform_craft(session, recipe_id)

    def harvest(self, session: GameSession, skill: SkillType) -> TurnResult:
        return self.turns.perform_harvest(session, skill)

    def eat(self, session: GameSession, item_id: str) -> TurnResult:
        return self.turns.perform_eat(session, item_id)

    def rest(self, session: GameSession) -> TurnResult:
        return self.turns.perform_rest(session)

    def take_loot(self, session: GameSession, item_id: str, amount: int = 1) -> int:
        return self.turns.take_loot(session, item_id, amount)

    def wander(self, session: GameSession) -> TurnResult:
        return self.turns.perform_wander(session)

    def gather(self, session: GameSession, node_id: str) -> TurnResult:
        return self.turns.perform_gather(session, node_id)

    def enter_location(self, session: GameSession, location_id: str) -> TurnResult:
        return self.turns.perform_enter_location(session, location_id)

    def leave_location(self, session: GameSession) -> TurnResult:
        return self.turns.perform_leave_location(session)

    def campfire(self, session: GameSession, action: CampfireAction) -> TurnResult:
        return self.turns.perform_campfire(session, action)

    # =========================================================================
    # 턴을 소모하지 않는 관리 행동
    # =========================================================================

    def allocate_stat(self, session: GameSession, stat: StatType) -> OperationResult:
        return StatService.allocate_stat_point(session.player, stat, self.registry)

    def equip(self, session: GameSession, item_id: str) -> EquipResult:
        return EquipmentService.equip(session.player, item_id, self.registry)

    def unequip(self, session: GameSession, slot: EquipSlot) -> EquipResult:
        return EquipmentService.unequip(session.player, slot, self.registry)
