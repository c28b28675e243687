from enum import IntEnum
from typing import Optional

from models.actor import Actor
from models.encounter import Corpse, Encounter
from models.exploration import ExplorationState


class SessionType(IntEnum):  # 숫자 기반 enum
    IDLE = 1
    FIGHT = 2
    GAME_OVER = 3


class GameSession:
    def __init__(self, player: Actor):
        self.player = player
        self.encounter: Optional[Encounter] = None
        self.turn = 0
        self.structures: set[str] = set()
        self.corpse: Optional[Corpse] = None
        self.pending_loot: dict[str, int] = {}
        self.exploration = ExplorationState()
        self.game_over = False

    @property
    def status(self) -> SessionType:
        if self.game_over:
            return SessionType.GAME_OVER
        if self.in_combat:
            return SessionType.FIGHT
        return SessionType.IDLE

    @property
    def in_combat(self) -> bool:
        return self.encounter is not None and not self.encounter.ended
