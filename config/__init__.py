"""
Iterra 게임 설정 상수

모든 매직 넘버와 게임 밸런스 관련 상수를 여기서 관리합니다.
각 도메인별 설정은 config/ 하위 모듈에 정의되어 있습니다.
"""
from config.stats import StatConfig, STATS
from config.skills import SkillConfig, SKILL
from config.combat import CombatConfig, COMBAT
from config.encounter import EncounterConfig, ENCOUNTER
from config.drops import DropConfig, DROP
from config.survival import SurvivalConfig, SURVIVAL
from config.exploration import ExplorationConfig, EXPLORATION
from config.grade import (
    ItemQuality, QualityInfo, QUALITY_TABLE, QUALITY_ROLL_SCALE,
    get_quality_info, get_quality_multiplier,
)

__all__ = [
    # stats
    "StatConfig", "STATS",
    # skills
    "SkillConfig", "SKILL",
    # combat
    "CombatConfig", "COMBAT",
    # encounter
    "EncounterConfig", "ENCOUNTER",
    # drops
    "DropConfig", "DROP",
    # survival
    "SurvivalConfig", "SURVIVAL",
    # exploration
    "ExplorationConfig", "EXPLORATION",
    # grade
    "ItemQuality", "QualityInfo", "QUALITY_TABLE", "QUALITY_ROLL_SCALE",
    "get_quality_info", "get_quality_multiplier",
]
