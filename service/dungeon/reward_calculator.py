"""
보상 계산기 - 경험치 보상, 투사체 회수

조우 종료 후 경험치 계산과 회수 가능한 투사체 판정을 담당합니다.
"""
import logging
import math
from dataclasses import dataclass

from config import DROP, ENCOUNTER
from models.encounter import Encounter, EncounterOutcome, ProjectileOutcome, ProjectileType
from service.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class ProjectileRecovery:
    """회수한 투사체 수"""
    arrows: int = 0
    rocks: int = 0

    def as_items(self) -> dict[str, int]:
        return {
            ProjectileType.ARROW.value: self.arrows,
            ProjectileType.ROCK.value: self.rocks,
        }


_BASE_RECOVERY = {
    ProjectileType.ARROW: ENCOUNTER.ARROW_RECOVERY,
    ProjectileType.ROCK: ENCOUNTER.ROCK_RECOVERY,
}

_OUTCOME_RECOVERY = {
    ProjectileOutcome.HIT: ENCOUNTER.RECOVERY_HIT,
    ProjectileOutcome.DODGED: ENCOUNTER.RECOVERY_DODGED,
    ProjectileOutcome.BLOCKED: ENCOUNTER.RECOVERY_BLOCKED,
    ProjectileOutcome.MISSED: ENCOUNTER.RECOVERY_MISSED,
}


# =============================================================================
# 경험치
# =============================================================================


def calculate_xp_reward(enemy_level: int, player_level: int, base_xp: int) -> int:
    """
    처치 경험치 = floor(기본 경험치 x 적 레벨 x 레벨 차 배율)

    상위 레벨 적은 레벨 차당 +10%, 하위 레벨 적은 레벨 차당 -15% (최소 10%).
    """
    level_diff = enemy_level - player_level
    modifier = 1.0
    if level_diff > 0:
        modifier = 1 + level_diff * DROP.XP_HIGHER_LEVEL_BONUS
    elif level_diff < 0:
        modifier = max(DROP.XP_MIN_MODIFIER, 1 + level_diff * DROP.XP_LOWER_LEVEL_PENALTY)
    return math.floor(base_xp * enemy_level * modifier)


# =============================================================================
# 투사체 회수
# =============================================================================


def get_recovery_chance(projectile: ProjectileType, outcome: ProjectileOutcome, enemy_escaped: bool) -> float:
    chance = _BASE_RECOVERY[projectile] * _OUTCOME_RECOVERY[outcome]
    if enemy_escaped and projectile is ProjectileType.ARROW:
        chance *= ENCOUNTER.ESCAPED_ARROW_FACTOR
    return chance


def calculate_projectile_recovery(encounter: Encounter, rng: RandomSource) -> ProjectileRecovery:
    """
    투사체 회수 판정

    투사체 하나마다 독립적으로 판정하며, 화살 → 돌 순서로
    각각 명중 → 회피 → 방어 → 빗나감 순서로 난수를 소비합니다.
    적이 도주했으면 화살 회수율만 추가로 25%가 됩니다.

    Args:
        encounter: 종료된 조우
        rng: 난수 공급원

    Returns:
        ProjectileRecovery: 회수한 화살/돌 수
    """
    enemy_escaped = encounter.result is EncounterOutcome.ENEMY_ESCAPED
    recovered = {ProjectileType.ARROW: 0, ProjectileType.ROCK: 0}

    for projectile in (ProjectileType.ARROW, ProjectileType.ROCK):
        for outcome in ProjectileOutcome:
            fired = encounter.projectiles.get(projectile, outcome)
            if fired <= 0:
                continue
            chance = get_recovery_chance(projectile, outcome, enemy_escaped)
            for _ in range(fired):
                if rng.random() < chance:
                    recovered[projectile] += 1

    result = ProjectileRecovery(arrows=recovered[ProjectileType.ARROW], rocks=recovered[ProjectileType.ROCK])
    if result.arrows or result.rocks:
        logger.debug(f"Recovered projectiles: {result}")
    return result
