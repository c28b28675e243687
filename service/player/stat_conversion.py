"""
능력치 → 파생 수치 변환

7대 능력치를 전투/경제 보너스로 변환하는 순수 함수 모음입니다.
모든 상한은 절대 상한이며, 최종 피해/수량 값은 반올림이 아닌 내림(정수 절삭)을 사용합니다.
"""
import math
from dataclasses import dataclass

from config import COMBAT, STATS as C
from models.stats import Stats


@dataclass(frozen=True)
class DerivedStats:
    """능력치에서 변환된 파생 수치 (액터에 캐시됨)"""
    max_health_bonus: int = 0
    speed_bonus: int = 0
    max_saturation_bonus: int = 0
    magic_capacity: int = 0
    carry_capacity_bonus: int = 0
    melee_bonus: int = 0
    ranged_bonus: int = 0
    crit_chance: float = 0.0
    crit_multiplier: float = 1.5
    loot_bonus: float = 0.0
    hunger_resistance: float = 0.0


# =============================================================================
# 명중 / 회피 / 방어 등급
# =============================================================================


def get_attack_rating(stats: Stats, level: int, weapon_accuracy: int = 0) -> int:
    """명중 등급 = 정밀x5 + 민첩x3 + 레벨x2 + 무기 명중 + 10"""
    return (
        stats.precision * C.AR_PRECISION
        + stats.agility * C.AR_AGILITY
        + level * C.AR_LEVEL
        + weapon_accuracy
        + C.AR_BASE
    )


def get_dodge_rating(stats: Stats, level: int, armor_penalty: int = 0) -> int:
    """회피 등급 = max(0, 민첩x5 + 행운x2 + 레벨x2 + 10 - 방어구 패널티)"""
    rating = (
        stats.agility * C.DR_AGILITY
        + stats.luck * C.DR_LUCK
        + level * C.DR_LEVEL
        + C.DR_BASE
        - armor_penalty
    )
    return max(0, rating)


def get_block_rating(stats: Stats, level: int, shield_block_bonus: int = 0) -> int:
    """방어 등급 (방패 보너스가 없으면 0)"""
    if shield_block_bonus <= 0:
        return 0
    return (
        stats.strength * C.BR_STRENGTH
        + stats.agility * C.BR_AGILITY
        + level * C.BR_LEVEL
        + shield_block_bonus
    )


def get_block_damage_reduction(stats: Stats, shield_armor: int = 0) -> int:
    """방어 성공 시 고정 피해 감소량 = 힘x2 + 방패 방어력"""
    return stats.strength * C.BLOCK_REDUCTION_STRENGTH + shield_armor


def calculate_block_chance(block_rating: int, attacker_ar: int) -> float:
    """방어 확률 = BR / (BR + 공격자 AR x 0.7)"""
    if block_rating <= 0:
        return 0.0
    return block_rating / (block_rating + attacker_ar * COMBAT.BLOCK_ATTACKER_AR_FACTOR)


def calculate_hit_chance(
    attacker_ar: int,
    defender_dr: int,
    attacker_level: int,
    defender_level: int,
) -> float:
    """
    명중 확률

    공식: AR / (AR + DR) x (2 x 공격자 레벨 / (공격자 레벨 + 방어자 레벨))

    레벨이 같으면 레벨 계수는 1.0이며, 공격자 레벨이 높을수록 커집니다.
    """
    if attacker_ar + defender_dr <= 0:
        return 0.0
    level_factor = (2 * attacker_level) / (attacker_level + defender_level)
    return attacker_ar / (attacker_ar + defender_dr) * level_factor


# =============================================================================
# 피해 / 치명타
# =============================================================================


def _synergy_bonus(base_stat: int, agility: int) -> int:
    return base_stat + math.floor(base_stat * agility * C.DAMAGE_SYNERGY_AGILITY)


def get_melee_damage_bonus(stats: Stats) -> int:
    """근접 피해 보너스 = 힘 + floor(힘 x 민첩 x 0.05)"""
    return _synergy_bonus(stats.strength, stats.agility)


def get_ranged_damage_bonus(stats: Stats) -> int:
    """원거리 피해 보너스 = 정밀 + floor(정밀 x 민첩 x 0.05)"""
    return _synergy_bonus(stats.precision, stats.agility)


def get_crit_chance(stats: Stats) -> float:
    """치명타 확률 (최대 30%)"""
    chance = stats.luck * C.CRIT_CHANCE_LUCK + stats.precision * C.CRIT_CHANCE_PRECISION
    return min(C.CRIT_CHANCE_CAP, chance)


def get_crit_multiplier(stats: Stats) -> float:
    return C.CRIT_MULTIPLIER_BASE + stats.luck * C.CRIT_MULTIPLIER_LUCK


# =============================================================================
# 생존 / 경제
# =============================================================================


def get_loot_bonus(stats: Stats) -> float:
    return stats.luck * C.LOOT_BONUS_LUCK


def get_hunger_resistance(stats: Stats) -> float:
    """허기 저항 (최대 50%)"""
    return min(C.HUNGER_RESISTANCE_CAP, stats.endurance * C.HUNGER_RESISTANCE_ENDURANCE)


def get_max_health_bonus(stats: Stats) -> int:
    return stats.vitality * C.MAX_HEALTH_VITALITY + stats.endurance * C.MAX_HEALTH_ENDURANCE


def get_speed_bonus(stats: Stats) -> int:
    return stats.agility * C.SPEED_AGILITY


def get_max_saturation_bonus(stats: Stats) -> int:
    return stats.endurance * C.MAX_SATURATION_ENDURANCE


def get_magic_capacity(stats: Stats) -> int:
    return stats.arcane * C.MAGIC_CAPACITY_ARCANE


def get_carry_capacity_bonus(stats: Stats) -> int:
    return stats.strength * C.CARRY_CAPACITY_STRENGTH


def convert_stats(stats: Stats) -> DerivedStats:
    """
    능력치 → 파생 수치 일괄 변환

    Args:
        stats: 능력치 벡터

    Returns:
        변환된 파생 수치
    """
    return DerivedStats(
        max_health_bonus=get_max_health_bonus(stats),
        speed_bonus=get_speed_bonus(stats),
        max_saturation_bonus=get_max_saturation_bonus(stats),
        magic_capacity=get_magic_capacity(stats),
        carry_capacity_bonus=get_carry_capacity_bonus(stats),
        melee_bonus=get_melee_damage_bonus(stats),
        ranged_bonus=get_ranged_damage_bonus(stats),
        crit_chance=get_crit_chance(stats),
        crit_multiplier=get_crit_multiplier(stats),
        loot_bonus=get_loot_bonus(stats),
        hunger_resistance=get_hunger_resistance(stats),
    )
