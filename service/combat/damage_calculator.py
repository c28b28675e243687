"""
데미지 계산 시스템

명중 등급(AR) 대 회피 등급(DR) 방식의 단일 공격 판정을 처리합니다.
난수 소비 순서는 (1) 치명타 (2) 방어 (방패가 있을 때만) (3) 명중 으로 고정되어,
같은 난수열이면 항상 같은 결과가 나옵니다.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import COMBAT
from models.actor import Actor
from models.skill import SkillType
from service.player.stat_conversion import (
    calculate_block_chance,
    calculate_hit_chance,
    get_attack_rating,
    get_block_damage_reduction,
    get_block_rating,
    get_crit_chance,
    get_crit_multiplier,
    get_dodge_rating,
    get_melee_damage_bonus,
    get_ranged_damage_bonus,
)
from service.random_source import RandomSource
from service.skill.skill_service import SkillService

logger = logging.getLogger(__name__)


class AttackOutcome(str, Enum):
    """공격 결과 태그"""
    HIT = "hit"
    CRITICAL = "critical"
    BLOCKED = "blocked"
    BLOCKED_CRITICAL = "blocked critical"
    DODGED = "dodged"
    MISSED = "missed"


@dataclass
class AttackOptions:
    """공격 판정 보정값"""

    ranged: bool = False
    weapon_accuracy: int = 0
    attacker_skill_level: int = 0
    """공격에 사용한 무기 숙련도 레벨"""

    defender_armor: int = 0
    defender_armor_penalty: int = 0
    defender_block_bonus: int = 0
    defender_shield_armor: int = 0
    defender_shield_skill_level: int = 0


@dataclass
class AttackResult:
    """공격 판정 결과"""

    hit: bool
    dodged: bool
    blocked: bool
    critical: bool
    damage: int
    """방어/방어구 적용 후 최종 피해 (빗나가면 0)"""

    outcome: AttackOutcome
    raw_damage: int = 0
    """방어/방어구 적용 전 피해"""

    @property
    def landed(self) -> bool:
        """피해가 들어갔는지 (명중 또는 방어)"""
        return self.hit or self.blocked

    @property
    def tag(self) -> str:
        return self.outcome.value


class DamageCalculator:
    """
    데미지 계산기

    모든 계산은 config의 COMBAT 상수와 stat_conversion의 공식을 기반으로 합니다.
    결과만 계산하며, 체력 반영은 호출자가 합니다.
    """

    @staticmethod
    def apply_armor(damage: int, armor: int) -> int:
        """방어구 경감 = max(1, 피해 - 방어력)"""
        return max(COMBAT.MIN_DAMAGE, damage - armor)

    @staticmethod
    def build_options(
        attacker: Actor,
        defender: Actor,
        ranged: bool = False,
        weapon_accuracy: int = 0,
        attack_skill: SkillType = SkillType.UNARMED,
    ) -> AttackOptions:
        """
        액터의 캐시된 장비 보너스와 숙련도로 판정 보정값 구성

        Args:
            attacker: 공격자
            defender: 방어자
            ranged: 원거리 공격 여부
            weapon_accuracy: 무기/투척물 명중 보정
            attack_skill: 공격에 사용하는 숙련도

        Returns:
            AttackOptions
        """
        bonus = defender.equipment_bonus
        return AttackOptions(
            ranged=ranged,
            weapon_accuracy=weapon_accuracy,
            attacker_skill_level=attacker.skills.level_of(attack_skill),
            defender_armor=(bonus.armor if bonus else 0) + defender.natural_armor,
            defender_armor_penalty=bonus.dodge_penalty if bonus else 0,
            defender_block_bonus=bonus.block_bonus if bonus else 0,
            defender_shield_armor=bonus.shield_armor if bonus else 0,
            defender_shield_skill_level=defender.skills.level_of(SkillType.SHIELD),
        )

    @staticmethod
    def resolve_attack(
        attacker: Actor,
        defender: Actor,
        base_damage: int,
        rng: RandomSource,
        options: Optional[AttackOptions] = None,
    ) -> AttackResult:
        """
        단일 공격 판정

        1. 공격자 AR 계산 (무기 명중 + 숙련도 보너스 포함)
        2. 피해 = 기본 피해 + 근접/원거리 능력치 보너스, 숙련도 배율 적용
        3. 치명타 판정 (방어된 공격에도 적용)
        4. 방패가 있으면 방어 판정 (성공 시 회피 판정 없이 종료)
        5. 명중 판정 1회 (명중 확률 초과분이 0.15 이내면 회피, 그 밖은 빗나감)
        6. 명중/방어 시 방어구 경감

        Args:
            attacker: 공격자
            defender: 방어자
            base_damage: 기본 피해 (무기 굴림 등)
            rng: 난수 공급원
            options: 판정 보정값

        Returns:
            AttackResult: 판정 결과
        """
        opts = options or AttackOptions()
        att_stats = attacker.level_info.stats
        def_stats = defender.level_info.stats
        att_level = attacker.level_info.level
        def_level = defender.level_info.level

        attacker_ar = get_attack_rating(att_stats, att_level, opts.weapon_accuracy)
        attacker_ar += SkillService.get_attack_rating_bonus(opts.attacker_skill_level)

        stat_bonus = get_ranged_damage_bonus(att_stats) if opts.ranged else get_melee_damage_bonus(att_stats)
        damage = base_damage + stat_bonus
        damage = math.floor(damage * SkillService.get_damage_multiplier(opts.attacker_skill_level))

        # 치명타
        is_critical = rng.random() < get_crit_chance(att_stats)
        if is_critical:
            damage = math.floor(damage * get_crit_multiplier(att_stats))

        # 방어 (방패)
        if opts.defender_block_bonus > 0:
            block_rating = get_block_rating(def_stats, def_level, opts.defender_block_bonus)
            block_rating += SkillService.get_block_rating_bonus(opts.defender_shield_skill_level)
            block_chance = calculate_block_chance(block_rating, attacker_ar)

            if rng.random() < block_chance:
                reduction = get_block_damage_reduction(def_stats, opts.defender_shield_armor)
                blocked_damage = max(COMBAT.MIN_DAMAGE, damage - reduction)
                return AttackResult(
                    hit=False,
                    dodged=False,
                    blocked=True,
                    critical=is_critical,
                    damage=DamageCalculator.apply_armor(blocked_damage, opts.defender_armor),
                    outcome=AttackOutcome.BLOCKED_CRITICAL if is_critical else AttackOutcome.BLOCKED,
                    raw_damage=damage,
                )

        # 명중 / 회피
        defender_dr = get_dodge_rating(def_stats, def_level, opts.defender_armor_penalty)
        hit_chance = calculate_hit_chance(attacker_ar, defender_dr, att_level, def_level)
        hit_roll = rng.random()

        if hit_roll > hit_chance:
            is_dodge = hit_roll < hit_chance + COMBAT.DODGE_BAND
            return AttackResult(
                hit=False,
                dodged=is_dodge,
                blocked=False,
                critical=False,
                damage=0,
                outcome=AttackOutcome.DODGED if is_dodge else AttackOutcome.MISSED,
                raw_damage=damage,
            )

        return AttackResult(
            hit=True,
            dodged=False,
            blocked=False,
            critical=is_critical,
            damage=DamageCalculator.apply_armor(damage, opts.defender_armor),
            outcome=AttackOutcome.CRITICAL if is_critical else AttackOutcome.HIT,
            raw_damage=damage,
        )
