"""
DamageCalculator 유닛 테스트

명중/회피/빗나감 판정, 방패 방어, 치명타, 방어구 경감과 난수 소비 순서를 테스트합니다.
"""
import pytest

from models.skill import SkillType
from service.combat.damage_calculator import AttackOptions, AttackOutcome, DamageCalculator
from service.item.equipment_service import EquipmentService

SHIELD = AttackOptions(defender_block_bonus=10, defender_shield_armor=2)


@pytest.fixture
def attacker(actor_factory):
    """정밀 5, 민첩 5 → AR 52, 치명타 2.5%"""
    return actor_factory(stats={"precision": 5, "agility": 5})


class TestHitResolution:
    """명중 판정 테스트"""

    def test_hit_lands(self, attacker, test_enemy, scripted_rng):
        """AR 52 대 DR 12, 같은 레벨 → 명중 확률 0.8125, 굴림 0.5는 명중"""
        rng = scripted_rng(0.9, 0.5)
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, rng)

        assert result.hit is True
        assert result.outcome is AttackOutcome.HIT
        assert result.damage == 15
        assert rng.draws == 2

    def test_roll_just_over_chance_is_dodge(self, attacker, test_enemy, scripted_rng):
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.9, 0.9))

        assert result.hit is False
        assert result.dodged is True
        assert result.damage == 0
        assert result.tag == "dodged"

    def test_roll_far_over_chance_is_miss(self, attacker, test_enemy, scripted_rng):
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.9, 0.99))

        assert result.hit is False
        assert result.dodged is False
        assert result.outcome is AttackOutcome.MISSED
        assert result.damage == 0

    @pytest.mark.parametrize("crit_roll,hit_roll", [(0.9, 0.1), (0.9, 0.9), (0.9, 0.99), (0.01, 0.5)])
    def test_outcomes_mutually_exclusive(self, attacker, test_enemy, scripted_rng, crit_roll, hit_roll):
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(crit_roll, hit_roll))
        assert sum([result.hit, result.dodged, result.blocked]) <= 1
        assert (result.damage > 0) == result.landed


class TestDamage:
    """피해 계산 테스트"""

    def test_critical_hit(self, attacker, test_enemy, scripted_rng):
        """치명타 배율 1.5 → floor(22.5) = 22"""
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.01, 0.5))

        assert result.critical is True
        assert result.outcome is AttackOutcome.CRITICAL
        assert result.damage == 22

    def test_armor_reduces_damage(self, attacker, test_enemy, scripted_rng):
        options = AttackOptions(defender_armor=5)
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.9, 0.5), options)
        assert result.damage == 10
        assert result.raw_damage == 15

    def test_minimum_damage(self, attacker, test_enemy, scripted_rng):
        options = AttackOptions(defender_armor=100)
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.9, 0.5), options)
        assert result.damage == 1

    def test_ranged_uses_ranged_bonus(self, attacker, test_enemy, scripted_rng):
        """원거리 보너스 = 5 + floor(5 x 5 x 0.05) = 6"""
        options = AttackOptions(ranged=True)
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.9, 0.5), options)
        assert result.damage == 21

    def test_weapon_skill_multiplier(self, attacker, test_enemy, scripted_rng):
        """숙련도 10 → 피해 x1.1 (내림)"""
        options = AttackOptions(attacker_skill_level=10)
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.9, 0.5), options)
        assert result.damage == 16


class TestBlock:
    """방패 방어 테스트"""

    def test_block_preempts_hit_roll(self, attacker, test_enemy, scripted_rng):
        """BR 12 대 AR 52 → 방어 확률 약 0.248, 굴림 0.1은 방어 성공"""
        rng = scripted_rng(0.9, 0.1)
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, rng, SHIELD)

        assert result.blocked is True
        assert result.hit is False
        assert result.dodged is False
        assert result.outcome is AttackOutcome.BLOCKED
        assert result.damage == 13
        assert rng.remaining == 0

    def test_failed_block_rolls_hit(self, attacker, test_enemy, scripted_rng):
        rng = scripted_rng(0.9, 0.9, 0.5)
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, rng, SHIELD)

        assert result.hit is True
        assert rng.draws == 3

    def test_critical_applies_to_blocked_attack(self, attacker, test_enemy, scripted_rng):
        """치명타 22 - 방패 감소 2 = 20"""
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.01, 0.1), SHIELD)

        assert result.critical is True
        assert result.outcome is AttackOutcome.BLOCKED_CRITICAL
        assert result.damage == 20

    def test_blocked_damage_also_reduced_by_armor(self, attacker, test_enemy, scripted_rng):
        options = AttackOptions(defender_block_bonus=10, defender_shield_armor=2, defender_armor=3)
        result = DamageCalculator.resolve_attack(attacker, test_enemy, 15, scripted_rng(0.9, 0.1), options)
        assert result.damage == 10

    def test_no_block_roll_without_shield(self, attacker, test_enemy, scripted_rng):
        rng = scripted_rng(0.9, 0.1)
        DamageCalculator.resolve_attack(attacker, test_enemy, 15, rng)
        assert rng.draws == 2


class TestBuildOptions:
    """판정 보정값 구성 테스트"""

    def test_options_from_equipment(self, actor_factory, enemy_actor_factory, registry):
        defender = actor_factory(inventory={"wooden_shield": 1, "leather_chest": 1})
        EquipmentService.equip(defender, "wooden_shield", registry)
        EquipmentService.equip(defender, "leather_chest", registry)
        defender.natural_armor = 1
        attacker = enemy_actor_factory()
        attacker.skills.get(SkillType.KNIFE).level = 4

        options = DamageCalculator.build_options(attacker, defender, attack_skill=SkillType.KNIFE)

        assert options.defender_armor == 5
        assert options.defender_armor_penalty == 3
        assert options.defender_block_bonus == 10
        assert options.defender_shield_armor == 2
        assert options.attacker_skill_level == 4
