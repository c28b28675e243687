"""
EnemyFactory 유닛 테스트
"""
import pytest

from service.dungeon.enemy_factory import EnemyFactory


class TestEnemyLevel:
    """적 레벨 굴림 테스트"""

    @pytest.mark.parametrize("roll,expected", [(0.0, 1), (0.5, 1), (0.99, 2)])
    def test_variance_floors_at_one(self, scripted_rng, roll, expected):
        assert EnemyFactory(scripted_rng(roll)).roll_enemy_level(1, 1) == expected

    def test_scales_with_player_level(self, scripted_rng):
        """기본 1 + floor(5 x 0.4) + 0"""
        assert EnemyFactory(scripted_rng(0.5)).roll_enemy_level(1, 6) == 3


class TestCreateEnemy:
    """적 생성 테스트"""

    def test_scale_stats(self, registry):
        stats = EnemyFactory.scale_stats(registry.get_enemy("wolf"), 3)
        assert stats.agility == 4
        assert stats.strength == 4
        assert stats.luck == 0

    def test_fixed_level_uses_no_draws(self, registry, scripted_rng):
        rng = scripted_rng()
        enemy = EnemyFactory(rng).create_enemy(registry.get_enemy("wolf"), level=3)

        assert enemy.id.startswith("wolf-")
        assert enemy.template_id == "wolf"
        assert enemy.level == 3
        assert enemy.natural_armor == 1
        assert enemy.ticks == 0
        assert enemy.max_health == 40
        assert enemy.speed == 120 + 4 * 2
        assert rng.draws == 0

    def test_inventory_enemy(self, registry, scripted_rng):
        """레벨 굴림 → 화살 확률/수량 → 산딸기 확률 실패"""
        rng = scripted_rng(0.5, 0.1, 0.5, 0.9)
        enemy = EnemyFactory(rng).create_enemy(registry.get_enemy("bandit"))

        assert enemy.level == 2
        assert enemy.inventory == {"arrow": 4}
        assert rng.remaining == 0

    def test_unique_ids(self, registry, scripted_rng):
        factory = EnemyFactory(scripted_rng())
        template = registry.get_enemy("test_slime")
        assert factory.create_enemy(template, level=1).id != factory.create_enemy(template, level=1).id
