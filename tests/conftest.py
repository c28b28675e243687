"""
pytest 설정 및 공통 픽스처 정의
"""
import sys
from pathlib import Path
from typing import Optional

import pytest

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


# =============================================================================
# pytest 설정
# =============================================================================


def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


# =============================================================================
# 난수 픽스처
# =============================================================================


@pytest.fixture
def scripted_rng():
    """정해진 값을 순서대로 돌려주는 난수 공급원 팩토리"""
    from tests.fixtures.scripted_random import ScriptedRandom

    def _create(*values: float) -> ScriptedRandom:
        return ScriptedRandom(values)

    return _create


# =============================================================================
# 콘텐츠 픽스처
# =============================================================================


@pytest.fixture
def registry():
    """테스트용 가짜 콘텐츠 레지스트리"""
    from models.content import EnemyTemplate, LocationDef, RecipeDef, ResourceNodeDef
    from models.item import ItemDef
    from models.repos.content_registry import ContentRegistry
    from tests.fixtures.exploration import LOCATIONS, RESOURCE_NODES
    from tests.fixtures.items import ALL_ITEMS
    from tests.fixtures.monsters import ALL_MONSTERS
    from tests.fixtures.recipes import ALL_RECIPES

    return ContentRegistry(
        items=[ItemDef(**data) for data in ALL_ITEMS],
        recipes=[RecipeDef(**data) for data in ALL_RECIPES],
        enemies=[EnemyTemplate(**data) for data in ALL_MONSTERS],
        resource_nodes=[ResourceNodeDef(**data) for data in RESOURCE_NODES],
        locations=[LocationDef(**data) for data in LOCATIONS],
    )


# =============================================================================
# 게임 엔티티 팩토리 픽스처
# =============================================================================


@pytest.fixture
def actor_factory():
    """테스트용 플레이어 Actor 생성 팩토리"""
    from models.stats import Stats
    from service.actor_service import ActorService

    def _create_actor(
        actor_id: str = "player",
        name: str = "테스트 플레이어",
        level: int = 1,
        stats: Optional[dict] = None,
        inventory: Optional[dict] = None,
        max_ticks: int = 1000,
        max_health: int = 100,
        max_saturation: int = 100,
        speed: int = 100,
        damage: int = 10,
    ):
        return ActorService.create_actor(
            actor_id,
            name,
            max_ticks=max_ticks,
            max_health=max_health,
            max_saturation=max_saturation,
            speed=speed,
            damage=damage,
            carry_capacity=30,
            level=level,
            stats=Stats(**(stats or {})),
            inventory=inventory,
        )

    return _create_actor


@pytest.fixture
def enemy_actor_factory():
    """테스트용 적 Actor 생성 팩토리"""
    from models.stats import Stats
    from service.actor_service import ActorService

    def _create_enemy(
        actor_id: str = "enemy",
        name: str = "테스트 몬스터",
        max_health: int = 30,
        damage: int = 5,
        speed: int = 100,
        level: int = 1,
        stats: Optional[dict] = None,
        natural_armor: int = 0,
        template_id: Optional[str] = None,
    ):
        return ActorService.create_enemy_actor(
            actor_id,
            name,
            max_health=max_health,
            damage=damage,
            speed=speed,
            level=level,
            stats=Stats(**(stats or {})),
            natural_armor=natural_armor,
            template_id=template_id,
        )

    return _create_enemy


@pytest.fixture
def test_player(actor_factory):
    """기본 테스트 플레이어"""
    return actor_factory()


@pytest.fixture
def test_enemy(enemy_actor_factory):
    """기본 테스트 적"""
    return enemy_actor_factory()


@pytest.fixture
def encounter_factory(enemy_actor_factory):
    """테스트용 Encounter 생성 팩토리"""
    from models.encounter import Encounter

    def _create_encounter(enemy=None, aggressiveness: float = 0.5, flee_threshold: float = 0.3, **flags):
        return Encounter(
            enemy=enemy or enemy_actor_factory(),
            aggressiveness=aggressiveness,
            flee_threshold=flee_threshold,
            **flags,
        )

    return _create_encounter


# =============================================================================
# 세션 픽스처
# =============================================================================


@pytest.fixture
def game_session(test_player):
    """기본 GameSession 객체"""
    from service.session import GameSession

    return GameSession(test_player)


# =============================================================================
# 유틸리티 함수
# =============================================================================


def assert_approx_equal(actual: float, expected: float, tolerance: float = 0.1):
    """근사값 비교 (확률 테스트용)"""
    assert abs(actual - expected) <= tolerance, (
        f"Expected {expected} ± {tolerance}, got {actual}"
    )
