"""
ExplorationService 유닛 테스트

배회 발견 순서, 멀어짐, 채집/고갈, 장소 이동, 무작위 조우, 모닥불 규칙을 테스트합니다.
"""
import pytest

from models.exploration import NodeSighting, WanderOutcome
from models.results import FailureReason
from service.dungeon.exploration_service import CampfireAction, ExplorationService


@pytest.fixture
def exploration_factory(registry):
    def _create(rng):
        return ExplorationService(registry, rng)
    return _create


class TestWander:
    """배회 발견 판정 테스트"""

    def test_discovers_top_level_location(self, game_session, exploration_factory, scripted_rng):
        """야외: 숲 발견(0.05 < 0.1) → 입구 멀어짐 판정(0.5, 유지)"""
        rng = scripted_rng(0.05, 0.5)

        result = exploration_factory(rng).wander(game_session)

        assert result.outcome is WanderOutcome.LOCATION_FOUND
        assert result.location_id == "forest"
        assert game_session.exploration.entrances == {"forest": [1]}
        assert rng.remaining == 0

    def test_locations_rolled_in_order(self, game_session, exploration_factory, scripted_rng):
        """숲 실패(0.5) → 동굴 성공(0.05 < 0.08)"""
        rng = scripted_rng(0.5, 0.05, 0.5)

        result = exploration_factory(rng).wander(game_session)

        assert result.location_id == "cave"
        assert rng.remaining == 0

    def test_discovers_resource_with_cumulative_roll(self, game_session, exploration_factory, scripted_rng):
        """장소 모두 실패 → 자원 누적 판정 0.3: 산딸기(0.2) 넘고 나뭇가지(0.4) 안 → 멀어짐(0.5, 유지)"""
        rng = scripted_rng(0.9, 0.9, 0.3, 0.5)

        result = exploration_factory(rng).wander(game_session)

        assert result.outcome is WanderOutcome.RESOURCE_FOUND
        assert result.node_id == "fallen_branches"
        assert game_session.exploration.nodes == [NodeSighting(node_id="fallen_branches", distance=1)]
        assert result.found_anything is True

    def test_nothing_found(self, game_session, exploration_factory, scripted_rng):
        rng = scripted_rng(0.9, 0.9, 0.9)

        result = exploration_factory(rng).wander(game_session)

        assert result.outcome is WanderOutcome.NOTHING
        assert result.found_anything is False
        assert rng.remaining == 0

    def test_exit_checked_first_inside_location(self, game_session, exploration_factory, scripted_rng):
        """숲 안: 출구 판정(0.1 < 0.12)이 성공하면 다른 발견 판정은 하지 않음"""
        game_session.exploration.location_id = "forest"
        rng = scripted_rng(0.1)

        result = exploration_factory(rng).wander(game_session)

        assert result.outcome is WanderOutcome.EXIT_FOUND
        assert game_session.exploration.found_exit is True
        assert rng.remaining == 0

    def test_location_resources_are_filtered(self, game_session, exploration_factory, scripted_rng):
        """공터: 출구 실패 → 하위 장소 없음 → 자원 후보는 산딸기뿐(0.1 < 0.2)"""
        game_session.exploration.location_id = "clearing"
        rng = scripted_rng(0.9, 0.1)

        result = exploration_factory(rng).wander(game_session)

        assert result.node_id == "berry_bush"
        assert rng.remaining == 0


class TestDrift:
    """배회 중 멀어짐 테스트"""

    def test_far_node_drops_off(self, game_session, exploration_factory, scripted_rng):
        """거리 3 나뭇가지: 0.2 x 1.3 = 0.26 > 0.25 → 사라짐, 산딸기는 판정 없이 거리 증가"""
        game_session.exploration.nodes = [
            NodeSighting(node_id="fallen_branches", distance=3),
            NodeSighting(node_id="berry_bush", distance=0),
        ]
        rng = scripted_rng(0.9, 0.9, 0.9, 0.25)

        result = exploration_factory(rng).wander(game_session)

        assert result.lost_nodes == ["fallen_branches"]
        assert game_session.exploration.nodes == [NodeSighting(node_id="berry_bush", distance=1)]
        assert rng.remaining == 0

    def test_last_entrance_lost_forgets_location(self, game_session, exploration_factory, scripted_rng):
        """숲 입구 유지(0.5), 동굴 입구 거리 5: 0.08 x 1.75 = 0.14 > 0.1 → 잊음"""
        game_session.exploration.entrances = {"forest": [0], "cave": [5]}
        rng = scripted_rng(0.9, 0.9, 0.9, 0.5, 0.1)

        result = exploration_factory(rng).wander(game_session)

        assert result.lost_locations == ["cave"]
        assert game_session.exploration.entrances == {"forest": [1]}

    def test_entrances_elsewhere_do_not_drift(self, game_session, exploration_factory, scripted_rng):
        """숲 안에서는 야외 장소 입구를 굴리지 않음"""
        state = game_session.exploration
        state.location_id = "forest"
        state.found_exit = True
        state.entrances = {"cave": [0]}
        rng = scripted_rng(0.9, 0.9)

        exploration_factory(rng).wander(game_session)

        assert state.entrances == {"cave": [0]}
        assert rng.remaining == 0


class TestGather:
    """채집 테스트"""

    def test_gather_and_deplete_closest(self, game_session, exploration_factory, scripted_rng):
        """산딸기 수량(0.0 → 2) → 고갈(0.1 < 0.6): 가장 가까운 덤불이 사라짐"""
        game_session.exploration.nodes = [
            NodeSighting(node_id="berry_bush", distance=3),
            NodeSighting(node_id="berry_bush", distance=1),
        ]
        service = exploration_factory(scripted_rng(0.0, 0.1))

        result = service.gather(game_session.player, game_session, "berry_bush")

        assert result.outputs == {"berries": 2}
        assert result.depleted is True
        assert game_session.player.inventory["berries"] == 2
        assert game_session.exploration.nodes == [NodeSighting(node_id="berry_bush", distance=3)]

    def test_uncertain_yield(self, game_session, exploration_factory, scripted_rng):
        """돌 수량(0.99 → 2) → 섬유 확률 실패(0.7 >= 0.5) → 고갈 실패(0.9)"""
        game_session.exploration.nodes = [NodeSighting(node_id="rocky_outcrop")]
        rng = scripted_rng(0.99, 0.7, 0.9)

        result = exploration_factory(rng).gather(game_session.player, game_session, "rocky_outcrop")

        assert result.outputs == {"rocks": 2}
        assert result.depleted is False
        assert len(game_session.exploration.nodes) == 1
        assert rng.remaining == 0

    @pytest.mark.parametrize("node_id", ["berry_bush", "ghost"])
    def test_nothing_to_gather(self, game_session, exploration_factory, scripted_rng, node_id):
        service = exploration_factory(scripted_rng())
        assert service.check_gather(game_session, node_id) is FailureReason.NOTHING_TO_GATHER


class TestLocationMovement:
    """장소 진입/이탈 테스트"""

    def test_enter_uses_closest_entrance(self, game_session, exploration_factory, scripted_rng):
        state = game_session.exploration
        state.entrances = {"forest": [2, 0]}
        state.nodes = [NodeSighting(node_id="berry_bush")]
        service = exploration_factory(scripted_rng())

        assert service.check_enter(game_session, "forest") is None
        service.enter_location(game_session, "forest")

        assert state.location_id == "forest"
        assert state.entrances == {"forest": [2]}
        assert state.nodes == []
        assert state.location_stack == []

    def test_nested_enter_and_leave(self, game_session, exploration_factory, scripted_rng):
        state = game_session.exploration
        state.location_id = "forest"
        state.entrances = {"clearing": [0]}
        service = exploration_factory(scripted_rng())

        service.enter_location(game_session, "clearing")
        assert state.location_stack == ["forest"]
        assert "clearing" not in state.entrances

        assert service.check_leave(game_session) is FailureReason.NO_EXIT_FOUND
        state.found_exit = True
        assert service.check_leave(game_session) is None
        assert service.leave_location(game_session) == "clearing"
        assert state.location_id == "forest"
        assert state.found_exit is False

    @pytest.mark.parametrize("location_id,entrances,expected", [
        ("ghost", {}, FailureReason.UNKNOWN_LOCATION),
        ("forest", {}, FailureReason.LOCATION_UNREACHABLE),
        ("clearing", {"clearing": [0]}, FailureReason.LOCATION_UNREACHABLE),
    ])
    def test_enter_failures(self, game_session, exploration_factory, scripted_rng, location_id, entrances, expected):
        game_session.exploration.entrances = entrances
        service = exploration_factory(scripted_rng())
        assert service.check_enter(game_session, location_id) is expected

    def test_cannot_leave_wilderness(self, game_session, exploration_factory, scripted_rng):
        service = exploration_factory(scripted_rng())
        assert service.check_leave(game_session) is FailureReason.NOT_IN_LOCATION


class TestCampfireBlocksMovement:
    """모닥불이 켜져 있으면 자리를 뜰 수 없음"""

    def test_blocks_wander_enter_leave(self, game_session, exploration_factory, scripted_rng):
        state = game_session.exploration
        state.entrances = {"forest": [0]}
        game_session.structures.add("campfire")
        service = exploration_factory(scripted_rng())

        assert service.check_wander(game_session) is FailureReason.CAMPFIRE_LIT
        assert service.check_enter(game_session, "forest") is FailureReason.CAMPFIRE_LIT

        state.location_id = "cave"
        state.found_exit = True
        assert service.check_leave(game_session) is FailureReason.CAMPFIRE_LIT

    def test_place_pack_smother(self, game_session, exploration_factory, scripted_rng):
        service = exploration_factory(scripted_rng())
        player = game_session.player

        assert service.check_campfire(game_session, CampfireAction.PLACE) is FailureReason.NOT_OWNED
        assert service.check_campfire(game_session, CampfireAction.PACK) is FailureReason.MISSING_STRUCTURE

        player.inventory["campfire"] = 1
        service.apply_campfire(game_session, CampfireAction.PLACE)
        assert game_session.structures == {"campfire"}
        assert "campfire" not in player.inventory
        assert service.check_campfire(game_session, CampfireAction.PLACE) is FailureReason.ALREADY_BUILT

        service.apply_campfire(game_session, CampfireAction.PACK)
        assert game_session.structures == set()
        assert player.inventory["campfire"] == 1

        service.apply_campfire(game_session, CampfireAction.PLACE)
        service.apply_campfire(game_session, CampfireAction.SMOTHER)
        assert game_session.structures == set()
        assert "campfire" not in player.inventory


class TestRandomEncounter:
    """무작위 조우 판정 테스트"""

    def test_location_enemy_pool(self, game_session, exploration_factory, scripted_rng):
        """숲: 조우(0.0 < 0.25) → 후보(토끼, 늑대) 중 0.99 → 늑대"""
        game_session.exploration.location_id = "forest"
        template = exploration_factory(scripted_rng(0.0, 0.99)).roll_random_encounter(game_session, 0.25)
        assert template.id == "wolf"

    def test_wilderness_uses_all_enemies(self, game_session, exploration_factory, scripted_rng):
        template = exploration_factory(scripted_rng(0.0, 0.0)).roll_random_encounter(game_session, 0.25)
        assert template.id == "test_slime"

    def test_roll_fails(self, game_session, exploration_factory, scripted_rng):
        rng = scripted_rng(0.25)
        assert exploration_factory(rng).roll_random_encounter(game_session, 0.25) is None
        assert rng.remaining == 0

    def test_safe_location_never_rolls(self, game_session, exploration_factory, scripted_rng):
        game_session.exploration.location_id = "clearing"
        rng = scripted_rng()
        assert exploration_factory(rng).roll_random_encounter(game_session, 1.0) is None
        assert rng.draws == 0
