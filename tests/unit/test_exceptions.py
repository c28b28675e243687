"""
exceptions.py 유닛 테스트
"""
import pytest

from exceptions import (
    CombatError,
    CombatNotInProgressError,
    DuplicateContentError,
    EncounterAlreadyEndedError,
    GameOverError,
    InvalidConfigError,
    InvalidContentError,
    InvalidStateError,
    IterraError,
)


class TestIterraError:
    """기본 예외 클래스 테스트"""

    def test_default_message(self):
        """기본 메시지 테스트"""
        error = IterraError()
        assert error.message == "알 수 없는 오류가 발생했습니다"
        assert str(error) == "알 수 없는 오류가 발생했습니다"

    def test_custom_message(self):
        """커스텀 메시지 테스트"""
        error = IterraError("커스텀 에러 메시지")
        assert error.message == "커스텀 에러 메시지"
        assert str(error) == "커스텀 에러 메시지"

    def test_inheritance(self):
        """상속 관계 테스트"""
        assert isinstance(IterraError(), Exception)


class TestInvalidConfigError:
    """잘못된 설정 예외 테스트"""

    def test_fields_stored(self):
        error = InvalidConfigError("ITERRA_RNG_SEED", "abc")
        assert error.key == "ITERRA_RNG_SEED"
        assert error.value == "abc"

    def test_message_format(self):
        error = InvalidConfigError("ITERRA_RNG_SEED", "abc")
        assert "ITERRA_RNG_SEED" in str(error)
        assert "'abc'" in str(error)


class TestContentErrors:
    """콘텐츠 예외 테스트"""

    def test_invalid_content(self):
        error = InvalidContentError("stone_knife", "damage_min > damage_max")
        assert error.content_id == "stone_knife"
        assert error.reason == "damage_min > damage_max"
        assert "stone_knife" in str(error)

    def test_duplicate_is_invalid_content(self):
        """중복 ID 예외는 InvalidContentError로도 잡힘"""
        error = DuplicateContentError("wolf")
        assert isinstance(error, InvalidContentError)
        assert isinstance(error, IterraError)
        assert error.content_id == "wolf"
        assert "중복" in str(error)


class TestCombatErrors:
    """전투 예외 테스트"""

    def test_not_in_progress(self):
        error = CombatNotInProgressError()
        assert isinstance(error, CombatError)
        assert "전투" in str(error)

    def test_already_ended(self):
        error = EncounterAlreadyEndedError("victory")
        assert error.result == "victory"
        assert "victory" in str(error)
        assert isinstance(error, CombatError)


class TestStateErrors:
    """게임 상태 예외 테스트"""

    def test_invalid_state(self):
        error = InvalidStateError("이미 전투 중입니다")
        assert error.reason == "이미 전투 중입니다"
        assert "이미 전투 중입니다" in str(error)

    def test_game_over_is_invalid_state(self):
        error = GameOverError()
        assert isinstance(error, InvalidStateError)
        assert "종료" in str(error)


class TestExceptionCatching:
    """예외 포착 테스트"""

    @pytest.mark.parametrize("error", [
        InvalidConfigError("KEY", "value"),
        DuplicateContentError("rocks"),
        CombatNotInProgressError(),
        GameOverError(),
    ])
    def test_catch_as_base(self, error):
        """모든 예외는 IterraError로 포착 가능"""
        with pytest.raises(IterraError):
            raise error
