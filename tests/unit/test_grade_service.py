"""
GradeService 유닛 테스트

제작 품질 판정 임계값과 품질 배율 적용을 테스트합니다.
"""
import pytest

from config.grade import ItemQuality, get_quality_multiplier
from service.item.grade_service import GradeService


class TestQualityThresholds:
    """누적 임계값 테스트"""

    def test_level_zero_distribution(self):
        """t=0 → 60 / 35 / 4 / 0.9 / 0.1 %"""
        thresholds = [value for _, value in GradeService.get_quality_thresholds(0)]
        assert thresholds == pytest.approx([60.0, 95.0, 99.0, 99.9])

    def test_level_hundred_distribution(self):
        """t=0.5 → 30 / 55 / 82 / 96.45"""
        thresholds = [value for _, value in GradeService.get_quality_thresholds(100)]
        assert thresholds == pytest.approx([30.0, 55.0, 82.0, 96.45])

    def test_high_level_approaches_limit(self):
        """t→1 이면 걸작 비율이 7%에 가까워짐"""
        _, excellent = GradeService.get_quality_thresholds(1_000_000)[-1]
        assert 100 - excellent == pytest.approx(7.0, abs=0.01)

    def test_thresholds_are_cumulative(self):
        values = [value for _, value in GradeService.get_quality_thresholds(37)]
        assert values == sorted(values)


class TestRollQuality:
    """품질 판정 테스트"""

    @pytest.mark.parametrize("roll,expected", [
        (0.5, ItemQuality.POOR),
        (0.9, ItemQuality.NORMAL),
        (0.97, ItemQuality.GOOD),
        (0.995, ItemQuality.EXCELLENT),
        (0.9995, ItemQuality.MASTERWORK),
    ])
    def test_level_zero_rolls(self, scripted_rng, roll, expected):
        rng = scripted_rng(roll)
        assert GradeService.roll_quality(0, rng) is expected
        assert rng.draws == 1

    @pytest.mark.parametrize("roll,expected", [
        (0.29, ItemQuality.POOR),
        (0.5, ItemQuality.NORMAL),
        (0.8, ItemQuality.GOOD),
        (0.9, ItemQuality.EXCELLENT),
        (0.97, ItemQuality.MASTERWORK),
    ])
    def test_level_hundred_rolls(self, scripted_rng, roll, expected):
        assert GradeService.roll_quality(100, scripted_rng(roll)) is expected


class TestApplyQuality:
    """품질 배율 테스트"""

    def test_multipliers(self):
        assert GradeService.apply_quality(10, ItemQuality.POOR) == 8
        assert GradeService.apply_quality(10, ItemQuality.NORMAL) == 10
        assert GradeService.apply_quality(7, ItemQuality.GOOD) == 8
        assert GradeService.apply_quality(10, ItemQuality.MASTERWORK) == 15

    def test_no_quality_is_neutral(self):
        assert GradeService.apply_quality(9, None) == 9
        assert get_quality_multiplier(None) == 1.0
        assert get_quality_multiplier(99) == 1.0
