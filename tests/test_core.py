import pytest

from fractalloc.memory import Cell, Medium, OffsetSequence, lowest_zero_bit
from fractalloc.types import AllocationStrategy, ComparisonConfig, StepRecord, WorkloadAction
from fractalloc.exceptions import ConfigurationError
from fractalloc.profiling import PerformanceProfiler


class TestLowestZeroBit:
    @pytest.mark.parametrize("value,expected", [
        (0, 0),
        (1, 1),
        (2, 0),
        (3, 2),
        (5, 1),
        (7, 3),
        (0b1011, 2),
    ])
    def test_positions(self, value, expected):
        assert lowest_zero_bit(value) == expected

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            lowest_zero_bit(-1)


class TestOffsetSequence:
    def setup_method(self):
        self.sequence = OffsetSequence()

    def test_known_prefix(self):
        assert self.sequence.take(8) == [0, 2, 6, 8, 18, 20, 24, 26]

    def test_terms_after_prefix(self):
        # idx 7 = 0b111 -> 3 ** 3 = 27
        assert self.sequence[8] == 54
        assert self.sequence[9] == 56

    def test_lazy_extension(self):
        assert len(self.sequence) == 1

        assert self.sequence[5] == 20
        assert len(self.sequence) == 6

        assert self.sequence[2] == 6
        assert len(self.sequence) == 6

    def test_deterministic_across_instances(self):
        other = OffsetSequence()
        other[50]

        assert self.sequence.take(51) == other.take(51)
        assert self.sequence[37] == other[37]

    def test_strictly_increasing(self):
        values = self.sequence.take(500)
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_negative_index(self):
        with pytest.raises(IndexError, match="non-negative"):
            self.sequence[-1]

    def test_take_nothing(self):
        assert self.sequence.take(0) == []


class TestMedium:
    def setup_method(self):
        self.medium = Medium()

    def test_empty(self):
        assert len(self.medium) == 0
        assert not self.medium.is_allocated(0)

    def test_extend(self):
        start = self.medium.extend(3)

        assert start == 0
        assert len(self.medium) == 3
        assert self.medium.allocated_indices() == []
        assert [self.medium[i].value for i in range(3)] == [0, 0, 0]

        assert self.medium.extend(2, allocated=True) == 3
        assert self.medium.allocated_indices() == [3, 4]

    def test_ensure_grows_to_index(self):
        cell = self.medium.ensure(5)

        assert len(self.medium) == 6
        assert isinstance(cell, Cell)

        self.medium.ensure(2)
        assert len(self.medium) == 6

    def test_negative_index(self):
        self.medium.extend(2)
        with pytest.raises(IndexError):
            self.medium[-1]

    def test_cell_release(self):
        cell = Cell(allocated=True, value=42)
        cell.release()

        assert not cell.allocated
        assert cell.value == 0


class TestComparisonConfig:
    def test_defaults(self):
        config = ComparisonConfig()

        assert config.steps == 1000
        assert config.warmup_steps == 200
        assert config.strategies == (AllocationStrategy.FRACTAL, AllocationStrategy.SERIAL)
        assert config.size_range_for(0) == (1, 20)
        assert config.size_range_for(200) == (10, 20)

    def test_invalid_steps(self):
        with pytest.raises(ConfigurationError, match="Step count must be positive"):
            ComparisonConfig(steps=0)

    def test_invalid_size_range(self):
        with pytest.raises(ConfigurationError, match="Invalid size_range"):
            ComparisonConfig(size_range=(5, 5))

        with pytest.raises(ConfigurationError, match="Invalid warmup_size_range"):
            ComparisonConfig(warmup_size_range=(0, 3))

    def test_invalid_probability(self):
        with pytest.raises(ValueError, match="Free probability"):
            ComparisonConfig(free_probability=1.5)

    def test_duplicate_strategies(self):
        with pytest.raises(ConfigurationError, match="Duplicate strategies"):
            ComparisonConfig(strategies=(AllocationStrategy.SERIAL, AllocationStrategy.SERIAL))


class TestStepRecord:
    def test_as_row(self):
        record = StepRecord(
            step=3,
            action=WorkloadAction.FREE,
            size=4,
            holding=10,
            handles={AllocationStrategy.FRACTAL: 7, AllocationStrategy.SERIAL: 2},
            high_water_marks={AllocationStrategy.FRACTAL: 40, AllocationStrategy.SERIAL: 14}
        )

        row = record.as_row((AllocationStrategy.FRACTAL, AllocationStrategy.SERIAL))
        assert row == [3, "Free", 4, 10, 7, 2, 40, 14]


class TestPerformanceProfiler:
    def setup_method(self):
        self.profiler = PerformanceProfiler()

    def test_empty_summary(self):
        assert self.profiler.get_summary() == {}

    def test_aggregates_by_name(self):
        for size in (3, 5):
            with self.profiler.profile_operation("Serial.alloc", {"size": size}) as profile:
                assert profile.metadata == {"size": size}
        with self.profiler.profile_operation("Fractal.alloc"):
            pass

        summary = self.profiler.get_summary()

        assert list(summary) == ["Fractal.alloc", "Serial.alloc"]
        stats = summary["Serial.alloc"]
        assert stats["call_count"] == 2
        assert 0.0 <= stats["min_duration"] <= stats["max_duration"]
        assert stats["avg_duration"] == pytest.approx(stats["total_duration"] / 2)

    def test_failed_operation_is_recorded(self):
        with pytest.raises(RuntimeError, match="boom"):
            with self.profiler.profile_operation("Serial.free"):
                raise RuntimeError("boom")

        assert self.profiler.get_summary()["Serial.free"]["call_count"] == 1


if __name__ == "__main__":
    pytest.main([__file__])
