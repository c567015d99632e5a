import json

import pytest

import fractalloc
from fractalloc import (
    AllocationStrategy,
    ConfigurationError,
    FractalAllocator,
    SerialAllocator,
    create_allocator,
    create_allocators,
    create_default_config,
    create_small_block_config,
    create_steady_state_config,
    parse_strategy,
    read_report,
)
from fractalloc.cli import compare_command, run_comparison, sequence_command


class TestBasicIntegration:
    def test_import_fractalloc(self):
        """Test that fractalloc can be imported successfully"""
        assert fractalloc.__version__ == "1.0.0"
        for name in fractalloc.__all__:
            assert hasattr(fractalloc, name)

    def test_factory_functions(self):
        assert isinstance(create_allocator(AllocationStrategy.SERIAL), SerialAllocator)
        assert isinstance(create_allocator(AllocationStrategy.FRACTAL), FractalAllocator)

        # every call builds an independent instance
        first = create_allocator(AllocationStrategy.SERIAL)
        second = create_allocator(AllocationStrategy.SERIAL)
        first.alloc(4)
        assert second.high_water_mark == 0

        allocators = create_allocators([AllocationStrategy.FRACTAL, AllocationStrategy.SERIAL])
        assert list(allocators) == [AllocationStrategy.FRACTAL, AllocationStrategy.SERIAL]

    def test_parse_strategy(self):
        assert parse_strategy("fractal") == AllocationStrategy.FRACTAL
        assert parse_strategy("Serial") == AllocationStrategy.SERIAL

        with pytest.raises(ConfigurationError, match="Unknown allocation strategy"):
            parse_strategy("buddy")

    def test_presets(self):
        assert create_default_config(seed=4).seed == 4
        assert create_steady_state_config().steps == 5000
        assert create_small_block_config().size_range == (1, 4)


class TestComparison:
    def test_run_comparison_writes_report(self, tmp_path):
        output = tmp_path / "allocate.csv"
        config = create_default_config(seed=9, steps=120, warmup_steps=30)

        summary = run_comparison(config, str(output))

        rows = read_report(output)
        assert len(rows) == 120
        assert summary['steps_run'] == 120
        assert int(rows[-1]['Fractal']) == summary['strategies']['Fractal']['final_high_water_mark']

    def test_high_water_mark_covers_peak_holding(self):
        """Test that no strategy holds more cells than its medium has"""
        config = create_default_config(seed=21, steps=400)
        summary = run_comparison(config)

        for stats in summary['strategies'].values():
            assert stats['final_high_water_mark'] >= summary['peak_holding']
            assert stats['overhead_ratio'] >= 1.0


class TestCommandLine:
    def test_compare_to_files(self, tmp_path):
        output = tmp_path / "report.csv.zst"
        summary_path = tmp_path / "summary.json"

        code = compare_command([
            '--steps', '80', '--warmup-steps', '20', '--seed', '3',
            '--output', str(output), '--summary', str(summary_path)
        ])

        assert code == 0
        assert len(read_report(output)) == 80
        summary = json.loads(summary_path.read_text())
        assert summary['config']['seed'] == 3

    def test_compare_to_stdout(self, capsys):
        code = compare_command(['--steps', '30', '--seed', '5', '--strategies', 'serial'])

        assert code == 0
        summary = json.loads(capsys.readouterr().out)
        assert list(summary['strategies']) == ['Serial']

    def test_compare_is_deterministic(self, capsys):
        compare_command(['--steps', '50', '--seed', '8', '--no-verify'])
        first = json.loads(capsys.readouterr().out)
        compare_command(['--steps', '50', '--seed', '8', '--no-verify'])
        second = json.loads(capsys.readouterr().out)

        assert first['strategies']['Fractal']['final_high_water_mark'] == \
            second['strategies']['Fractal']['final_high_water_mark']
        assert first['final_holding'] == second['final_holding']

    def test_compare_invalid_config(self, capsys):
        code = compare_command(['--steps', '0'])

        assert code == 1
        assert "Step count must be positive" in capsys.readouterr().err

    def test_compare_unknown_strategy(self, capsys):
        assert compare_command(['--strategies', 'buddy']) == 1

    def test_sequence(self, capsys):
        assert sequence_command(['--count', '8']) == 0
        assert capsys.readouterr().out.strip() == "0 2 6 8 18 20 24 26"


if __name__ == "__main__":
    pytest.main([__file__])
