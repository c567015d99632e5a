"""
CSV and JSON output for strategy comparisons.

Rows are keyed by step, action, size and held size, followed by the
handle and high-water mark of each strategy. Paths ending in ``.zst``
are written as a zstandard frame.
"""

from __future__ import annotations
import csv
import io
import json
import logging
import sys
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Sequence, Tuple, Union

import zstandard as zstd

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from ..types.descriptors import StepRecord
from ..types.enums import AllocationStrategy

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def report_header(strategies: Sequence[AllocationStrategy]) -> List[str]:
    header = ['Step', 'Action', 'Size', 'Holding']
    header.extend(f"Handle{s.label}" for s in strategies)
    header.extend(s.label for s in strategies)
    return header


def _is_compressed(path: Path) -> bool:
    return path.suffix == '.zst'


class ReportWriter:
    __slots__ = ('_path', '_strategies', '_compression_level', '_sink',
                 '_compressor', '_buffer', '_csv', '_rows')

    def __init__(self, path: PathLike, strategies: Sequence[AllocationStrategy],
                 compression_level: int = 3):
        self._path = Path(path)
        self._strategies: Tuple[AllocationStrategy, ...] = tuple(strategies)
        self._compression_level = compression_level
        self._sink: Optional[BinaryIO] = None
        self._compressor = None
        self._buffer = io.StringIO()
        self._csv = csv.writer(self._buffer)
        self._rows = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def rows_written(self) -> int:
        return self._rows

    @property
    def is_open(self) -> bool:
        return self._sink is not None

    def open(self) -> None:
        if self._sink is not None:
            return

        raw = open(self._path, 'wb')
        try:
            if _is_compressed(self._path):
                cctx = zstd.ZstdCompressor(level=self._compression_level)
                self._compressor = cctx.stream_writer(raw, closefd=True)
                self._sink = self._compressor
            else:
                self._sink = raw
        except Exception:
            raw.close()
            self._compressor = None
            raise

        self._emit(report_header(self._strategies))

    def write(self, record: StepRecord) -> None:
        if self._sink is None:
            raise ValueError(f"Report {self._path} is not open")
        self._emit(record.as_row(self._strategies))
        self._rows += 1

    def write_all(self, records: Sequence[StepRecord]) -> None:
        for record in records:
            self.write(record)

    def close(self) -> None:
        if self._sink is None:
            return
        self._sink.close()
        self._sink = None
        self._compressor = None
        logger.info("Wrote %d rows to %s", self._rows, self._path)

    def _emit(self, row: Sequence[Any]) -> None:
        self._csv.writerow(row)
        self._sink.write(self._buffer.getvalue().encode('utf-8'))
        self._buffer.seek(0)
        self._buffer.truncate()

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def read_report(path: PathLike) -> List[Dict[str, str]]:
    """Load a report written by ReportWriter, compressed or not."""
    path = Path(path)
    data = path.read_bytes()
    if _is_compressed(path):
        data = zstd.ZstdDecompressor().decompressobj().decompress(data)
    return list(csv.DictReader(io.StringIO(data.decode('utf-8'))))


def write_summary(path: PathLike, summary: Dict[str, Any]) -> None:
    with open(path, 'w') as f:
        json.dump(summary, f, indent=2)
    logger.info("Wrote summary to %s", path)
