"""CSV export functionality for the taxi dispatch simulation."""

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

TAXI_FIELDS = ['tick', 'strategy', 'taxi_id', 'x', 'y', 'state', 'passenger_id']
METRIC_FIELDS = [
    'tick', 'strategy',
    'avg_wait_time', 'avg_trip_time',
    'total_passengers_served', 'total_passengers_waiting',
    'avg_taxi_utilization',
]


class CSVWriter:
    """
    Exports simulation rows to CSV format incrementally.

    Output format (taxi log):
        tick,strategy,taxi_id,x,y,state,passenger_id
        1,greedy,taxi-0,4,8,picking_up,passenger-0
        ...
    """

    def __init__(self, output_path: Path, fieldnames: Sequence[str] = TAXI_FIELDS):
        self.output_path = Path(output_path)
        self.fieldnames: List[str] = list(fieldnames)
        self.file: Optional[object] = None
        self.writer: Optional[csv.DictWriter] = None
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        """Initialize file and write header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=self.fieldnames)
        self.writer.writeheader()
        self._is_open = True

    def append(self, rows: Iterable[Dict]) -> None:
        """Write a batch of rows (one tick's worth)."""
        if not self._is_open:
            self.open()
        for row in rows:
            self.writer.writerow(row)
        self.file.flush()  # Ensure data is written

    def close(self) -> None:
        """Close file handle."""
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
