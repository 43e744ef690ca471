"""
Persistence writer for canonical station records.

Writes three artifacts, each replaced wholesale on every run:
- fire-stations.json   run metadata + full record list
- fire-stations.csv    header + one quoted row per record
- states-summary.json  station counts per state, largest first
"""

import csv
import json
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog

from hifld.pipeline.models import CSV_FIELDS, StateSummary, StationRecord, WrittenPaths
from hifld.services.arcgis.models import ServiceEndpoint

logger = structlog.get_logger()

HIFLD_SOURCE = "HIFLD (Homeland Infrastructure Foundation-Level Data)"

STATIONS_JSON = "fire-stations.json"
STATIONS_CSV = "fire-stations.csv"
STATES_SUMMARY = "states-summary.json"


class StationWriter:
    """Serialize a record set into the output directory."""

    def __init__(self, output_dir: Path | str):
        self.output_dir = Path(output_dir)
        self.log = logger.bind(component="StationWriter", output_dir=str(self.output_dir))

    def write(
        self,
        records: Sequence[StationRecord],
        endpoint: ServiceEndpoint | None = None,
        declared_total: int | None = None,
        source: str = HIFLD_SOURCE,
        extra_metadata: dict[str, Any] | None = None,
    ) -> WrittenPaths:
        """
        Write all artifacts for ``records``.

        A failing artifact is logged and reported as ``None``; the remaining
        artifacts are still written.
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # Each artifact write below fails and is reported on its own
            self.log.error("Could not create output directory", error=str(e))

        metadata: dict[str, Any] = {
            "source": source,
            "service_url": endpoint.base_url if endpoint else None,
            "provider": endpoint.provider.value if endpoint else None,
            "service_name": endpoint.identifier if endpoint else None,
            "downloaded_at": datetime.now(UTC).isoformat(timespec="seconds"),
            "total_records": len(records),
            "declared_total": declared_total,
        }
        if extra_metadata:
            metadata.update(extra_metadata)

        summary = StateSummary.from_records(records)

        paths = WrittenPaths(
            stations_json=self._safe_write(STATIONS_JSON, self.write_json, records, metadata),
            stations_csv=self._safe_write(STATIONS_CSV, self.write_csv, records),
            states_summary=self._safe_write(STATES_SUMMARY, self.write_summary, summary),
        )
        self.log.info(
            "Saved data files",
            records=len(records),
            states=len(summary.states),
            failed=paths.failed,
        )
        return paths

    def _safe_write(self, filename: str, writer, *args: Any) -> Path | None:
        path = self.output_dir / filename
        try:
            writer(path, *args)
        except OSError as e:
            self.log.error("Failed to write artifact", path=str(path), error=str(e))
            return None
        self.log.debug("Wrote artifact", path=str(path))
        return path

    @staticmethod
    def write_json(path: Path, records: Sequence[StationRecord], metadata: dict[str, Any]) -> None:
        document = {
            "metadata": metadata,
            "stations": [r.to_dict() for r in records],
        }
        path.write_text(
            json.dumps(document, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    @staticmethod
    def write_csv(path: Path, records: Sequence[StationRecord]) -> None:
        # QUOTE_ALL wraps every field and doubles embedded quotes
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
            writer.writerow(CSV_FIELDS)
            for record in records:
                row = record.to_dict()
                writer.writerow(["" if row[k] is None else row[k] for k in CSV_FIELDS])

    @staticmethod
    def write_summary(path: Path, summary: StateSummary) -> None:
        path.write_text(
            json.dumps(summary.to_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )


def load_stations(path: Path) -> tuple[dict[str, Any], list[StationRecord]]:
    """
    Read a ``fire-stations.json`` document.

    Returns:
        (metadata, records)

    Raises:
        OSError: file cannot be read
        ValueError: not JSON, or not a ``{"metadata", "stations"}`` document
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    entries = data.get("stations") or []
    if not isinstance(entries, list):
        raise ValueError(f"stations is {type(entries).__name__}, expected list")
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"station {index} is {type(entry).__name__}, expected object")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError(f"metadata is {type(metadata).__name__}, expected object")

    return metadata, [StationRecord.from_dict(entry) for entry in entries]
