"""Application services: Export / Import Harvests as CSV."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from itertools import count
from typing import Iterable

from eggstand.application.csv_rows import RowError, parse_date, parse_int, read_rows, write_rows
from eggstand.application.dto import ImportResult
from eggstand.application.identifiers import next_id
from eggstand.domain.model.coop import Coop
from eggstand.domain.model.harvest import Harvest
from eggstand.domain.repository.farm_repository import CoopRepository, HarvestRepository

logger = logging.getLogger(__name__)

HARVEST_COLUMNS = ["coop_name", "collection_date", "eggs_collected", "notes"]

UNKNOWN_COOP = "Unknown"


def export_harvests_csv(harvests: Iterable[Harvest], coops: Iterable[Coop]) -> str:
    names = {c.id: c.name for c in coops}
    return write_rows(
        HARVEST_COLUMNS,
        (
            {
                "coop_name": names.get(h.coop_id, UNKNOWN_COOP),
                "collection_date": h.collection_date.isoformat(),
                "eggs_collected": h.eggs_collected,
                "notes": h.notes or "",
            }
            for h in harvests
        ),
    )


@dataclass(frozen=True)
class ParsedHarvestRow:
    coop: Coop
    collection_date: date
    eggs_collected: int
    notes: str


def parse_harvest_row(row: dict[str, str], coop_repo: CoopRepository) -> ParsedHarvestRow | RowError:
    coop_name = row.get("coop_name", "")
    if not coop_name or not row.get("collection_date") or not row.get("eggs_collected"):
        return RowError(f"Missing required fields for harvest of coop {coop_name or 'unknown'}")

    coop = coop_repo.get_by_name(coop_name)
    if coop is None:
        return RowError(f"Coop {coop_name} not found")

    collected_on = parse_date(row["collection_date"])
    if collected_on is None:
        return RowError(f"Invalid collection date {row['collection_date']!r} for coop {coop_name}")

    eggs = parse_int(row["eggs_collected"])
    if eggs is None or eggs < 0:
        return RowError(f"Invalid egg count {row['eggs_collected']!r} for coop {coop_name}")

    return ParsedHarvestRow(
        coop=coop,
        collection_date=collected_on,
        eggs_collected=eggs,
        notes=row.get("notes", ""),
    )


class ExportHarvestsHandler:

    def __init__(self, harvest_repo: HarvestRepository, coop_repo: CoopRepository) -> None:
        self._harvest_repo = harvest_repo
        self._coop_repo = coop_repo

    def handle(
        self,
        coop_id: str | None = None,
        start: date | None = None,
        end: date | None = None,
    ) -> str:
        harvests = self._harvest_repo.find(coop_id=coop_id, start=start, end=end)
        return export_harvests_csv(harvests, self._coop_repo.list_all())


class ImportHarvestsHandler:

    def __init__(self, harvest_repo: HarvestRepository, coop_repo: CoopRepository) -> None:
        self._harvest_repo = harvest_repo
        self._coop_repo = coop_repo

    def handle(self, csv_text: str) -> ImportResult:
        result = ImportResult()
        ids = count(int(next_id(h.id for h in self._harvest_repo.find())))
        for line, row in enumerate(read_rows(csv_text), start=2):
            parsed = parse_harvest_row(row, self._coop_repo)
            if isinstance(parsed, RowError):
                logger.warning("Harvest import line %d skipped: %s", line, parsed.message)
                result.errors.append(f"Line {line}: {parsed.message}")
                continue
            harvest = Harvest(
                id=str(next(ids)),
                coop_id=parsed.coop.id,
                eggs_collected=parsed.eggs_collected,
                collection_date=parsed.collection_date,
                notes=parsed.notes,
            )
            try:
                self._harvest_repo.save(harvest)
            except Exception as exc:
                logger.exception("Harvest import line %d failed", line)
                result.errors.append(
                    f"Line {line}: Unexpected error processing harvest for coop "
                    f"{parsed.coop.name}: {exc}"
                )
                continue
            result.success += 1
        logger.info("Harvest import finished: %d created, %d errors", result.success, len(result.errors))
        return result
