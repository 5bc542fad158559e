"""Tests for harvest CSV export and import."""

from datetime import date

from eggstand.application.harvest_csv import (
    ExportHarvestsHandler,
    ImportHarvestsHandler,
    export_harvests_csv,
)
from eggstand.application.csv_rows import read_rows
from eggstand.domain.model.coop import Coop
from eggstand.domain.model.harvest import Harvest
from tests.fakes import FakeCoopRepository, FakeHarvestRepository, StoreFailure


def _coops() -> FakeCoopRepository:
    return FakeCoopRepository([Coop(id="1", name="North"), Coop(id="2", name="South")])


def test_export_uses_coop_names():
    harvests = [
        Harvest(id="1", coop_id="1", eggs_collected=11, collection_date=date(2024, 5, 2)),
        Harvest(id="2", coop_id="9", eggs_collected=4, collection_date=date(2024, 5, 1), notes="stray"),
    ]
    rows = read_rows(export_harvests_csv(harvests, _coops().list_all()))
    assert rows[0] == {"coop_name": "North", "collection_date": "2024-05-02", "eggs_collected": "11", "notes": ""}
    assert rows[1]["coop_name"] == "Unknown"


def test_export_filters_by_coop():
    repo = FakeHarvestRepository([
        Harvest(id="1", coop_id="1", eggs_collected=11, collection_date=date(2024, 5, 2)),
        Harvest(id="2", coop_id="2", eggs_collected=4, collection_date=date(2024, 5, 1)),
    ])
    rows = read_rows(ExportHarvestsHandler(repo, _coops()).handle(coop_id="2"))
    assert [r["coop_name"] for r in rows] == ["South"]


def test_import_matches_coops_by_name():
    harvests = FakeHarvestRepository()
    csv_text = (
        "coop_name,collection_date,eggs_collected,notes\n"
        "north,2024-05-01,12,\n"
        "Barn,2024-05-01,3,\n"
        "South,05/02/2024,9,windy\n"
        "South,not a date,9,\n"
        "South,2024-05-03,-1,\n"
    )
    result = ImportHarvestsHandler(harvests, _coops()).handle(csv_text)

    assert result.success == 2
    assert len(result.errors) == 3
    assert "Coop Barn not found" in result.errors[0]
    stored = harvests.find(coop_id="2")
    assert stored[0].collection_date == date(2024, 5, 2)
    assert stored[0].notes == "windy"


def test_import_assigns_distinct_ids():
    harvests = FakeHarvestRepository()
    ImportHarvestsHandler(harvests, _coops()).handle(
        "coop_name,collection_date,eggs_collected,notes\nNorth,2024-05-01,1,\nNorth,2024-05-02,2,\n"
    )
    assert sorted(h.id for h in harvests.find()) == ["1", "2"]


def test_import_continues_numbering_with_one_lookup():
    class CountingHarvests(FakeHarvestRepository):
        lookups = 0

        def find(self, *args, **kwargs):
            self.lookups += 1
            return super().find(*args, **kwargs)

    harvests = CountingHarvests([
        Harvest(id="7", coop_id="1", eggs_collected=5, collection_date=date(2024, 4, 30)),
    ])
    ImportHarvestsHandler(harvests, _coops()).handle(
        "coop_name,collection_date,eggs_collected,notes\n"
        "North,2024-05-01,1,\nSouth,2024-05-02,2,\nNorth,2024-05-03,3,\n"
    )
    assert harvests.lookups == 1
    assert sorted(h.id for h in harvests.find()) == ["10", "7", "8", "9"]


def test_store_error_on_one_harvest_does_not_stop_the_batch():
    class FullDisk(FakeHarvestRepository):
        def save(self, harvest):
            if harvest.eggs_collected == 2:
                raise StoreFailure("disk full")
            super().save(harvest)

    harvests = FullDisk()
    result = ImportHarvestsHandler(harvests, _coops()).handle(
        "coop_name,collection_date,eggs_collected,notes\n"
        "North,2024-05-01,1,\nSouth,2024-05-02,2,\nNorth,2024-05-03,3,\n"
    )

    assert result.success == 2
    assert result.errors == ["Line 3: Unexpected error processing harvest for coop South: disk full"]
    assert sorted(h.eggs_collected for h in harvests.find()) == [1, 3]
