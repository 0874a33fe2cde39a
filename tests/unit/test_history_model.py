"""Unit tests for the history row model."""

from datetime import date

from parcels.models.history import SLOT_COUNT, HistoryRow, StatusPush, empty_slots, latest_label


def _row(**slots):
    return HistoryRow.model_validate({"codigo_seguimiento": "ABC123", **empty_slots(), **slots})


def test_empty_row_targets_first_slot():
    row = _row()
    assert row.target_slot() == 1
    assert row.latest_status() is None


def test_target_slot_skips_occupied_and_treats_empty_string_as_free():
    row = _row(estado1="recibido", estado2="")
    assert row.target_slot() == 2


def test_full_row_targets_last_slot():
    row = _row(estado1="a", estado2="b", estado3="c", estado4="d")
    assert row.target_slot() == SLOT_COUNT


def test_latest_status_is_highest_occupied_slot():
    row = _row(estado1="recibido", estado2="en_transito", estado3=None, estado4=None)
    assert row.latest_status() == "en_transito"


def test_latest_status_ignores_gaps():
    row = _row(estado1="recibido", estado2=None, estado3="en_aduana")
    assert row.latest_status() == "en_aduana"


def test_dump_uses_store_column_names():
    row = _row(estado1="recibido", fecha1="2024-05-01")
    data = row.model_dump(mode="json", by_alias=True)
    assert data["codigo_seguimiento"] == "ABC123"
    assert data["estado1"] == "recibido"
    assert data["fecha1"] == "2024-05-01"


def test_status_push_accepts_both_spellings():
    push = StatusPush.model_validate({"estado": "recibido", "fecha": "2024-05-01"})
    assert push.label == "recibido"
    assert push.on == date(2024, 5, 1)
    assert StatusPush.model_validate({"status": "listo"}).on is None


def test_whitespace_label_is_free_and_not_latest():
    row = _row(estado1="recibido", estado2="   ")
    assert row.target_slot() == 2
    assert row.latest_status() == "recibido"


def test_latest_label_reads_plain_rows():
    assert latest_label({"estado1": "recibido", "estado2": "en_transito", "estado3": ""}) == "en_transito"
    assert latest_label({"estado1": None}) is None


def test_stored_dates_keep_legacy_text():
    row = _row(fecha1="2024-05-01T10:30:00Z", fecha2="ayer", fecha3="")
    assert row.date1 == date(2024, 5, 1)
    assert row.date2 == "ayer"
    assert row.date3 is None
