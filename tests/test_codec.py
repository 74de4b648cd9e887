import pytest

from almanac.calendar.codec import dump_events, parse_events, parse_u64, read_calendar, write_calendar
from almanac.calendar.errors import CalendarFileError, ErrorCode
from almanac.calendar.store import CalendarStore


def test_save_writes_exact_lines(abc_store, calendar_file):
    assert abc_store.save(calendar_file) == 3
    assert calendar_file.read_bytes() == (
        b"1|A|2025-02-01|10:00|x\n"
        b"2|B|2025-02-01|09:00|y\n"
        b"3|C|2025-01-31|23:59|z\n"
    )


def test_round_trip_into_fresh_store(abc_store, calendar_file):
    abc_store.save(calendar_file)

    fresh = CalendarStore()
    report = fresh.load(calendar_file)

    assert report.skipped == []
    assert fresh.list() == abc_store.list()
    assert [e.id for e in fresh.list()] == [1, 2, 3]
    assert fresh.last_id == 3


def test_round_trip_keeps_unicode_and_blank_fields(store, calendar_file):
    store.create("Café ☕", "2025-06-01", "08:00", "")
    store.create("", "2025-06-02", "09:00", "naïve résumé")
    store.save(calendar_file)

    fresh = CalendarStore()
    fresh.load(calendar_file)
    assert fresh.list() == store.list()


def test_load_tolerates_garbage(calendar_file):
    calendar_file.write_text(
        "1|Dentist|2025-01-15|09:30|Checkup\n"
        "2|only|three\n"
        "oops|Bad|2025-01-16|10:00|id\n"
        "7|Party|2025-03-01|20:00|bring cake\n",
        encoding="utf-8",
    )
    store = CalendarStore()
    report = store.load(calendar_file)

    assert [e.id for e in store.list()] == [1, 7]
    assert store.last_id == 7
    assert [s.line_no for s in report.skipped] == [2, 3]
    assert [s.reason for s in report.reported] == ["invalid digit found in string"]


def test_next_create_after_load_follows_max_id(calendar_file):
    calendar_file.write_text("5|x|2025-01-01|00:00|\n2|y|2025-01-01|00:00|\n", encoding="utf-8")
    store = CalendarStore()
    store.load(calendar_file)
    assert store.create("new", "2025-01-02", "10:00", "") == 6


def test_load_keeps_higher_prior_last_id(store, calendar_file):
    for i in range(3):
        store.create(f"e{i}", "2025-01-01", "10:00", "")
    for event_id in (1, 2, 3):
        store.delete(event_id)
    calendar_file.write_text("2|x|2025-01-01|00:00|\n", encoding="utf-8")

    store.load(calendar_file)
    assert store.last_id == 3
    assert store.create("next", "2025-01-01", "10:00", "") == 4


def test_load_skips_ids_already_in_store(abc_store, calendar_file):
    calendar_file.write_text("3|dup|2025-01-01|00:00|\n9|new|2025-01-01|00:00|\n", encoding="utf-8")
    report = abc_store.load(calendar_file)

    assert report.reported[0].reason == "duplicate id 3"
    assert [e.id for e in abc_store.list()] == [1, 2, 3, 9]
    assert abc_store.get(3).title == "C"
    assert abc_store.last_id == 9


def test_duplicate_ids_within_file_are_skipped():
    report = parse_events("4|a|d|t|x\n4|b|d|t|y\n")
    assert [e.title for e in report.events] == ["a"]
    assert report.reported[0].line_no == 2


def test_fields_are_taken_verbatim():
    report = parse_events(" 3 |a|b|c|d\n3| padded |not-a-date|noon| desc \n")
    assert len(report.events) == 1
    e = report.events[0]
    assert (e.title, e.date, e.time, e.description) == (" padded ", "not-a-date", "noon", " desc ")
    assert report.reported[0].reason == "invalid digit found in string"


def test_crlf_lines_load_like_lf():
    lf = parse_events("1|a|2025-01-01|10:00|x\n2|b|2025-01-02|11:00|y\n")
    crlf = parse_events("1|a|2025-01-01|10:00|x\r\n2|b|2025-01-02|11:00|y\r\n")
    assert crlf.events == lf.events


def test_blank_and_short_lines_are_silent():
    report = parse_events("\n\nnot an event\n1|a|2025-01-01|10:00|x")
    assert len(report.events) == 1
    assert report.reported == []
    assert [s.line_no for s in report.skipped] == [3]
    assert report.skipped[0].silent


def test_too_many_fields_is_skipped():
    report = parse_events("1|a|2025-01-01|10:00|x|extra\n")
    assert report.events == []
    assert report.skipped[0].reason == "expected 5 fields, found 6"


def test_missing_file_leaves_store_unchanged(abc_store, tmp_path):
    before = abc_store.list()
    with pytest.raises(CalendarFileError) as info:
        abc_store.load(tmp_path / "nope.txt")
    assert info.value.code is ErrorCode.FILE_IO
    assert str(info.value).startswith("Failed to read file:")
    assert abc_store.list() == before
    assert abc_store.last_id == 3


def test_non_utf8_file_is_a_file_error(calendar_file):
    calendar_file.write_bytes(b"1|\xff\xfe|2025-01-01|10:00|x\n")
    with pytest.raises(CalendarFileError):
        read_calendar(calendar_file)


def test_write_to_missing_directory_fails(abc_store, tmp_path):
    with pytest.raises(CalendarFileError) as info:
        abc_store.save(tmp_path / "missing" / "cal.txt")
    assert str(info.value).startswith("Failed to write file:")


def test_save_truncates_existing_file(abc_store, calendar_file):
    calendar_file.write_text("old contents that are much longer than the new ones\n" * 20, encoding="utf-8")
    abc_store.save(calendar_file)
    assert calendar_file.read_text(encoding="utf-8") == dump_events(abc_store.list())


def test_atomic_save_replaces_and_cleans_up(abc_store, calendar_file):
    calendar_file.write_text("stale\n", encoding="utf-8")
    write_calendar(calendar_file, abc_store.list(), atomic=True)

    assert calendar_file.read_text(encoding="utf-8").startswith("1|A|")
    assert sorted(p.name for p in calendar_file.parent.iterdir()) == ["calendar.txt"]


def test_empty_store_writes_empty_file(store, calendar_file):
    store.save(calendar_file)
    assert calendar_file.read_bytes() == b""
    assert parse_events("").events == []


@pytest.mark.parametrize("text,value", [
    ("0", 0),
    ("7", 7),
    ("+7", 7),
    ("007", 7),
    ("18446744073709551615", 2**64 - 1),
])
def test_parse_u64_accepts(text, value):
    assert parse_u64(text) == value


@pytest.mark.parametrize("text,message", [
    ("", "cannot parse integer from empty string"),
    ("+", "cannot parse integer from empty string"),
    ("-1", "invalid digit found in string"),
    (" 1", "invalid digit found in string"),
    ("1_0", "invalid digit found in string"),
    ("١٢", "invalid digit found in string"),
    ("18446744073709551616", "number too large to fit in target type"),
])
def test_parse_u64_rejects(text, message):
    with pytest.raises(ValueError, match=message):
        parse_u64(text)
