from utils import BatchIdGenerator, batch_id_for, escape_like, iso_from_ms, pagination, percentage


def test_batch_ids_follow_the_clock():
    ticks = iter([1000, 2000])
    gen = BatchIdGenerator(clock=lambda: next(ticks))
    assert batch_id_for(gen.next_ms()) == "BATCH-1000"
    assert batch_id_for(gen.next_ms()) == "BATCH-2000"


def test_batch_ids_never_repeat_or_go_backwards():
    ticks = iter([5000, 5000, 4000])
    gen = BatchIdGenerator(clock=lambda: next(ticks))
    assert [gen.next_ms() for _ in range(3)] == [5000, 5001, 5002]


def test_iso_timestamps_are_fixed_width():
    assert iso_from_ms(1694567890123) == "2023-09-13T01:18:10.123Z"
    assert iso_from_ms(1694567890005) == "2023-09-13T01:18:10.005Z"
    assert iso_from_ms(0) == "1970-01-01T00:00:00.000Z"


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


def test_percentage():
    assert percentage(0, 0) == 0
    assert percentage(1, 3) == 33.33
    assert percentage(3, 3) == 100.0


def test_pagination():
    assert pagination(2, 10, 25) == {
        "currentPage": 2,
        "totalPages": 3,
        "totalEvents": 25,
        "pageSize": 10,
        "hasNext": True,
        "hasPrev": True,
    }
    assert pagination(1, 10, 0)["totalPages"] == 0
    assert pagination(1, 10, 0)["hasNext"] is False
