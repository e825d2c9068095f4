import pytest

from rainrate.stored_var import ShiftQueue, StoredVar, format_value


def test_format_value_int():
    assert format_value(5) == str(5)


def test_format_value_float_fixed_six_places():
    assert format_value(5.0) == "5.000000"


def test_format_value_string_unchanged():
    assert format_value("5") == "5"


def test_format_value_rejects_unknown_type():
    with pytest.raises(TypeError):
        format_value([1, 2])


def test_stored_var_setup_returns_self_and_records_info():
    var = StoredVar(0.0, "x", "double", "K", "node", 1, 1)
    result = var.setup("made here")
    assert result is var
    assert var.setup_info == "made here"


def test_stored_var_default_setup_info_empty():
    var = StoredVar(-1, "offset", "int", "s", "node", 1, 1)
    assert var.setup_info == ""
    assert var.value == -1


def test_shift_queue_initial_values():
    sq = ShiftQueue("test", 0, 5)
    assert [sq[i] for i in range(5)] == [0] * 5
    assert str(sq) == "test: 0, 0, 0, 0, 0, "


def test_shift_queue_push_fills_in_order():
    sq = ShiftQueue("test", 0, 5)
    for i in range(5):
        sq.push(i)
    assert [sq[i] for i in range(5)] == list(range(5))
    assert str(sq) == "test: 0, 1, 2, 3, 4, "


def test_shift_queue_get_and_shift_drain_to_initial():
    sq = ShiftQueue("test", 0, 5)
    for i in range(5):
        sq.push(i)
    seen = []
    for _ in range(5):
        seen.append(sq.get())
        sq.shift()
    assert seen == list(range(5))
    assert list(sq) == [0] * 5


def test_shift_queue_negative_index_and_out_of_range():
    sq = ShiftQueue("q", 0.0, 3)
    sq.push(7.5)
    assert sq[-1] == 7.5
    assert sq[3] == 0.0
    assert sq[-4] == 0.0


def test_shift_queue_minimum_size_is_one():
    sq = ShiftQueue("q", 0.0, 0)
    assert len(sq) == 1
    sq.push(2.5)
    assert sq.get() == 2.5


def test_shift_queue_push_drops_oldest():
    sq = ShiftQueue("q", 0, 2)
    sq.push(1)
    sq.push(2)
    sq.push(3)
    assert list(sq) == [2, 3]
    assert len(sq) == 2