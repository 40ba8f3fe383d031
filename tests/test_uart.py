import pytest

from avrcmd.uart import COMMAND_BUFFER_SIZE, LineReader, RingBuffer


def test_ring_buffer_is_fifo():
    buffer = RingBuffer(8)
    for char in "abc":
        assert buffer.add(char)
    assert [buffer.read() for _ in range(3)] == ["a", "b", "c"]
    assert buffer.read() is None


def test_ring_buffer_holds_one_less_than_size():
    buffer = RingBuffer(4)
    assert [buffer.add(c) for c in "wxyz"] == [True, True, True, False]
    assert buffer.is_full()
    assert len(buffer) == 3


def test_ring_buffer_empty_state():
    buffer = RingBuffer()
    assert buffer.is_empty()
    assert not buffer.is_full()
    buffer.add("q")
    assert not buffer.is_empty()
    assert buffer.read() == "q"
    assert buffer.is_empty()


def test_ring_buffer_wraps_around():
    buffer = RingBuffer(3)
    received = []
    for char in "abcdefg":
        assert buffer.add(char)
        received.append(buffer.read())
    assert "".join(received) == "abcdefg"
    assert buffer.is_empty()


def test_ring_buffer_default_capacity():
    buffer = RingBuffer()
    added = sum(buffer.add("x") for _ in range(COMMAND_BUFFER_SIZE + 5))
    assert added == COMMAND_BUFFER_SIZE - 1


def test_ring_buffer_rejects_bad_input():
    with pytest.raises(ValueError):
        RingBuffer(1)
    with pytest.raises(ValueError):
        RingBuffer().add("ab")


def test_line_reader_splits_lines():
    reader = LineReader()
    assert reader.feed("STATUS\nPRINT 1\n") == ["STATUS", "PRINT 1"]


def test_line_reader_ignores_carriage_returns():
    reader = LineReader()
    assert reader.feed("ST\rATUS\r\n") == ["STATUS"]


def test_line_reader_keeps_partial_line_between_feeds():
    reader = LineReader()
    assert reader.feed("PRI") == []
    assert reader.pending == "PRI"
    assert reader.feed("NT 2\nRE") == ["PRINT 2"]
    assert reader.pending == "RE"


def test_line_reader_accepts_longest_line():
    reader = LineReader(8)
    assert reader.feed("abcdefg\n") == ["abcdefg"]


def test_line_reader_discards_overlong_line():
    reader = LineReader(8)
    assert reader.feed("abcdefgh\nok\n") == ["ok"]


def test_line_reader_discards_across_feeds():
    reader = LineReader(4)
    assert reader.feed("abcdef") == []
    assert reader.pending == ""
    assert reader.feed("gh\nxy\n") == ["xy"]


def test_line_reader_empty_line():
    reader = LineReader()
    assert reader.feed("\n") == [""]