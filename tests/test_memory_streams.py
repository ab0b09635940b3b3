import io

import pytest

from valvetex.errors import EndOfStreamError, StreamNotOpenError, VTFLibError
from valvetex.memory_streams import MemoryReader, MemoryWriter, SeekMode

DATA = b"VTF\x00abcdefgh"


def test_seek_mode_values_match_io_constants():
    assert SeekMode(io.SEEK_SET) is SeekMode.BEGIN
    assert SeekMode(io.SEEK_CUR) is SeekMode.CURRENT
    assert SeekMode(io.SEEK_END) is SeekMode.END
    with MemoryReader(DATA) as reader:
        assert reader.seek(-1, io.SEEK_END) == len(DATA) - 1
        assert reader.seek(2, io.SEEK_SET) == 2


def test_reader_reads_everything_in_order():
    with MemoryReader(DATA) as reader:
        assert reader.opened
        assert reader.size() == len(DATA)
        assert reader.read(4) == DATA[:4]
        assert reader.tell() == 4
        assert reader.read(100) == DATA[4:]
        assert reader.tell() == len(DATA)
        assert reader.read(1) == b""
    assert not reader.opened


def test_reader_read_byte_and_end_of_stream():
    with MemoryReader(b"AB") as reader:
        assert reader.read_byte() == ord("A")
        assert reader.read_byte() == ord("B")
        with pytest.raises(EndOfStreamError) as info:
            reader.read_byte()
        assert str(info.value) == "End of memory stream."


def test_reader_closed_reports_zero_and_refuses_reads():
    reader = MemoryReader(DATA)
    assert reader.size() == 0
    assert reader.tell() == 0
    assert reader.seek(3) == 0
    with pytest.raises(StreamNotOpenError):
        reader.read(1)
    with pytest.raises(StreamNotOpenError):
        reader.read_byte()


def test_reader_null_buffer_cannot_open():
    with pytest.raises(VTFLibError) as info:
        MemoryReader(None).open()
    assert str(info.value) == "Memory stream is null."


@pytest.mark.parametrize(
    "offset, mode, expected",
    [
        (2, SeekMode.BEGIN, 2),
        (-100, SeekMode.BEGIN, 0),
        (100, SeekMode.BEGIN, len(DATA)),
        (-3, SeekMode.END, len(DATA) - 3),
        (5, SeekMode.END, len(DATA)),
    ],
)
def test_reader_seek_clamps(offset, mode, expected):
    with MemoryReader(DATA) as reader:
        assert reader.seek(offset, mode) == expected
        assert reader.tell() == expected


def test_reader_seek_current_is_relative():
    with MemoryReader(DATA) as reader:
        reader.read(5)
        assert reader.seek(2, SeekMode.CURRENT) == 7
        assert reader.read(1) == DATA[7:8]


def test_reader_open_rewinds():
    reader = MemoryReader(DATA)
    reader.open()
    reader.read(6)
    reader.open()
    assert reader.tell() == 0
    assert reader.read(len(DATA)) == DATA


def test_reader_negative_count_rejected():
    with MemoryReader(DATA) as reader:
        with pytest.raises(ValueError):
            reader.read(-1)


def test_writer_round_trip_through_reader():
    with MemoryWriter(64) as writer:
        assert writer.write(DATA) == len(DATA)
        writer.write_byte(0x7F)
    payload = writer.getvalue()
    assert payload == DATA + b"\x7f"
    assert writer.size() == len(payload)
    with MemoryReader(payload) as reader:
        assert reader.read(len(payload)) == payload


def test_writer_partial_write_at_capacity():
    with MemoryWriter(4) as writer:
        assert writer.write(DATA) == 4
        assert writer.tell() == 4
        assert writer.write(b"xyz") == 0
        with pytest.raises(EndOfStreamError):
            writer.write_byte(1)
    assert writer.getvalue() == DATA[:4]


def test_writer_overwrite_after_seek_keeps_length():
    with MemoryWriter(16) as writer:
        writer.write(b"abcdef")
        assert writer.seek(2) == 2
        writer.write(b"XY")
        assert writer.size() == len(b"abcdef")
        assert writer.seek(0, SeekMode.END) == len(b"abcdef")
        assert writer.getvalue() == b"abXYef"


def test_writer_seek_clamped_to_written_length():
    with MemoryWriter(16) as writer:
        writer.write(b"abc")
        assert writer.seek(10) == len(b"abc")
        assert writer.seek(-10, SeekMode.CURRENT) == 0


def test_writer_size_survives_close_and_open_resets():
    writer = MemoryWriter(8)
    writer.open()
    writer.write(b"abc")
    writer.close()
    assert writer.size() == len(b"abc")
    assert writer.tell() == 0
    writer.open()
    assert writer.size() == 0
    assert writer.getvalue() == b""


def test_writer_requires_open_and_valid_byte():
    writer = MemoryWriter(8)
    with pytest.raises(StreamNotOpenError):
        writer.write(b"a")
    writer.open()
    with pytest.raises(ValueError):
        writer.write_byte(256)


def test_writer_null_buffer_cannot_open():
    with pytest.raises(VTFLibError) as info:
        MemoryWriter(None).open()
    assert str(info.value) == "Memory stream is null."