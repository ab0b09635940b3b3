import io

import pytest

from valvetex.errors import EndOfStreamError, StreamNotOpenError, VTFLibError
from valvetex.memory_streams import SeekMode
from valvetex.proc_streams import Proc, ProcReader, ProcTable, ProcWriter

DATA = b"VTF\x00payload"


def _seek(offset, mode, stream):
    return stream.seek(offset, int(mode))


def reader_table(events):
    table = ProcTable()
    table.set(Proc.READ_OPEN, lambda ud: events.append("open") or True)
    table.set(Proc.READ_CLOSE, lambda ud: events.append("close"))
    table.set(Proc.READ_READ, lambda count, ud: ud.read(count))
    table.set(Proc.READ_SEEK, _seek)
    table.set(Proc.READ_TELL, lambda ud: ud.tell())
    table.set(Proc.READ_SIZE, lambda ud: len(ud.getbuffer()))
    return table


def writer_table(events):
    table = ProcTable()
    table.set(Proc.WRITE_OPEN, lambda ud: events.append("open") or True)
    table.set(Proc.WRITE_CLOSE, lambda ud: events.append("close"))
    table.set(Proc.WRITE_WRITE, lambda data, ud: ud.write(data))
    table.set(Proc.WRITE_SEEK, _seek)
    table.set(Proc.WRITE_TELL, lambda ud: ud.tell())
    table.set(Proc.WRITE_SIZE, lambda ud: len(ud.getbuffer()))
    return table


def test_proc_slot_numbers():
    assert Proc(0) is Proc.READ_CLOSE
    assert Proc(6) is Proc.WRITE_CLOSE
    table = ProcTable()

    def callback(ud):
        return None

    table.set(6, callback)
    assert table.get(Proc.WRITE_CLOSE) is callback
    assert table.get(Proc.READ_CLOSE) is None
    with pytest.raises(ValueError):
        table.get(12)


def test_table_set_get_and_clear():
    table = ProcTable()
    assert table.get(Proc.READ_OPEN) is None

    def callback(ud):
        return True

    table.set(Proc.READ_OPEN, callback)
    assert table.get(int(Proc.READ_OPEN)) is callback
    assert table.require(Proc.READ_OPEN) is callback
    table.set(Proc.READ_OPEN, None)
    with pytest.raises(VTFLibError):
        table.require(Proc.READ_OPEN)


def test_table_rejects_non_callable_and_unknown_slot():
    table = ProcTable()
    with pytest.raises(TypeError):
        table.set(Proc.READ_READ, 5)
    with pytest.raises(ValueError):
        table.get(len(Proc))


def test_reader_delegates_to_callbacks():
    events = []
    source = io.BytesIO(DATA)
    with ProcReader(source, reader_table(events)) as reader:
        assert reader.opened
        assert reader.size() == len(DATA)
        assert reader.read_byte() == DATA[0]
        assert reader.read(3) == DATA[1:4]
        assert reader.tell() == 4
        assert reader.seek(-2, SeekMode.END) == len(DATA) - 2
        assert reader.read(10) == DATA[-2:]
        with pytest.raises(EndOfStreamError):
            reader.read_byte()
    assert not reader.opened
    assert events == ["open", "close"]


def test_reader_closed_returns_zero_and_refuses_reads():
    reader = ProcReader(io.BytesIO(DATA), reader_table([]))
    assert reader.size() == 0
    assert reader.tell() == 0
    assert reader.seek(3) == 0
    with pytest.raises(StreamNotOpenError):
        reader.read(1)


def test_reader_open_failures():
    with pytest.raises(VTFLibError):
        ProcReader(None, ProcTable()).open()
    table = ProcTable()
    table.set(Proc.READ_OPEN, lambda ud: False)
    with pytest.raises(VTFLibError) as info:
        ProcReader(None, table).open()
    assert str(info.value) == "Error opening file."


def test_reader_without_close_callback_stays_open():
    table = ProcTable()
    table.set(Proc.READ_OPEN, lambda ud: True)
    reader = ProcReader(None, table)
    reader.open()
    reader.close()
    assert reader.opened
    with pytest.raises(VTFLibError) as info:
        reader.open()
    assert str(info.value) == "Reader already open."


def test_writer_round_trip():
    events = []
    sink = io.BytesIO()
    with ProcWriter(sink, writer_table(events)) as writer:
        assert writer.write(DATA) == len(DATA)
        writer.write_byte(0x41)
        assert writer.size() == len(DATA) + 1
        assert writer.tell() == len(DATA) + 1
        assert writer.seek(0) == 0
    assert sink.getvalue() == DATA + b"A"
    assert events == ["open", "close"]

    with ProcReader(io.BytesIO(sink.getvalue()), reader_table([])) as reader:
        assert reader.read(len(DATA) + 1) == DATA + b"A"


def test_writer_failed_byte_write_raises():
    table = writer_table([])
    table.set(Proc.WRITE_WRITE, lambda data, ud: 0)
    with ProcWriter(io.BytesIO(), table) as writer:
        with pytest.raises(EndOfStreamError):
            writer.write_byte(1)
        assert writer.write(DATA) == 0


def test_writer_requires_open_and_valid_byte():
    writer = ProcWriter(io.BytesIO(), writer_table([]))
    with pytest.raises(StreamNotOpenError):
        writer.write(b"x")
    writer.open()
    with pytest.raises(ValueError):
        writer.write_byte(-1)


def test_writer_missing_size_callback_raises():
    table = writer_table([])
    table.set(Proc.WRITE_SIZE, None)
    with ProcWriter(io.BytesIO(), table) as writer:
        with pytest.raises(VTFLibError):
            writer.size()