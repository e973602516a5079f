import io

import pytest

from bftape.errors import OutputDeviceError
from bftape.io_adapter import BufferSink, BufferSource, StdinSource, StdoutSink


class FlushCountingStream(io.BytesIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1
        super().flush()


class FailingStream:
    def write(self, data):
        raise OSError("broken pipe")

    def flush(self):
        pass

    def read(self, n):
        raise OSError("bad descriptor")


def test_stdout_sink_writes_raw_bytes_and_flushes_each():
    stream = FlushCountingStream()
    sink = StdoutSink(stream)
    for value in (0, 72, 255):
        sink.write_byte(value)
    assert stream.getvalue() == b"\x00H\xff"
    assert stream.flushes == 3


def test_stdout_sink_failure_raises_output_device_error():
    with pytest.raises(OutputDeviceError):
        StdoutSink(FailingStream()).write_byte(1)


def test_stdout_sink_closed_stream():
    stream = io.BytesIO()
    stream.close()
    with pytest.raises(OutputDeviceError):
        StdoutSink(stream).write_byte(1)


def test_stdin_source_reads_one_byte_then_eof():
    source = StdinSource(io.BytesIO(b"ab"))
    assert source.read_byte() == ord("a")
    assert source.read_byte() == ord("b")
    assert source.read_byte() is None


def test_stdin_source_read_failure_is_eof():
    assert StdinSource(FailingStream()).read_byte() is None


def test_buffer_source_accepts_text():
    source = BufferSource("hi")
    assert [source.read_byte(), source.read_byte(), source.read_byte()] == [104, 105, None]
    assert source.reads == 2


def test_buffer_sink_counts_writes():
    sink = BufferSink()
    sink.write_byte(7)
    sink.write_byte(8)
    assert sink.getvalue() == b"\x07\x08"
    assert sink.writes == 2
