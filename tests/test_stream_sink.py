# tests/test_stream_sink.py
import io
import threading

from portcheck.adapters.system.stream_sink import StoreResultSink, StreamResultSink
from portcheck.domain.endpoint import Endpoint
from tests.fakes import InMemoryResultStore


def test_success_line_format():
    buf = io.StringIO()
    StreamResultSink(buf).report(Endpoint("127.0.0.1", 8001))
    assert buf.getvalue() == "SUCCESS: 127.0.0.1:8001\n"


def test_concurrent_reports_never_interleave():
    buf = io.StringIO()
    sink = StreamResultSink(buf)

    def burst(start):
        for p in range(start, start + 200):
            sink.report(Endpoint("10.0.0.1", p))

    threads = [threading.Thread(target=burst, args=(i * 1000 + 1,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = buf.getvalue().splitlines()
    assert len(lines) == 1600
    assert all(line.startswith("SUCCESS: 10.0.0.1:") for line in lines)


def test_defaults_to_stdout(capsys):
    StreamResultSink().report(Endpoint("::1", 22))
    assert capsys.readouterr().out == "SUCCESS: [::1]:22\n"


def test_store_sink_appends_addresses():
    store = InMemoryResultStore()
    store.set_pending("s1")
    sink = StoreResultSink(store, "s1")
    sink.report(Endpoint("h", 80))
    sink.report(Endpoint("h", 22))
    assert store.get("s1")["open"] == ["h:80", "h:22"]
