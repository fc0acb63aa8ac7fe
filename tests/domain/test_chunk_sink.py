"""Tests for ChunkSink entity."""

import threading

from serialtail.domain import ChunkSink


class TestChunkSinkBasic:
    """Basic ChunkSink tests."""

    def test_empty_sink(self, chunk_sink):
        """Test newly created sink is empty."""
        assert chunk_sink.is_empty
        assert chunk_sink.size == 0
        assert len(chunk_sink) == 0
        assert chunk_sink.materialize() == b""

    def test_append(self, chunk_sink):
        """Test appending tracks chunks and bytes."""
        chunk_sink.append(b"hello ")
        chunk_sink.append(b"world")

        assert not chunk_sink.is_empty
        assert len(chunk_sink) == 2
        assert chunk_sink.size == 11

    def test_materialize_concatenates_in_order(self, chunk_sink):
        """Test materialize joins chunks in arrival order."""
        chunks = [b"\x00\x01", b"", b"\xe2\x82", b"\xac", b"\xff\xfe tail"]
        for chunk in chunks:
            chunk_sink.append(chunk)

        assert chunk_sink.materialize() == b"".join(chunks)

    def test_materialize_does_not_clear(self, chunk_sink):
        """Test materialize is non-destructive."""
        chunk_sink.append(b"abc")

        assert chunk_sink.materialize() == b"abc"
        assert chunk_sink.materialize() == b"abc"
        assert chunk_sink.size == 3

    def test_append_copies_mutable_input(self, chunk_sink):
        """Test a later change to the caller's buffer does not leak in."""
        data = bytearray(b"abc")
        chunk_sink.append(data)
        data[0] = ord("z")

        assert chunk_sink.materialize() == b"abc"

    def test_clear(self, chunk_sink):
        """Test clearing the sink."""
        chunk_sink.append(b"abc")
        chunk_sink.clear()

        assert chunk_sink.is_empty
        assert chunk_sink.size == 0


class TestChunkSinkDrain:
    """Tests for drain_all."""

    def test_drain_returns_chunks_and_clears(self, chunk_sink):
        """Test drain hands back all chunks and empties the sink."""
        chunk_sink.append(b"a")
        chunk_sink.append(b"b")

        assert chunk_sink.drain_all() == [b"a", b"b"]
        assert chunk_sink.is_empty
        assert chunk_sink.size == 0

    def test_drain_empty(self, chunk_sink):
        """Test draining an empty sink returns nothing."""
        assert chunk_sink.drain_all() == []

    def test_append_after_drain_is_kept(self, chunk_sink):
        """Test a chunk appended right after a drain lands in the next drain only."""
        chunk_sink.append(b"first")
        first = chunk_sink.drain_all()
        chunk_sink.append(b"second")
        second = chunk_sink.drain_all()

        assert first == [b"first"]
        assert second == [b"second"]
        assert chunk_sink.drain_all() == []

    def test_concurrent_appends_never_lost_or_duplicated(self):
        """Test drains racing appends from other threads see each chunk once."""
        sink = ChunkSink()
        writers = 4
        per_writer = 2000
        done = threading.Event()
        drained: list[bytes] = []

        def writer(index: int) -> None:
            for n in range(per_writer):
                sink.append(f"{index}:{n};".encode())

        threads = [threading.Thread(target=writer, args=(i,)) for i in range(writers)]

        def drainer() -> None:
            while not done.is_set():
                drained.extend(sink.drain_all())
            drained.extend(sink.drain_all())

        drain_thread = threading.Thread(target=drainer)
        drain_thread.start()
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        done.set()
        drain_thread.join()

        expected = {f"{i}:{n};".encode() for i in range(writers) for n in range(per_writer)}
        assert len(drained) == writers * per_writer
        assert set(drained) == expected

    def test_per_writer_order_preserved(self):
        """Test chunks from one producer keep their order across drains."""
        sink = ChunkSink()
        collected: list[bytes] = []
        for n in range(100):
            sink.append(bytes([n]))
            if n % 7 == 0:
                collected.extend(sink.drain_all())
        collected.extend(sink.drain_all())

        assert b"".join(collected) == bytes(range(100))

    def test_counters_wait_for_lock(self):
        """Test len, size and is_empty read under the sink lock."""
        sink = ChunkSink()
        sink.append(b"abc")
        results = {}

        def read_counters() -> None:
            results["len"] = len(sink)
            results["size"] = sink.size
            results["is_empty"] = sink.is_empty

        with sink._lock:
            reader = threading.Thread(target=read_counters)
            reader.start()
            reader.join(timeout=0.05)
            assert reader.is_alive()
            assert results == {}

        reader.join(timeout=2)
        assert results == {"len": 1, "size": 3, "is_empty": False}
