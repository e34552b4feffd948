from __future__ import annotations

"""
Integration tests for concurrent logging on a single instance.

Verifies that writes and rotations issued from many threads never tear
lines, never lose lines and never rotate twice for one crossing.
"""

import re
import threading
from collections import defaultdict
from typing import Dict, List

from columnlog.domain.levels import Level

THREADS = 8
PER_THREAD = 150

LINE_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} \[INFO\] +\[Conc\.worker\] +t(\d+)-(\d+)$")


def test_concurrent_writes_with_rotation(make_logger, tmp_path):
    lg = make_logger("Conc", level=Level.INFO, console=False, max_file_size=2000)
    barrier = threading.Barrier(THREADS)

    def worker(tid: int) -> None:
        barrier.wait()
        for i in range(PER_THREAD):
            lg.info(f"t{tid}-{i:03d}")

    threads = [threading.Thread(target=worker, args=(t,)) for t in range(THREADS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    lg.close()

    files = sorted(tmp_path.glob("log*.txt"))
    parts = sorted(int(p.stem.split("_part")[1]) for p in files if "_part" in p.stem)
    assert parts == list(range(1, len(parts) + 1)), "Part indices must be contiguous"
    assert lg.file_sink.part_index == len(parts)

    per_thread: Dict[int, List[int]] = defaultdict(list)
    ordered = [tmp_path / "log.txt"] + [tmp_path / f"log_part{i}.txt" for i in parts]
    for f in ordered:
        for line in f.read_text(encoding="utf-8").splitlines():
            match = LINE_RE.match(line)
            assert match, f"Torn or malformed line: {line!r}"
            per_thread[int(match.group(1))].append(int(match.group(2)))

    assert len(per_thread) == THREADS
    for tid, seq in per_thread.items():
        assert seq == list(range(PER_THREAD)), f"Thread {tid} lost or reordered lines"

    for f in ordered[:-1]:
        size = f.stat().st_size
        line_size = len(f.read_text(encoding="utf-8").splitlines()[0]) + 1
        assert 2000 <= size < 2000 + line_size


def test_set_append_during_writes_does_not_deadlock(make_logger):
    lg = make_logger("Conc", console=False, max_file_size=500)
    stop = threading.Event()

    def writer() -> None:
        while not stop.is_set():
            lg.info("spin", caller="writer")

    t = threading.Thread(target=writer)
    t.start()
    for flag in (False, True, False, True):
        lg.set_append_to_file(flag)
    stop.set()
    t.join(timeout=10)

    assert not t.is_alive()
