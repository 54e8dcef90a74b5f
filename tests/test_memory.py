import numpy as np
import pytest

from pagerank import RankResult
from pagerankbase import PageRankConfig
from pagerank_memory import MemoryMonitor, experiment, profile_methods


def test_experiment_wraps_result():
    @experiment("sum")
    def total(values):
        return sum(values)

    record = total([1, 2, 3])
    assert record["name"] == "sum"
    assert record["result"] == 6
    assert record["time"] >= 0
    assert record["memory"] >= 0


def test_experiment_stops_monitor_on_error():
    @experiment("boom")
    def boom():
        raise KeyError("x")

    with pytest.raises(KeyError):
        boom()


def test_memory_monitor_records_peak():
    monitor = MemoryMonitor(interval=0.001)
    monitor.start()
    monitor.stop()
    monitor.join(timeout=5)
    assert not monitor.is_alive()
    assert monitor.peak > 0


def test_profile_methods_runs_every_storage(leaky_graph, capsys):
    records = profile_methods(leaky_graph, PageRankConfig(diff_threshold=1e-8, verbose=True))
    assert [r["name"] for r in records] == ["dense", "sparse"]
    assert all(isinstance(r["result"], RankResult) for r in records)
    np.testing.assert_allclose(records[0]["result"].ranks, records[1]["result"].ranks)
    out = capsys.readouterr().out
    assert "[dense]" in out and "[sparse]" in out
