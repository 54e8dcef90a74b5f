import gc
import os
import threading
import time
from functools import wraps

import numpy as np
import psutil

from pagerank import METHODS, WeightedPageRank

MEM_SAMPLE_INTERVAL = 0.001  # 内存采样间隔1ms


# ================== 内存峰值监控 ==================
class MemoryMonitor(threading.Thread):
    """后台线程定期采样当前进程 RSS，记录峰值"""

    def __init__(self, interval=MEM_SAMPLE_INTERVAL):
        super().__init__(daemon=True)
        self.interval = interval
        self.peak = 0
        self.running = True

    def run(self):
        proc = psutil.Process(os.getpid())
        self.peak = proc.memory_info().rss
        while self.running:
            try:
                self.peak = max(self.peak, proc.memory_info().rss)
            except psutil.Error:
                break
            time.sleep(self.interval)

    def stop(self):
        self.running = False


def experiment(name):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            gc.collect()
            base_mem = psutil.Process(os.getpid()).memory_info().rss
            monitor = MemoryMonitor()
            monitor.start()
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            finally:
                monitor.stop()
                monitor.join()
            return {
                "name": name,
                "time": time.time() - start_time,
                "memory": max(monitor.peak - base_mem, 0) / (1024**2),
                "result": result,
            }

        return wrapper

    return decorator


def profile_methods(graph, config=None, methods=METHODS):
    """
    每种存储方式各跑一次，返回 {"name", "time", "memory", "result"} 列表。
    各方式结果必须一致。
    """
    records = []
    for method in methods:
        run = experiment(method)(lambda m=method: WeightedPageRank(graph, config, method=m).run())
        record = run()
        records.append(record)
        if config is not None and config.verbose:
            print(f"[{method}] {record['result'].iterations} iterations in {record['time']:.3f}s, "
                  f"peak memory +{record['memory']:.2f}MB")

    baseline = records[0]["result"].ranks
    for record in records[1:]:
        if not np.allclose(record["result"].ranks, baseline, atol=1e-12):
            raise RuntimeError(f"Method {record['name']!r} disagrees with {records[0]['name']!r}")
    return records
