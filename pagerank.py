import enum
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from scipy.sparse import csr_matrix

from pagerankbase import ConfigurationError, DAMPING, MAX_ITER, PageRankConfig, TOL
from pagerank_graph import compute_degrees
from pagerank_weights import build_weights, combined_weights

METHODS = ("dense", "sparse")


class IterationState(enum.Enum):
    INIT = "init"
    ITERATING = "iterating"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


class Node(NamedTuple):
    label: str
    index: int
    rank: float
    prev_rank: float
    in_degree: float
    out_degree: float


@dataclass
class RankResult:
    labels: list
    ranks: np.ndarray
    iterations: int
    diff: float
    state: IterationState

    @property
    def converged(self):
        return self.state is IterationState.CONVERGED

    def pairs(self):
        """(label, rank)，按内部索引顺序，排序交给调用方"""
        return [(label, float(r)) for label, r in zip(self.labels, self.ranks)]

    def as_dict(self):
        return dict(self.pairs())

    def __iter__(self):
        return iter(self.pairs())

    def __len__(self):
        return len(self.labels)


class WeightedPageRank:
    """
    加权PageRank迭代引擎。
    构造即 Init: 校验参数, 统计出入度, 构建 Win/Wout, rank = 1/N。
    rank / prev_rank 为引擎私有的两个向量。
    """

    def __init__(self, graph, config=None, method="dense"):
        self.config = (config or PageRankConfig()).validate()
        if method not in METHODS:
            raise ConfigurationError(f"Unknown method {method!r}, expected one of {METHODS}")
        if graph.n <= 0:
            raise ConfigurationError("Cannot rank an empty node set")
        self.graph = graph
        self.method = method
        self.n = float(graph.n)

        self.stats = compute_degrees(graph)
        self.win, self.wout = build_weights(graph, self.stats)
        weights = combined_weights(self.win, self.wout)
        if method == "sparse":
            # 转置后 CSR 按目标节点取行
            self._transfer = csr_matrix(weights.T)
        else:
            self._transfer = np.ascontiguousarray(weights.T)

        self.reset()

    def reset(self):
        self.rank = np.full(self.graph.n, 1.0 / self.n, dtype=np.float64)
        self.prev_rank = self.rank.copy()
        self.iteration = 0
        self.steps = 0
        self.diff = None
        self.state = IterationState.INIT

    def step(self):
        """单步更新，返回 L1 diff"""
        if self.state is IterationState.INIT:
            self.state = IterationState.ITERATING
        d = self.config.damping
        self.prev_rank = self.rank.copy()
        weight = self._transfer @ self.prev_rank
        self.rank = (1 - d) / self.n + d * np.asarray(weight).ravel()
        self.diff = float(np.abs(self.rank - self.prev_rank).sum())
        self.steps += 1
        return self.diff

    def run(self):
        cfg = self.config
        self.reset()
        self.iteration = 1

        # 至少迭代一次
        diff = self.step()
        self.iteration += 1
        while self.iteration < cfg.max_iterations and diff >= cfg.diff_threshold:
            diff = self.step()
            self.iteration += 1

        if diff < cfg.diff_threshold:
            self.state = IterationState.CONVERGED
            if cfg.verbose:
                print(f"[Weighted] Converged at {self.steps} iterations, delta={diff:.2e}")
        else:
            self.state = IterationState.EXHAUSTED
            if cfg.verbose:
                print(f"[Weighted] Stopped after {self.steps} iterations "
                      f"(max_iterations={cfg.max_iterations}), delta={diff:.2e}")
        return self.result()

    def result(self):
        return RankResult(
            labels=list(self.graph.labels),
            ranks=self.rank.copy(),
            iterations=self.steps,
            diff=self.diff,
            state=self.state,
        )

    def nodes(self):
        return [
            Node(label, i, float(self.rank[i]), float(self.prev_rank[i]),
                 float(self.stats.in_degree[i]), float(self.stats.out_degree[i]))
            for i, label in enumerate(self.graph.labels)
        ]


def weighted_pagerank(graph, damping=DAMPING, diff_threshold=TOL, max_iterations=MAX_ITER,
                      method="dense", verbose=False):
    config = PageRankConfig(damping=damping, diff_threshold=diff_threshold,
                            max_iterations=max_iterations, verbose=verbose)
    return WeightedPageRank(graph, config, method=method).run()
