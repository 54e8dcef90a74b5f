import math
import numbers
from dataclasses import dataclass

import numpy as np
from scipy.sparse import csr_matrix

from pagerankbase import ConfigurationError, DANGLING_FALLBACK, GraphError


@dataclass(frozen=True)
class Document:
    label: str
    index: int


class Graph:
    """
    有向图，密集矩阵存储: edges[u, v] != 0 表示 u -> v。
    只写一次，排名计算期间只读。
    """

    def __init__(self, n, labels=None):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
            raise ConfigurationError(f"Graph needs at least one node, got n={n!r}")
        n = int(n)
        if labels is None:
            labels = [str(i) for i in range(n)]
        labels = list(labels)
        if len(labels) != n:
            raise ConfigurationError(f"Expected {n} labels, got {len(labels)}")
        self._index = {}
        for i, label in enumerate(labels):
            if label in self._index:
                raise ConfigurationError(f"Duplicate document label {label!r}")
            self._index[label] = i
        self.n = n
        self.labels = labels
        self.edges = np.zeros((n, n), dtype=np.float64)

    @classmethod
    def from_edges(cls, labels, edges):
        """(from, to) 索引对建图，丢弃自环和重复边"""
        g = cls(len(labels), labels)
        for u, v in edges:
            if u == v:
                continue
            g._check_index(u)
            g._check_index(v)
            if not g.is_adjacent(u, v):
                g.insert_edge(u, v)
        return g

    @classmethod
    def from_links(cls, link_map):
        """{label: [outlink labels]} 建图，忽略集合外的链接"""
        labels = list(link_map)
        g = cls(len(labels), labels)
        for label, outlinks in link_map.items():
            u = g._index[label]
            for target in outlinks:
                v = g._index.get(target)
                if v is None or v == u or g.is_adjacent(u, v):
                    continue
                g.insert_edge(u, v)
        return g

    def _check_index(self, i):
        if isinstance(i, bool) or not isinstance(i, (int, np.integer)) or not 0 <= i < self.n:
            raise GraphError(f"Node index {i!r} out of range [0, {self.n})")

    def insert_edge(self, src, dst, weight=1.0):
        self._check_index(src)
        self._check_index(dst)
        if src == dst:
            raise GraphError(f"Self-loop on node {src} is not allowed")
        if isinstance(weight, bool) or not isinstance(weight, numbers.Real) \
                or not math.isfinite(weight) or weight < 0:
            raise GraphError(f"Edge weight must be finite and non-negative, got {weight!r}")
        # 0 表示"无边"，不覆盖已有的边
        if weight == 0:
            return
        self.edges[src, dst] = weight

    def is_adjacent(self, src, dst):
        return self.edges[src, dst] != 0

    def weight(self, src, dst):
        return float(self.edges[src, dst])

    def adjacency(self):
        return self.edges != 0

    def successors(self, i):
        return np.flatnonzero(self.edges[i, :]).tolist()

    def predecessors(self, i):
        return np.flatnonzero(self.edges[:, i]).tolist()

    @property
    def edge_count(self):
        return int(np.count_nonzero(self.edges))

    def label(self, i):
        return self.labels[i]

    def index_of(self, label):
        return self._index[label]

    def documents(self):
        return [Document(label, i) for i, label in enumerate(self.labels)]

    def to_sparse(self):
        return csr_matrix(self.edges)

    def __len__(self):
        return self.n

    def __repr__(self):
        return f"Graph(n={self.n}, edges={self.edge_count})"


# ================== 度统计 ==================
@dataclass(frozen=True)
class DegreeStats:
    in_degree: np.ndarray
    out_degree: np.ndarray

    def dangling(self):
        return np.flatnonzero(self.out_degree == 0)

    def effective_out(self):
        """出度为0时替换为0.5"""
        return np.where(self.out_degree == 0, DANGLING_FALLBACK, self.out_degree)


def compute_degrees(graph):
    """全矩阵扫描 O(N^2)，图建完后只算一次"""
    adj = graph.adjacency()
    out_degree = adj.sum(axis=1).astype(np.float64)
    in_degree = adj.sum(axis=0).astype(np.float64)
    return DegreeStats(in_degree=in_degree, out_degree=out_degree)
