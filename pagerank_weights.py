import numpy as np
from scipy.sparse import csr_matrix

from pagerankbase import DANGLING_FALLBACK, DegenerateWeightError


class WeightGraph:
    """Win / Wout 权重矩阵，edges[j, i] 仅在原图有 j -> i 时非零"""

    def __init__(self, name, edges):
        self.name = name
        self.edges = edges
        self.edges.setflags(write=False)

    @property
    def n(self):
        return self.edges.shape[0]

    def weight(self, src, dst):
        return float(self.edges[src, dst])

    def to_sparse(self):
        return csr_matrix(self.edges)

    def __repr__(self):
        return f"WeightGraph({self.name!r}, n={self.n})"


def _normalise_by_neighbourhood(adj, score, name):
    """
    W[j, i] = score[i] / sum(score[k] for j -> k)
    分母为0时取0.5
    分母为0意味着分子也为0，已有的边会得到0权重；由同一张图算出的度不会出现这种情况
    """
    denom = adj.astype(np.float64) @ score
    denom = np.where(denom == 0, DANGLING_FALLBACK, denom)
    w = np.where(adj, score[np.newaxis, :] / denom[:, np.newaxis], 0.0)
    if not np.isfinite(w).all():
        bad = np.argwhere(~np.isfinite(w))[0]
        raise DegenerateWeightError(f"{name} weight for edge {bad[0]} -> {bad[1]} is not finite")
    return w


def build_win(graph, stats):
    return WeightGraph("win", _normalise_by_neighbourhood(graph.adjacency(), stats.in_degree, "Win"))


def build_wout(graph, stats):
    return WeightGraph("wout", _normalise_by_neighbourhood(graph.adjacency(), stats.effective_out(), "Wout"))


def build_weights(graph, stats):
    return build_win(graph, stats), build_wout(graph, stats)


def combined_weights(win, wout):
    # 迭代期间不变，预先相乘
    return win.edges * wout.edges
