import math
import numbers
from dataclasses import dataclass, fields

# ================== 默认参数 ==================
DAMPING = 0.85
TOL = 1e-4
MAX_ITER = 1000
# 出度为0的节点按"半条链接"计算
DANGLING_FALLBACK = 0.5


# ================== 异常 ==================
class WeightedPageRankError(ValueError):
    """Base class for every input the weighted PageRank engine refuses."""


class ConfigurationError(WeightedPageRankError):
    """Invalid run parameters or an empty node set."""


class GraphError(WeightedPageRankError):
    """Invalid edge insertion: self-loop, bad index or bad weight."""


class DegenerateWeightError(WeightedPageRankError):
    """A derived Win/Wout weight came out non-finite."""


# ================== 运行配置 ==================
@dataclass(frozen=True)
class PageRankConfig:
    damping: float = DAMPING
    diff_threshold: float = TOL
    max_iterations: int = MAX_ITER
    verbose: bool = False

    def validate(self):
        """参数检查，在任何迭代开始前调用"""
        d = self.damping
        if isinstance(d, bool) or not isinstance(d, numbers.Real) or not math.isfinite(d) or not 0.0 <= d <= 1.0:
            raise ConfigurationError(f"damping must be a finite value in [0, 1], got {d!r}")
        t = self.diff_threshold
        if isinstance(t, bool) or not isinstance(t, numbers.Real) or not math.isfinite(t) or t <= 0:
            raise ConfigurationError(f"diff_threshold must be > 0, got {t!r}")
        m = self.max_iterations
        if isinstance(m, bool) or not isinstance(m, numbers.Integral) or m <= 0:
            raise ConfigurationError(f"max_iterations must be a positive integer, got {m!r}")
        return self

    @classmethod
    def from_mapping(cls, values):
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**values).validate()
