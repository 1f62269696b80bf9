# pa_regression/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict

from pa_regression.observability.metrics import MetricRecorder
from pa_regression.observability.timer import Timer


@dataclass
class Instrumentation:
    """
    Instrumentation（Leaf-only accounting + Parent scope）

    规则：
    1. timeline 只记录叶子节点（record=True）
    2. record=False 的 timer 仅定义 wall-time，不产生副作用
    3. 不在逐样本热路径上使用
    """

    enabled: bool = True

    def __post_init__(self):
        self._timer = Timer(enabled=self.enabled)
        self.metrics = MetricRecorder(enabled=self.enabled)
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            inst._timer.start(name)
            try:
                yield
            finally:
                elapsed = inst._timer.end(name)
                if record:
                    inst.timeline[name] = inst.timeline.get(name, 0.0) + elapsed

        return _ctx()

    def summary(self) -> str:
        """timeline 单行摘要（冷路径）"""
        if not self.timeline:
            return "timeline=<empty>"
        parts = [f"{k}={v:.4f}s" for k, v in self.timeline.items()]
        return "timeline: " + ", ".join(parts)


class NoOpInstrumentation:
    """Instrumentation disabled 时使用。"""

    def __init__(self):
        self.metrics = MetricRecorder(enabled=False)
        self.timeline: Dict[str, float] = {}

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()

    def summary(self) -> str:
        return "timeline=<disabled>"


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
