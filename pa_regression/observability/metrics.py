# pa_regression/observability/metrics.py
from dataclasses import dataclass, field
from typing import Any, Dict

from pa_regression import logs


@dataclass
class MetricRecorder:
    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        self.metrics[name] = value
        logs.info(f"[Metric] {name} = {value}")

    def record_many(self, values: Dict[str, Any]):
        for name, value in values.items():
            self.record(name, value)
