import os
from typing import Any

from hypothesis import HealthCheck, settings

# Deeper property runs on CI: HYPOTHESIS_PROFILE=ci pytest
settings.register_profile(
    "ci", max_examples=500, suppress_health_check=[HealthCheck.too_slow]
)
settings.register_profile("dev", max_examples=100)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

# Subprocess coverage: the collector teardown can fail inside CI containers
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage
    import coverage.collector

    coverage.process_startup()

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop
