from backend.engine.scheduler.scheduler import (
    PollingScheduler,
    PollingTimer,
    Scheduler,
    TimerHandle,
)

__all__ = ["PollingScheduler", "PollingTimer", "Scheduler", "TimerHandle"]
