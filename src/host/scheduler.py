"""Background tick driver for the session host."""

import structlog
from apscheduler.events import EVENT_JOB_ERROR
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = structlog.get_logger().bind(source="scheduler")

TICK_JOB_ID = "host_tick"


class TickScheduler:
    """Calls `host.tick()` every `tick_seconds` on a background thread."""

    def __init__(self, host, tick_seconds: float = 1.0):
        if tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {tick_seconds}")
        self.host = host
        self.tick_seconds = tick_seconds
        self.scheduler = BackgroundScheduler()

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def _on_job_error(self, event):
        logger.error(
            "job_error",
            job_id=event.job_id,
            exception=str(event.exception),
            traceback=event.traceback,
        )

    def start(self):
        """Start ticking."""
        self.scheduler.add_job(
            self.host.tick,
            trigger=IntervalTrigger(seconds=self.tick_seconds),
            id=TICK_JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.add_listener(self._on_job_error, EVENT_JOB_ERROR)
        self.scheduler.start()
        logger.info("tick.scheduled", tick_seconds=self.tick_seconds)

    def stop(self):
        """Stop ticking; waits for a running tick to finish."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=True)
            logger.info("tick.stopped")

    def __enter__(self) -> "TickScheduler":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
