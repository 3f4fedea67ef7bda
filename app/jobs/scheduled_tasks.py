import threading
import time
from typing import Optional, TYPE_CHECKING

import schedule

from infrastructure.logging import get_module_logger
from infrastructure.services import get_dispatch_engine, get_settings
from modules.messaging import run_retention_sweep

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


def safe_run(job):
    def wrapper(*args, **kwargs):
        try:
            job(*args, **kwargs)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "safe_run_error",
                error=str(e),
                function=job.__name__,
                module=job.__module__,
                job_args=args,
                job_kwargs=kwargs,
            )

    return wrapper


def init(settings: Optional["Settings"] = None):
    settings = settings or get_settings()
    logger.info(
        "scheduled_tasks_initialized",
        sweep_time=settings.retention.SWEEP_TIME,
        sweep_timezone=settings.retention.SWEEP_TIMEZONE,
    )

    schedule.every(5).minutes.do(safe_run(scheduler_heartbeat))
    schedule.every(5).minutes.do(safe_run(integration_healthchecks))
    schedule.every().day.at(
        settings.retention.SWEEP_TIME, settings.retention.SWEEP_TIMEZONE
    ).do(safe_run(run_retention_sweep))


def scheduler_heartbeat():
    logger.info("running_scheduler_heartbeat", module="scheduled_tasks", time=time.ctime())


def integration_healthchecks():
    logger.info("running_integration_healthchecks")
    for key, healthy in get_dispatch_engine().health_check().items():
        if not healthy:
            logger.error("integration_unhealthy", integration=key)
        else:
            logger.info("integration_healthy", integration=key)


def run_continuously(interval=1):
    """Continuously run, while executing pending jobs at each
    elapsed time interval.
    @return cease_continuous_run: threading. Event which can
    be set to cease continuous run. Please note that it is
    *intended behavior that run_continuously() does not run
    missed jobs*. For example, if you've registered a job that
    should run every minute and you set a continuous run
    interval of one hour then your job won't be run 60 times
    at each interval but only once.
    """
    cease_continuous_run = threading.Event()

    class ScheduleThread(threading.Thread):
        @classmethod
        def run(cls):
            while not cease_continuous_run.is_set():
                schedule.run_pending()
                cease_continuous_run.wait(interval)

    continuous_thread = ScheduleThread(daemon=True, name="scheduled-tasks")
    continuous_thread.start()
    return cease_continuous_run
