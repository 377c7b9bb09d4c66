"""Main FastAPI application - health monitor with inspection API."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .config import (
    Settings,
    settings as default_settings,
    get_cron_schedule,
    get_endpoints,
    get_log_file_path,
    get_status_file_path,
)
from .routers import health_router
from .schemas.status import MonitorStatusResponse
from .services.alerter import AlerterService
from .services.prober import ProberService
from .services.scheduler import SchedulerService, build_trigger
from .services.status_store import StatusStore
from .services.sweep import SweepCoordinator
from .services.transition_log import TransitionLog

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_components(app: FastAPI, config: Settings):
    """Create the store, log, coordinator and scheduler on app.state."""
    endpoints = get_endpoints(config)
    if not endpoints:
        logger.warning("No TARGET_URLS configured - sweeps will check nothing")

    store = StatusStore(get_status_file_path(config))
    store.load()

    transition_log = TransitionLog(get_log_file_path(config))

    coordinator = SweepCoordinator(
        endpoints=endpoints,
        store=store,
        transition_log=transition_log,
        prober=ProberService(timeout=config.probe_timeout_seconds),
        notifier=AlerterService(config),
        timeout=config.probe_timeout_seconds,
    )

    schedule = get_cron_schedule(config)
    try:
        trigger = build_trigger(schedule, config.check_interval_seconds)
    except ValueError as e:
        fallback = get_cron_schedule(config.model_copy(update={"cron_schedule": None}))
        logger.error(f"Invalid cron schedule '{schedule}' ({e}), using '{fallback}'")
        trigger = build_trigger(fallback)

    app.state.config = config
    app.state.store = store
    app.state.transition_log = transition_log
    app.state.coordinator = coordinator
    app.state.scheduler = SchedulerService(coordinator, trigger)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    config = app.state.config
    logger.info(f"Application starting in '{config.environment}' mode")

    build_components(app, config)

    # Runs the startup sweep right away, then follows the schedule
    app.state.scheduler.start()
    logger.info(
        f"Monitoring {len(app.state.coordinator.endpoints)} endpoint(s), "
        f"timeout={config.probe_timeout_seconds}s"
    )

    yield

    app.state.scheduler.stop()
    logger.info("Shutdown complete")


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="HealthWatch",
        description="Uptime monitor - periodic HTTP probes with down alerts",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config or default_settings

    app.include_router(health_router)

    @app.get("/status", response_model=MonitorStatusResponse)
    async def monitor_status():
        """Liveness of the monitor itself, not of the endpoints."""
        coordinator = getattr(app.state, "coordinator", None)
        scheduler = getattr(app.state, "scheduler", None)
        return MonitorStatusResponse(
            status="healthy",
            environment=app.state.config.environment,
            endpoints=len(coordinator.endpoints) if coordinator else 0,
            sweeps_completed=coordinator.sweep_count if coordinator else 0,
            sweep_running=coordinator.running if coordinator else False,
            scheduler_running=scheduler.running if scheduler else False,
        )

    return app


# Create the application instance
app = create_app()


def run():
    """Console entry point."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=default_settings.web_port)


if __name__ == "__main__":
    run()
