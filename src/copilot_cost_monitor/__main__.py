import asyncio
import signal
import sys

import structlog
from prometheus_client import start_http_server

from copilot_cost_monitor.cli import parse_args
from copilot_cost_monitor.commands import Commands
from copilot_cost_monitor.config import ConfigStore
from copilot_cost_monitor.credentials import MemorySecretStore
from copilot_cost_monitor.logging import setup_logging
from copilot_cost_monitor.metrics import MetricsUpdater
from copilot_cost_monitor.orchestrator import RefreshOrchestrator
from copilot_cost_monitor.presenter import ConsolePresenter
from copilot_cost_monitor.provider.github import GitHubBillingFetcher
from copilot_cost_monitor.scheduler import PollScheduler

logger = structlog.get_logger()


def _parse_listen_address(addr: "str") -> "tuple[str, int]":
    """
    parses listen address in format ':9186' or '0.0.0.0:9186'.
    """
    if addr.startswith(":"):
        return ("0.0.0.0", int(addr[1:]))

    host, port = addr.rsplit(":", 1)
    return (host, int(port))


def main(argv: "list[str] | None" = None) -> "None":
    config = parse_args(argv)
    setup_logging(config.log_level, config.log_format)

    config_store = ConfigStore(config)
    secret_store = MemorySecretStore(config.github_token)
    presenter = ConsolePresenter()
    fetcher = GitHubBillingFetcher()

    metrics = None
    if config.listen_address:
        metrics = MetricsUpdater()
        host, port = _parse_listen_address(config.listen_address)
        start_http_server(port, addr=host)
        logger.info("metrics_server_started", host=host, port=port)

    orchestrator = RefreshOrchestrator(
        fetcher,
        secret_store,
        presenter,
        config_store.get,
        metrics=metrics,
    )

    async def _run() -> "None":
        # a terminal has no notion of focus, always poll
        scheduler = PollScheduler(
            refresh=lambda trigger: orchestrator.refresh(trigger=trigger),
            has_focus=lambda: True,
            last_update=orchestrator.last_update,
            interval_seconds=config.polling_interval,
        )
        commands = Commands(
            orchestrator, scheduler, secret_store, presenter, config_store
        )

        stop = asyncio.Event()
        pending: "set[asyncio.Task[object]]" = set()

        def _manual_refresh() -> "None":
            task = asyncio.ensure_future(commands.refresh())
            pending.add(task)
            task.add_done_callback(pending.discard)

        def _reload_config() -> "None":
            # SIGHUP re-reads environment and flags
            task = asyncio.ensure_future(commands.reconfigure(parse_args(argv)))
            pending.add(task)
            task.add_done_callback(pending.discard)

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop.set)
        if sys.platform != "win32":
            loop.add_signal_handler(signal.SIGUSR1, _manual_refresh)
            loop.add_signal_handler(signal.SIGHUP, _reload_config)

        await orchestrator.refresh(trigger="startup")
        scheduler.start()
        try:
            await stop.wait()
        finally:
            logger.info("shutting_down")
            scheduler.stop()
            await fetcher.close()
            logger.info("shutdown_complete")

    asyncio.run(_run())


if __name__ == "__main__":
    main()
