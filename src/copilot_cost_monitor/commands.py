import webbrowser
from typing import Callable

import structlog

from copilot_cost_monitor.config import CREATE_TOKEN_URL, Config, ConfigStore
from copilot_cost_monitor.credentials import SecretStore
from copilot_cost_monitor.orchestrator import RefreshOrchestrator, RefreshPhase
from copilot_cost_monitor.presenter import Presenter
from copilot_cost_monitor.scheduler import PollScheduler

logger = structlog.get_logger()


class Commands:
    """
    Commands is the inbound surface a host binds its actions to:
    manual refresh, token management and configuration changes.
    """

    def __init__(
        self,
        orchestrator: "RefreshOrchestrator",
        scheduler: "PollScheduler",
        secret_store: "SecretStore",
        presenter: "Presenter",
        config_store: "ConfigStore",
        opener: "Callable[[str], object]" = webbrowser.open,
    ) -> "None":
        self._orchestrator = orchestrator
        self._scheduler = scheduler
        self._secrets = secret_store
        self._presenter = presenter
        self._config_store = config_store
        self._opener = opener

    async def refresh(self) -> "RefreshPhase":
        return await self._orchestrator.refresh(trigger="manual", notify=True)

    async def set_credential(self, value: "str") -> "RefreshPhase | None":
        """
        stores a new token and refreshes. Empty input is treated as
        a cancelled prompt and ignored.
        """
        if not value:
            return None
        await self._secrets.store(value)
        self._presenter.notify("GitHub Token saved securely.")
        return await self._orchestrator.refresh(trigger="token_set", notify=True)

    async def clear_credential(self) -> "RefreshPhase":
        await self._secrets.delete()
        self._presenter.notify("GitHub Token cleared.")
        return await self._orchestrator.refresh(trigger="token_cleared", notify=True)

    def open_credential_creation_page(self) -> "None":
        logger.info("open_token_page", url=CREATE_TOKEN_URL)
        self._opener(CREATE_TOKEN_URL)

    async def reconfigure(self, config: "Config") -> "RefreshPhase":
        """
        applies a changed configuration: the timer is recreated with
        the new interval and a silent refresh runs right away.
        """
        self._config_store.update(config)
        self._scheduler.reconfigure(config.polling_interval)
        return await self._orchestrator.refresh(trigger="config_change")
