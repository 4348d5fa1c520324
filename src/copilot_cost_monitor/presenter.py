from typing import Protocol

import structlog

from copilot_cost_monitor.views import (
    ConfigMissing,
    Failed,
    Loading,
    Presented,
    View,
    format_cost,
)

logger = structlog.get_logger()


class Presenter(Protocol):
    """
    Presenter is the host surface that renders views. Everything
    visual lives behind this protocol.
    """

    def present(self, view: "View") -> "None": ...

    def notify(self, message: "str", *, error: "bool" = False) -> "None": ...


class ConsolePresenter:
    """
    ConsolePresenter renders every view as a structured log line,
    standing in for a status bar when running from a terminal.
    """

    def __init__(self) -> "None":
        self.last_view: "View | None" = None

    def present(self, view: "View") -> "None":
        self.last_view = view

        if isinstance(view, Presented):
            logger.info(
                "copilot_cost",
                cost=format_cost(view.total),
                tier=view.tier.value,
            )
        elif isinstance(view, Failed):
            logger.error("copilot_cost_error", error=view.message)
        elif isinstance(view, ConfigMissing):
            logger.warning("copilot_config_missing", missing=view.missing, reason=view.reason)
        elif isinstance(view, Loading):
            logger.info("copilot_cost_loading")

    def notify(self, message: "str", *, error: "bool" = False) -> "None":
        if error:
            logger.error("notification", message=message)
        else:
            logger.info("notification", message=message)
