from typing import Protocol

from copilot_cost_monitor.models import FetchOutcome


class UsageFetcher(Protocol):
    """
    UsageFetcher stands as the protocol the refresh orchestrator
    relies on to obtain the billing period total.

    One call performs exactly one conditional request. Retries are
    the caller's business.
    """

    @property
    def name(self) -> "str": ...

    async def fetch(
        self,
        identity: "str",
        credential: "str",
        validator: "str | None" = None,
    ) -> "FetchOutcome": ...

    async def close(self) -> "None": ...
