import asyncio

import pytest
from prometheus_client import CollectorRegistry

from copilot_cost_monitor.config import Config, ConfigStore
from copilot_cost_monitor.credentials import MemorySecretStore
from copilot_cost_monitor.models import FetchOutcome


class FakeClock:
    def __init__(self, now: "float" = 1000.0) -> "None":
        self.now = now

    def monotonic(self) -> "float":
        return self.now

    def advance(self, seconds: "float") -> "None":
        self.now += seconds


class RecordingPresenter:
    def __init__(self) -> "None":
        self.views: "list[object]" = []
        self.notifications: "list[tuple[str, bool]]" = []

    @property
    def last(self) -> "object":
        return self.views[-1]

    def present(self, view: "object") -> "None":
        self.views.append(view)

    def notify(self, message: "str", *, error: "bool" = False) -> "None":
        self.notifications.append((message, error))


class ScriptedFetcher:
    """
    A fetcher that replays queued outcomes or exceptions and records
    every call it receives.
    """

    def __init__(self) -> "None":
        self.script: "list[FetchOutcome | Exception]" = []
        self.calls: "list[tuple[str, str, str | None]]" = []

    @property
    def name(self) -> "str":
        return "scripted"

    async def fetch(
        self,
        identity: "str",
        credential: "str",
        validator: "str | None" = None,
    ) -> "FetchOutcome":
        self.calls.append((identity, credential, validator))
        result = self.script.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self) -> "None":
        pass


class GatedFetcher:
    """
    A fetcher that replays queued outcomes, each optionally held
    back until its event is set, to overlap refreshes.
    """

    def __init__(self) -> "None":
        self.script: "list[tuple[FetchOutcome, asyncio.Event | None]]" = []
        self.calls: "list[tuple[str, str, str | None]]" = []

    @property
    def name(self) -> "str":
        return "gated"

    async def fetch(
        self,
        identity: "str",
        credential: "str",
        validator: "str | None" = None,
    ) -> "FetchOutcome":
        self.calls.append((identity, credential, validator))
        outcome, gate = self.script.pop(0)
        if gate is not None:
            await gate.wait()
        return outcome

    async def close(self) -> "None":
        pass


@pytest.fixture()
def registry() -> "CollectorRegistry":
    """
    fresh Prometheus registry to avoid cross-test state.
    """
    return CollectorRegistry()


@pytest.fixture()
def clock() -> "FakeClock":
    return FakeClock()


@pytest.fixture()
def presenter() -> "RecordingPresenter":
    return RecordingPresenter()


@pytest.fixture()
def fetcher() -> "ScriptedFetcher":
    return ScriptedFetcher()


@pytest.fixture()
def secret_store() -> "MemorySecretStore":
    return MemorySecretStore("ghp_test")


@pytest.fixture()
def config_store() -> "ConfigStore":
    return ConfigStore(
        Config(username="octocat", warning_threshold=10, error_threshold=20)
    )


@pytest.fixture()
def gated_fetcher() -> "GatedFetcher":
    return GatedFetcher()
