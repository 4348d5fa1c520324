import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

import structlog

from copilot_cost_monitor.cache import Reconciled, reconcile
from copilot_cost_monitor.clock import Clock, SystemClock
from copilot_cost_monitor.config import Config
from copilot_cost_monitor.credentials import SecretStore
from copilot_cost_monitor.errors import CacheAnomaly, ConfigurationError, MonitorError
from copilot_cost_monitor.metrics import MetricsUpdater
from copilot_cost_monitor.models import CacheState
from copilot_cost_monitor.presenter import Presenter
from copilot_cost_monitor.provider.base import UsageFetcher
from copilot_cost_monitor.severity import classify
from copilot_cost_monitor.views import (
    ConfigMissing,
    Failed,
    Loading,
    Presented,
    format_cost,
)

logger = structlog.get_logger()

# one unconditional re-fetch after a "not modified" on an empty cache
_MAX_FETCH_ATTEMPTS = 2

_MISSING_TOKEN_REASON = "GitHub Token is missing."
_MISSING_USERNAME_REASON = "Please configure your GitHub Username in settings."


class RefreshPhase(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    PRESENTING = "presenting"
    FAILED = "failed"
    CONFIG_MISSING = "config_missing"


@dataclass
class MonitorState:
    """
    MonitorState is everything that survives between refresh
    invocations. It is owned by the orchestrator and shared by
    reference with whoever needs to observe it.
    """

    cache: "CacheState" = field(default_factory=CacheState)
    # clock.monotonic() of the last successful reconciliation
    last_update: "float | None" = None
    phase: "RefreshPhase" = RefreshPhase.IDLE


class RefreshOrchestrator:
    """
    RefreshOrchestrator drives one refresh end to end: precondition
    checks, the conditional fetch, cache reconciliation, severity
    classification and the hand-off to the presenter. Failures are
    presented and never touch the cached total.
    """

    def __init__(
        self,
        fetcher: "UsageFetcher",
        secret_store: "SecretStore",
        presenter: "Presenter",
        config_provider: "Callable[[], Config]",
        metrics: "MetricsUpdater | None" = None,
        clock: "Clock | None" = None,
        state: "MonitorState | None" = None,
    ) -> "None":
        self._fetcher = fetcher
        self._secrets = secret_store
        self._presenter = presenter
        self._config_provider = config_provider
        self._metrics = metrics
        self._clock: "Clock" = clock or SystemClock()
        self._state: "MonitorState" = state or MonitorState()

    @property
    def state(self) -> "MonitorState":
        return self._state

    def last_update(self) -> "float | None":
        return self._state.last_update

    async def refresh(
        self,
        trigger: "str" = "manual",
        notify: "bool" = False,
    ) -> "RefreshPhase":
        """
        runs a single refresh and returns the phase it ended in.
        notify marks a user-initiated refresh, which shows a loading
        view first and reports the result as a notification.
        """
        log = logger.bind(trigger=trigger)
        config = self._config_provider()
        token = await self._secrets.get()

        self._state.phase = RefreshPhase.FETCHING

        if not token:
            return self._config_missing("credential", notify, log)
        if not config.username:
            return self._config_missing("identity", notify, log)

        if notify:
            self._presenter.present(Loading())

        log.debug("refresh_start", username=config.username)

        try:
            total = await self._fetch_total(config.username, token, log)
        except ConfigurationError as exc:
            return self._config_missing(exc.missing, notify, log)
        except MonitorError as exc:
            return self._failed(exc, notify, log)
        except Exception as exc:
            log.exception("refresh_unexpected_error")
            return self._failed(exc, notify, log)

        self._state.last_update = self._clock.monotonic()
        tier = classify(total, config.warning_threshold, config.error_threshold)

        self._state.phase = RefreshPhase.PRESENTING
        self._presenter.present(Presented(total=total, tier=tier))
        if self._metrics is not None:
            self._metrics.set_cost(total, time.time())

        log.info("refresh_done", total=total, tier=tier.value)
        if notify:
            self._presenter.notify(f"Copilot Cost Updated: {format_cost(total)}")
        return self._state.phase

    async def _fetch_total(
        self,
        identity: "str",
        credential: "str",
        log: "structlog.stdlib.BoundLogger",
    ) -> "float":
        validator = self._state.cache.validator

        for _ in range(_MAX_FETCH_ATTEMPTS):
            started = self._clock.monotonic()
            outcome = await self._fetcher.fetch(identity, credential, validator)
            if self._metrics is not None:
                self._metrics.record_fetch(outcome, self._clock.monotonic() - started)

            # reconcile against the current state, a concurrent refresh
            # may have updated it while this fetch was in flight
            result = reconcile(self._state.cache, outcome)
            if isinstance(result, Reconciled):
                if outcome.not_modified:
                    log.debug("cache_restored", total=result.total)
                self._state.cache = result.state
                return result.total

            log.warning("cache_anomaly_retry", validator=validator)
            validator = None
            self._state.cache = CacheState(total=self._state.cache.total)

        raise CacheAnomaly()

    def _config_missing(
        self,
        missing: "str",
        notify: "bool",
        log: "structlog.stdlib.BoundLogger",
    ) -> "RefreshPhase":
        reason = (
            _MISSING_TOKEN_REASON if missing == "credential" else _MISSING_USERNAME_REASON
        )
        log.info("config_missing", missing=missing)

        self._state.phase = RefreshPhase.CONFIG_MISSING
        self._presenter.present(ConfigMissing(reason=reason, missing=missing))
        if notify:
            self._presenter.notify(f"Copilot Cost Monitor: {reason}", error=True)
        return self._state.phase

    def _failed(
        self,
        exc: "Exception",
        notify: "bool",
        log: "structlog.stdlib.BoundLogger",
    ) -> "RefreshPhase":
        message = str(exc) or type(exc).__name__
        log.warning("refresh_failed", kind=type(exc).__name__, error=message)

        self._state.phase = RefreshPhase.FAILED
        self._presenter.present(Failed(message=message))
        if self._metrics is not None:
            self._metrics.inc_error(type(exc).__name__)
        if notify:
            self._presenter.notify(f"Copilot Cost Monitor Error: {message}", error=True)
        return self._state.phase
