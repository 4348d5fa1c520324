from dataclasses import dataclass

from copilot_cost_monitor.models import CacheState, FetchOutcome


@dataclass(frozen=True, slots=True)
class Reconciled:
    state: "CacheState"
    total: "float"


class RetryNeeded:
    """
    RetryNeeded signals a "not modified" answer while nothing is
    cached. The caller should drop the validator and fetch again
    without it.
    """

    def __repr__(self) -> "str":
        return "RetryNeeded()"


RETRY_NEEDED = RetryNeeded()


def reconcile(
    state: "CacheState",
    outcome: "FetchOutcome",
) -> "Reconciled | RetryNeeded":
    """
    folds a fetch outcome into the cache state. Never touches the
    network and never mutates the given state.
    """
    if outcome.total is not None:
        new_state = CacheState(total=outcome.total, validator=outcome.validator)
        return Reconciled(state=new_state, total=outcome.total)

    if state.total is not None:
        # validator was just confirmed current, keep everything
        return Reconciled(state=state, total=state.total)

    return RETRY_NEEDED
