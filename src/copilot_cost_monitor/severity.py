from copilot_cost_monitor.models import SeverityTier


def classify(
    total: "float",
    warning_threshold: "float",
    error_threshold: "float",
) -> "SeverityTier":
    """
    maps a total onto a severity tier. The error threshold is
    checked first so it wins even when warning > error.
    """
    if total >= error_threshold:
        return SeverityTier.ERROR
    if total >= warning_threshold:
        return SeverityTier.WARNING
    return SeverityTier.NORMAL
