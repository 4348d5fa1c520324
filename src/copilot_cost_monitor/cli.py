import argparse

from copilot_cost_monitor.config import (
    DEFAULT_ERROR_THRESHOLD,
    DEFAULT_POLLING_INTERVAL,
    DEFAULT_WARNING_THRESHOLD,
    Config,
)


def parse_args(argv: "list[str] | None" = None) -> "Config":
    parser = argparse.ArgumentParser(
        prog="copilot-cost-monitor",
        description="Watches the GitHub Copilot cost of the current billing period",
    )
    parser.add_argument(
        "--github.username",
        dest="username",
        default=None,
        help="GitHub username to monitor (default: $GITHUB_USERNAME)",
    )
    parser.add_argument(
        "--polling.interval",
        dest="polling_interval",
        type=float,
        default=DEFAULT_POLLING_INTERVAL,
        help=f"Polling interval in seconds, minimum 5 (default: {DEFAULT_POLLING_INTERVAL})",
    )
    parser.add_argument(
        "--threshold.warning",
        dest="warning_threshold",
        type=float,
        default=DEFAULT_WARNING_THRESHOLD,
        help=f"Cost at which the warning tier starts (default: {DEFAULT_WARNING_THRESHOLD})",
    )
    parser.add_argument(
        "--threshold.error",
        dest="error_threshold",
        type=float,
        default=DEFAULT_ERROR_THRESHOLD,
        help=f"Cost at which the error tier starts (default: {DEFAULT_ERROR_THRESHOLD})",
    )
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        default=":9186",
        help="Address to expose metrics on, empty to disable (default: :9186)",
    )
    parser.add_argument(
        "--log.level",
        dest="log_level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)",
    )
    parser.add_argument(
        "--log.format",
        dest="log_format",
        default="console",
        choices=["console", "json"],
        help="Log output format (default: console)",
    )

    args = parser.parse_args(argv)
    config = Config.from_env()
    if args.username is not None:
        config.username = args.username
    config.polling_interval = args.polling_interval
    config.warning_threshold = args.warning_threshold
    config.error_threshold = args.error_threshold
    config.listen_address = args.listen_address
    config.log_level = args.log_level
    config.log_format = args.log_format
    return config
