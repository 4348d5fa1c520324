import os
from dataclasses import dataclass

DEFAULT_POLLING_INTERVAL = 300
# floor for the polling interval, in seconds
MIN_POLLING_INTERVAL = 5
DEFAULT_WARNING_THRESHOLD = 10.0
DEFAULT_ERROR_THRESHOLD = 20.0

CREATE_TOKEN_URL = (
    "https://github.com/settings/personal-access-tokens/new"
    "?name=Copilot%20Cost%20Monitor"
    "&description=Plan%20read%20permissions%20for%20Copilot%20Cost%20Monitor"
    "&plan=read"
)


def clamp_interval(seconds: "float") -> "float":
    return max(seconds, MIN_POLLING_INTERVAL)


@dataclass
class Config:
    # GitHub login whose billing usage is monitored
    username: "str" = ""
    # polling interval in seconds, see clamped_interval
    polling_interval: "float" = DEFAULT_POLLING_INTERVAL
    warning_threshold: "float" = DEFAULT_WARNING_THRESHOLD
    error_threshold: "float" = DEFAULT_ERROR_THRESHOLD
    log_level: "str" = "info"
    log_format: "str" = "console"
    # listen_address: format ":9186" or
    # "0.0.0.0:9186", empty disables the metrics server
    listen_address: "str" = ":9186"

    # only used to seed the secret store at startup
    github_token: "str" = ""

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            username=os.environ.get("GITHUB_USERNAME", ""),
            github_token=os.environ.get("GITHUB_TOKEN", ""),
        )

    @property
    def clamped_interval(self) -> "float":
        return clamp_interval(self.polling_interval)


class ConfigStore:
    """
    ConfigStore hands out the current configuration. Readers call
    get() on every use so an update applies on their next run.
    """

    def __init__(self, config: "Config") -> "None":
        self._config = config

    def get(self) -> "Config":
        return self._config

    def update(self, config: "Config") -> "None":
        self._config = config
