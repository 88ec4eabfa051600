"""Errors raised while assembling the configuration of a release notes run."""


class ConfigurationError(Exception):
    """Base class for command line and environment configuration problems."""

    pass


class GitHubAuthenticationConfigurationError(ConfigurationError):
    """Raised when GitHub credentials are missing, incomplete or mix PAT and App settings."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when a setting the run cannot do without is given neither on the command line nor in the environment."""

    def __init__(self, name: str, cli_name: str, env_name: str) -> None:
        """Record the setting and where it can be supplied."""
        super().__init__(f"{name} is not set; pass {cli_name} or set the {env_name} environment variable")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name
