"""Environment configuration, credentials and optional YAML overrides.

The target environment comes from ``ENV_VARS`` (default production). Base URLs
can be overridden in ``fashionhub.yaml`` (or the file named by
``FASHIONHUB_CONFIG``) with OmegaConf interpolation such as
``${oc.env:STAGING_URL}``. Login credentials are read from the environment, which
``.env`` populates, only when a step needs them.
"""

import copy
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import InterpolationResolutionError

logger = logging.getLogger(__name__)

DEFAULT_GITHUB_PULLS_URL = "https://github.com/appwrite/appwrite/pulls"


class Environment(Enum):
    """Deployments of the FashionHub application under test."""

    LOCAL = "local"
    STAGING = "staging"
    PRODUCTION = "production"


VALID_ENVIRONMENTS = [env.value for env in Environment]


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str


@dataclass(frozen=True)
class EnvironmentConfig:
    """Resolved settings for one environment.

    Attributes
    ----------
    environment : str
        Environment key (local, staging, production)
    name : str
        Human-readable environment name
    base_url : str
        Base URL of the shop, always ending with "/"
    github_pulls_url : str
        Pull request listing used by the GitHub scenarios
    """

    environment: str
    name: str
    base_url: str
    github_pulls_url: str = DEFAULT_GITHUB_PULLS_URL

    def url_for(self, path: str = "") -> str:
        """Join a page path onto the base URL."""
        return f"{self.base_url}{path.lstrip('/')}"


def load_dotenv_file(env_file: str | Path = ".env") -> bool:
    """Load variables from a .env file without overriding the environment.

    Parameters
    ----------
    env_file : str | Path
        Path of the .env file

    Returns
    -------
    bool
        True if the file existed and was loaded
    """
    env_path = Path(env_file)
    if not env_path.exists():
        logger.debug("No %s file found; credentials must come from the environment", env_path)
        return False

    return load_dotenv(dotenv_path=env_path, override=False)


class ConfigLoader:
    """Load environment configuration with optional YAML overrides."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in environment defaults."""
        self.BUILT_IN_DEFAULTS: dict[str, Any] = {
            "github_pulls_url": DEFAULT_GITHUB_PULLS_URL,
            "environments": {
                Environment.LOCAL.value: {
                    "name": "Local Development",
                    "base_url": "http://localhost:4000/fashionhub/",
                },
                Environment.STAGING.value: {
                    "name": "Staging Environment",
                    "base_url": "https://staging-env/fashionhub/",
                },
                Environment.PRODUCTION.value: {
                    "name": "Production",
                    "base_url": "https://pocketaces2.github.io/fashionhub/",
                },
            },
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration overrides from YAML.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks FASHIONHUB_CONFIG env var,
            then falls back to fashionhub.yaml

        Returns
        -------
        dict[str, Any]
            Built-in defaults merged with the file's settings, interpolations
            such as ``${oc.env:STAGING_URL}`` resolved

        Raises
        ------
        ValueError
            If the file is not valid YAML or a variable cannot be resolved
        """
        if config_path is None:
            config_path = os.environ.get("FASHIONHUB_CONFIG", "fashionhub.yaml")

        config_file = Path(config_path)
        defaults = OmegaConf.create(copy.deepcopy(self.BUILT_IN_DEFAULTS))

        if not config_file.exists():
            return OmegaConf.to_container(defaults, resolve=True)

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return OmegaConf.to_container(defaults, resolve=True)

        try:
            merged = OmegaConf.merge(defaults, cfg)
            config = OmegaConf.to_container(merged, resolve=True, throw_on_missing=True)
        except InterpolationResolutionError as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        self.validate_config(config)
        return config

    def validate_config(self, config: dict[str, Any]) -> None:
        """Validate environment entries.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Raises
        ------
        ValueError
            If an environment is unknown or lacks a base_url string
        """
        environments = config.get("environments", {})
        if not isinstance(environments, dict):
            raise ValueError("environments must be a mapping")

        for env, settings in environments.items():
            if env not in VALID_ENVIRONMENTS:
                raise ValueError(
                    f"Unknown environment '{env}'. Valid options: {', '.join(VALID_ENVIRONMENTS)}"
                )
            base_url = settings.get("base_url") if isinstance(settings, dict) else None
            if not isinstance(base_url, str) or not base_url:
                raise ValueError(f"environments.{env}.base_url must be a non-empty string")

        if not isinstance(config.get("github_pulls_url"), str):
            raise ValueError("github_pulls_url must be a string")


def is_valid_environment(env: str | None) -> bool:
    return env in VALID_ENVIRONMENTS


def current_environment(environ: Mapping[str, str] | None = None) -> str:
    """Read the selected environment from ENV_VARS, defaulting to production."""
    if environ is None:
        environ = os.environ
    return (environ.get("ENV_VARS") or Environment.PRODUCTION.value).strip().lower()


def get_config(
    env: str | None = None,
    loader: ConfigLoader | None = None,
    config_path: str | None = None,
) -> EnvironmentConfig:
    """Resolve the configuration of an environment.

    Parameters
    ----------
    env : str | None
        Environment key; None reads ENV_VARS
    loader : ConfigLoader | None
        Loader to use, a fresh one by default
    config_path : str | None
        YAML override file passed to the loader

    Returns
    -------
    EnvironmentConfig
        Resolved environment settings

    Raises
    ------
    ValueError
        If the environment is not one of local, staging, production
    """
    if env is None:
        env = current_environment()

    if not is_valid_environment(env):
        raise ValueError(
            f"Invalid environment: {env}. Valid options: {', '.join(VALID_ENVIRONMENTS)}"
        )

    config = (loader or ConfigLoader()).load_config(config_path)
    settings = config["environments"][env]

    base_url = settings["base_url"]
    if not base_url.endswith("/"):
        base_url += "/"

    logger.info("Running tests on %s environment: %s", settings.get("name", env), env.upper())

    return EnvironmentConfig(
        environment=env,
        name=settings.get("name", env),
        base_url=base_url,
        github_pulls_url=config["github_pulls_url"],
    )


def get_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Read login credentials from LOGIN_USERNAME and LOGIN_PASSWORD.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Environment to read, defaults to os.environ

    Returns
    -------
    Credentials
        Username and password

    Raises
    ------
    ValueError
        If either variable is missing or empty
    """
    if environ is None:
        environ = os.environ

    username = environ.get("LOGIN_USERNAME")
    password = environ.get("LOGIN_PASSWORD")

    for var_name, value in (("LOGIN_USERNAME", username), ("LOGIN_PASSWORD", password)):
        if not value:
            logger.error("%s is not set. Add it to your .env file or CI secrets", var_name)
            raise ValueError(f"Missing {var_name} environment variable")

    logger.debug("Credentials loaded (username: %s***)", username[:2])
    return Credentials(username=username, password=password)
