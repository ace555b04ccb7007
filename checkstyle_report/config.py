"""Configuration loading and validation.

Usage:
    config = load("checkstyle-config.yaml")      # raises ConfigError on bad config
    config.context_lines                         # snippet window, default 3
    config.require_gitlab()                      # raises unless url + token set
    generate_template("checkstyle-config.yaml")  # writes example file to disk
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from checkstyle_report.dispatcher import MAX_WORKERS
from checkstyle_report.snippet import DEFAULT_CONTEXT_LINES

DEFAULT_CONFIG_PATH = "checkstyle-config.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    context_lines: int = DEFAULT_CONTEXT_LINES
    workers: int = MAX_WORKERS
    gitlab_url: str = ""
    gitlab_token: str = ""

    def require_gitlab(self) -> None:
        """Raise ConfigError unless the GitLab server is fully configured."""
        missing = []
        if not self.gitlab_url:
            missing.append("  - 'gitlab.url' is missing (or set the GITLAB_URL environment variable)")
        if not self.gitlab_token:
            missing.append("  - 'gitlab.token' is missing (or set the GITLAB_TOKEN environment variable)")
        if missing:
            raise ConfigError("GitLab access is not configured:\n" + "\n".join(missing))


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """Load and validate configuration from a YAML file.

    Environment variables GITLAB_URL, GITLAB_TOKEN and
    CHECKSTYLE_CONTEXT_LINES override file values.

    Raises:
        ConfigError: if the file is missing, malformed, or a value is invalid.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `python -m checkstyle_report init` to generate a template."
        )

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")

    snippet = raw.get("snippet") or {}
    gitlab = raw.get("gitlab") or {}

    context_lines = os.environ.get("CHECKSTYLE_CONTEXT_LINES") or snippet.get(
        "context_lines", DEFAULT_CONTEXT_LINES)
    workers = raw.get("workers", MAX_WORKERS)
    url   = os.environ.get("GITLAB_URL")   or gitlab.get("url",   "")
    token = os.environ.get("GITLAB_TOKEN") or gitlab.get("token", "")

    errors: list[str] = []
    context_lines = _as_int(context_lines, "snippet.context_lines", 0, errors)
    workers = _as_int(workers, "workers", 1, errors)
    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))

    return Config(
        context_lines=context_lines,
        workers=workers,
        gitlab_url=str(url).strip(),
        gitlab_token=str(token).strip(),
    )


def _as_int(value, name: str, minimum: int, errors: list[str]) -> int:
    """Coerce *value* to an int >= *minimum*, recording a message on failure."""
    # YAML booleans are ints in Python; reject them explicitly
    if isinstance(value, bool):
        errors.append(f"  - '{name}' must be an integer, got {value!r}")
        return minimum
    try:
        number = int(value)
    except (TypeError, ValueError):
        errors.append(f"  - '{name}' must be an integer, got {value!r}")
        return minimum
    if number < minimum:
        errors.append(f"  - '{name}' must be at least {minimum}, got {number}")
    return number


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
snippet:
  context_lines: 3                # Lines shown before the offending line

workers: 3                        # Report lines processed concurrently

gitlab:                           # Only needed by the `job` command
  url: "https://gitlab.example.com"
  token: "glpat-xxxxxxxxxxxx"     # Generate at: <your-gitlab-url>/-/user_settings/personal_access_tokens
"""


def generate_template(output_path: str = DEFAULT_CONFIG_PATH) -> None:
    """Write a template checkstyle-config.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists (to avoid overwriting secrets).
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
