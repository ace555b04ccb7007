"""CLI entry point — command definitions using Click.

Commands:
    init    Generate a template config file
    parse   Convert a checkstyle output file (or stdin) into JSON issues
    job     Fetch a GitLab CI job log and convert the checkstyle output in it
"""

import json
import logging
import sys
from typing import Any

import click

from checkstyle_report import __version__


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _load_config(ctx: click.Context):
    """Load config from --config. Exits on error."""
    from checkstyle_report.config import ConfigError, load

    try:
        return load(ctx.obj["config_path"])
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)


def _emit_json(data: Any, ctx: click.Context) -> None:
    """Write JSON to stdout or to the file specified by --output."""
    obj = ctx.obj
    indent = 2 if obj["pretty"] else None
    text = json.dumps(data, indent=indent, ensure_ascii=False)

    output_path: str | None = obj["output_path"]
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Report written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _convert(ctx: click.Context, config, output: str, base_path: str,
             report_id: int, commit_sha: str) -> None:
    """Run the dispatcher over *output* and emit the JSON report."""
    from checkstyle_report.dispatcher import get_issues
    from checkstyle_report.reports.issues import build_report

    result = get_issues(
        output,
        commit_sha,
        base_path,
        report_id,
        context_lines=config.context_lines,
        max_workers=config.workers,
        strict=ctx.obj["strict"],
    )

    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Parsed {len(result.issues)} issues, "
                   f"{len(result.errors)} malformed lines", err=True)

    _emit_json(build_report(result, report_id, commit_sha, base_path), ctx)


def _handle_errors(func):
    """Decorator that catches client and parse exceptions and exits cleanly."""
    import functools

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from checkstyle_report.client import (
            AuthenticationError,
            GitLabClientError,
            NetworkError,
            NotFoundError,
        )
        from checkstyle_report.config import ConfigError
        from checkstyle_report.parser import ParseError

        try:
            return func(*args, **kwargs)
        except ConfigError as exc:
            click.echo(f"Configuration error: {exc}", err=True)
            sys.exit(1)
        except ParseError as exc:
            click.echo(f"Report error: {exc}", err=True)
            sys.exit(1)
        except AuthenticationError as exc:
            click.echo(f"Authentication error: {exc}", err=True)
            sys.exit(1)
        except NotFoundError as exc:
            click.echo(f"Not found: {exc}", err=True)
            sys.exit(1)
        except NetworkError as exc:
            click.echo(f"Network error: {exc}", err=True)
            sys.exit(1)
        except GitLabClientError as exc:
            click.echo(f"GitLab error: {exc}", err=True)
            sys.exit(1)

    return wrapper


_base_path_option = click.option(
    "--base-path", required=True,
    help="Prefix to strip from file paths, e.g. the CI checkout directory.")
_report_id_option = click.option(
    "--report-id", type=int, required=True,
    help="Identifier stamped on every issue.")
_commit_option = click.option(
    "--commit", "commit_sha", default="",
    help="Commit SHA the report was produced for.")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default="checkstyle-config.yaml", show_default=True,
              help="Path to the configuration file.")
@click.option("--output", "output_path", default=None,
              help="Write JSON output to a file instead of stdout.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output.")
@click.option("--strict", is_flag=True, default=False,
              help="Fail on the first malformed line instead of listing it under 'errors'.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="checkstyle-report")
@click.pass_context
def cli(ctx: click.Context, config_path: str, output_path: str | None,
        pretty: bool, strict: bool, verbose: bool) -> None:
    """Checkstyle report tool — turn checkstyle output into JSON issues."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["output_path"] = output_path
    ctx.obj["pretty"] = pretty
    ctx.obj["strict"] = strict
    ctx.obj["verbose"] = verbose


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="checkstyle-config.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template checkstyle-config.yaml file."""
    from checkstyle_report.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your snippet settings and GitLab server details.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------

@cli.command("parse")
@click.argument("report", type=click.File("r", encoding="utf-8"))
@_base_path_option
@_report_id_option
@_commit_option
@click.pass_context
@_handle_errors
def parse_command(ctx: click.Context, report, base_path: str, report_id: int,
                  commit_sha: str) -> None:
    """Convert checkstyle output from REPORT (a file, or - for stdin)."""
    config = _load_config(ctx)

    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Reading checkstyle output from {report.name}", err=True)

    _convert(ctx, config, report.read(), base_path, report_id, commit_sha)


# ---------------------------------------------------------------------------
# job
# ---------------------------------------------------------------------------

@cli.command("job")
@click.argument("project")
@click.argument("job_id")
@_base_path_option
@_report_id_option
@_commit_option
@click.pass_context
@_handle_errors
def job_command(ctx: click.Context, project: str, job_id: str, base_path: str,
                report_id: int, commit_sha: str) -> None:
    """Convert the checkstyle output found in GitLab CI job JOB_ID of PROJECT."""
    from checkstyle_report.client import GitLabClient

    config = _load_config(ctx)
    config.require_gitlab()

    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Fetching log of job {job_id} in {project} "
                   f"from {config.gitlab_url}", err=True)

    client = GitLabClient(url=config.gitlab_url, token=config.gitlab_token)
    output = client.get_job_log(project, job_id)
    _convert(ctx, config, output, base_path, report_id, commit_sha)
