"""
CLI entry point for republisher.

Provides command-line interface for checking and preparing a republish.
"""

import logging
from pathlib import Path

import click
from rich.logging import RichHandler

from .config import DEFAULT_CONFIG_FILE, PublisherConfig, create_default_config
from .errors import ConfigError
from .pipeline import Republisher, console


def configure_logging(verbose: bool) -> None:
    """Route diagnostic logging through rich on the shared console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_config(config_path: Path) -> PublisherConfig:
    try:
        return PublisherConfig.from_yaml(config_path)
    except ConfigError as e:
        console.print(f"[red]{e.message}[/red]")
        console.print("Run 'republisher init' to create a configuration file.")
        raise SystemExit(1)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    help="Path to the republisher configuration file",
)


@click.group()
@click.version_option(package_name="republisher")
@click.option("--verbose", "-v", is_flag=True, help="Show diagnostic logging")
def cli(verbose: bool):
    """Republisher - Mirror upstream releases onto a registry under a new name."""
    configure_logging(verbose)


@cli.command()
@click.option(
    "--upstream-repo-url",
    "-u",
    required=True,
    help="Git remote URL of the upstream library",
)
@click.option(
    "--package-name",
    "-n",
    required=True,
    help="Package name to publish under",
)
@click.option(
    "--repository-url",
    "-r",
    required=True,
    help="Repository URL to write into the manifest",
)
@click.option(
    "--work-dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory to clone the upstream repository into",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_FILE,
    help="Output config file path",
)
def init(
    upstream_repo_url: str,
    package_name: str,
    repository_url: str,
    work_dir: Path | None,
    output: Path,
):
    """Initialize a new configuration file."""
    config = create_default_config(
        upstream_repo_url=upstream_repo_url,
        package_name=package_name,
        repository_url=repository_url,
        work_dir=work_dir,
    )

    config.to_yaml(output)
    console.print(f"[green]Created configuration file: {output}[/green]")
    console.print(f"  Upstream: {upstream_repo_url}")
    console.print(f"  Package: {package_name}")
    console.print(f"  Registry document: {config.package_url}")
    console.print(f"  Clone path: {config.work_dir}")


@cli.command()
@config_option
def run(config_path: Path):
    """Prepare the upstream tree for publishing if a new release exists."""
    config = load_config(config_path)
    result = Republisher(config).run()
    if result.success:
        console.print(f"\n[green]Ready to publish {config.package_name} from {result.work_path}[/green]")
    raise SystemExit(result.exit_code)


@cli.command()
@config_option
def check(config_path: Path):
    """Check whether a new upstream release needs publishing."""
    config = load_config(config_path)
    result = Republisher(config).check()
    raise SystemExit(result.exit_code)


if __name__ == "__main__":
    cli()
