import sys
from pathlib import Path

import click
import yaml
from beartype.typing import Optional

from modlog.constants import DEFAULT_CONFIG_FILES, FAULT_MAPPING, TOOL_USAGE
from modlog.exceptions import ConfigurationError
from modlog.logging.config import LoggingConfig
from modlog.logging.module_logger import create_logger
from modlog.service_locator import ServiceRegistry

CONTEXT_SETTINGS = dict(auto_envvar_prefix="MODLOG_CLI")


class Environment:
    def __init__(self):
        self.home = Path.cwd()
        self.config: Optional[Path] = None
        self.registry = ServiceRegistry()
        self.silent = False

    def log(self, msg: str, new_line=True):
        """Logs a message to stdout only if silent mode is disabled."""
        if not self.silent:
            click.echo(msg, file=sys.stdout, nl=new_line)

    @staticmethod
    def elog(msg: str, new_line=True):
        """Logs a message to stderr."""
        click.echo(msg, file=sys.stderr, nl=new_line)

    def resolve_config_file(self, config: Optional[str]):
        """Use the given config file, or modlog.yml / modlog.yaml from the working directory if present."""
        if config:
            if not Path(config).is_file():
                self.elog(FAULT_MAPPING["config_file_missing"].format(file_path=config))
                exit(1)
            self.config = Path(config)
            return

        for name in DEFAULT_CONFIG_FILES:
            if (self.home / name).is_file():
                self.config = self.home / name
                return
        self.config = None


pass_environment = click.make_pass_decorator(Environment, ensure=True)


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option(
    "-c",
    "--config",
    type=click.Path(),
    metavar="",
    help="Optional path to a YAML file with a `logging` section.",
)
@click.option("-s", "--silent", is_flag=True, default=False, help="Silence stdout")
@click.pass_context
@pass_environment
def cli(environment: Environment, context: click.Context, config: Optional[str], silent: bool):
    """modlog CLI"""
    if context.invoked_subcommand is None:
        click.echo(TOOL_USAGE)
        exit(0)

    environment.silent = silent
    environment.resolve_config_file(config)


@cli.command("check-config")
@pass_environment
def check_config(environment: Environment):
    """Print the effective logging configuration"""
    config = LoggingConfig.load(str(environment.config) if environment.config else None)
    environment.log(yaml.safe_dump({"logging": config}, sort_keys=True).rstrip())

    is_valid, error_message = LoggingConfig.validate(config)
    if not is_valid:
        environment.elog(FAULT_MAPPING["invalid_config"].format(error_message=error_message))
        exit(1)


@cli.command()
@click.option("-m", "--module", "module_name", default="modlog.cli", show_default=True, metavar="", help="Module name.")
@click.option(
    "-l",
    "--level",
    type=click.Choice(["debug", "warn", "error"], case_sensitive=False),
    default="debug",
    show_default=True,
    help="Severity of the line.",
)
@click.option("--app-name", metavar="", help="Override the configured app name.")
@click.argument("message", nargs=-1, required=True)
@pass_environment
def emit(environment: Environment, module_name: str, level: str, app_name: Optional[str], message):
    """Send one line through a module logger"""
    overrides = {"app_name": app_name} if app_name else {}
    try:
        service = LoggingConfig.setup_logging(
            environment.registry, str(environment.config) if environment.config else None, **overrides
        )
    except ConfigurationError as e:
        environment.elog(FAULT_MAPPING["invalid_config"].format(error_message=e))
        exit(1)

    logger = create_logger(module_name, environment.registry)
    try:
        getattr(logger, level.lower())(*message)
    except OSError as e:
        environment.elog(FAULT_MAPPING["emit_failed"].format(error_message=e))
        exit(1)
    finally:
        close = getattr(service.log_method, "close", None)
        if close is not None:
            close()

    if not logger.is_enabled or not service.options.accepts(module_name):
        environment.elog(f"Module '{module_name}' is filtered out by the configuration")
