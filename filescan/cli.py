import click
import json
import logging
from typing import Optional

from .config import ConfigError, ConfigManager, setup_logging
from .security.errors import ScanError
from .security.orchestrator import ScanOrchestrator
from .security.registry import DefaultStrategyRegistry, KillSwitchStrategy, LazyStrategy
from .security.scanners.clamav import ClamScanStrategy
from .security.tool_manager import ToolManager

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_INFECTED = 1
EXIT_ERROR = 2


@click.group()
@click.option('--config', '-c', default='config.yaml', help='Configuration file path')
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Override the configured log level')
@click.pass_context
def cli(ctx, config, log_level):
    """filescan CLI"""
    ctx.ensure_object(dict)
    try:
        app_config = ConfigManager(config).get_config()
    except (ConfigError, OSError) as e:
        raise click.ClickException(str(e))

    setup_logging(log_level or app_config.log_level, app_config.log_file)
    ctx.obj['config'] = app_config


def _build_registry(app_config, timeout: Optional[float], disable: bool) -> DefaultStrategyRegistry:
    settings = app_config.scanner
    if timeout is not None:
        settings = settings.model_copy(update={'timeout': timeout})

    tool_manager = ToolManager(tools_dir=settings.tools_dir, tools=app_config.tools)
    # clamscan is only looked up when a file actually reaches it
    baseline = LazyStrategy(
        lambda: ClamScanStrategy.from_config(settings, tool_manager),
        name=settings.tool_name,
    )
    registry = DefaultStrategyRegistry(factory=lambda: baseline)

    enabled = settings.enabled and not disable
    if not enabled:
        registry.install_override(lambda previous: KillSwitchStrategy(previous, lambda: enabled))
    return registry


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=None,
              help='Per-file timeout in seconds')
@click.option('--disable', is_flag=True, help='Report every file clean without scanning')
@click.option('--json', 'as_json', is_flag=True, help='Emit one JSON object per file')
@click.pass_context
def scan(ctx, paths, timeout, disable, as_json):
    """Scan one or more files.

    Exit status is 0 when every file is clean, 1 when any file is infected
    and 2 when any scan failed.
    """
    app_config = ctx.obj['config']
    registry = _build_registry(app_config, timeout, disable)

    exit_code = EXIT_CLEAN
    for path in paths:
        try:
            orchestrator = ScanOrchestrator(path, registry=registry)
            verdict = orchestrator.verdict()
        except (ScanError, ValueError) as e:
            exit_code = EXIT_ERROR
            logger.error(f"Scan of {path} failed: {e}")
            if as_json:
                click.echo(json.dumps({'path': path, 'status': 'error', 'error': str(e)}))
            else:
                click.echo(f"{path}: ERROR {e}")
            continue

        if verdict.infected:
            exit_code = max(exit_code, EXIT_INFECTED)

        if as_json:
            click.echo(json.dumps({
                'path': path,
                'status': verdict.verdict.value,
                'signature': verdict.signature,
                'tool': verdict.tool_name,
            }))
        elif verdict.infected:
            click.echo(f"{path}: {verdict.signature or 'UNKNOWN'} FOUND")
        else:
            click.echo(f"{path}: OK")

    ctx.exit(exit_code)


@cli.command()
@click.pass_context
def tools(ctx):
    """Show scanner tool availability"""
    app_config = ctx.obj['config']
    tool_manager = ToolManager(tools_dir=app_config.scanner.tools_dir, tools=app_config.tools)

    for name in dict.fromkeys([app_config.scanner.tool_name, *app_config.tools]):
        info = tool_manager.locate(name)
        if info.installed:
            state = "installed" if tool_manager.verify(info) else "HASH MISMATCH"
            click.echo(f"{info.display_name:<20} {state:<14} {info.path}")
        else:
            click.echo(f"{info.display_name:<20} {'missing':<14}")

