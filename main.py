"""check_bigip_bandwidth - Icinga/Nagios check for BIG-IP bandwidth overutilization

Reads the last '01010045:5: Bandwidth utilization' line of /var/log/ltm over
SSH and alerts only when that event is both over threshold and recent.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import click
import typer

from analyzers import BandwidthAnalyzer, ConfigError, ProbeError, TransportFailure
from analyzers.bandwidth_analyzer import unknown_result
from collectors.bigip_ssh import BigIPCollector
from config.settings import Thresholds, load_settings
from scoring.status import Status
from utils.logger_config import setup_logger
from utils.plugin_output import format_plugin_output

logger = logging.getLogger(__name__)

# typer may ship its own copy of click, so catch the classes it actually raises
USAGE_ERRORS = tuple({
    click.ClickException,
    *(cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "ClickException"),
})
ABORT_ERRORS = (click.Abort, typer.Abort)

app = typer.Typer(
    name="check-bigip-bandwidth",
    help="Check BIG-IP bandwidth overutilization from /var/log/ltm",
    add_completion=False,
)


def run_check(settings, collector, now):
    """
    Fetch the last log line and classify it

    Returns:
        ClassificationResult
    """
    fetch = collector.fetch_log_line()
    if fetch["error"]:
        logger.debug(f"Fetch failed (reachable={fetch['reachable']}): {fetch['error']}")
        raise TransportFailure(fetch["error"])

    return BandwidthAnalyzer.analyze(fetch["output"], settings.thresholds, now)


def _fallback_thresholds(warning, critical):
    """Thresholds to render perfdata with when settings could not be loaded"""
    defaults = Thresholds()
    return Thresholds(
        warning=defaults.warning if warning is None else warning,
        critical=defaults.critical if critical is None else critical,
    )


@app.command()
def check(
    host: Annotated[Optional[str], typer.Option("--host", "-H", help="BIG-IP address")] = None,
    user: Annotated[Optional[str], typer.Option(
        "--user", "-u", help="SSH user (default: admin or $BIGIP_USER)")] = None,
    password: Annotated[Optional[str], typer.Option(
        "--password", "-p", help="SSH password (default: $BIGIP_PASS)")] = None,
    key: Annotated[Optional[str], typer.Option(
        "--key", "-k", help="SSH private key path (default: $BIGIP_SSH_KEY)")] = None,
    warning: Annotated[Optional[int], typer.Option(
        "--warning", "-w", help="WARNING threshold in % (default: 75)")] = None,
    critical: Annotated[Optional[int], typer.Option(
        "--critical", "-c", help="CRITICAL threshold in % (default: 80)")] = None,
    age_no_alert: Annotated[Optional[int], typer.Option(
        "--age-no-alert", help="Ignore events older than this many minutes (default: 10)")] = None,
    age_alert: Annotated[Optional[int], typer.Option(
        "--age-alert", help="Alert on events newer than this many minutes (default: 5)")] = None,
    config: Annotated[Optional[Path], typer.Option(
        "--config", help="YAML settings file")] = None,
    connect_timeout: Annotated[Optional[int], typer.Option(
        "--connect-timeout", help="SSH connect timeout in seconds (default: 10)")] = None,
    timeout: Annotated[Optional[int], typer.Option(
        "--timeout", help="Remote command timeout in seconds (default: 30)")] = None,
    debug: Annotated[bool, typer.Option("--debug", "-d", help="Diagnostics on stderr")] = False,
):
    """
    Examples:

      check-bigip-bandwidth -H 192.168.3.4

      check-bigip-bandwidth -H 192.168.3.4 -w 70 -c 85

      check-bigip-bandwidth -H 192.168.3.4 -k /path/to/key --age-no-alert 15 --age-alert 3
    """
    setup_logger(level=logging.DEBUG if debug else logging.WARNING)

    try:
        settings = load_settings(
            config_file=config,
            host=host,
            user=user,
            password=password,
            ssh_key=key,
            warning=warning,
            critical=critical,
            age_alert=age_alert,
            age_no_alert=age_no_alert,
            connect_timeout=connect_timeout,
            session_timeout=timeout,
        )
    except ConfigError as e:
        _finish(unknown_result(e), _fallback_thresholds(warning, critical))
        return

    thresholds = settings.thresholds

    try:
        if not settings.host:
            raise ConfigError("The --host option is mandatory")
        thresholds.validate()

        collector = BigIPCollector(
            settings.host,
            settings.user,
            password=settings.password,
            key_path=settings.ssh_key,
            connect_timeout=settings.connect_timeout,
            session_timeout=settings.session_timeout,
            keepalive_interval=settings.keepalive_interval,
        )

        result = run_check(settings, collector, datetime.now())
    except ProbeError as e:
        result = unknown_result(e)

    _finish(result, thresholds)


def _finish(result, thresholds):
    typer.echo(format_plugin_output(result, thresholds))
    raise typer.Exit(code=result.status.exit_code)


def run():
    """Console entry point: usage errors are reported as UNKNOWN too"""
    try:
        code = app(standalone_mode=False)
    except USAGE_ERRORS as e:
        typer.echo(format_plugin_output(unknown_result(e.format_message()), Thresholds()))
        code = Status.UNKNOWN.exit_code
    except ABORT_ERRORS:
        code = Status.UNKNOWN.exit_code
    sys.exit(code or 0)


if __name__ == "__main__":
    run()
