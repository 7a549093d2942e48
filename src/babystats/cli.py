"""CLI for the babystats activity analytics toolkit."""

from __future__ import annotations

from datetime import datetime

import click


PERIOD_CHOICES = ["2", "7", "14", "30"]


def _load(
    file: str,
    unit: str | None,
    now_text: str | None,
    tz_name: str | None,
    settings_path: str | None,
    verbose: bool,
):
    """Shared setup: resolve settings, timezone, "now" and the activity cache."""
    from dateutil import parser as date_parser
    from dateutil import tz

    from babystats.settings import display_unit_from, load_settings
    from babystats.timeline import TimelineError, load_timeline, select_recent

    try:
        settings = load_settings(settings_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    zone_name = tz_name or settings.timezone
    zone = tz.gettz(zone_name) if zone_name else tz.tzlocal()
    if zone is None:
        raise click.BadParameter(f"Unknown timezone {zone_name!r}", param_hint="--tz")

    if now_text:
        try:
            now = date_parser.isoparse(now_text)
        except ValueError:
            raise click.BadParameter(f"Not an ISO-8601 timestamp: {now_text}", param_hint="--now")
        now = now.replace(tzinfo=zone) if now.tzinfo is None else now.astimezone(zone)
    else:
        now = datetime.now(tz=zone)

    try:
        records = load_timeline(file, zone, verbose=verbose)
    except TimelineError as e:
        raise click.ClickException(str(e))

    # The fetch layer only ever provides the last 30 days
    records = select_recent(records, now)
    display_unit = display_unit_from(unit) if unit else settings.display_unit
    if verbose:
        click.echo(f"{len(records)} activities in the last 30 days for {now.date()}")
    return settings, records, now, display_unit


@click.group()
def main() -> None:
    """babystats: caregiving activity analytics."""


@main.command("stats")
@click.argument("file", type=click.Path(exists=True))
@click.option("--baby", "-b", required=True, help="Baby ID to summarize.")
@click.option("--period", "-p", type=click.Choice(PERIOD_CHOICES), default=None,
              help="Lookback period in days (default from settings, else 7).")
@click.option("--unit", "-u", type=click.Choice(["OZ", "ML"], case_sensitive=False), default=None,
              help="Display unit for feed amounts.")
@click.option("--now", "now_text", default=None, help="Reference instant (ISO-8601). Default: now.")
@click.option("--tz", "tz_name", default=None, help="Timezone to bucket days in (IANA name).")
@click.option("--settings", "settings_path", type=click.Path(), default=None,
              help="Settings JSON file.")
@click.option("--output", "-o", default=None, help="Write summary JSON to file.")
@click.option("--verbose", "-v", is_flag=True, help="Report skipped timeline entries.")
def stats_cmd(
    file: str,
    baby: str,
    period: str | None,
    unit: str | None,
    now_text: str | None,
    tz_name: str | None,
    settings_path: str | None,
    output: str | None,
    verbose: bool,
) -> None:
    """Summarize one period of a timeline export as JSON."""
    from babystats.analytics.pipeline import compute_stats

    settings, records, now, display_unit = _load(
        file, unit, now_text, tz_name, settings_path, verbose
    )
    summary = compute_stats(
        records,
        baby,
        period or settings.main_period,
        now,
        display_unit,
    )
    click.echo(summary.to_json())

    if output:
        with open(output, "w") as f:
            f.write(summary.to_json())
        click.echo(f"\nSummary written to {output}")


@main.command("compare")
@click.argument("file", type=click.Path(exists=True))
@click.option("--baby", "-b", required=True, help="Baby ID to summarize.")
@click.option("--main", "main_period", type=click.Choice(PERIOD_CHOICES), default=None,
              help="Main period in days (default from settings, else 7).")
@click.option("--compare", "compare_period", type=click.Choice(PERIOD_CHOICES), default=None,
              help="Compare period in days (default from settings, else 14).")
@click.option("--unit", "-u", type=click.Choice(["OZ", "ML"], case_sensitive=False), default=None,
              help="Display unit for feed amounts.")
@click.option("--now", "now_text", default=None, help="Reference instant (ISO-8601). Default: now.")
@click.option("--tz", "tz_name", default=None, help="Timezone to bucket days in (IANA name).")
@click.option("--settings", "settings_path", type=click.Path(), default=None,
              help="Settings JSON file.")
@click.option("--verbose", "-v", is_flag=True, help="Report skipped timeline entries.")
def compare_cmd(
    file: str,
    baby: str,
    main_period: str | None,
    compare_period: str | None,
    unit: str | None,
    now_text: str | None,
    tz_name: str | None,
    settings_path: str | None,
    verbose: bool,
) -> None:
    """Compare two periods of a timeline export side by side."""
    from babystats.analytics.pipeline import compare_periods
    from babystats.report import build_cards, format_period_label, render_cards

    settings, records, now, display_unit = _load(
        file, unit, now_text, tz_name, settings_path, verbose
    )
    main_p = main_period or settings.main_period
    compare_p = compare_period or settings.compare_period

    if not any(r.subject_id == baby for r in records):
        click.echo("No activities found for the selected time period.")
        return

    main_stats, compare_stats, _ = compare_periods(
        records, baby, main_p, compare_p, now, display_unit
    )

    click.echo(f"\n{'=' * 60}")
    click.echo(f"  Quick Stats: {baby} (as of {now.date().isoformat()})")
    click.echo(f"{'=' * 60}")
    click.echo(render_cards(
        build_cards(main_stats, compare_stats),
        format_period_label(main_p),
        format_period_label(compare_p),
    ))
    click.echo(f"{'=' * 60}")


if __name__ == "__main__":
    main()
