"""CLI entry point: which way is the Galactic Center from a given place and time?

    galacticcompass "Philadelphia, PA" --when "2025-06-30 23:00"
"""

import click
from dotenv import load_dotenv

load_dotenv()

from galacticcompass.compute import InvalidInputError  # noqa: E402
from galacticcompass.geocode import GeocodingError  # noqa: E402
from galacticcompass.guidance import describe_direction, format_target, run  # noqa: E402
from galacticcompass.i18n import t  # noqa: E402
from galacticcompass.log import configure_logging  # noqa: E402
from galacticcompass.models import QueryInput  # noqa: E402


@click.command()
@click.argument("address")
@click.option("--when", default=None, help='Local time at the place, "YYYY-MM-DD HH:MM" (default: now)')
@click.option("--lang", type=click.Choice(["en", "ko"]), default="en", help="Output language")
@click.option("--log-level", default="WARNING", help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
def cli(address, when, lang, log_level):
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level") from e

    try:
        data = run(QueryInput(address=address, when=when))
    except GeocodingError as e:
        raise click.ClickException(t("error_address", lang).format(error=e)) from e
    except InvalidInputError as e:
        raise click.ClickException(t("error_input", lang).format(error=e)) from e

    ctx = data.context
    pos = data.position
    click.echo(f"{t('label_place', lang)}: {ctx.address_display} ({ctx.lat:.4f}, {ctx.lng:.4f})")
    click.echo(f"{t('label_time', lang)}: {ctx.utc_dt:%Y-%m-%d %H:%M}")
    click.echo(f"{t('label_target', lang)}: {format_target(data.target)}")
    click.echo(f"{t('label_azimuth', lang)}: {pos.azimuth_deg:.1f}° ({pos.compass_label})")
    click.echo(f"{t('label_altitude', lang)}: {pos.altitude_deg:.1f}°")
    click.echo(describe_direction(pos, lang))
    if not pos.is_above_horizon:
        click.echo(t("below_horizon", lang))


if __name__ == "__main__":
    cli()
