"""CLI entrypoint for pretty-compare."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import click

from pretty_compare.config.store import SettingsStore, load_settings
from pretty_compare.paths import settings_path
from pretty_compare.render import format_changeset
from pretty_compare.styles import styler_for
from pretty_compare.version import __version__


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
def main() -> None:
    """pretty-compare: colored diffs of value representations."""


@main.command()
@click.argument("left_path")
@click.argument("right_path")
@click.option(
    "--color",
    type=click.Choice(["auto", "always", "never"]),
    default=None,
    help="Override the configured color mode",
)
@click.option(
    "--granularity",
    type=click.Choice(["word", "char"]),
    default=None,
    help="Intra-line highlighting unit",
)
@click.option("--left-label", default=None)
@click.option("--right-label", default=None)
def diff(
    left_path: str,
    right_path: str,
    color: str | None,
    granularity: str | None,
    left_label: str | None,
    right_label: str | None,
) -> None:
    """Compare two text files line by line; exit status 1 when they differ."""
    left = _read_text(left_path)
    right = _read_text(right_path)

    settings = load_settings()
    output = settings.output.model_copy(
        update={
            key: value
            for key, value in {
                "color": color,
                "left_label": left_label,
                "right_label": right_label,
            }.items()
            if value is not None
        }
    )
    diff_settings = settings.diff
    if granularity is not None:
        diff_settings = diff_settings.model_copy(update={"granularity": granularity})
    settings = settings.model_copy(update={"output": output, "diff": diff_settings})

    if left == right:
        click.echo("no differences")
        return

    styler = styler_for(settings.styles, mode=settings.output.color, stream=sys.stdout)
    buffer = io.StringIO()
    format_changeset(left, right, buffer, settings=settings, styler=styler)
    click.echo(buffer.getvalue(), color=styler.enabled)
    click.get_current_context().exit(1)


@main.command("settings-path")
def settings_path_command() -> None:
    """Print settings file path."""
    click.echo(str(settings_path()))


@main.command("settings-show")
def settings_show() -> None:
    """Print the effective settings, one dotted key per line."""
    settings = load_settings(SettingsStore())
    for key, value in settings.setting_items():
        click.echo(f"{key}={value}")


@main.command("settings-set")
@click.argument("key")
@click.argument("value")
def settings_set(key: str, value: str) -> None:
    """Update one setting; VALUE is parsed as JSON when possible."""
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    try:
        SettingsStore().update(key, parsed)
    except KeyError as exc:
        raise click.ClickException(str(exc.args[0])) from exc
    except ValueError as exc:
        raise click.ClickException(f"Invalid value for {key}: {exc}") from exc
    click.echo(f"{key}={parsed}")


@main.command()
def about() -> None:
    """Show version and project summary."""
    payload = {
        "name": "pretty-compare",
        "version": __version__,
        "description": "Colored line and word diffs for failed comparisons",
    }
    click.echo(json.dumps(payload, indent=2))


def _read_text(path: str) -> str:
    file_path = Path(path).expanduser().resolve()
    if not file_path.exists():
        raise click.ClickException(f"File not found: {file_path}")
    return file_path.read_text(encoding="utf-8", errors="replace")


if __name__ == "__main__":
    main()
