"""Interactive prompts and option validation built on click."""

import click

from seeder.core.errors import ValidationError


def validate_count(value, option: str, minimum: int = 1, maximum: int | None = None) -> int:
    """Turn a count given on the command line into an int within bounds."""
    try:
        count = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"The {option} argument must be a number.")

    if count < minimum:
        raise ValidationError(f"The {option} argument must be greater than {minimum - 1}.")
    if maximum is not None and count > maximum:
        raise ValidationError(f"The {option} argument must be at most {maximum}.")
    return count


def _number(value: str, minimum: int = 0) -> int:
    try:
        number = int(str(value).strip())
    except ValueError:
        raise click.BadParameter("The value must be a number.")
    if number < minimum:
        if minimum == 0:
            raise click.BadParameter("The value must not be negative.")
        raise click.BadParameter(f"The value must be at least {minimum}.")
    return number


def ask_number(label: str, default: int | None = None, minimum: int = 0) -> int:
    """Prompt until the user enters a whole number of at least ``minimum``."""
    return click.prompt(label, default=default, value_proc=lambda value: _number(value, minimum))


def ask_select(label: str, options: dict[str, str], default: str | None = None) -> str:
    """Show ``options`` as ``key: label`` lines and prompt for one of the keys."""
    for key, text in options.items():
        click.echo(f"  {key}: {text}")
    return click.prompt(
        label, type=click.Choice(list(options)), default=default, show_choices=False
    )


def confirm(label: str, default: bool = False) -> bool:
    return click.confirm(label, default=default)


def success(message: str) -> None:
    click.secho(f"Success: {message}", fg="green")


def warning(message: str) -> None:
    click.secho(f"Warning: {message}", fg="yellow", err=True)
