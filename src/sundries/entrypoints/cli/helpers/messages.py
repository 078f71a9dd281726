"""Terminal message helpers for the sundries CLI.

Messages go to stderr so stdout stays reserved for command output (paths,
captured process output). The emoji marker falls back to ASCII on terminals
that cannot encode it.
"""

import click

ERROR_MARKER = "❌"
ERROR_FALLBACK = "[X]"


def _supports_character(character: str) -> bool:
    """Return True if `character` can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def error_glyph() -> str:
    """Return the error marker, or its ASCII fallback if stderr cannot encode it."""
    return ERROR_MARKER if _supports_character(ERROR_MARKER) else ERROR_FALLBACK


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr**.

    Example:
        ``❌  Command failed: false (exit status 1)``
    """
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)
