"""IRC message tokenizer.

Grammar handled here::

    [':' prefix ' '] command [' ' middle]* [' :' trailing]
"""

from __future__ import annotations

from .models import IRCCommand


def parse_irc_message(raw_line: str) -> IRCCommand:
    """Split one CRLF-stripped line into prefix, command and parameters.

    Never raises; malformed input yields a best-effort command (possibly with
    an empty command token).
    """
    prefix: str | None = None
    rest = raw_line

    if rest.startswith(":"):
        remainder = rest[1:]
        if " " in remainder:
            prefix, rest = remainder.split(" ", 1)
        else:  # only a prefix on the line
            prefix = remainder
            rest = ""

    if " " in rest:
        command, rest = rest.split(" ", 1)
    else:
        command, rest = rest, ""

    trailing: str | None = None
    if rest.startswith(":"):
        middle, trailing = "", rest[1:]
    elif " :" in rest:
        middle, trailing = rest.split(" :", 1)
    else:
        middle = rest

    # Only the space character separates parameters; other whitespace and
    # formatting codes belong to the token.
    params = [p for p in middle.split(" ") if p]
    has_trailing = bool(trailing)
    if has_trailing:
        params.append(trailing)  # type: ignore[arg-type]

    return IRCCommand(
        command=command,
        params=params,
        prefix=prefix,
        raw=raw_line,
        has_trailing=has_trailing,
    )


def serialize_irc_message(message: IRCCommand) -> str:
    """Render a command back into a single protocol line (no CRLF)."""
    parts: list[str] = []
    if message.prefix:
        parts.append(f":{message.prefix}")
    parts.append(message.command)
    params = list(message.params)
    if params:
        last = params.pop()
        parts.extend(params)
        if message.has_trailing or not last or " " in last or last.startswith(":"):
            last = f":{last}"
        parts.append(last)
    return " ".join(parts)
