"""
User-facing notices printed alongside command output.
"""

APP_TO_FLEET_OUTPUT_MSG = (
    'Note: output headings will change from "application" to "fleet" in a '
    'future release. Use the "--v13" option (or set FLEET_V13=1) to preview '
    "the new output."
)


def warnify(msg: str, prefix: str = "[Warn] ") -> str:
    """
    Prefix every line of a message for display on stderr.

    Examples:
        >>> warnify("careful")
        '[Warn] careful'
    """
    return "\n".join(f"{prefix}{line}" for line in msg.splitlines())
