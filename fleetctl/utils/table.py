"""
Vertical table rendering.
Shows one record as a column of "LABEL: value" rows.
"""

from typing import Any, List, Mapping, Tuple, Union

from pydantic import BaseModel

BOLD = "\033[1m"
RESET = "\033[0m"


def _parse_field(field: str) -> Tuple[str, str, bool]:
    """
    Split a field spec into (key, label, emphasized).

    Field spec syntax:
        "device_type"            -> key device_type, label "DEVICE TYPE"
        "application_name => FLEET" -> key application_name, label "FLEET"
        "$device_name$"          -> emphasized header row showing the value
    """
    if len(field) > 1 and field.startswith("$") and field.endswith("$"):
        key = field[1:-1]
        return key, key, True

    key, sep, label = field.partition("=>")
    key = key.strip()
    label = label.strip() if sep else key
    return key, label.upper().replace("_", " "), False


def format_value(value: Any) -> str:
    """Render a single cell. None renders empty; booleans in lowercase."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def vertical(
    record: Union[BaseModel, Mapping[str, Any]],
    fields: List[str],
    color: bool = False
) -> str:
    """
    Render a record as a vertical table.

    Args:
        record: Pydantic model or mapping holding the values
        fields: Ordered field specs (see _parse_field)
        color: Use ANSI bold for emphasized rows

    Returns:
        The table text, without a trailing newline

    Examples:
        >>> print(vertical({"device_name": "pi", "id": 7}, ["$device_name$", "id"]))
        == pi
        ID: 7
    """
    data = record.model_dump() if isinstance(record, BaseModel) else dict(record)

    parsed = [_parse_field(field) for field in fields]
    width = max(
        (len(label) + 1 for _, label, emphasized in parsed if not emphasized),
        default=0
    )

    lines = []
    for key, label, emphasized in parsed:
        value = format_value(data.get(key))
        if emphasized:
            header = f"== {value}".rstrip()
            lines.append(f"{BOLD}{header}{RESET}" if color else header)
        else:
            lines.append(f"{label + ':':<{width}} {value}".rstrip())

    return "\n".join(lines)
