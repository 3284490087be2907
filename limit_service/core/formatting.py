"""
Message template rendering for limit errors.
"""

import re
from typing import Any, Mapping

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def format_number(value: Any) -> str:
    """
    Render a value for a message, grouping thousands in numbers.

    Grouping always uses "," regardless of the process locale.

    Args:
        value: Value to render

    Returns:
        String form of the value
    """
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return f"{value:,}"
    return str(value)


def format_template(template: str, variables: Mapping[str, Any]) -> str:
    """
    Replace {{key}} placeholders in a template.

    Placeholders with no matching variable are left as they are.

    Args:
        template: Message template, e.g. "Your plan supports up to {{max}} staff users."
        variables: Placeholder values

    Returns:
        Rendered message
    """

    def replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        return format_number(variables[key])

    return _PLACEHOLDER.sub(replace, template)
