"""
Formatting Helpers
Number formatting shared by rating messages and reports.
"""


def format_number(value: float) -> str:
    """
    Human formatting of a quantity: thousands separators, no trailing ".0".

    Example:
        format_number(12500.0)  # "12,500"
        format_number(137.5)    # "137.5"
    """
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{round(value, 2):,}"
