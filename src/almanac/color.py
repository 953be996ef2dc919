# SPDX-License-Identifier: MIT

# Source colors for calendar event chips
NOTE_COLOR = "#0ea5e9"
EXPENSE_COLOR = "#ef4444"
INCOME_COLOR = "#10b981"

# Terminal styles used by the calendar views
NOW_LINE_STYLE = "bold white on red"
TODAY_STYLE = "bold black on bright_cyan"
OUTSIDE_MONTH_STYLE = "bright_black"
SEPARATOR_STYLE = "dim"
DETAIL_STYLE = "dim"
RECURRING_BADGE_STYLE = "black on yellow"
PAID_BADGE_STYLE = "black on green"


def resolve_expense_color(category: str, category_colors: dict[str, str]) -> str:
    """Return the configured color for an expense category, or the expense default."""
    color = category_colors.get(category)
    if not color:
        return EXPENSE_COLOR
    return color
