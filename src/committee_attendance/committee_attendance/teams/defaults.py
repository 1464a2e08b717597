"""Pre-defined teams created by the seed operation.

Wrap-up teams recur by weekday; ``day_of_week`` uses 0=Sunday .. 6=Saturday.
"""

DEFAULT_REGULAR_TEAM_NAMES = (
    "Tafheem",
    "Pre-collection",
    "Thaal return 1st floor",
    "Thaal return 2nd floor",
    "To-go packing and mumineen distribution",
    "Safra marado",
    "Safra bairao",
    "Saturday madrasah jaman",
    "Friday namaz distribution",
    "Sadaqa meals",
)

WRAP_UP_TEAMS = (
    (0, "Sunday Wrap-up"),
    (1, "Monday Wrap-up"),
    (2, "Tuesday Wrap-up"),
    (3, "Wednesday Wrap-up"),
    (4, "Thursday Wrap-up"),
    (5, "Friday Wrap-up"),
    (6, "Saturday Wrap-up"),
)
