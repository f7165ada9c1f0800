"""Status colors shared by the DOT output and the snapshot backends."""

from ..models.issue import Status

STATUS_COLORS: dict[Status, str] = {
    Status.OPEN: "#C8E6C9",         # light green
    Status.IN_PROGRESS: "#BBDEFB",  # light blue
    Status.BLOCKED: "#FFCDD2",      # light red
    Status.CLOSED: "#CFD8DC",       # light gray
    Status.TOMBSTONE: "#CFD8DC",
}

LEGEND_ROWS: list[tuple[Status, str]] = [
    (Status.OPEN, "Open / Ready"),
    (Status.IN_PROGRESS, "In Progress"),
    (Status.BLOCKED, "Blocked"),
    (Status.CLOSED, "Closed"),
]


def status_color(status: Status) -> str:
    return STATUS_COLORS.get(status, "#FFFFFF")
