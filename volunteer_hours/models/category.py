"""Fixed set of volunteer work categories."""
import enum


class Category(str, enum.Enum):
    """Work type shared by shifts and manual logs."""
    TUTORING = "tutoring"
    MENTORING = "mentoring"
    COMMUNITY_SERVICE = "community_service"
    OFFICE_WORK = "office_work"
    EVENT_SUPPORT = "event_support"
    OTHER = "other"


CATEGORY_LABELS = {
    Category.TUTORING: "Tutoring",
    Category.MENTORING: "Mentoring",
    Category.COMMUNITY_SERVICE: "Community service",
    Category.OFFICE_WORK: "Office work",
    Category.EVENT_SUPPORT: "Event support",
    Category.OTHER: "Other",
}


def category_label(category: str) -> str:
    """Display label for a category value; unknown values are returned as-is."""
    try:
        return CATEGORY_LABELS[Category(category)]
    except ValueError:
        return str(category)
