from .group import Group, GroupMember
from .submission import Submission, FAILED_SCORE
from .day_summary import DaySummary, SummaryStatus
from .reaction import Reaction, EMOJI_CHOICES

__all__ = [
    "Group",
    "GroupMember",
    "Submission",
    "FAILED_SCORE",
    "DaySummary",
    "SummaryStatus",
    "Reaction",
    "EMOJI_CHOICES",
]
