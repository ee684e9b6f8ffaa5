"""Public schema exports."""

from .award import AwardCreate, AwardRead
from .backup import BackupPayload, MirrorReport, RestoreSummary
from .badge import BadgeCreate, BadgeRead, BadgeToggle
from .bingo import MatchRequest, MatchResponse, MatchResult, PatternFlags, PatternRequest, QuestionRead
from .leaderboard import RankedGroup, RankedStudent
from .roster import BingoAnswers, GroupAssignment, GroupCreate, GroupRead, StudentCreate, StudentRead

__all__ = [
	"AwardCreate",
	"AwardRead",
	"BackupPayload",
	"BadgeCreate",
	"BadgeRead",
	"BadgeToggle",
	"BingoAnswers",
	"GroupAssignment",
	"GroupCreate",
	"GroupRead",
	"MatchRequest",
	"MatchResponse",
	"MatchResult",
	"MirrorReport",
	"PatternFlags",
	"PatternRequest",
	"QuestionRead",
	"RankedGroup",
	"RankedStudent",
	"RestoreSummary",
	"StudentCreate",
	"StudentRead",
]
