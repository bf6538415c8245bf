"""Type hints used in Ladder Pairing."""

from typing import Dict, List, Literal, Optional, Tuple

# Athlete identifiers are opaque strings handed out by the roster store
AthleteId = str
# A doubles side, always exactly two athletes
PairIds = Tuple[str, str]

# Which side won a match
Side = Literal["teamA", "teamB"]
Winner = Optional[Side]

MatchStatus = Literal["pending", "completed"]
GameDayStatus = Literal["upcoming", "in_progress", "completed"]
GameDayFormat = Literal["group", "teams", "pairs"]
MovementRule = Literal["auto", "1", "2"]

# Athlete ids of each group, group 1 first
GroupIds = List[List[AthleteId]]
# Global rank by athlete id
RankLookup = Dict[AthleteId, int]
