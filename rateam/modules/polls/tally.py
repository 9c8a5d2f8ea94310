"""Vote counting for polls. Pure functions over already-fetched vote rows."""
import logging
from typing import Iterable, List, Optional, Sequence

from rateam.modules.polls.schemas import OptionTally

logger = logging.getLogger(__name__)


def _valid_index(index, option_count: int) -> bool:
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < option_count


def tally_poll(options: Sequence[str], votes: Iterable[dict], poll_id: Optional[str] = None) -> List[OptionTally]:
    """Count votes per option and compute each option's share of the total.

    Rows belonging to another poll (when poll_id is given) are skipped, as are
    rows whose option_index does not address an option. With no valid votes
    every percentage is 0.0.
    """
    counts = [0] * len(options)
    for vote in votes:
        if poll_id is not None and vote.get("poll_id") != poll_id:
            continue
        index = vote.get("option_index")
        if not _valid_index(index, len(options)):
            logger.warning(f"Ignoring vote with invalid option index {index!r} for poll {vote.get('poll_id')}")
            continue
        counts[index] += 1

    total = sum(counts)
    return [
        OptionTally(
            index=i,
            label=label,
            votes=counts[i],
            percentage=(counts[i] / total * 100) if total else 0.0,
        )
        for i, label in enumerate(options)
    ]


def find_user_vote(options: Sequence[str], votes: Iterable[dict], user_id: Optional[str],
                   poll_id: Optional[str] = None) -> Optional[int]:
    """Option index the user voted for, or None. Rows tally_poll would ignore count as no vote."""
    if not user_id:
        return None
    for vote in votes:
        if vote.get("user_id") != user_id:
            continue
        if poll_id is not None and vote.get("poll_id") != poll_id:
            continue
        index = vote.get("option_index")
        return index if _valid_index(index, len(options)) else None
    return None
