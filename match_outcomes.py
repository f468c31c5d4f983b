"""
Win / lose / draw assignment for the players of one match.

The generator uses this to fill in results and the validator uses it to
recompute what the results should have been, so both sides agree on a
single rule:

1. Highest final score wins.
2. If several players share the top score, the one with the lowest total
   play time among them wins.
3. If they are also tied on time, those players draw; if that is every
   player in the match, everybody draws.
4. A match nobody scored in is a draw for everybody, whatever the times.

Everybody who is not a winner or a drawing top scorer loses.
"""

from typing import List, Optional, Sequence

from seed_records import FINISHED, Participation

WIN = "win"
LOSE = "lose"
DRAW = "draw"


def derive_results(entries: Sequence[Participation]) -> List[str]:
    """
    Return the result for each entry, in the same order as `entries`.

    Only final_score and total_time are looked at.
    """
    if not entries:
        return []

    max_score = max(e.final_score for e in entries)
    candidates = [i for i, e in enumerate(entries) if e.final_score == max_score]

    if max_score == 0 and len(candidates) == len(entries):
        return [DRAW] * len(entries)

    if len(candidates) > 1:
        # Tie-break on time: the faster player takes it
        min_time = min(entries[i].total_time for i in candidates)
        winners = {i for i in candidates if entries[i].total_time == min_time}
        top = WIN if len(winners) == 1 else DRAW
        return [top if i in winners else LOSE for i in range(len(entries))]

    (winner,) = candidates
    return [WIN if i == winner else LOSE for i in range(len(entries))]


def results_for_status(status: str, entries: Sequence[Participation]) -> List[Optional[str]]:
    """Results as they should be stored: derived for finished matches, NULL otherwise."""
    if status != FINISHED:
        return [None] * len(entries)
    return list(derive_results(entries))
