"""
Domain service: user behavior ledger and collaborative-similarity heuristic.

This is a heuristic, not a trained model. Two users count as similar when
the Jaccard overlap of their stated conservation goals exceeds a fixed
threshold; a tree's likelihood for a user is the share of similar users who
liked it.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Protocol, Set
import logging

from app.domain.models import (
    BehaviorAction,
    BehaviorEvent,
    LedgerInsights,
    TreeSurvival,
)

logger = logging.getLogger(__name__)

NEUTRAL_LIKELIHOOD = 0.5
SIMILARITY_THRESHOLD = 0.6
DEFAULT_SURVIVAL_RATE = 0.7
TOP_TREES_LIMIT = 5


class BehaviorStore(Protocol):
    """Persistence for behavior events and stated goals, partitioned per user."""

    def append(self, event: BehaviorEvent) -> None: ...

    def events_for(self, user_id: str) -> List[BehaviorEvent]: ...

    def user_ids(self) -> Iterable[str]: ...

    def set_goals(self, user_id: str, goals: Set[str]) -> None: ...

    def goals_for(self, user_id: str) -> Set[str]: ...


def jaccard(first: Set[str], second: Set[str]) -> float:
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


class BehaviorLedger:
    """Append-only record of likes, dislikes and planting outcomes."""

    def __init__(self, store: BehaviorStore):
        self.store = store

    def record(self, event: BehaviorEvent) -> None:
        """Append an event to the user's log."""
        self.store.append(event)
        logger.info(f"Recorded {event.action.value} for user={event.user_id} tree={event.tree_id}")

    def set_goals(self, user_id: str, goals: Iterable[str]) -> None:
        self.store.set_goals(user_id, set(goals))

    def similar_user_likelihood(self, user_id: str, tree_id: str) -> float:
        """
        Share of similar users who liked a tree.

        Args:
            user_id: User to compute the likelihood for
            tree_id: Tree in question

        Returns:
            Likelihood between 0 and 1; 0.5 when there is nothing to compare
        """
        goals = self.store.goals_for(user_id)
        if not goals:
            return NEUTRAL_LIKELIHOOD

        similar_users = 0
        liked = 0
        for other_id in self.store.user_ids():
            if other_id == user_id:
                continue
            if jaccard(goals, self.store.goals_for(other_id)) <= SIMILARITY_THRESHOLD:
                continue
            similar_users += 1
            if any(
                e.tree_id == tree_id and e.action == BehaviorAction.LIKED
                for e in self.store.events_for(other_id)
            ):
                liked += 1

        if similar_users == 0:
            return NEUTRAL_LIKELIHOOD
        return liked / similar_users

    def likelihoods(self, user_id: str, tree_ids: Iterable[str]) -> Dict[str, float]:
        return {tree_id: self.similar_user_likelihood(user_id, tree_id) for tree_id in tree_ids}

    def _outcomes(self) -> List[BehaviorEvent]:
        return [
            event
            for user_id in self.store.user_ids()
            for event in self.store.events_for(user_id)
            if event.action == BehaviorAction.PLANTED_OUTCOME and event.survived is not None
        ]

    def survival_rate(
        self,
        tree_id: str,
        region: Optional[str] = None,
        agro_zone: Optional[str] = None,
    ) -> float:
        """
        Share of recorded plantings of a tree that survived.

        Args:
            tree_id: Tree in question
            region: Only count plantings in this region
            agro_zone: Only count plantings in this agro-ecological zone

        Returns:
            Survival rate between 0 and 1; 0.7 when no outcomes are recorded
        """
        outcomes = [
            e for e in self._outcomes()
            if e.tree_id == tree_id
            and (region is None or e.region == region)
            and (agro_zone is None or e.agro_zone == agro_zone)
        ]
        if not outcomes:
            return DEFAULT_SURVIVAL_RATE
        return sum(1 for e in outcomes if e.survived) / len(outcomes)

    def insights(self) -> LedgerInsights:
        """Aggregate statistics across every user's log."""
        user_ids = list(self.store.user_ids())
        total_interactions = sum(len(self.store.events_for(u)) for u in user_ids)

        per_tree: Dict[str, List[bool]] = defaultdict(list)
        for event in self._outcomes():
            per_tree[event.tree_id].append(bool(event.survived))

        all_outcomes = [s for outcomes in per_tree.values() for s in outcomes]
        average = sum(all_outcomes) / len(all_outcomes) if all_outcomes else 0.0

        top = sorted(
            (
                TreeSurvival(tree_id=tree_id, survival_rate=sum(o) / len(o))
                for tree_id, o in per_tree.items()
            ),
            key=lambda t: t.survival_rate,
            reverse=True,
        )[:TOP_TREES_LIMIT]

        return LedgerInsights(
            total_users=len(user_ids),
            total_interactions=total_interactions,
            average_survival_rate=average,
            top_performing_trees=top,
        )
