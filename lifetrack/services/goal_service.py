"""
Goals: high-level vision goals and measurable KPIs.
"""
from datetime import datetime
from typing import List

from lifetrack.constants import KEY_GOALS
from lifetrack.defaults import default_goals
from lifetrack.exceptions import GoalNotFoundException
from lifetrack.repositories.collection_repository import CollectionRepository
from lifetrack.schemas import Goal
from lifetrack.storage import DocumentStore


class GoalService:
    """Service for goals"""

    def __init__(self, store: DocumentStore, seed_defaults: bool = True):
        self.repo = CollectionRepository(store, KEY_GOALS, Goal)
        self.goals: List[Goal] = self.repo.load_all(default_goals if seed_defaults else None)

    @property
    def active_goals(self) -> List[Goal]:
        return [goal for goal in self.goals if goal.is_active]

    @property
    def high_level_goals(self) -> List[Goal]:
        return [goal for goal in self.active_goals if goal.is_high_level]

    @property
    def kpis(self) -> List[Goal]:
        return [goal for goal in self.active_goals if not goal.is_high_level]

    def get_goal(self, goal_id: str) -> Goal:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        raise GoalNotFoundException(goal_id)

    def add_goal(self, goal: Goal) -> Goal:
        with self.repo.lock:
            self.goals.append(goal)
            self.repo.save_all(self.goals)
        return goal

    def update_progress(self, goal_id: str, current_value: float) -> Goal:
        goal = self.get_goal(goal_id)
        updated = goal.model_copy(update={
            "current_value": current_value,
            "updated_at": datetime.now(),
        })
        with self.repo.lock:
            self.goals = [updated if g.id == goal_id else g for g in self.goals]
            self.repo.save_all(self.goals)
        return updated
