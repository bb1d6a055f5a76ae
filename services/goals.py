from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from beanie.odm.fields import PydanticObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession
from pymongo.errors import PyMongoError

from models import Goal, client as default_client
from models.base import utcnow
from schemas.goals import GoalCreateIn, GoalUpdateIn
from services.statistics.errors import StoreUnavailableError
from utils.logger import get_logger

logger = get_logger(__name__)

GOAL_FIELDS = tuple(GoalCreateIn.model_fields)


def _unavailable(user_id: PydanticObjectId, exc: PyMongoError) -> StoreUnavailableError:
    logger.warning("goals write failed for user %s: %s", user_id, exc)
    return StoreUnavailableError("Goals are unavailable")


class GoalManager:
    """
    Write side of goals. Owns the single-active-goal invariant: activating a
    goal deactivates the user's other goals inside the same transaction,
    readers never fix it up themselves.

    Transactions need a replica set (a single-node one is enough); on a
    standalone mongod activating a goal fails with 503.
    """

    def __init__(self, mongo_client: Optional[AsyncIOMotorClient] = None):
        self.client = mongo_client or default_client

    @staticmethod
    async def _deactivate_others(
        user_id: PydanticObjectId,
        session: AsyncIOMotorClientSession,
        at: datetime,
        keep: Optional[PydanticObjectId] = None,
    ) -> None:
        query = {"user_id": user_id, "is_active": True}
        if keep is not None:
            query["_id"] = {"$ne": keep}
        await Goal.find(query, session=session).update(
            {"$set": {"is_active": False, "updated_at": at}},
            session=session,
        )

    async def create_active_goal(self, user_id: PydanticObjectId, payload: GoalCreateIn) -> Goal:
        goal = Goal(user_id=user_id, is_active=True, **payload.model_dump())

        try:
            async with await self.client.start_session() as session:
                async with session.start_transaction():
                    await self._deactivate_others(user_id, session, goal.created_at)
                    await goal.insert(session=session)
        except PyMongoError as exc:
            raise _unavailable(user_id, exc) from exc

        logger.info("user %s activated goal %s", user_id, goal.id)
        return goal

    async def update_goal(
        self,
        user_id: PydanticObjectId,
        goal_id: PydanticObjectId,
        payload: GoalUpdateIn,
    ) -> Optional[Goal]:
        """
        Apply the fields sent in `payload` to the user's goal. Returns None when
        the goal does not exist or belongs to someone else. Raises pydantic's
        ValidationError when the merged goal breaks the create-time rules.
        """
        changes = payload.model_dump(exclude_unset=True)
        if changes.get("is_active") is None:
            changes.pop("is_active", None)

        try:
            goal = await Goal.find_one({"_id": goal_id, "user_id": user_id})
            if goal is None:
                return None

            GoalCreateIn.model_validate({**{f: getattr(goal, f) for f in GOAL_FIELDS}, **changes})
            changes["updated_at"] = utcnow()

            if changes.get("is_active"):
                async with await self.client.start_session() as session:
                    async with session.start_transaction():
                        await self._deactivate_others(user_id, session, changes["updated_at"], keep=goal.id)
                        await goal.set(changes, session=session)
            else:
                await goal.set(changes)
        except PyMongoError as exc:
            raise _unavailable(user_id, exc) from exc

        logger.info("user %s updated goal %s: %s", user_id, goal_id, sorted(changes))
        return goal

    async def get_active_goal(self, user_id: PydanticObjectId) -> Optional[Goal]:
        goals = await Goal.find({"user_id": user_id, "is_active": True}).sort("-created_at").limit(1).to_list()
        return goals[0] if goals else None

    async def list_goals(self, user_id: PydanticObjectId, skip: int = 0, limit: int = 20) -> List[Goal]:
        return await Goal.find({"user_id": user_id}).sort("-created_at").skip(skip).limit(limit).to_list()

    async def delete_goal(self, user_id: PydanticObjectId, goal_id: PydanticObjectId) -> bool:
        try:
            goal = await Goal.find_one({"_id": goal_id, "user_id": user_id})
            if goal is None:
                return False
            await goal.delete()
        except PyMongoError as exc:
            raise _unavailable(user_id, exc) from exc

        logger.info("user %s deleted goal %s", user_id, goal_id)
        return True
