"""
LearnHub Platform - API Dependencies
FastAPI dependencies for the trusted actor identity and service wiring
"""
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from learnhub.core.database import get_db
from learnhub.core.exceptions import PermissionDeniedError
from learnhub.services.progress import ProgressService


class ActorRole(str, Enum):
    """Roles supplied by the upstream identity gateway."""
    STUDENT = "student"
    TEACHER = "teacher"


@dataclass(frozen=True)
class Actor:
    """Already-authenticated caller. Identity is trusted as given."""
    id: uuid.UUID
    role: ActorRole

    def resolve_student(self, student_id: uuid.UUID | None) -> uuid.UUID:
        """
        Whose data the actor is asking for.

        Students may only read their own records; teachers may read anyone's.

        Raises:
            PermissionDeniedError: A student asked for another student
        """
        if student_id is None or student_id == self.id:
            return self.id
        if self.role != ActorRole.TEACHER:
            raise PermissionDeniedError("Access denied")
        return student_id


async def get_current_actor(
    x_actor_id: Annotated[str | None, Header()] = None,
    x_actor_role: Annotated[str | None, Header()] = None,
) -> Actor:
    """
    Read the actor from the identity headers set by the gateway.

    Raises:
        HTTPException: If the headers are missing or malformed
    """
    if not x_actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing actor identity",
        )
    try:
        actor_id = uuid.UUID(x_actor_id)
        role = ActorRole(x_actor_role or ActorRole.STUDENT.value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Malformed actor identity",
        )
    return Actor(id=actor_id, role=role)


async def get_progress_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProgressService:
    return ProgressService(db)


# Type aliases for common dependencies
CurrentActor = Annotated[Actor, Depends(get_current_actor)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
ProgressServiceDep = Annotated[ProgressService, Depends(get_progress_service)]
