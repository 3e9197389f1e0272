"""User profile service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from pydantic import ValidationError

from macro_lens.domain.profile import (
    BodyProfile,
    ProfileTargets,
    ProfileUpdate,
    UserProfile,
)
from macro_lens.services.calculator import calculate_profile_targets
from macro_lens.services.upstream import upstream_call

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user, if any."""

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        """Insert or replace a profile and return the stored row."""


@dataclass
class ProfileService:
    """Service for reading and updating body profiles."""

    repository: ProfileRepository

    def get_or_create(
        self, user_id: str, user_email: str | None, name: str | None = None
    ) -> UserProfile:
        """Return the user's profile, creating an empty one on first access."""
        with upstream_call("load profile"):
            existing = self.repository.get_profile(user_id)
            if existing:
                return existing
            return self.repository.upsert_profile(
                UserProfile(user_id=user_id, user_email=user_email, name=name)
            )

    def update(
        self, user_id: str, user_email: str | None, update: ProfileUpdate
    ) -> UserProfile:
        """Merge provided fields into the profile and refresh stored targets."""
        current = self.get_or_create(user_id, user_email)
        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        merged = UserProfile(
            user_id=user_id,
            user_email=user_email or current.user_email,
            name=changes.get("name", current.name),
            weight_kg=changes.get("weight_kg", current.weight_kg),
            height_cm=changes.get("height_cm", current.height_cm),
            age=changes.get("age", current.age),
            gender=_enum_value(changes.get("gender", current.gender)),
            activity_level=_enum_value(
                changes.get("activity_level", current.activity_level)
            ),
            goal=_enum_value(changes.get("goal", current.goal)),
            targets=current.targets,
            updated_at=datetime.now(tz=UTC),
        )
        targets = profile_targets(merged)
        if targets is not None:
            merged = replace(merged, targets=targets)
        with upstream_call("save profile"):
            return self.repository.upsert_profile(merged)


def profile_targets(profile: UserProfile) -> ProfileTargets | None:
    """Return stored targets when every body field is present and valid."""
    try:
        body = BodyProfile(
            weight_kg=profile.weight_kg,
            height_cm=profile.height_cm,
            age=profile.age,
            gender=profile.gender,
            activity_level=profile.activity_level,
            goal=profile.goal,
        )
    except ValidationError:
        logger.debug("Profile %s is incomplete; keeping targets", profile.user_id)
        return None
    return calculate_profile_targets(body)


def _enum_value(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
