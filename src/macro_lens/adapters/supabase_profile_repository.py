"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from macro_lens.domain.profile import ProfileTargets, UserProfile
from macro_lens.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "user_id, user_email, name, weight_kg, height_cm, age, gender, "
    "activity_level, goal, target_calories, target_protein, target_carbs, "
    "target_fats, updated_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        """Insert or update a profile keyed by user id."""
        payload: dict[str, object] = {
            "user_id": profile.user_id,
            "user_email": profile.user_email,
            "name": profile.name,
            "weight_kg": profile.weight_kg,
            "height_cm": profile.height_cm,
            "age": profile.age,
            "gender": profile.gender,
            "activity_level": profile.activity_level,
            "goal": profile.goal,
            "updated_at": profile.updated_at.isoformat()
            if profile.updated_at
            else None,
        }
        if profile.targets:
            payload.update(
                {
                    "target_calories": profile.targets.target_calories,
                    "target_protein": profile.targets.target_protein,
                    "target_carbs": profile.targets.target_carbs,
                    "target_fats": profile.targets.target_fats,
                }
            )
        response = (
            self.client.table("user_profiles")
            .upsert(payload, on_conflict="user_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save user profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    targets = None
    if row.get("target_calories") is not None:
        targets = ProfileTargets(
            target_calories=int(row["target_calories"]),
            target_protein=int(row.get("target_protein") or 0),
            target_carbs=int(row.get("target_carbs") or 0),
            target_fats=int(row.get("target_fats") or 0),
        )
    updated_at_raw = row.get("updated_at")
    return UserProfile(
        user_id=str(row["user_id"]),
        user_email=row.get("user_email"),
        name=row.get("name"),
        weight_kg=_optional_float(row.get("weight_kg")),
        height_cm=_optional_float(row.get("height_cm")),
        age=int(row["age"]) if row.get("age") is not None else None,
        gender=row.get("gender"),
        activity_level=row.get("activity_level"),
        goal=row.get("goal"),
        targets=targets,
        updated_at=datetime.fromisoformat(updated_at_raw)
        if isinstance(updated_at_raw, str) and updated_at_raw
        else None,
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
