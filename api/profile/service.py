import logging
from typing import Any

from bson import ObjectId

from api.profile.schemas import SOCIAL_FIELDS, EducationRequest, ExperienceRequest, ProfileUpsertRequest
from config import Settings
from github_client import fetch_user_repos
from profile_store import (
    delete_account,
    find_profile,
    is_object_id,
    list_profiles,
    save_profile,
    to_json,
    upsert_profile,
)
from utils import normalize_url, parse_skills

logger = logging.getLogger(__name__)


class ProfileNotFoundError(LookupError):
    pass


class GithubProfileNotFoundError(LookupError):
    pass


def build_profile_fields(request: ProfileUpsertRequest) -> dict[str, Any]:
    provided = request.model_dump(exclude_unset=True, exclude=set(SOCIAL_FIELDS))

    fields = {key: value for key, value in provided.items() if value is not None}
    fields["website"] = normalize_url(request.website) if request.website else ""
    fields["skills"] = parse_skills(request.skills)
    fields["status"] = request.status

    social = {}
    for key in SOCIAL_FIELDS:
        value = getattr(request, key)
        if value is None:
            continue
        social[key] = normalize_url(value) if value else value
    fields["social"] = social
    return fields


def get_own_profile(user_id: str) -> dict:
    profile = find_profile(user_id)
    if not profile:
        raise ProfileNotFoundError("There is no profile for this user")
    return to_json(profile)


def save_user_profile(user_id: str, request: ProfileUpsertRequest) -> dict:
    return to_json(upsert_profile(user_id, build_profile_fields(request)))


def get_all_profiles() -> list[dict]:
    return [to_json(profile) for profile in list_profiles()]


def get_profile_by_user_id(user_id: str) -> dict:
    if not is_object_id(user_id):
        raise ProfileNotFoundError("Profile not found")
    profile = find_profile(user_id)
    if not profile:
        raise ProfileNotFoundError("Profile not found")
    return to_json(profile)


def delete_user_account(user_id: str) -> dict[str, int]:
    return delete_account(user_id)


def _load_for_update(user_id: str) -> dict:
    profile = find_profile(user_id, populate=False)
    if not profile:
        raise ProfileNotFoundError("There is no profile for this user")
    return profile


def _prepend_entry(user_id: str, section: str, entry: dict) -> dict:
    profile = _load_for_update(user_id)
    entry = {"_id": ObjectId(), **entry}
    profile.setdefault(section, []).insert(0, entry)
    return to_json(save_profile(profile))


def _remove_entry(user_id: str, section: str, entry_id: str) -> dict:
    profile = _load_for_update(user_id)
    entries = profile.get(section, [])
    remaining = [entry for entry in entries if str(entry.get("_id")) != entry_id]
    if len(remaining) == len(entries):
        logger.info("No %s entry id=%s for user_id=%s", section, entry_id, user_id)
    profile[section] = remaining
    return to_json(save_profile(profile))


def add_experience(user_id: str, request: ExperienceRequest) -> dict:
    return _prepend_entry(user_id, "experience", request.to_entry())


def remove_experience(user_id: str, experience_id: str) -> dict:
    return _remove_entry(user_id, "experience", experience_id)


def add_education(user_id: str, request: EducationRequest) -> dict:
    return _prepend_entry(user_id, "education", request.to_entry())


def remove_education(user_id: str, education_id: str) -> dict:
    return _remove_entry(user_id, "education", education_id)


def get_github_repos(username: str, settings: Settings) -> list[dict]:
    try:
        return fetch_user_repos(username, settings)
    except Exception as exc:
        raise GithubProfileNotFoundError("No Github profile found") from exc
