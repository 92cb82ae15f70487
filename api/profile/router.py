import logging

from fastapi import APIRouter, Depends, HTTPException

from api.profile.schemas import EducationRequest, ExperienceRequest, MessageResponse, ProfileUpsertRequest
from api.security import AuthenticatedUser, get_current_user
from config import Settings, get_settings
from utils import InvalidUrlError
from .service import (
    GithubProfileNotFoundError,
    ProfileNotFoundError,
    add_education,
    add_experience,
    delete_user_account,
    get_all_profiles,
    get_github_repos,
    get_own_profile,
    get_profile_by_user_id,
    remove_education,
    remove_experience,
    save_user_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile")

SERVER_ERROR = "Server Error"


def _server_error(exc: Exception) -> HTTPException:
    logger.exception("Profile request failed: %s", exc)
    return HTTPException(status_code=500, detail=SERVER_ERROR)


@router.get("/me")
def get_me_route(user: AuthenticatedUser = Depends(get_current_user)):
    try:
        return get_own_profile(user.id)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        raise _server_error(exc) from exc


@router.post("")
def upsert_profile_route(
    request: ProfileUpsertRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        return save_user_profile(user.id, request)
    except InvalidUrlError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        raise _server_error(exc) from exc


@router.get("")
def list_profiles_route():
    try:
        return get_all_profiles()
    except Exception as exc:
        raise _server_error(exc) from exc


@router.get("/user/{user_id}")
def get_by_user_route(user_id: str):
    try:
        return get_profile_by_user_id(user_id)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:
        raise _server_error(exc) from exc


@router.delete("", response_model=MessageResponse)
def delete_profile_route(user: AuthenticatedUser = Depends(get_current_user)):
    try:
        outcome = delete_user_account(user.id)
        logger.info("Deleted account user_id=%s outcome=%s", user.id, outcome)
        return MessageResponse(msg="User deleted")
    except Exception as exc:
        raise _server_error(exc) from exc


@router.put("/experience")
def add_experience_route(
    request: ExperienceRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        return add_experience(user.id, request)
    except Exception as exc:
        raise _server_error(exc) from exc


@router.delete("/experience/{experience_id}")
def remove_experience_route(experience_id: str, user: AuthenticatedUser = Depends(get_current_user)):
    try:
        return remove_experience(user.id, experience_id)
    except Exception as exc:
        raise _server_error(exc) from exc


@router.put("/education")
def add_education_route(
    request: EducationRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        return add_education(user.id, request)
    except Exception as exc:
        raise _server_error(exc) from exc


@router.delete("/education/{education_id}")
def remove_education_route(education_id: str, user: AuthenticatedUser = Depends(get_current_user)):
    try:
        return remove_education(user.id, education_id)
    except Exception as exc:
        raise _server_error(exc) from exc


@router.get("/github/{username}")
def github_repos_route(username: str, settings: Settings = Depends(get_settings)):
    try:
        return get_github_repos(username, settings)
    except GithubProfileNotFoundError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
