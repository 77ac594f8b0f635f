"""
User Routes
Registration, profile lookups, role probes and admin user management
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.exceptions import ForbiddenError
from app.database import get_database
from app.models.auth.token import TokenData
from app.models.auth.user import UserCreate, ProfileUpdate, RoleUpdate, UserRole
from app.routes.auth.dependencies import get_current_identity, require_admin
from app.services.auth.user_service import UserService
from app.utils.pagination import parse_pagination
from app.utils.response import success_response, paginated_response, error_response
from app.utils.serializers import serialize_document

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("")
async def register_user(
    user_data: UserCreate,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Register a user on first login.
    A second call with the same email is a no-op.
    """
    user_service = UserService(db)
    created, inserted_id = await user_service.register_user(user_data)

    if not created:
        return success_response(
            message="User already exists",
            data={"inserted_id": None}
        )

    return success_response(
        message="User created successfully",
        data={"inserted_id": inserted_id},
        status_code=201
    )


@router.get("")
async def list_users(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Get all users (admin only).

    - **page**: Page number (default: 1)
    - **limit**: Users per page (default: 10, max: 100)
    """
    pagination = parse_pagination(page, limit)
    users, total = await UserService(db).list_users(pagination.skip, pagination.limit)

    return paginated_response("users", users, pagination, total, "Users retrieved successfully")


async def _probe_role(email: str, identity: TokenData, db, role: UserRole) -> bool:
    """Callers may only probe their own role"""
    if email != identity.email:
        raise ForbiddenError("Forbidden access")
    return await UserService(db).has_role(email, role)


@router.get("/admin/{email}")
async def check_admin(
    email: str,
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Whether the caller is an admin"""
    is_admin = await _probe_role(email, identity, db, UserRole.ADMIN)
    return success_response(message="Role checked", data={"admin": is_admin})


@router.get("/creator/{email}")
async def check_creator(
    email: str,
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Whether the caller is a creator"""
    is_creator = await _probe_role(email, identity, db, UserRole.CREATOR)
    return success_response(message="Role checked", data={"creator": is_creator})


@router.get("/{email}")
async def get_user(
    email: str,
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Get a single user's profile and role"""
    user = await UserService(db).get_user_by_email(email)
    if not user:
        return error_response(message="User not found", status_code=404)

    return success_response(
        message="User retrieved successfully",
        data={"user": serialize_document(user)}
    )


@router.patch("/profile/{email}")
async def update_profile(
    email: str,
    profile: ProfileUpdate,
    identity: TokenData = Depends(get_current_identity),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Update the caller's own name, image and address"""
    result = await UserService(db).update_profile(email, identity.email, profile)
    return success_response(message="Profile updated successfully", data=result)


@router.patch("/role/{user_id}")
async def update_role(
    user_id: str,
    role_data: RoleUpdate,
    admin: dict = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Change a user's role (admin only)"""
    result = await UserService(db).update_role(user_id, role_data.role)
    return success_response(message=f"Role updated to {role_data.role.value}", data=result)
