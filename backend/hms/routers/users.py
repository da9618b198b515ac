"""
用户管理路由
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from hms.database import get_db
from hms.models.entities import User, ProfileStatus
from hms.models.schemas import UserResponse, UserUpdate, UserSearch
from hms.services.user_service import UserService
from hms.security.auth import get_current_user, require_admin, ensure_self_or_admin

router = APIRouter(prefix="/users", tags=["用户管理"])


@router.get("", response_model=List[UserResponse])
def list_users(
    address: Optional[str] = None,
    email: Optional[str] = None,
    full_name: Optional[str] = None,
    identity_number: Optional[str] = None,
    profile_status: Optional[ProfileStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """获取用户列表"""
    search = UserSearch(
        address=address,
        email=email,
        full_name=full_name,
        identity_number=identity_number,
        status=profile_status
    )
    return UserService(db).find_all(search)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取用户档案"""
    ensure_self_or_admin(current_user, user_id)
    return UserService(db).get_profile_by_user_id(user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """更新用户档案"""
    ensure_self_or_admin(current_user, user_id)
    return UserService(db).update_user(user_id, data, allow_status_change=current_user.is_admin)


@router.delete("/{user_id}", response_model=List[UserResponse])
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """删除用户（停用档案）"""
    return UserService(db).delete_user(user_id)
