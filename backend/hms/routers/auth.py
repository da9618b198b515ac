"""
认证路由
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from hms.database import get_db
from hms.models.entities import User
from hms.models.schemas import SignUpRequest, SignInRequest, TokenResponse, UserResponse
from hms.services.auth_service import AuthService
from hms.services.user_service import serialize_user
from hms.security.auth import get_current_user

router = APIRouter(prefix="/auth", tags=["认证"])


@router.post("/sign-up", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def sign_up(data: SignUpRequest, db: Session = Depends(get_db)):
    """用户注册"""
    return AuthService(db).sign_up(data)


@router.post("/sign-in", response_model=TokenResponse)
def sign_in(data: SignInRequest, db: Session = Depends(get_db)):
    """用户登录"""
    return AuthService(db).sign_in(data.email, data.password)


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """获取当前用户信息"""
    return serialize_user(current_user)
