"""
认证服务
注册委托给 UserService，登录校验密码与档案状态后签发 token
"""
import logging
from sqlalchemy.orm import Session
from hms.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from hms.models.entities import ProfileStatus
from hms.models.schemas import SignUpRequest
from hms.security.auth import verify_password, create_access_token
from hms.services.user_service import UserService, serialize_user

logger = logging.getLogger(__name__)


class AuthService:
    """认证服务"""

    def __init__(self, db: Session):
        self.db = db
        self.user_service = UserService(db)

    def sign_up(self, data: SignUpRequest) -> dict:
        """注册新用户"""
        return self.user_service.create_user(data)

    def sign_in(self, email: str, password: str) -> dict:
        """登录，返回 access token 与用户信息"""
        try:
            user = self.user_service.get_profile_with_password(email)
        except NotFoundError:
            logger.warning(f"登录失败，用户不存在: {email}")
            raise UnauthorizedError("邮箱或密码错误")

        if not verify_password(password, user.password):
            logger.warning(f"登录失败，密码错误: {email}")
            raise UnauthorizedError("邮箱或密码错误")

        profile = user.profile
        if profile is None or profile.is_deleted or profile.status != ProfileStatus.ACTIVE:
            logger.warning(f"登录失败，账号已停用: {email}")
            raise ForbiddenError("账号已停用")

        token = create_access_token(user.id, user.role.role_name)
        logger.info(f"用户登录: {user.id}")
        return {
            "access_token": token,
            "token_type": "bearer",
            "user": serialize_user(user)
        }
