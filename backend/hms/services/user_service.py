"""
用户服务
管理 User 与 Profile，对外输出时剔除密码及关联对象的审计字段
"""
from typing import List, Optional
import logging
from sqlalchemy.orm import Session, joinedload
from hms.exceptions import BadRequestError, ForbiddenError, NotFoundError
from hms.models.entities import (
    User, Profile, Role, UserType, RoleName, UserTypeName, ProfileStatus
)
from hms.models.schemas import SignUpRequest, UserUpdate, UserSearch
from hms.security.auth import get_password_hash

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    'full_name', 'nationality', 'status', 'dob',
    'phone_number', 'address', 'identity_number'
)


def serialize_profile(profile: Optional[Profile]) -> Optional[dict]:
    if profile is None:
        return None
    return {
        'id': profile.id,
        'full_name': profile.full_name,
        'nationality': profile.nationality,
        'status': profile.status,
        'address': profile.address,
        'phone_number': profile.phone_number,
        'dob': profile.dob,
        'identity_number': profile.identity_number,
    }


def serialize_user(user: User) -> dict:
    """用户输出格式（不含密码）"""
    return {
        'id': user.id,
        'email': user.email,
        'role_name': user.role.role_name if user.role else None,
        'user_type_name': user.user_type.type_name if user.user_type else None,
        'profile': serialize_profile(user.profile),
    }


class UserService:
    """用户服务"""

    # get_user_by_field 允许的查询字段
    LOOKUP_FIELDS = {
        'id': User.id,
        'email': User.email,
    }

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return self.db.query(User).options(
            joinedload(User.role),
            joinedload(User.user_type),
            joinedload(User.profile)
        ).filter(User.deleted_at.is_(None))

    def _get_user(self, user_id: str) -> User:
        user = self._base_query().filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("用户不存在")
        return user

    def get_user_type_by_name(self, type_name: UserTypeName) -> UserType:
        """根据名称获取客户类型"""
        user_type = self.db.query(UserType).filter(
            UserType.type_name == type_name,
            UserType.deleted_at.is_(None)
        ).first()
        if not user_type:
            raise NotFoundError(f"客户类型 '{type_name}' 不存在")
        return user_type

    def get_user_by_field(self, field: str, value) -> Optional[User]:
        """按指定字段查找用户，仅支持 id / email"""
        column = self.LOOKUP_FIELDS.get(field)
        if column is None:
            raise BadRequestError(f"不支持的查询字段: {field}")
        return self._base_query().filter(column == value).first()

    def create_user(self, data: SignUpRequest) -> dict:
        """创建用户及其档案"""
        if self.db.query(User).filter(User.email == data.email).first():
            logger.warning(f"注册失败，邮箱已存在: {data.email}")
            raise BadRequestError(f"邮箱 '{data.email}' 已被注册")

        role = self.db.query(Role).filter(
            Role.role_name == RoleName.USER,
            Role.deleted_at.is_(None)
        ).first()
        if not role:
            raise NotFoundError("角色 'user' 不存在")

        user_type = self.get_user_type_by_name(data.user_type_name)

        user = User(
            email=data.email,
            password=get_password_hash(data.password),
            role_id=role.id,
            user_type_id=user_type.id
        )
        user.profile = Profile(
            full_name=data.full_name,
            nationality=data.nationality,
            dob=data.dob,
            phone_number=data.phone_number,
            address=data.address,
            identity_number=data.identity_number
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"用户已创建: {user.id} ({user.email})")
        return serialize_user(user)

    def find_all(self, search: Optional[UserSearch] = None) -> List[dict]:
        """获取非管理员用户列表，已删除档案的用户不返回"""
        query = self._base_query().join(User.role).join(User.profile).filter(
            Role.role_name != RoleName.ADMIN,
            Profile.deleted_at.is_(None)
        )

        if search:
            if search.address:
                query = query.filter(Profile.address.ilike(f"%{search.address}%"))
            if search.email:
                query = query.filter(User.email.ilike(f"%{search.email}%"))
            if search.full_name:
                query = query.filter(Profile.full_name.ilike(f"%{search.full_name}%"))
            if search.identity_number:
                query = query.filter(Profile.identity_number.ilike(f"%{search.identity_number}%"))
            if search.status:
                query = query.filter(Profile.status == search.status)

        users = query.order_by(User.created_at, User.email).all()
        return [serialize_user(u) for u in users]

    def find_one(self, email: str) -> Optional[dict]:
        """按邮箱查找用户"""
        user = self.get_user_by_field('email', email)
        return serialize_user(user) if user else None

    def delete_user(self, user_id: str) -> List[dict]:
        """停用并软删除用户档案，返回剩余用户列表"""
        user = self._get_user(user_id)

        if user.profile is not None:
            user.profile.status = ProfileStatus.INACTIVE
            user.profile.soft_delete()
        self.db.commit()

        logger.info(f"用户档案已删除: {user_id}")
        return self.find_all()

    def get_profile_by_user_id(self, user_id: str) -> dict:
        """获取用户档案"""
        return serialize_user(self._get_user(user_id))

    def update_user(self, user_id: str, data: UserUpdate, allow_status_change: bool = True) -> dict:
        """
        更新用户邮箱及档案信息
        allow_status_change 为 False 时不允许修改账号状态（非管理员）
        """
        user = self._get_user(user_id)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            raise BadRequestError("没有需要更新的字段")
        if 'status' in update_data and not allow_status_change:
            logger.warning(f"无权修改账号状态: {user_id}")
            raise ForbiddenError("无权修改账号状态")

        if 'email' in update_data:
            existing = self.db.query(User).filter(User.email == update_data['email']).first()
            if existing and existing.id != user_id:
                logger.warning(f"更新失败，邮箱已被占用: {update_data['email']}")
                raise BadRequestError(f"邮箱 '{update_data['email']}' 已被注册")
            user.email = update_data.pop('email')

        if update_data and user.profile is None:
            raise NotFoundError("用户档案不存在")

        for key, value in update_data.items():
            if key in PROFILE_FIELDS:
                setattr(user.profile, key, value)

        self.db.commit()
        self.db.refresh(user)

        logger.info(f"用户已更新: {user_id}")
        return serialize_user(user)

    def get_profile_with_password(self, email: str) -> User:
        """获取包含密码哈希的用户实体，仅供登录校验"""
        user = self.get_user_by_field('email', email)
        if not user:
            raise NotFoundError("用户不存在")
        return user
