"""
种子数据 - 角色、客户类型、管理员、系统配置、房型
每个函数均幂等：已存在的记录跳过，只 flush 不提交，由 MainSeeder 统一提交
"""
from datetime import date
from decimal import Decimal
from sqlalchemy.orm import Session
from hms.config import settings
from hms.exceptions import NotFoundError
from hms.models.entities import (
    Role, RoleName, UserType, UserTypeName, User, Profile,
    Configuration, RoomType
)
from hms.security.auth import get_password_hash
from hms.services.configuration_service import (
    MAX_CUSTOMERS_PER_ROOM, CUSTOMER_SURCHARGE_THRESHOLD, CUSTOMER_SURCHARGE_RATE
)


SEED_ROLES = [
    {"role_name": RoleName.ADMIN, "description": "系统管理员"},
    {"role_name": RoleName.USER, "description": "普通用户"},
]

SEED_USER_TYPES = [
    {"type_name": UserTypeName.LOCAL, "description": "本国客人", "surcharge_factor": Decimal("1.00")},
    {"type_name": UserTypeName.FOREIGN, "description": "外国客人", "surcharge_factor": Decimal("1.50")},
]

SEED_ADMIN_PROFILE = {
    "full_name": "系统管理员",
    "nationality": "中国",
    "dob": date(1990, 1, 1),
    "phone_number": "10000000000",
    "address": "酒店总部",
    "identity_number": "000000000000000000",
}

SEED_CONFIGURATIONS = [
    {
        "config_name": MAX_CUSTOMERS_PER_ROOM, "config_value": Decimal("3"),
        "description": "每间房最多入住人数",
    },
    {
        "config_name": CUSTOMER_SURCHARGE_THRESHOLD, "config_value": Decimal("3"),
        "description": "入住人数达到此值时收取附加费",
    },
    {
        "config_name": CUSTOMER_SURCHARGE_RATE, "config_value": Decimal("0.25"),
        "description": "附加费率",
    },
]

SEED_ROOM_TYPES = [
    {"name": "标准间", "description": "单人床，适合商务出行", "room_price": Decimal("300.00")},
    {"name": "大床房", "description": "1.8米大床", "room_price": Decimal("350.00")},
    {"name": "双床房", "description": "两张1.2米单人床", "room_price": Decimal("400.00")},
    {"name": "豪华间", "description": "景观房，含早餐", "room_price": Decimal("600.00")},
]


def seed_roles(db: Session) -> int:
    created = 0
    for data in SEED_ROLES:
        if not db.query(Role).filter(Role.role_name == data["role_name"]).first():
            db.add(Role(**data))
            created += 1
    db.flush()
    return created


def seed_user_types(db: Session) -> int:
    created = 0
    for data in SEED_USER_TYPES:
        if not db.query(UserType).filter(UserType.type_name == data["type_name"]).first():
            db.add(UserType(**data))
            created += 1
    db.flush()
    return created


def seed_admin(db: Session) -> int:
    """已存在管理员账号时跳过"""
    admin_role = db.query(Role).filter(Role.role_name == RoleName.ADMIN).first()
    if not admin_role:
        raise NotFoundError("管理员角色不存在")

    if db.query(User).filter(User.role_id == admin_role.id).first():
        return 0

    user_type = db.query(UserType).filter(UserType.type_name == UserTypeName.LOCAL).first()
    if not user_type:
        raise NotFoundError("客户类型 'local' 不存在")

    admin = User(
        email=settings.ADMIN_EMAIL,
        password=get_password_hash(settings.ADMIN_PASSWORD),
        role_id=admin_role.id,
        user_type_id=user_type.id
    )
    admin.profile = Profile(**SEED_ADMIN_PROFILE)
    db.add(admin)
    db.flush()
    return 1


def seed_configurations(db: Session) -> int:
    created = 0
    for data in SEED_CONFIGURATIONS:
        existing = db.query(Configuration).filter(
            Configuration.config_name == data["config_name"]
        ).first()
        if not existing:
            db.add(Configuration(**data))
            created += 1
    db.flush()
    return created


def seed_room_types(db: Session) -> int:
    created = 0
    for data in SEED_ROOM_TYPES:
        if not db.query(RoomType).filter(RoomType.name == data["name"]).first():
            db.add(RoomType(**data))
            created += 1
    db.flush()
    return created
