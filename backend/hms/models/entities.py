"""
实体定义 (ORM Entities)
所有实体使用 UUID 字符串主键，带创建/更新时间和软删除标记
"""
import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, String, DateTime, Date, Integer,
    ForeignKey, Text, Enum as SQLEnum, Numeric
)
from sqlalchemy.orm import relationship
from hms.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


# ============== 枚举定义 ==============

class RoleName(str, Enum):
    """角色枚举"""
    ADMIN = "admin"
    USER = "user"


class UserTypeName(str, Enum):
    """客户类型枚举"""
    LOCAL = "local"        # 本国客人
    FOREIGN = "foreign"    # 外国客人


class ProfileStatus(str, Enum):
    """档案状态"""
    ACTIVE = "active"
    INACTIVE = "inactive"


class RoomStatus(str, Enum):
    """房间状态"""
    AVAILABLE = "available"      # 可预订
    BOOKED = "booked"            # 已有预订
    MAINTENANCE = "maintenance"  # 维修中


class InvoiceStatus(str, Enum):
    """发票状态"""
    UNPAID = "unpaid"
    PAID = "paid"


# ============== 公共字段 ==============

class AuditMixin:
    """创建/更新时间与软删除标记"""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        self.deleted_at = datetime.utcnow()


# ============== 用户相关 ==============

class Role(AuditMixin, Base):
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True, default=_uuid)
    role_name = Column(SQLEnum(RoleName), unique=True, nullable=False, default=RoleName.USER)
    description = Column(Text)

    users = relationship("User", back_populates="role")


class UserType(AuditMixin, Base):
    """
    客户类型
    surcharge_factor 为该类型客人的房价系数
    """
    __tablename__ = "user_types"

    id = Column(String(36), primary_key=True, default=_uuid)
    type_name = Column(SQLEnum(UserTypeName), unique=True, nullable=False, default=UserTypeName.LOCAL)
    description = Column(Text)
    surcharge_factor = Column(Numeric(10, 2), nullable=False, default=1)

    users = relationship("User", back_populates="user_type")


class User(AuditMixin, Base):
    """
    用户账号
    password 仅保存 bcrypt 哈希，任何对外输出都必须剔除
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role_id = Column(String(36), ForeignKey("roles.id"), nullable=False)
    user_type_id = Column(String(36), ForeignKey("user_types.id"), nullable=False)

    role = relationship("Role", back_populates="users")
    user_type = relationship("UserType", back_populates="users")
    profile = relationship("Profile", back_populates="user", uselist=False)
    bookings = relationship("Booking", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role is not None and self.role.role_name == RoleName.ADMIN


class Profile(AuditMixin, Base):
    """个人档案，与用户一对一"""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True)
    full_name = Column(String(255), nullable=False)
    nationality = Column(String(100), nullable=False)
    status = Column(SQLEnum(ProfileStatus), nullable=False, default=ProfileStatus.ACTIVE)
    dob = Column(Date, nullable=False)
    phone_number = Column(String(30), nullable=False)
    address = Column(String(255), nullable=False)
    identity_number = Column(String(50), nullable=False)

    user = relationship("User", back_populates="profile")


# ============== 房间相关 ==============

class RoomType(AuditMixin, Base):
    __tablename__ = "room_types"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(Text)
    room_price = Column(Numeric(10, 2), nullable=False)

    rooms = relationship("Room", back_populates="room_type")


class Room(AuditMixin, Base):
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=_uuid)
    room_number = Column(String(10), unique=True, nullable=False)
    status = Column(SQLEnum(RoomStatus), nullable=False, default=RoomStatus.AVAILABLE)
    note = Column(Text)
    room_type_id = Column(String(36), ForeignKey("room_types.id"), nullable=False)

    room_type = relationship("RoomType", back_populates="rooms")
    booking_details = relationship("BookingDetail", back_populates="room")


# ============== 预订相关 ==============

class Booking(AuditMixin, Base):
    """
    预订 - 聚合根
    total_price 始终等于其有效预订明细的发票金额之和
    """
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False, default=0)

    user = relationship("User", back_populates="bookings")
    booking_details = relationship("BookingDetail", back_populates="booking")

    @property
    def active_booking_details(self):
        return [bd for bd in self.booking_details if bd.deleted_at is None]


class BookingDetail(AuditMixin, Base):
    """预订明细：一间房一段日期"""
    __tablename__ = "booking_details"

    id = Column(String(36), primary_key=True, default=_uuid)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    room_id = Column(String(36), ForeignKey("rooms.id"), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    number_of_customers = Column(Integer, nullable=False, default=1)
    total_price = Column(Numeric(12, 2), nullable=False, default=0)

    booking = relationship("Booking", back_populates="booking_details")
    user = relationship("User")
    room = relationship("Room", back_populates="booking_details")
    invoice = relationship("Invoice", back_populates="booking_detail", uselist=False)


class Invoice(AuditMixin, Base):
    """发票，与预订明细一对一"""
    __tablename__ = "invoices"

    id = Column(String(36), primary_key=True, default=_uuid)
    booking_detail_id = Column(String(36), ForeignKey("booking_details.id"), unique=True, nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(SQLEnum(InvoiceStatus), nullable=False, default=InvoiceStatus.UNPAID)
    paid_at = Column(DateTime)

    booking_detail = relationship("BookingDetail", back_populates="invoice")


# ============== 系统配置 ==============

class Configuration(AuditMixin, Base):
    """业务参数（最大入住人数、附加费率等）"""
    __tablename__ = "configurations"

    id = Column(String(36), primary_key=True, default=_uuid)
    config_name = Column(String(100), unique=True, nullable=False, index=True)
    config_value = Column(Numeric(10, 2), nullable=False)
    description = Column(String(500))
