"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, field_validator
from hms.models.entities import (
    RoleName, UserTypeName, ProfileStatus, RoomStatus, InvoiceStatus
)

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ============== 认证 / 用户 Schemas ==============

class SignUpRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    user_type_name: UserTypeName = UserTypeName.LOCAL
    full_name: str = Field(..., min_length=1, max_length=255)
    nationality: str = Field(..., min_length=1, max_length=100)
    dob: date
    phone_number: str = Field(..., min_length=1, max_length=30)
    address: str = Field(..., min_length=1, max_length=255)
    identity_number: str = Field(..., min_length=1, max_length=50)


class SignInRequest(BaseModel):
    email: str
    password: str


class UserUpdate(BaseModel):
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN, max_length=255)
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    nationality: Optional[str] = Field(None, min_length=1, max_length=100)
    status: Optional[ProfileStatus] = None
    dob: Optional[date] = None
    phone_number: Optional[str] = Field(None, min_length=1, max_length=30)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    identity_number: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator('email', 'full_name', 'nationality', 'status', 'dob',
                     'phone_number', 'address', 'identity_number')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("字段不能为空")
        return v


class UserSearch(BaseModel):
    address: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    identity_number: Optional[str] = None
    status: Optional[ProfileStatus] = None


class ProfileResponse(BaseModel):
    id: str
    full_name: str
    nationality: str
    status: ProfileStatus
    address: str
    phone_number: str
    dob: date
    identity_number: str


class UserResponse(BaseModel):
    id: str
    email: str
    role_name: Optional[RoleName] = None
    user_type_name: Optional[UserTypeName] = None
    profile: Optional[ProfileResponse] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============== 房型 Schemas ==============

class RoomTypeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    room_price: Decimal = Field(..., ge=0)


class RoomTypeCreate(RoomTypeBase):
    pass


class RoomTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    room_price: Optional[Decimal] = Field(None, ge=0)

    @field_validator('name', 'room_price')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("字段不能为空")
        return v


class RoomTypeSearch(BaseModel):
    name: Optional[str] = None
    room_price: Optional[Decimal] = None


class RoomTypeResponse(RoomTypeBase):
    id: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== 房间 Schemas ==============

class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=10)
    room_type_id: str
    status: RoomStatus = RoomStatus.AVAILABLE
    note: Optional[str] = None


class RoomUpdate(BaseModel):
    room_number: Optional[str] = Field(None, min_length=1, max_length=10)
    room_type_id: Optional[str] = None
    status: Optional[RoomStatus] = None
    note: Optional[str] = None

    @field_validator('room_number', 'room_type_id', 'status')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("字段不能为空")
        return v


class RoomStatusUpdate(BaseModel):
    status: RoomStatus


class RoomSearch(BaseModel):
    room_number: Optional[str] = None
    price: Optional[Decimal] = None
    room_type_name: Optional[str] = None
    status: Optional[str] = None


class RoomResponse(BaseModel):
    id: str
    room_number: str
    status: RoomStatus
    note: Optional[str] = None
    room_type_id: str
    room_type: Optional[RoomTypeResponse] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ============== 预订明细 Schemas ==============

class BookingDetailCreate(BaseModel):
    room_id: str
    start_date: date
    end_date: date
    number_of_customers: int = Field(default=1, ge=1)


class BookingDetailUpdate(BaseModel):
    id: str
    room_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    number_of_customers: Optional[int] = Field(None, ge=1)

    @field_validator('room_id', 'start_date', 'end_date', 'number_of_customers')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("字段不能为空")
        return v


class InvoiceResponse(BaseModel):
    id: str
    booking_detail_id: str
    total_price: Decimal
    status: InvoiceStatus
    paid_at: Optional[datetime] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BookingDetailResponse(BaseModel):
    id: str
    booking_id: Optional[str] = None
    user_id: str
    room_id: str
    room_number: Optional[str] = None
    start_date: date
    end_date: date
    number_of_customers: int
    total_price: Decimal
    invoice: Optional[InvoiceResponse] = None
    created_at: datetime


# ============== 预订 Schemas ==============

class BookingCreate(BaseModel):
    booking_details: List[BookingDetailCreate] = Field(..., min_length=1)


class BookingUpdate(BaseModel):
    booking_details: List[BookingDetailUpdate] = Field(..., min_length=1)


class BookingDelete(BaseModel):
    booking_detail_ids: Optional[List[str]] = None


class BookingUserResponse(BaseModel):
    id: str
    email: str
    profile: Optional[ProfileResponse] = None


class BookingResponse(BaseModel):
    id: str
    total_price: Decimal
    created_at: datetime
    deleted_at: Optional[datetime] = None
    user: Optional[BookingUserResponse] = None
    booking_details: List[BookingDetailResponse] = []


# ============== 系统配置 Schemas ==============

class ConfigurationUpdate(BaseModel):
    config_value: Decimal = Field(..., ge=0)


class ConfigurationResponse(BaseModel):
    id: str
    config_name: str
    config_value: Decimal
    description: Optional[str] = None
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)
