"""
房型管理路由
"""
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from hms.database import get_db
from hms.models.entities import User
from hms.models.schemas import (
    RoomTypeCreate, RoomTypeUpdate, RoomTypeSearch, RoomTypeResponse
)
from hms.services.room_type_service import RoomTypeService
from hms.security.auth import get_current_user, require_admin

router = APIRouter(prefix="/room-types", tags=["房型管理"])


@router.get("", response_model=List[RoomTypeResponse])
def list_room_types(
    name: Optional[str] = None,
    room_price: Optional[Decimal] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取房型列表"""
    return RoomTypeService(db).find_all(RoomTypeSearch(name=name, room_price=room_price))


@router.post("", response_model=RoomTypeResponse, status_code=201)
def create_room_type(
    data: RoomTypeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """创建房型"""
    return RoomTypeService(db).create(data)


@router.get("/{room_type_id}", response_model=RoomTypeResponse)
def get_room_type(
    room_type_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取房型详情"""
    return RoomTypeService(db).find_one(room_type_id)


@router.patch("/{room_type_id}", response_model=RoomTypeResponse)
def update_room_type(
    room_type_id: str,
    data: RoomTypeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """更新房型"""
    return RoomTypeService(db).update(room_type_id, data)


@router.delete("/{room_type_id}", response_model=List[RoomTypeResponse])
def delete_room_type(
    room_type_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """删除房型"""
    return RoomTypeService(db).remove(room_type_id)
