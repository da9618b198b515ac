"""
房间管理路由
"""
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from hms.database import get_db
from hms.exceptions import NotFoundError
from hms.models.entities import User
from hms.models.schemas import (
    RoomCreate, RoomUpdate, RoomSearch, RoomResponse, RoomStatusUpdate
)
from hms.services.room_service import RoomService
from hms.security.auth import get_current_user, require_admin

router = APIRouter(prefix="/rooms", tags=["房间管理"])


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    room_number: Optional[str] = None,
    price: Optional[Decimal] = None,
    room_type_name: Optional[str] = None,
    room_status: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取房间列表"""
    search = RoomSearch(
        room_number=room_number,
        price=price,
        room_type_name=room_type_name,
        status=room_status
    )
    return RoomService(db).find_all(search)


@router.post("", response_model=RoomResponse, status_code=201)
def create_room(
    data: RoomCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """创建房间"""
    return RoomService(db).create_room(data)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """获取房间详情"""
    room = RoomService(db).find_one(room_id)
    if not room:
        raise NotFoundError("房间不存在")
    return room


@router.patch("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: str,
    data: RoomUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """更新房间"""
    return RoomService(db).update_room(room_id, data)


@router.patch("/{room_id}/status", response_model=RoomResponse)
def update_room_status(
    room_id: str,
    data: RoomStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """更新房间状态"""
    return RoomService(db).update_status(room_id, data.status)


@router.delete("/{room_id}", response_model=List[RoomResponse])
def delete_room(
    room_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """删除房间"""
    return RoomService(db).remove_room(room_id)
