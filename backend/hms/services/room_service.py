"""
房间服务
管理 Room，查询时附带房型信息
"""
from typing import List, Optional
import logging
from sqlalchemy import String, cast
from sqlalchemy.orm import Session, joinedload
from hms.exceptions import BadRequestError, NotFoundError
from hms.models.entities import Room, RoomType, RoomStatus
from hms.models.schemas import RoomCreate, RoomUpdate, RoomSearch

logger = logging.getLogger(__name__)


class RoomService:
    """房间服务"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Room).options(
            joinedload(Room.room_type)
        ).filter(Room.deleted_at.is_(None))

    def _get_room_type(self, room_type_id: str) -> RoomType:
        room_type = self.db.query(RoomType).filter(
            RoomType.id == room_type_id,
            RoomType.deleted_at.is_(None)
        ).first()
        if not room_type:
            raise NotFoundError("房型不存在")
        return room_type

    def get_room_by_number(self, room_number: str) -> Optional[Room]:
        """按房间号查找，包含已删除的房间"""
        return self.db.query(Room).filter(Room.room_number == room_number).first()

    def _ensure_room_number_free(self, room_number: str, room_id: Optional[str] = None) -> None:
        existing = self.get_room_by_number(room_number)
        if not existing or existing.id == room_id:
            return
        if existing.is_deleted:
            raise BadRequestError(f"房间号 '{room_number}' 已被已删除的房间占用")
        raise BadRequestError(f"房间号 '{room_number}' 已存在")

    def create_room(self, data: RoomCreate) -> Room:
        """创建房间"""
        self._ensure_room_number_free(data.room_number)

        self._get_room_type(data.room_type_id)

        room = Room(**data.model_dump())
        self.db.add(room)
        self.db.commit()
        self.db.refresh(room)

        logger.info(f"房间已创建: {room.id} ({room.room_number})")
        return room

    def find_all(self, search: Optional[RoomSearch] = None) -> List[Room]:
        """获取房间列表"""
        query = self._query().join(Room.room_type)

        if search:
            if search.room_number:
                query = query.filter(Room.room_number.ilike(f"%{search.room_number}%"))
            if search.price is not None:
                query = query.filter(RoomType.room_price == search.price)
            if search.room_type_name:
                query = query.filter(RoomType.name.ilike(f"%{search.room_type_name}%"))
            if search.status:
                query = query.filter(cast(Room.status, String).ilike(f"%{search.status}%"))

        return query.order_by(Room.room_number).all()

    def find_one(self, room_id: str) -> Optional[Room]:
        """获取单个房间"""
        return self._query().filter(Room.id == room_id).first()

    def update_room(self, room_id: str, data: RoomUpdate) -> Room:
        """更新房间"""
        room = self.find_one(room_id)
        if not room:
            raise NotFoundError("房间不存在")

        update_data = data.model_dump(exclude_unset=True)

        if 'room_number' in update_data:
            self._ensure_room_number_free(update_data['room_number'], room_id)

        if 'room_type_id' in update_data:
            self._get_room_type(update_data['room_type_id'])

        for key, value in update_data.items():
            setattr(room, key, value)

        self.db.commit()
        self.db.refresh(room)

        logger.info(f"房间已更新: {room_id}")
        return room

    def remove_room(self, room_id: str) -> List[Room]:
        """软删除房间，返回剩余房间"""
        room = self.find_one(room_id)
        if not room:
            raise NotFoundError("房间不存在")

        room.soft_delete()
        self.db.commit()

        logger.info(f"房间已删除: {room_id}")
        return self.find_all()

    def update_status(self, room_id: str, status: RoomStatus, commit: bool = True) -> Room:
        """更新房间状态"""
        room = self.find_one(room_id)
        if not room:
            raise BadRequestError("房间不存在")

        old_status = room.status
        room.status = status
        if commit:
            self.db.commit()
            self.db.refresh(room)
        else:
            self.db.flush()

        if old_status != status:
            logger.info(f"房间 {room.room_number} 状态: {old_status.value} -> {status.value}")
        return room
