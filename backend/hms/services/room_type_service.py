"""
房型服务
"""
from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from hms.exceptions import BadRequestError, NotFoundError
from hms.models.entities import Room, RoomType
from hms.models.schemas import RoomTypeCreate, RoomTypeUpdate, RoomTypeSearch

logger = logging.getLogger(__name__)


class RoomTypeService:
    """房型服务"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(RoomType).filter(RoomType.deleted_at.is_(None))

    def get_by_name(self, name: str) -> Optional[RoomType]:
        """按名称查找，包含已删除的房型"""
        return self.db.query(RoomType).filter(RoomType.name == name).first()

    def _ensure_name_free(self, name: str, room_type_id: Optional[str] = None) -> None:
        existing = self.get_by_name(name)
        if not existing or existing.id == room_type_id:
            return
        if existing.is_deleted:
            raise BadRequestError(f"房型名称 '{name}' 已被已删除的房型占用")
        raise BadRequestError(f"房型名称 '{name}' 已存在")

    def create(self, data: RoomTypeCreate) -> RoomType:
        """创建房型"""
        self._ensure_name_free(data.name)

        room_type = RoomType(**data.model_dump())
        self.db.add(room_type)
        self.db.commit()
        self.db.refresh(room_type)

        logger.info(f"房型已创建: {room_type.id} ({room_type.name})")
        return room_type

    def find_all(self, search: Optional[RoomTypeSearch] = None) -> List[RoomType]:
        """获取房型列表"""
        query = self._query()
        if search:
            if search.name:
                query = query.filter(RoomType.name.ilike(f"%{search.name}%"))
            if search.room_price is not None:
                query = query.filter(RoomType.room_price == search.room_price)
        return query.order_by(RoomType.room_price, RoomType.name).all()

    def find_one(self, room_type_id: str) -> RoomType:
        """获取单个房型"""
        room_type = self._query().filter(RoomType.id == room_type_id).first()
        if not room_type:
            raise NotFoundError("房型不存在")
        return room_type

    def update(self, room_type_id: str, data: RoomTypeUpdate) -> RoomType:
        """更新房型"""
        room_type = self.find_one(room_type_id)

        update_data = data.model_dump(exclude_unset=True)
        if 'name' in update_data:
            self._ensure_name_free(update_data['name'], room_type_id)

        for key, value in update_data.items():
            setattr(room_type, key, value)

        self.db.commit()
        self.db.refresh(room_type)

        logger.info(f"房型已更新: {room_type_id}")
        return room_type

    def remove(self, room_type_id: str) -> List[RoomType]:
        """软删除房型，返回剩余房型"""
        room_type = self.find_one(room_type_id)

        room_count = self.db.query(Room).filter(
            Room.room_type_id == room_type_id,
            Room.deleted_at.is_(None)
        ).count()
        if room_count > 0:
            logger.warning(f"房型 {room_type_id} 仍有 {room_count} 间房间，拒绝删除")
            raise BadRequestError(f"该房型下有 {room_count} 间房间，无法删除")

        room_type.soft_delete()
        self.db.commit()

        logger.info(f"房型已删除: {room_type_id}")
        return self.find_all()
