"""
主种子程序
在一个事务内依次写入角色、客户类型、管理员、系统配置、房型
"""
import logging
from sqlalchemy.orm import Session
from hms.seeds.seed_data import (
    seed_roles, seed_user_types, seed_admin, seed_configurations, seed_room_types
)

logger = logging.getLogger(__name__)


class MainSeeder:
    """一次性初始化基础数据，可重复执行"""

    steps = (
        ("roles", "角色", seed_roles),
        ("user_types", "客户类型", seed_user_types),
        ("admin", "管理员账号", seed_admin),
        ("configurations", "系统配置", seed_configurations),
        ("room_types", "房型", seed_room_types),
    )

    def run(self, db: Session) -> dict:
        """执行全部种子步骤，返回各步骤新增数量；任一步失败则整体回滚"""
        stats = {}
        try:
            for key, label, seed in self.steps:
                logger.info(f"开始写入{label}数据...")
                stats[key] = seed(db)
            db.commit()
        except Exception:
            logger.exception("种子数据写入失败，已回滚")
            db.rollback()
            raise

        logger.info(f"种子数据写入完成: {stats}")
        return stats
