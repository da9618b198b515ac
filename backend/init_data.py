"""
初始化数据脚本
创建数据表并写入角色、客户类型、管理员账号、系统配置和房型

默认管理员账号见 .env 中的 ADMIN_EMAIL / ADMIN_PASSWORD
"""
import sys
sys.path.insert(0, '.')

from hms.config import settings
from hms.database import SessionLocal, init_db
from hms.logging_config import setup_logging
from hms.seeds import MainSeeder


def main():
    setup_logging(settings.LOG_LEVEL)
    init_db()

    db = SessionLocal()
    try:
        stats = MainSeeder().run(db)
    finally:
        db.close()

    print("初始化完成:")
    for key, count in stats.items():
        print(f"  {key}: 新增 {count} 条")
    print(f"管理员账号: {settings.ADMIN_EMAIL}")


if __name__ == "__main__":
    main()
