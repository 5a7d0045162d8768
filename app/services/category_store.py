import logging
from typing import Any, Optional

from fastapi import Depends
from sqlalchemy import exists
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, make_transient_to_detached

from app.core.database import get_db
from app.models import Category

logger = logging.getLogger(__name__)


class CategoryStore:
    """category 表的存取封装，每个请求持有自己的 Session。

    所有写操作都在方法内部提交；提交失败时先回滚再把原异常抛给调用方，
    并发冲突（UPDATE 没有命中行）以 ``StaleDataError`` 的形式抛出。
    """

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Category]:
        return self.db.query(Category).order_by(Category.id.asc()).all()

    def find(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def exists(self, category_id: int) -> bool:
        return bool(self.db.query(exists().where(Category.id == category_id)).scalar())

    def add(self, category: Category) -> Category:
        self.db.add(category)
        self._commit()
        self.db.refresh(category)
        logger.info("已创建分类: id=%s name=%s", category.id, category.name)
        return category

    def replace(self, category_id: int, fields: dict[str, Any]) -> None:
        """按主键整体覆盖除 id 外的所有字段，不预先读取。"""
        # 以“已脱离会话”的身份挂回会话，flush 时直接发 UPDATE ... WHERE id = ?
        category = Category(id=category_id)
        make_transient_to_detached(category)
        self.db.add(category)
        for key, value in fields.items():
            setattr(category, key, value)
        self._commit()
        logger.info("已更新分类: id=%s", category_id)

    def remove(self, category: Category) -> None:
        category_id = category.id
        self.db.delete(category)
        self._commit()
        logger.info("已删除分类: id=%s", category_id)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise


def get_category_store(db: Session = Depends(get_db)) -> CategoryStore:
    """分类存储依赖注入"""
    return CategoryStore(db)
