from sqlalchemy import Column, Integer, String, Text
from app.core.database import Base


class Category(Base):
    """商品分类"""
    __tablename__ = "category"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Category {self.id} {self.name}>"
