from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# id 列按 32 位有符号整数处理，超出范围的值在绑定阶段拒绝
CATEGORY_ID_MIN = -(2 ** 31)
CATEGORY_ID_MAX = 2 ** 31 - 1


class CategoryBase(BaseModel):
    """分类的公共字段"""
    id: Optional[int] = Field(default=None, ge=CATEGORY_ID_MIN, le=CATEGORY_ID_MAX)
    name: str
    description: Optional[str] = None


class CategoryCreate(CategoryBase):
    """创建分类的请求（id 由数据库分配，请求里的值会被忽略）"""


class CategoryReplace(CategoryBase):
    """整体替换分类的请求，id 必须与路径一致"""

    def fields(self) -> dict:
        """除 id 外的全部字段，未提供的按 None 写入"""
        return self.model_dump(exclude={"id"})


class CategoryResponse(BaseModel):
    """分类响应"""
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
