import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response, status
from sqlalchemy.orm.exc import StaleDataError

from app.models import Category
from app.schemas.category import (
    CATEGORY_ID_MAX,
    CATEGORY_ID_MIN,
    CategoryCreate,
    CategoryReplace,
    CategoryResponse,
)
from app.services.category_store import CategoryStore, get_category_store

logger = logging.getLogger(__name__)

router = APIRouter()

CategoryId = Annotated[int, Path(ge=CATEGORY_ID_MIN, le=CATEGORY_ID_MAX)]


@router.get("", response_model=list[CategoryResponse])
async def get_categories(store: CategoryStore = Depends(get_category_store)):
    """获取全部分类（按 id 升序）"""
    return store.list_all()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: CategoryId, store: CategoryStore = Depends(get_category_store)):
    """获取单个分类"""
    category = store.find(category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="分类不存在")
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
async def replace_category(
    category_id: CategoryId,
    data: CategoryReplace,
    store: CategoryStore = Depends(get_category_store),
):
    """整体替换分类（请求体中的 id 必须与路径一致）"""
    if data.id != category_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="请求体 id 与路径 id 不一致")

    fields = data.fields()
    try:
        store.replace(category_id, fields)
    except StaleDataError:
        # UPDATE 没有命中行：记录已被其他请求删除则返回 404，否则原样抛出
        if not store.exists(category_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="分类不存在")
        logger.warning("更新分类发生并发冲突: id=%s", category_id)
        raise

    return CategoryResponse(id=category_id, **fields)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    request: Request,
    response: Response,
    store: CategoryStore = Depends(get_category_store),
):
    """创建分类，id 由数据库分配"""
    category = store.add(Category(name=data.name, description=data.description))
    response.headers["Location"] = str(request.url_for("get_category", category_id=category.id))
    return category


@router.delete("/{category_id}", response_model=CategoryResponse)
async def delete_category(category_id: CategoryId, store: CategoryStore = Depends(get_category_store)):
    """删除分类，返回被删除前的内容"""
    category = store.find(category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="分类不存在")

    deleted = CategoryResponse.model_validate(category)
    store.remove(category)
    return deleted
