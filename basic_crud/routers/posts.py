from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from basic_crud.database import get_db
from basic_crud.schemas import PostCreate, PostUpdate
from basic_crud.services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])

@router.post("", status_code=201)
async def create_post(data: PostCreate, db: AsyncSession = Depends(get_db)):
    return await post_service.create_post(db, data)

@router.get("")
async def list_posts(db: AsyncSession = Depends(get_db)):
    return await post_service.get_posts(db)

@router.get("/{post_id}")
async def get_post(post_id: int, db: AsyncSession = Depends(get_db)):
    return await post_service.get_post(db, post_id)

@router.put("/{post_id}")
async def update_post(post_id: int, data: PostUpdate, db: AsyncSession = Depends(get_db)):
    return await post_service.update_post(db, post_id, data)

@router.delete("/{post_id}")
async def delete_post(post_id: int, db: AsyncSession = Depends(get_db)):
    return await post_service.delete_post(db, post_id)
