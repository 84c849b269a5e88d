from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import name_filters, page_number
from app.models import schemas
from app.request_scope import run_service_call
from app.services.character_service import CharacterService

router = APIRouter()


@router.get("/", response_model=schemas.PaginatedResponse[schemas.Character])
async def list_characters(page: int = Depends(page_number), db: Session = Depends(get_db)):
    service = CharacterService(db)
    return await run_service_call(service.list_characters, page)


@router.get("/search", response_model=schemas.PaginatedResponse[schemas.Character])
async def search_characters(
    names: Optional[List[str]] = Depends(name_filters),
    page: int = Depends(page_number),
    db: Session = Depends(get_db),
):
    """
    Characters whose name contains any of `names[]`, case-insensitive.

    Example: `/characters/search?names[]=jim&names[]=pam`
    """
    service = CharacterService(db)
    return await run_service_call(service.search_characters, names, page)


@router.get("/random", response_model=schemas.ItemResponse[schemas.Character])
async def random_character(db: Session = Depends(get_db)):
    service = CharacterService(db)
    character = await run_service_call(service.random_character)
    return {"result": character}


@router.get("/{character_id}", response_model=schemas.ItemResponse[schemas.Character])
async def get_character(character_id: str, db: Session = Depends(get_db)):
    service = CharacterService(db)
    character = await run_service_call(service.get_character, character_id)
    return {"result": character}
