from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import page_number, search_filters
from app.models import schemas
from app.request_scope import run_service_call
from app.services.conversation_service import ConversationService

router = APIRouter()


@router.get("/", response_model=schemas.PaginatedResponse[schemas.Conversation])
async def list_conversations(page: int = Depends(page_number), db: Session = Depends(get_db)):
    service = ConversationService(db)
    return await run_service_call(service.list_conversations, page)


@router.get("/search", response_model=schemas.PaginatedResponse[schemas.Conversation])
async def search_conversations(
    filters: schemas.SearchFilters = Depends(search_filters),
    page: int = Depends(page_number),
    db: Session = Depends(get_db),
):
    """
    Search conversations by character name, quote text, season and episode number.

    A conversation matches names[]/quotes[] when one of its quotes matches
    them, and seasons[]/episodes[] when its episode does.
    """
    service = ConversationService(db)
    return await run_service_call(service.search_conversations, filters, page)


@router.get("/random", response_model=schemas.ItemResponse[schemas.Conversation])
async def random_conversation(db: Session = Depends(get_db)):
    service = ConversationService(db)
    conversation = await run_service_call(service.random_conversation)
    return {"result": conversation}


@router.get("/{conversation_id}", response_model=schemas.ItemResponse[schemas.Conversation])
async def get_conversation(conversation_id: str, db: Session = Depends(get_db)):
    service = ConversationService(db)
    conversation = await run_service_call(service.get_conversation, conversation_id)
    return {"result": conversation}
