from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import page_number, search_filters
from app.models import schemas
from app.request_scope import run_service_call
from app.services.quote_service import QuoteService

router = APIRouter()


@router.get("/", response_model=schemas.PaginatedResponse[schemas.Quote])
async def list_quotes(page: int = Depends(page_number), db: Session = Depends(get_db)):
    service = QuoteService(db)
    return await run_service_call(service.list_quotes, page)


@router.get("/search", response_model=schemas.PaginatedResponse[schemas.Quote])
async def search_quotes(
    filters: schemas.SearchFilters = Depends(search_filters),
    page: int = Depends(page_number),
    db: Session = Depends(get_db),
):
    """
    Search quotes by character name, quote text, season and episode number.

    Every parameter is optional and repeatable; values of one parameter are
    OR-ed, different parameters are AND-ed.

    Example: `/quotes/search?names[]=dwight&quotes[]=beet&seasons[]=3`
    """
    service = QuoteService(db)
    return await run_service_call(service.search_quotes, filters, page)


@router.get("/random", response_model=schemas.ItemResponse[schemas.Quote])
async def random_quote(db: Session = Depends(get_db)):
    service = QuoteService(db)
    quote = await run_service_call(service.random_quote)
    return {"result": quote}


@router.get("/{quote_id}", response_model=schemas.ItemResponse[schemas.Quote])
async def get_quote(quote_id: str, db: Session = Depends(get_db)):
    service = QuoteService(db)
    quote = await run_service_call(service.get_quote, quote_id)
    return {"result": quote}
