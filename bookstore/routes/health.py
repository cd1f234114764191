from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlmodel import Session

from bookstore.database import get_session

router = APIRouter()


@router.get("/health")
def health(session: Session = Depends(get_session)):
    session.exec(text("SELECT 1"))
    return {"status": "ok"}
