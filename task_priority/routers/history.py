from fastapi import APIRouter, Depends, HTTPException, status, Body
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from pydantic import TypeAdapter, ValidationError
from typing import Any, Dict, List

from task_priority.core.config import settings
from task_priority.core.database import get_db
from task_priority.schemas.task import CompletedTask
from task_priority.services.storage_service import get_document, put_document, CorruptDocumentError

router = APIRouter(prefix="/history", tags=["history"])

history_adapter = TypeAdapter(List[CompletedTask])


@router.get("")
def list_history(db: Session = Depends(get_db)):
    """Historique des tâches terminées, tel que stocké"""
    try:
        return get_document(db, settings.TASK_HISTORY_KEY)
    except CorruptDocumentError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("", response_class=PlainTextResponse)
def replace_history(
    history: List[Dict[str, Any]] = Body(...),
    db: Session = Depends(get_db)
):
    """Remplace tout l'historique"""
    # On valide la forme mais on stocke le body tel quel
    try:
        history_adapter.validate_python(history)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False)
        )

    put_document(db, settings.TASK_HISTORY_KEY, history)
    return "saved"
