from fastapi import APIRouter, Depends, HTTPException, status, Body
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session
from pydantic import TypeAdapter, ValidationError
from typing import Any, Dict, List

from task_priority.core.config import settings
from task_priority.core.database import get_db
from task_priority.schemas.task import Task
from task_priority.services.storage_service import get_document, put_document, CorruptDocumentError

router = APIRouter(prefix="/tasks", tags=["tasks"])

task_list_adapter = TypeAdapter(List[Task])


@router.get("")
def list_tasks(db: Session = Depends(get_db)):
    """Liste complète des tâches actives, telle que stockée"""
    try:
        return get_document(db, settings.TASK_LIST_KEY)
    except CorruptDocumentError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("", response_class=PlainTextResponse)
def replace_tasks(
    tasks: List[Dict[str, Any]] = Body(...),
    db: Session = Depends(get_db)
):
    """Remplace toute la liste (pas de mise à jour partielle)"""
    # On valide la forme mais on stocke le body tel quel
    try:
        task_list_adapter.validate_python(tasks)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False)
        )

    put_document(db, settings.TASK_LIST_KEY, tasks)
    return "saved"
