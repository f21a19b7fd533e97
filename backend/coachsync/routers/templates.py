from fastapi import APIRouter, Depends, HTTPException, Query, status
from coachsync.deps.auth import STAFF_ROLES, get_current_user, require_role
from coachsync.deps.store import get_store
from coachsync.schemas.workout import WorkoutTemplate
from coachsync.store import LocalEntityStore

router = APIRouter(prefix="/templates", tags=["templates"], dependencies=[Depends(get_current_user)])

@router.get("", response_model=list[WorkoutTemplate])
async def list_templates(
    store: LocalEntityStore = Depends(get_store),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    page = await store.templates.page(limit=limit, offset=offset)
    return page.items

@router.get("/{template_id}", response_model=WorkoutTemplate)
async def get_template(template_id: str, store: LocalEntityStore = Depends(get_store)):
    template = await store.get_template(template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template

@router.put("/{template_id}", response_model=WorkoutTemplate,
            dependencies=[Depends(require_role(*STAFF_ROLES))])
async def save_template(template_id: str, payload: WorkoutTemplate, store: LocalEntityStore = Depends(get_store)):
    if payload.id != template_id:
        raise HTTPException(status_code=400, detail="id does not match path")
    await store.save_template(payload)
    return payload

@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_role(*STAFF_ROLES))])
async def delete_template(template_id: str, store: LocalEntityStore = Depends(get_store)):
    await store.delete_template(template_id)
