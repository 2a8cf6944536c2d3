"""Routes to manage the report templates of a workspace."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.application.use_cases.templates import (
    NewReportTemplateData,
    TemplateFilters,
    can_access_template,
    clone_template as clone_template_uc,
    create_default_field as create_default_field_uc,
    create_template as create_template_uc,
    delete_template as delete_template_uc,
    get_department_usage as get_department_usage_uc,
    get_template as get_template_uc,
    get_template_statistics as get_template_statistics_uc,
    list_available_departments as list_available_departments_uc,
    list_template_categories as list_template_categories_uc,
    list_templates as list_templates_uc,
    list_templates_for_user as list_templates_for_user_uc,
    record_template_usage as record_template_usage_uc,
    update_template as update_template_uc,
    update_template_department_access as update_template_department_access_uc,
)
from app.domain.entities import Actor, ReportTemplate
from app.domain.exceptions import NotFoundError, PersistenceError, ValidationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_actor, require_admin
from app.interfaces.api.schemas import (
    DepartmentAccessSchema,
    DepartmentUsageRead,
    TemplateClone,
    TemplateCreate,
    TemplateFieldSchema,
    TemplateRead,
    TemplateStatisticsRead,
    TemplateUpdate,
    TemplateUsageRead,
    TemplateUsageRecord,
)

router = APIRouter(prefix="/workspaces/{workspace_id}/templates", tags=["templates"])


def _template_to_read_model(template: ReportTemplate) -> TemplateRead:
    return TemplateRead.model_validate(template)


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict())
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PersistenceError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


def _filters(
    status_filter: str | None = Query(default=None, alias="status"),
    category: str | None = Query(default=None),
    order_by: str = Query(default="updated_at"),
    direction: str = Query(default="desc"),
    limit: int | None = Query(default=None, ge=1),
) -> TemplateFilters:
    return TemplateFilters(
        status=status_filter,
        category=category,
        order_by=order_by,
        direction=direction,
        limit=limit,
    )


@router.post("/", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def register_template(
    workspace_id: str,
    template_in: TemplateCreate,
    db: Session = Depends(get_db),
    current_actor: Actor = Depends(require_admin),
) -> TemplateRead:
    """Create a new report template in the workspace."""

    data = NewReportTemplateData(
        name=template_in.name,
        fields=[field.to_entity() for field in template_in.fields],
        description=template_in.description,
        category=template_in.category,
        department=template_in.department,
        tags=template_in.tags,
        visibility=template_in.visibility,
        allowed_roles=template_in.allowed_roles,
        allowed_departments=template_in.allowed_departments,
        department_access=(
            template_in.department_access.to_entity()
            if template_in.department_access is not None
            else None
        ),
        settings=template_in.settings,
        status=template_in.status,
    )
    try:
        template = create_template_uc(
            db, workspace_id=workspace_id, data=data, created_by=current_actor.id
        )
    except (ValidationError, PersistenceError) as exc:
        raise _http_error(exc) from exc

    return _template_to_read_model(template)


@router.get("/", response_model=list[TemplateRead])
def list_templates(
    workspace_id: str,
    filters: TemplateFilters = Depends(_filters),
    db: Session = Depends(get_db),
    _: Actor = Depends(require_admin),
) -> list[TemplateRead]:
    """List every template of the workspace."""

    try:
        templates = list_templates_uc(db, workspace_id=workspace_id, filters=filters)
    except (ValueError, PersistenceError) as exc:
        raise _http_error(exc) from exc
    return [_template_to_read_model(template) for template in templates]


@router.get("/available", response_model=list[TemplateRead])
def list_available_templates(
    workspace_id: str,
    filters: TemplateFilters = Depends(_filters),
    db: Session = Depends(get_db),
    current_actor: Actor = Depends(get_current_actor),
) -> list[TemplateRead]:
    """List the templates the caller may use to file reports."""

    try:
        templates = list_templates_for_user_uc(
            db,
            workspace_id=workspace_id,
            user_department=current_actor.department,
            user_role=current_actor.role,
            filters=filters,
        )
    except (ValueError, PersistenceError) as exc:
        raise _http_error(exc) from exc
    return [_template_to_read_model(template) for template in templates]


@router.get("/statistics", response_model=TemplateStatisticsRead)
def read_template_statistics(
    workspace_id: str,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_admin),
) -> TemplateStatisticsRead:
    try:
        statistics = get_template_statistics_uc(db, workspace_id=workspace_id)
    except PersistenceError as exc:
        raise _http_error(exc) from exc
    return TemplateStatisticsRead.model_validate(statistics)


@router.get("/categories", response_model=list[str])
def list_categories(
    workspace_id: str,
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_actor),
) -> list[str]:
    try:
        return list_template_categories_uc(db, workspace_id=workspace_id)
    except PersistenceError as exc:
        raise _http_error(exc) from exc


@router.get("/departments", response_model=list[str])
def list_departments(
    workspace_id: str,
    db: Session = Depends(get_db),
    _: Actor = Depends(get_current_actor),
) -> list[str]:
    return list_available_departments_uc(db, workspace_id=workspace_id)


@router.get("/field-defaults/{field_type}", response_model=TemplateFieldSchema)
def read_field_defaults(
    workspace_id: str,
    field_type: str,
    order: int = Query(default=0, ge=0),
    _: Actor = Depends(require_admin),
) -> TemplateFieldSchema:
    """Return a new field draft of ``field_type`` with its default settings."""

    try:
        field = create_default_field_uc(field_type, order=order)
    except ValidationError as exc:
        raise _http_error(exc) from exc
    return TemplateFieldSchema.model_validate(field)


@router.get("/{template_id}", response_model=TemplateRead)
def read_template(
    workspace_id: str,
    template_id: int,
    db: Session = Depends(get_db),
    current_actor: Actor = Depends(get_current_actor),
) -> TemplateRead:
    """Return a template; members only see the ones their department may use."""

    try:
        template = get_template_uc(db, workspace_id=workspace_id, template_id=template_id)
    except (NotFoundError, PersistenceError) as exc:
        raise _http_error(exc) from exc

    if not can_access_template(template, current_actor.department, current_actor.role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Template not available for your department",
        )
    return _template_to_read_model(template)


@router.patch("/{template_id}", response_model=TemplateRead)
def update_template(
    workspace_id: str,
    template_id: int,
    template_in: TemplateUpdate,
    db: Session = Depends(get_db),
    current_actor: Actor = Depends(require_admin),
) -> TemplateRead:
    """Apply a partial update; structural changes bump the version."""

    updates = template_in.model_dump(exclude_unset=True)
    updates.update(template_in.model_extra or {})
    if template_in.fields is not None:
        updates["fields"] = [field.to_entity() for field in template_in.fields]
    if "department_access" in updates:
        updates["department_access"] = (
            template_in.department_access.to_entity()
            if template_in.department_access is not None
            else None
        )

    try:
        template = update_template_uc(
            db,
            workspace_id=workspace_id,
            template_id=template_id,
            updates=updates,
            updated_by=current_actor.id,
        )
    except (ValidationError, NotFoundError, PersistenceError) as exc:
        raise _http_error(exc) from exc
    return _template_to_read_model(template)


@router.put("/{template_id}/department-access", response_model=TemplateRead)
def replace_department_access(
    workspace_id: str,
    template_id: int,
    access_in: DepartmentAccessSchema,
    db: Session = Depends(get_db),
    current_actor: Actor = Depends(require_admin),
) -> TemplateRead:
    try:
        template = update_template_department_access_uc(
            db,
            workspace_id=workspace_id,
            template_id=template_id,
            department_access=access_in.to_entity(),
            updated_by=current_actor.id,
        )
    except (ValidationError, NotFoundError, PersistenceError) as exc:
        raise _http_error(exc) from exc
    return _template_to_read_model(template)


@router.delete("/{template_id}", response_model=None)
def delete_template(
    workspace_id: str,
    template_id: int,
    db: Session = Depends(get_db),
    current_actor: Actor = Depends(require_admin),
) -> TemplateRead | Response:
    """Delete a template; templates with filed reports are archived instead."""

    try:
        archived = delete_template_uc(
            db,
            workspace_id=workspace_id,
            template_id=template_id,
            deleted_by=current_actor.id,
        )
    except (ValidationError, NotFoundError, PersistenceError) as exc:
        raise _http_error(exc) from exc

    if archived is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return _template_to_read_model(archived)


@router.post(
    "/{template_id}/clone",
    response_model=TemplateRead,
    status_code=status.HTTP_201_CREATED,
)
def clone_template(
    workspace_id: str,
    template_id: int,
    payload: TemplateClone,
    db: Session = Depends(get_db),
    current_actor: Actor = Depends(require_admin),
) -> TemplateRead:
    """Copy a template into a new draft."""

    try:
        template = clone_template_uc(
            db,
            workspace_id=workspace_id,
            template_id=template_id,
            new_name=payload.name,
            cloned_by=current_actor.id,
        )
    except (ValidationError, NotFoundError, PersistenceError) as exc:
        raise _http_error(exc) from exc
    return _template_to_read_model(template)


@router.post("/{template_id}/usage", response_model=TemplateUsageRead)
def record_usage(
    workspace_id: str,
    template_id: int,
    payload: TemplateUsageRecord,
    db: Session = Depends(get_db),
    current_actor: Actor = Depends(get_current_actor),
) -> TemplateUsageRead:
    """Count a report transition; the caller's department is used when none is sent."""

    try:
        usage = record_template_usage_uc(
            db,
            workspace_id=workspace_id,
            template_id=template_id,
            status=payload.status,
            department=payload.department or current_actor.department,
        )
    except (ValidationError, NotFoundError, PersistenceError) as exc:
        raise _http_error(exc) from exc
    return TemplateUsageRead.model_validate(usage)


@router.get("/{template_id}/department-usage", response_model=list[DepartmentUsageRead])
def read_department_usage(
    workspace_id: str,
    template_id: int,
    db: Session = Depends(get_db),
    _: Actor = Depends(require_admin),
) -> list[DepartmentUsageRead]:
    try:
        entries = get_department_usage_uc(
            db, workspace_id=workspace_id, template_id=template_id
        )
    except (NotFoundError, PersistenceError) as exc:
        raise _http_error(exc) from exc
    return [DepartmentUsageRead.model_validate(entry) for entry in entries]
