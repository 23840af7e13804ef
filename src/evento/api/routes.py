"""HTTP routes. Thin pass-throughs to the registry and services."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST

from evento.components.registry import ComponentRegistry
from evento.core.errors import NotFound, UnknownComponentType
from evento.core.json import safe_json_dumps
from evento.document.models import TemplateCategory, TemplateStatus
from evento.instances.models import InstanceStatus
from evento.monitoring.metrics import MetricsCollector
from evento.services.rendering import RenderService
from evento.services.templates import TemplateService
from evento.storage.protocol import TemplateQuery

from .schemas import InstanceResponse, PreviewRequest, RenderRequest, TemplateListResponse

router = APIRouter()


# ============================================================================
# Dependencies
# ============================================================================


def get_registry(request: Request) -> ComponentRegistry:
    return request.app.state.container.get(ComponentRegistry)


def get_template_service(request: Request) -> TemplateService:
    return request.app.state.container.get(TemplateService)


def get_render_service(request: Request) -> RenderService:
    return request.app.state.container.get(RenderService)


def get_metrics(request: Request) -> MetricsCollector:
    return request.app.state.container.get(MetricsCollector)


# ============================================================================
# System
# ============================================================================


@router.get("/health")
async def health(
    registry: ComponentRegistry = Depends(get_registry),
    templates: TemplateService = Depends(get_template_service),
) -> dict[str, Any]:
    return {
        "status": "healthy",
        "components": len(registry),
        "templates": templates.templates.count(),
    }


@router.get("/metrics")
async def metrics(collector: MetricsCollector = Depends(get_metrics)) -> Response:
    return Response(content=collector.get_metrics(), media_type=CONTENT_TYPE_LATEST)


# ============================================================================
# Components (read-only registry queries)
# ============================================================================


@router.get("/components")
async def list_components(
    category: str | None = None,
    registry: ComponentRegistry = Depends(get_registry),
) -> dict[str, Any]:
    schemas = registry.list_by_category(category) if category else registry.list_all()
    return {"components": [schema.to_dict() for schema in schemas]}


@router.get("/components/categories")
async def list_categories(registry: ComponentRegistry = Depends(get_registry)) -> dict[str, Any]:
    return {"categories": registry.list_categories()}


@router.get("/components/{component_type}")
async def get_component(component_type: str, registry: ComponentRegistry = Depends(get_registry)) -> dict[str, Any]:
    try:
        return registry.get(component_type).to_dict()
    except UnknownComponentType:
        raise NotFound("component", component_type) from None


# ============================================================================
# Templates
# ============================================================================


@router.post("/templates", status_code=201)
async def create_template(
    document: dict[str, Any] = Body(...),
    service: TemplateService = Depends(get_template_service),
) -> dict[str, Any]:
    return service.create(document).to_wire()


@router.get("/templates")
async def list_templates(
    status: TemplateStatus | None = None,
    category: TemplateCategory | None = None,
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    service: TemplateService = Depends(get_template_service),
) -> dict[str, Any]:
    query = TemplateQuery(status=status, category=category, search=search, page=page, limit=limit)
    return TemplateListResponse.from_page(service.list_templates(query)).model_dump(by_alias=True)


@router.get("/templates/published")
async def list_published_templates(
    category: TemplateCategory | None = None,
    search: str | None = None,
    service: TemplateService = Depends(get_template_service),
) -> dict[str, Any]:
    query = TemplateQuery(status=TemplateStatus.PUBLISHED, category=category, search=search, limit=100)
    return {"templates": [t.to_wire() for t in service.list_templates(query).items]}


@router.post("/templates/validate")
async def validate_template(
    document: dict[str, Any] = Body(...),
    service: TemplateService = Depends(get_template_service),
) -> dict[str, Any]:
    return service.validate_document(document).to_dict()


@router.get("/templates/{template_id}")
async def get_template(template_id: str, service: TemplateService = Depends(get_template_service)) -> dict[str, Any]:
    return service.get(template_id).to_wire()


@router.put("/templates/{template_id}")
async def update_template(
    template_id: str,
    document: dict[str, Any] = Body(...),
    service: TemplateService = Depends(get_template_service),
    renderer: RenderService = Depends(get_render_service),
) -> dict[str, Any]:
    updated = service.update(template_id, document)
    renderer.invalidate(template_id)
    return updated.to_wire()


@router.delete("/templates/{template_id}")
async def delete_template(
    template_id: str,
    service: TemplateService = Depends(get_template_service),
    renderer: RenderService = Depends(get_render_service),
) -> dict[str, Any]:
    removed = service.delete(template_id)
    renderer.invalidate(template_id)
    return {"message": "Template deleted successfully", "instancesDeleted": removed}


@router.post("/templates/{template_id}/duplicate", status_code=201)
async def duplicate_template(
    template_id: str, service: TemplateService = Depends(get_template_service)
) -> dict[str, Any]:
    return service.duplicate(template_id).to_wire()


@router.post("/templates/{template_id}/publish")
async def publish_template(template_id: str, service: TemplateService = Depends(get_template_service)) -> dict[str, Any]:
    return service.publish(template_id).to_wire()


@router.post("/templates/{template_id}/unpublish")
async def unpublish_template(
    template_id: str, service: TemplateService = Depends(get_template_service)
) -> dict[str, Any]:
    return service.unpublish(template_id).to_wire()


@router.post("/templates/{template_id}/archive")
async def archive_template(template_id: str, service: TemplateService = Depends(get_template_service)) -> dict[str, Any]:
    return service.archive(template_id).to_wire()


@router.get("/templates/{template_id}/bindings")
async def template_bindings(
    template_id: str, service: TemplateService = Depends(get_template_service)
) -> dict[str, Any]:
    return {
        "templateId": template_id,
        "bindings": service.bindings(template_id),
        "nodes": service.node_bindings(template_id),
    }


@router.post("/templates/{template_id}/preview")
async def preview_template(
    template_id: str,
    body: PreviewRequest | None = None,
    service: RenderService = Depends(get_render_service),
) -> dict[str, Any]:
    body = body or PreviewRequest()
    tree = service.preview(template_id, body.preview_name, body.data)
    return {"templateId": template_id, "renderedOutput": tree.to_dict()}


# ============================================================================
# Instances
# ============================================================================


@router.post("/templates/{template_id}/instances", status_code=201)
async def create_instance(
    template_id: str,
    body: RenderRequest,
    service: RenderService = Depends(get_render_service),
) -> Any:
    instance = service.render(template_id, body.data)
    response = InstanceResponse.from_instance(instance).to_json()

    if instance.status is InstanceStatus.ERROR:
        message = instance.error.message if instance.error else "Rendering failed"
        return JSONResponse(status_code=422, content={"error": message, "instance": response})
    return response


@router.get("/instances/{instance_id}")
async def get_instance(instance_id: str, service: RenderService = Depends(get_render_service)) -> dict[str, Any]:
    return InstanceResponse.from_instance(service.get_instance(instance_id)).to_json()


@router.get("/instances/{instance_id}/export")
async def export_instance(instance_id: str, service: RenderService = Depends(get_render_service)) -> Response:
    filename, document = service.export(instance_id)
    return Response(
        content=safe_json_dumps(document, indent=2),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


__all__ = ["router"]
