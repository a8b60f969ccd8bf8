"""Project, status and priority endpoints."""

from fastapi import APIRouter, status

from ticketsmith.api.dependencies import StoreDep
from ticketsmith.api.models import (
    APIResponse,
    PriorityCreate,
    PriorityResponse,
    ProjectCreate,
    ProjectResponse,
    StatusCreate,
    StatusResponse,
)

router = APIRouter(tags=["projects"])


@router.get("/projects", response_model=APIResponse[list[ProjectResponse]])
def list_projects(store: StoreDep) -> APIResponse[list[ProjectResponse]]:
    """List all projects."""
    projects = store.list_projects()
    return APIResponse(data=[ProjectResponse.model_validate(p) for p in projects])


@router.post(
    "/projects",
    response_model=APIResponse[ProjectResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_project(project: ProjectCreate, store: StoreDep) -> APIResponse[ProjectResponse]:
    """Create a project, seeding its default workflow metadata unless disabled."""
    created = store.create_project(name=project.name, description=project.description)
    if project.seed_defaults:
        store.seed_defaults(created.id)
    return APIResponse(data=ProjectResponse.model_validate(created))


@router.get("/projects/{project_id}", response_model=APIResponse[ProjectResponse])
def get_project(project_id: int, store: StoreDep) -> APIResponse[ProjectResponse]:
    """Get a project by ID."""
    return APIResponse(data=ProjectResponse.model_validate(store.get_project(project_id)))


@router.delete("/projects/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, store: StoreDep) -> None:
    """Delete a project with its statuses and tickets."""
    store.delete_project(project_id)


@router.get(
    "/projects/{project_id}/statuses", response_model=APIResponse[list[StatusResponse]]
)
def list_statuses(project_id: int, store: StoreDep) -> APIResponse[list[StatusResponse]]:
    """List a project's ticket statuses."""
    store.get_project(project_id)
    statuses = store.list_statuses(project_id)
    return APIResponse(data=[StatusResponse.model_validate(s) for s in statuses])


@router.post(
    "/projects/{project_id}/statuses",
    response_model=APIResponse[StatusResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_status(
    project_id: int, body: StatusCreate, store: StoreDep
) -> APIResponse[StatusResponse]:
    """Add a ticket status to a project."""
    created = store.create_status(
        project_id,
        name=body.name,
        sort_order=body.sort_order,
        color=body.color,
        is_completed=body.is_completed,
    )
    return APIResponse(data=StatusResponse.model_validate(created))


@router.get("/priorities", response_model=APIResponse[list[PriorityResponse]])
def list_priorities(store: StoreDep) -> APIResponse[list[PriorityResponse]]:
    """List all ticket priorities."""
    return APIResponse(
        data=[PriorityResponse.model_validate(p) for p in store.list_priorities()]
    )


@router.post(
    "/priorities",
    response_model=APIResponse[PriorityResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_priority(body: PriorityCreate, store: StoreDep) -> APIResponse[PriorityResponse]:
    """Create a global ticket priority."""
    created = store.create_priority(name=body.name, color=body.color)
    return APIResponse(data=PriorityResponse.model_validate(created))
