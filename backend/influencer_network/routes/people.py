"""Influencer roster endpoints: /api/people."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.enums import AvailabilityStatus, PersonStatus
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.schemas.person import PersonCreate, PersonData, PersonResponse, PersonUpdate
from influencer_network.services.person_service import person_service
from influencer_network.services.query import PaginationParams, parse_csv

router = APIRouter(
    prefix="/api/people",
    tags=["People"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


def person_envelope(person, message: str) -> ApiResponse[PersonData]:
    return ApiResponse[PersonData](message=message, data=PersonData(person=PersonResponse.model_validate(person)))


@router.get("", response_model=PaginatedResponse[PersonResponse], summary="List people")
async def list_people(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    status: Optional[PersonStatus] = Query(default=None),
    availability_status: Optional[AvailabilityStatus] = Query(default=None, alias="availabilityStatus"),
    tags: Optional[str] = Query(default=None, description="Comma-separated; matches any"),
    assigned_to: Optional[UUID] = Query(default=None, alias="assignedTo"),
    search: Optional[str] = Query(default=None, description="Matches name, email or bios"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[PersonResponse]:
    people, total = await person_service.list_people(
        db,
        params,
        status=status.value if status else None,
        availability_status=availability_status.value if availability_status else None,
        tags=parse_csv(tags),
        assigned_to=assigned_to,
        search=search,
    )
    return paginated(response, people, total, params, "People retrieved successfully", PersonResponse)


@router.get("/{person_id}", response_model=ApiResponse[PersonData], summary="Get a person")
async def get_person(person_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[PersonData]:
    return person_envelope(await person_service.get_person(db, person_id), "Person retrieved successfully")


@router.post("", status_code=201, response_model=ApiResponse[PersonData], summary="Add a person")
async def create_person(
    body: PersonCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PersonData]:
    person = await person_service.create_person(db, body, assigned_to=user.id)
    return person_envelope(person, "Person created successfully")


@router.patch("/{person_id}", response_model=ApiResponse[PersonData], summary="Update a person")
async def update_person(
    person_id: UUID,
    body: PersonUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PersonData]:
    return person_envelope(await person_service.update_person(db, person_id, body), "Person updated successfully")


@router.delete("/{person_id}", response_model=ApiResponse[None], summary="Delete a person")
async def delete_person(person_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[None]:
    await person_service.delete_person(db, person_id)
    return ApiResponse[None](message="Person deleted successfully")
