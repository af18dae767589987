"""Curated diet plan catalog endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from lankanutri.api.dependencies import admin_user, get_container, read_image
from lankanutri.api.schemas import parse_json_form
from lankanutri.api.serializers import program_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.programs import DietProgram

router = APIRouter(prefix="/api/diet-plans", tags=["diet-plans"])


@router.get("")
def list_programs(
    category: str | None = None, container: AppContainer = Depends(get_container)
) -> list[dict]:
    """Return active diet plans, newest first."""
    programs = container.program_service.list_programs(category)
    return [program_to_dict(program) for program in programs]


@router.get("/{program_id}")
def get_program(
    program_id: UUID, container: AppContainer = Depends(get_container)
) -> dict:
    return program_to_dict(container.program_service.get_program(program_id))


@router.post(
    "", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_user)]
)
async def create_program(  # noqa: PLR0913
    name: str = Form(min_length=1),
    category: str = Form(min_length=1),
    description: str = Form(default=""),
    duration_days: int = Form(default=7, gt=0, alias="durationDays"),
    daily_calories: int | None = Form(default=None, gt=0, alias="dailyCalories"),
    meals: str | None = Form(default=None),
    is_active: bool = Form(default=True, alias="isActive"),
    image: UploadFile | None = File(default=None),
    container: AppContainer = Depends(get_container),
) -> dict:
    program = container.program_service.create_program(
        DietProgram(
            id=None,
            name=name,
            category=category,
            description=description,
            duration_days=duration_days,
            daily_calories=daily_calories,
            meals=parse_json_form(meals, list[str], "meals") or [],
            is_active=is_active,
        ),
        image=await read_image(image, container.image_service),
    )
    return program_to_dict(program)


@router.put("/{program_id}", dependencies=[Depends(admin_user)])
async def update_program(  # noqa: PLR0913
    program_id: UUID,
    name: str | None = Form(default=None),
    category: str | None = Form(default=None),
    description: str | None = Form(default=None),
    duration_days: int | None = Form(default=None, gt=0, alias="durationDays"),
    daily_calories: int | None = Form(default=None, gt=0, alias="dailyCalories"),
    meals: str | None = Form(default=None),
    is_active: bool | None = Form(default=None, alias="isActive"),
    image: UploadFile | None = File(default=None),
    container: AppContainer = Depends(get_container),
) -> dict:
    """Apply the submitted fields to a diet plan."""
    changes = {
        key: value
        for key, value in {
            "name": name,
            "category": category,
            "description": description,
            "duration_days": duration_days,
            "daily_calories": daily_calories,
            "meals": parse_json_form(meals, list[str], "meals"),
            "is_active": is_active,
        }.items()
        if value is not None
    }
    program = container.program_service.update_program(
        program_id, changes, image=await read_image(image, container.image_service)
    )
    return program_to_dict(program)


@router.delete("/{program_id}", dependencies=[Depends(admin_user)])
def delete_program(
    program_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    container.program_service.delete_program(program_id)
    return {"message": "Diet plan removed"}
