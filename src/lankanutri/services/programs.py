"""Curated diet plan catalog service."""

from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from lankanutri.domain.programs import DietProgram
from lankanutri.errors import NotFoundError
from lankanutri.services.storage import ImageService, ImageUpload

IMAGE_FOLDER = "diet-plans"


class DietProgramRepository(Protocol):
    """Persistence interface for curated diet plans."""

    def list_programs(
        self, category: str | None = None, active_only: bool = True
    ) -> list[DietProgram]:
        """Return programs, newest first."""

    def get(self, program_id: UUID) -> DietProgram | None:
        """Return a program by id, if present."""

    def create(self, program: DietProgram) -> DietProgram:
        """Persist a new program."""

    def update(self, program: DietProgram) -> DietProgram:
        """Persist changes to an existing program."""

    def delete(self, program_id: UUID) -> None:
        """Delete a program."""


@dataclass
class DietProgramService:
    """CRUD operations for curated diet plans."""

    repository: DietProgramRepository
    images: ImageService

    def list_programs(self, category: str | None = None) -> list[DietProgram]:
        """Return active programs."""
        return self.repository.list_programs(category=category, active_only=True)

    def get_program(self, program_id: UUID) -> DietProgram:
        program = self.repository.get(program_id)
        if program is None:
            raise NotFoundError("Diet plan")
        return program

    def create_program(
        self, program: DietProgram, image: ImageUpload | None = None
    ) -> DietProgram:
        """Create a program, uploading its image first when given."""
        url = self.images.store_optional(image, IMAGE_FOLDER)
        if url:
            program = replace(program, image=url)
        return self.repository.create(program)

    def update_program(
        self,
        program_id: UUID,
        changes: dict[str, object],
        image: ImageUpload | None = None,
    ) -> DietProgram:
        """Apply partial changes; a failed image upload leaves the record as is."""
        current = self.get_program(program_id)
        url = self.images.store_optional(image, IMAGE_FOLDER)
        if url:
            changes = {**changes, "image": url}
        return self.repository.update(replace(current, **changes))

    def delete_program(self, program_id: UUID) -> None:
        self.get_program(program_id)
        self.repository.delete(program_id)
