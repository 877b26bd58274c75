from alumni_backend.dto.job_dto import JobApplicationDto, JobDto
from alumni_backend.entity.job_entity import JobEntity
from alumni_backend.entity.job_application_entity import JobApplicationEntity


class JobMapper:
    """
    Mapper for converting job entities to DTOs.
    """

    def map_to_job_dto(self, entity: JobEntity) -> JobDto:
        return JobDto(
            id=entity.job_id,
            title=entity.title,
            company=entity.company,
            location=entity.location,
            type=entity.type,
            description=entity.description,
            posted_by_id=entity.posted_by_id,
            status=entity.status,
            application_count=len(entity.applications or []),
            created_at=entity.created_timestamp,
        )

    def map_to_job_dtos(self, entities: list[JobEntity]) -> list[JobDto]:
        return [self.map_to_job_dto(e) for e in entities]

    def map_to_application_dto(
        self, entity: JobApplicationEntity
    ) -> JobApplicationDto:
        return JobApplicationDto(
            applicant_id=entity.applicant_id,
            status=entity.status,
            applied_at=entity.applied_at,
        )
