from alumni_backend.dto.base_request_dto import BaseRequestDto


class ApprovalCreateDto(BaseRequestDto):
    approve: bool


class SuspendCreateDto(BaseRequestDto):
    suspend: bool
