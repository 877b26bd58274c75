from enum import Enum
from alumni_backend.common.exceptions import ForbiddenError
from alumni_backend.common.user_role import UserRole
from alumni_backend.dto.user_context_dto import UserContextDto


class AccessAction(str, Enum):
    DECIDE_MENTORSHIP = "decide_mentorship"
    CLOSE_MENTORSHIP = "close_mentorship"
    SCHEDULE_SESSION = "schedule_session"
    SUBMIT_FEEDBACK = "submit_feedback"
    REGISTER_MENTOR = "register_mentor"
    MODIFY_EVENT = "modify_event"
    POST_JOB = "post_job"
    MODIFY_JOB = "modify_job"
    MODERATE = "moderate"


class AccessPolicy:
    """
    Single place deciding whether an actor may perform an action on a record.

    Relation based rules read the participant columns of the record
    (mentor_id/mentee_id, organizer_id, posted_by_id); role based rules read the roles carried
    by the authenticated user context. Records may be None for actions that do
    not target an existing record.
    """

    def __init__(self, logger):
        self.logger = logger

    def is_allowed(
        self, actor: UserContextDto, record, action: AccessAction
    ) -> bool:
        """
        Decide whether the actor may perform the action.

        Args:
            actor (UserContextDto): The authenticated user.
            record: The targeted entity, or None.
            action (AccessAction): The requested action.

        Returns:
            bool: True when the action is allowed.
        """
        match action:
            case AccessAction.DECIDE_MENTORSHIP:
                return record is not None and record.mentor_id == actor.user_id
            case AccessAction.SUBMIT_FEEDBACK:
                return record is not None and record.mentee_id == actor.user_id
            case AccessAction.SCHEDULE_SESSION | AccessAction.CLOSE_MENTORSHIP:
                return record is not None and actor.user_id in (
                    record.mentor_id,
                    record.mentee_id,
                )
            case AccessAction.MODIFY_EVENT:
                return actor.has_role(UserRole.ADMIN) or (
                    record is not None and record.organizer_id == actor.user_id
                )
            case AccessAction.MODIFY_JOB:
                return actor.has_role(UserRole.ADMIN) or (
                    record is not None and record.posted_by_id == actor.user_id
                )
            case AccessAction.REGISTER_MENTOR | AccessAction.POST_JOB:
                return not actor.has_role(UserRole.STUDENT) or actor.has_role(
                    UserRole.ADMIN
                )
            case AccessAction.MODERATE:
                return actor.has_role(UserRole.ADMIN)
            case _:
                return False

    def ensure_allowed(
        self,
        actor: UserContextDto,
        record,
        action: AccessAction,
        message: str | None = None,
    ):
        """
        Raise ForbiddenError unless the actor may perform the action.

        Args:
            actor (UserContextDto): The authenticated user.
            record: The targeted entity, or None.
            action (AccessAction): The requested action.
            message (str | None): Client facing reason; a generic one is used when omitted.

        Raises:
            ForbiddenError: If is_allowed returns False.
        """
        if not self.is_allowed(actor, record, action):
            self.logger.warning(
                "[AccessPolicy] user %s denied %s", actor.user_id, action.value
            )
            raise ForbiddenError(
                message or f"Not authorized to {action.value.replace('_', ' ')}."
            )
