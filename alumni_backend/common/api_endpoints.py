MY_ROLES = "/roles/me"

MENTORS_ENDPOINT = "/mentorship/mentors"
MENTOR_REGISTER_ENDPOINT = "/mentorship/register"
MENTORSHIP_REQUEST_ENDPOINT = "/mentorship/request"
MENTORSHIP_PENDING_REQUESTS_ENDPOINT = "/mentorship/requests"
MY_MENTORSHIPS_ENDPOINT = "/mentorship/my-mentorships"
MENTORSHIP_DECISION_ENDPOINT = "/mentorship/request/{mentorship_id}"
MENTORSHIP_STATUS_ENDPOINT = "/mentorship/{mentorship_id}/status"
MENTORSHIP_SESSION_ENDPOINT = "/mentorship/session/{mentorship_id}"
MENTORSHIP_FEEDBACK_ENDPOINT = "/mentorship/session/{mentorship_id}/feedback"

EVENTS_ENDPOINT = "/events"
EVENT_ENDPOINT = "/events/{event_id}"
EVENT_RSVP_ENDPOINT = "/events/{event_id}/rsvp"

JOBS_ENDPOINT = "/jobs"
JOB_ENDPOINT = "/jobs/{job_id}"
JOB_APPLY_ENDPOINT = "/jobs/{job_id}/apply"

ADMIN_STATS_ENDPOINT = "/admin/stats"
ADMIN_USERS_ENDPOINT = "/admin/users"
ADMIN_VERIFY_USER_ENDPOINT = "/admin/users/{target_user_id}/verify"
ADMIN_SUSPEND_USER_ENDPOINT = "/admin/users/{target_user_id}/suspend"
ADMIN_PENDING_EVENTS_ENDPOINT = "/admin/events/pending"
ADMIN_APPROVE_EVENT_ENDPOINT = "/admin/events/{event_id}/approve"
ADMIN_PENDING_JOBS_ENDPOINT = "/admin/jobs/pending"
ADMIN_APPROVE_JOB_ENDPOINT = "/admin/jobs/{job_id}/approve"

HEALTH_ENDPOINT = "/fastapi/health"
