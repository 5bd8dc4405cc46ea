from .job import Job, JOB_STATUSES
