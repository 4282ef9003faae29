"""SQLAlchemy-backed repository implementations.

Each repository issues SQL text with ``$N`` placeholders through
:func:`jobly.app.db.run_query`; dynamic ``SET`` and ``WHERE`` fragments come
from :mod:`jobly.app.utils.sql`. Instances are stateless and shared by the
route modules.
"""

from .companies_repo_sql import CompanyRepoSQL
from .jobs_repo_sql import JobRepoSQL
from .users_repo_sql import UserRepoSQL

companies = CompanyRepoSQL()
jobs = JobRepoSQL()
users = UserRepoSQL()

__all__ = ["CompanyRepoSQL", "JobRepoSQL", "UserRepoSQL", "companies", "jobs", "users"]
