"""JobDispatch.

A multi-tenant job dispatch service. Companies register and wait for admin
approval, then add service providers and dispatch job cards (work orders) to
them. Providers accept or decline cards, work them and complete them with
notes and photo evidence. Admins oversee companies, users and every job card.

Core subpackages
----------------

- ``jobdispatch.core``: logging, monitoring, domain errors, password and token
  helpers, SQLModel entities, repositories and API I/O schemas.
- ``jobdispatch.server``: the FastAPI application, its configuration, services
  and versioned routers.

Job card lifecycle
------------------

``pending -> accepted | declined``, ``accepted -> in_progress`` and
``in_progress -> completed``. A company may reassign a pending or declined card
to another provider, which recalls it to ``pending``.

Every state change is recorded in the activity log, which doubles as the
notification feed that dashboards poll.
"""

__version__ = "1.0.0"
