# 📄 File: app/modules/admin/presentation/api/v1/admin.py
# 🧭 Purpose (Layman Explanation):
# The admin's control room: the overview page, the list of everyone with an account,
# suspending or reactivating accounts, and sales reports.
# 🧪 Purpose (Technical Summary):
# FastAPI router for admin-only reporting and user administration. Every route depends
# on get_current_admin_user.
# 🔗 Dependencies:
# FastAPI, DashboardService, UserService, app.shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# app.api.v1.router (mounted at /api/admin)

"""
Admin API Endpoints

- GET /dashboard: Marketplace counts and delivered revenue
- GET /users: Filtered, paginated user list
- PUT /users/{user_id}/status: Suspend or reactivate an account
- GET /reports: Revenue, status mix and top performers for a date window
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from app.modules.admin.domain.services.dashboard_service import DashboardService
from app.modules.admin.presentation.api.schemas.admin_schemas import (
    ReportResponse,
    UserListResponse,
    UserStatusUpdateRequest,
)
from app.modules.admin.presentation.api.schemas.dashboard_schemas import DashboardResponse
from app.modules.user_management.domain.models.user import UserRole, UserStatus
from app.modules.user_management.domain.services.user_service import UserService
from app.modules.user_management.presentation.api.schemas.auth_schemas import UserResponse
from app.shared.core.dependencies import (
    CurrentUser,
    PaginationParams,
    get_current_admin_user,
    get_pagination_params,
)
from app.shared.utils.helpers import total_pages

logger = logging.getLogger(__name__)

admin_router = APIRouter()


@admin_router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Marketplace overview (admin)",
)
async def get_dashboard(
    current_user: CurrentUser = Depends(get_current_admin_user),
    dashboard_service: DashboardService = Depends(),
) -> DashboardResponse:
    summary = await dashboard_service.get_dashboard()
    return DashboardResponse.from_summary(summary)


@admin_router.get(
    "/users",
    response_model=UserListResponse,
    summary="List users (admin)",
)
async def list_users(
    role: Optional[UserRole] = Query(None),
    user_status: Optional[UserStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, max_length=100, description="Matches name, email or phone"),
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> UserListResponse:
    users, total = await user_service.list_users(
        role=role,
        status=user_status,
        search=search,
        offset=pagination.offset,
        limit=pagination.limit,
    )
    return UserListResponse(
        items=[UserResponse.from_domain(u) for u in users],
        total=total,
        page=pagination.page,
        pages=total_pages(total, pagination.limit),
    )


@admin_router.put(
    "/users/{user_id}/status",
    response_model=UserResponse,
    summary="Suspend or reactivate a user (admin)",
    responses={
        400: {"description": "Unsupported status or the admin's own account"},
        404: {"description": "User not found"},
    },
)
async def update_user_status(
    payload: UserStatusUpdateRequest,
    user_id: str = Path(...),
    current_user: CurrentUser = Depends(get_current_admin_user),
    user_service: UserService = Depends(),
) -> UserResponse:
    user = await user_service.update_user_status(
        user_id,
        UserStatus(payload.status),
        updated_by=current_user.user_id,
    )
    return UserResponse.from_domain(user)


@admin_router.get(
    "/reports",
    response_model=ReportResponse,
    summary="Platform report (admin)",
)
async def get_reports(
    start_date: Optional[datetime] = Query(None, description="Orders created at or after this time"),
    end_date: Optional[datetime] = Query(None, description="Orders created at or before this time"),
    current_user: CurrentUser = Depends(get_current_admin_user),
    dashboard_service: DashboardService = Depends(),
) -> ReportResponse:
    report = await dashboard_service.get_report(start_date, end_date)
    return ReportResponse.from_report(report)
