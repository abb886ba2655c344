# hostel_admin/api/v1/analytics.py
"""
Read-only reporting endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hostel_admin.api import deps
from hostel_admin.api.responses import render
from hostel_admin.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics & Reporting"])


@router.get("/categories", summary="Complaint counts per category")
def category_breakdown(service: AnalyticsService = Depends(deps.get_analytics_service)):
    return render(service.category_breakdown())


@router.get("/rooms", summary="Occupancy and complaints per room")
def room_summary(
    hostel_id: Optional[int] = Query(None),
    service: AnalyticsService = Depends(deps.get_analytics_service),
):
    return render(service.room_summary(hostel_id))


@router.get("/hostels", summary="Occupancy and complaints per hostel")
def hostel_summary(service: AnalyticsService = Depends(deps.get_analytics_service)):
    return render(service.hostel_summary())


@router.get("/resolution", summary="Resolution times and SLA compliance")
def resolution_stats(
    hostel_id: Optional[int] = Query(None),
    days: Optional[int] = Query(None, description="Window size in days"),
    service: AnalyticsService = Depends(deps.get_analytics_service),
):
    return render(service.resolution_stats(hostel_id=hostel_id, days=days))


@router.get("/trends", summary="Monthly complaint trends")
def monthly_trends(
    months: Optional[int] = Query(None, description="Number of months, newest first"),
    service: AnalyticsService = Depends(deps.get_analytics_service),
):
    return render(service.monthly_trends(months))


@router.get("/staff", summary="Maintenance staff workload")
def staff_workload(service: AnalyticsService = Depends(deps.get_analytics_service)):
    return render(service.staff_workload())
