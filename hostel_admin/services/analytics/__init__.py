from hostel_admin.services.analytics.analytics_service import AnalyticsService

__all__ = ["AnalyticsService"]
