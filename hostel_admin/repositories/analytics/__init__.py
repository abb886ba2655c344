from hostel_admin.repositories.analytics.analytics_repository import AnalyticsRepository

__all__ = ["AnalyticsRepository"]
