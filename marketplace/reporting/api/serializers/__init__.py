from .report_serializers import DashboardStatsSerializer, TopSellingProductSerializer


__all__ = ["DashboardStatsSerializer", "TopSellingProductSerializer"]
