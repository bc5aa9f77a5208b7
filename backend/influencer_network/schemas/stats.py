"""Dashboard payloads."""

from influencer_network.schemas.common import CamelModel


class DashboardStats(CamelModel):
    active_campaigns: int
    monthly_revenue: float
    active_clients: int
    invoices_sent: int
    payments_received: float
    payments_pending: float
    services_listed: int


class DashboardData(CamelModel):
    stats: DashboardStats

