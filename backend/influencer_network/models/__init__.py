"""ORM models; importing this package registers every table on Base.metadata."""

from influencer_network.models.client import Client
from influencer_network.models.invoice import Invoice
from influencer_network.models.lead import Lead
from influencer_network.models.payment import Payment
from influencer_network.models.payment_terms import PaymentTermsTemplate
from influencer_network.models.person import Person
from influencer_network.models.project import Project
from influencer_network.models.rate_card import RateCard
from influencer_network.models.user import User

__all__ = [
    "Client",
    "Invoice",
    "Lead",
    "Payment",
    "PaymentTermsTemplate",
    "Person",
    "Project",
    "RateCard",
    "User",
]
