"""
Enumerations shared by the ORM models and the API schemas.

Columns store the `.value` strings; schemas validate against these classes.
"""

from enum import Enum


class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"
    INFLUENCER = "influencer"
    BRAND = "brand"
    AGENCY = "agency"


# ── Leads ─────────────────────────────────────────────────────────────────
class LeadType(str, Enum):
    FASHION = "Fashion"
    TECH = "Tech"
    FMCG = "FMCG"
    LIFESTYLE = "Lifestyle"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    FINANCE = "Finance"
    REAL_ESTATE = "Real Estate"


class LeadSource(str, Enum):
    MANUAL = "Manual"
    REFERRAL = "Referral"
    DISCOVERY = "Discovery"
    INBOUND = "Inbound"
    SOCIAL_MEDIA = "Social Media"
    WEBSITE = "Website"
    COLD_OUTREACH = "Cold Outreach"


class LeadStatus(str, Enum):
    NEW = "New"
    CONTACTED = "Contacted"
    PROPOSAL_SENT = "Proposal Sent"
    NEGOTIATION = "Negotiation"
    WON = "Won"
    LOST = "Lost"


class BudgetRange(str, Enum):
    UP_TO_25K = "₹5,000 – ₹25,000"
    UP_TO_50K = "₹25,000 – ₹50,000"
    UP_TO_1L = "₹50,000 – ₹1,00,000"
    UP_TO_2_5L = "₹1,00,000 – ₹2,50,000"
    UP_TO_5L = "₹2,50,000 – ₹5,00,000"
    ABOVE_5L = "₹5,00,000+"


# ── People ────────────────────────────────────────────────────────────────
class PreferredPaymentMethod(str, Enum):
    BANK_TRANSFER = "Bank Transfer"
    PAYPAL = "PayPal"
    UPI = "UPI"
    CASH = "Cash"
    CHEQUE = "Cheque"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "Available"
    BUSY = "Busy"
    UNAVAILABLE = "Unavailable"


class PersonStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    PENDING = "Pending"
    ARCHIVED = "Archived"


class PortfolioFileType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"


class VisibilityLevel(str, Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"
    TEAM = "Team"


# ── Rate cards ────────────────────────────────────────────────────────────
class RateCardCategory(str, Enum):
    INSTAGRAM = "Instagram"
    YOUTUBE = "YouTube"
    LINKEDIN = "LinkedIn"
    FACEBOOK = "Facebook"
    TWITTER = "Twitter"
    TIKTOK = "TikTok"
    EVENT = "Event"
    OFFLINE = "Offline"
    OTHER = "Other"


class ServiceType(str, Enum):
    STORY = "Story"
    POST = "Post"
    REEL = "Reel"
    VIDEO = "Video"
    INTEGRATION = "Integration"
    REVIEW = "Review"
    APPEARANCE = "Appearance"
    CAMPAIGN = "Campaign"
    COLLABORATION = "Collaboration"


class PricingType(str, Enum):
    PER_POST = "Per Post"
    PER_CAMPAIGN = "Per Campaign"
    MONTHLY = "Monthly"
    PER_DELIVERABLE = "Per Deliverable"
    PER_HOUR = "Per Hour"
    PER_DAY = "Per Day"


class ApplicableFor(str, Enum):
    BRAND = "Brand"
    AGENCY = "Agency"
    DIRECT_COLLABORATION = "Direct Collaboration"
    ALL = "All"


class RateCardVisibility(str, Enum):
    PUBLIC = "Public"
    PRIVATE = "Private"


# ── Invoices & payments ───────────────────────────────────────────────────
class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PARTIALLY_PAID = "Partially Paid"
    PAID = "Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


class Currency(str, Enum):
    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "Bank Transfer"
    UPI = "UPI"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    CHEQUE = "Cheque"
    CASH = "Cash"
    DIGITAL_WALLET = "Digital Wallet"
    OTHER = "Other"


class DiscountType(str, Enum):
    AMOUNT = "amount"
    PERCENTAGE = "percentage"


class ActivityType(str, Enum):
    CREATED = "created"
    SENT = "sent"
    VIEWED = "viewed"
    PAYMENT_RECORDED = "payment_recorded"
    REMINDER_SENT = "reminder_sent"
    STATUS_CHANGED = "status_changed"
    EDITED = "edited"


class PaymentStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"
    FAILED = "Failed"


# ── Projects ──────────────────────────────────────────────────────────────
class CampaignType(str, Enum):
    INFLUENCER_CAMPAIGN = "Influencer Campaign"
    UGC = "UGC"
    EVENT = "Event"
    BRANDING = "Branding"
    OTHER = "Other"


class ProjectStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ON_HOLD = "on-hold"


class MilestoneStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"


class MilestonePaymentType(str, Enum):
    AMOUNT = "amount"
    PERCENTAGE = "percentage"


class ProjectPaymentTerms(str, Enum):
    DEFAULT = "default"
    CUSTOMISED = "customised"
